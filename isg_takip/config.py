"""Ortam değişkenlerinden okunan ayarlar.

Scriptler önce ``env_loader``'ı import ederek .env dosyasını yükler.
"""

import os

REGION = os.environ.get("AWS_DEFAULT_REGION", "us-west-2")

COLLECTIONS_TABLE = os.environ.get("ISG_COLLECTIONS_TABLE", "IsgCollections")
MARKERS_TABLE = os.environ.get("ISG_MARKERS_TABLE", "IsgMarkers")
DECISIONS_TABLE = os.environ.get("ISG_DECISIONS_TABLE", "AgentDecisions")

# Boş bırakılırsa karar logları S3'e yazılmaz
S3_BUCKET = os.environ.get("ISG_S3_BUCKET", "")
BUCKET_PREFIX = "isg-takip"

LOG_LEVEL = os.environ.get("ISG_LOG_LEVEL", "INFO")
REPORT_POLL_SECONDS = float(os.environ.get("ISG_REPORT_POLL_SECONDS", "30"))
