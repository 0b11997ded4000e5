"""S3 bucket oluşturma.

Bucket yapısı:
  isg-takip-{account_id}/
  ├── agent-logs/
  └── reports/
      ├── weekly/
      └── monthly/
"""
import boto3
import os
import sys
from botocore.exceptions import ClientError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))
import env_loader  # noqa: F401

from isg_takip import config

REGION = config.REGION
BUCKET_PREFIX = config.BUCKET_PREFIX
FOLDERS = ["agent-logs/", "reports/weekly/", "reports/monthly/"]


def get_bucket_name(region: str = REGION) -> str:
    """ISG_S3_BUCKET tanımlıysa onu, değilse account ID ile unique bucket adını döner."""
    if config.S3_BUCKET:
        return config.S3_BUCKET
    sts = boto3.client("sts", region_name=region)
    account_id = sts.get_caller_identity()["Account"]
    return f"{BUCKET_PREFIX}-{account_id}"


def create_bucket(region: str = REGION) -> str:
    """S3 bucket ve klasör yapısını oluşturur."""
    s3 = boto3.client("s3", region_name=region)
    bucket_name = get_bucket_name(region)

    try:
        if region == "us-east-1":
            s3.create_bucket(Bucket=bucket_name)
        else:
            s3.create_bucket(
                Bucket=bucket_name,
                CreateBucketConfiguration={"LocationConstraint": region},
            )
        print(f"  ✓ Bucket oluşturuldu: {bucket_name}")
    except ClientError as e:
        if e.response["Error"]["Code"] in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
            print(f"  ⏭️  Bucket zaten mevcut: {bucket_name}")
        else:
            raise

    # Boş prefix'ler oluştur (klasör yapısı)
    for prefix in FOLDERS:
        s3.put_object(Bucket=bucket_name, Key=prefix, Body=b"")
        print(f"  ✓ {prefix} (klasör)")

    return bucket_name


def delete_bucket(region: str = REGION):
    """Bucket ve içeriğini siler (dikkatli kullan)."""
    s3 = boto3.resource("s3", region_name=region)
    bucket_name = get_bucket_name(region)
    try:
        bucket = s3.Bucket(bucket_name)
        bucket.objects.all().delete()
        bucket.delete()
        print(f"  🗑️  {bucket_name} silindi")
    except ClientError:
        print(f"  ⏭️  {bucket_name} bulunamadı")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "--delete":
        print("🗑️  S3 bucket siliniyor...")
        delete_bucket()
    else:
        print("🏗️  S3 bucket oluşturuluyor...\n")
        create_bucket()
