"""Günlük işaretçi depoları (son uyarı günü, otomatik rapor çalıştı mı).

Tüm depolar aynı arayüzü sunar: ``get(key) -> Optional[str]`` ve ``set(key, value)``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class InMemoryMarkerStore:
    """Test ve çevrimdışı kullanım için bellek içi işaretçi deposu."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class DynamoMarkerStore:
    """DynamoDB tablosunda saklanan işaretçiler (hash key: marker_key)."""

    def __init__(self, table: Any) -> None:
        self.table = table

    def get(self, key: str) -> Optional[str]:
        try:
            response = self.table.get_item(Key={"marker_key": key})
        except ClientError as e:
            logger.error("İşaretçi okuma hatası [%s]: %s", key, e)
            raise
        item = response.get("Item")
        return item.get("value") if item else None

    def set(self, key: str, value: str) -> None:
        try:
            self.table.put_item(Item={"marker_key": key, "value": value})
        except ClientError as e:
            logger.error("İşaretçi yazma hatası [%s]: %s", key, e)
            raise
