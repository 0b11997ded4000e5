"""Otomatik rapor zamanlayıcısı.

Ayarlarda seçilen gün ve saatte haftalık planı bir kez tetikler. Zaman
dışarıdan verilen bir saat fonksiyonuyla okunur; aynı gün ve saat dilimi için
tekrar çalışmayı kalıcı bir işaretçi engeller.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from isg_takip import config
from isg_takip.engine.alerts import MarkerStore
from isg_takip.models.isg import AppSettings

logger = logging.getLogger(__name__)


def js_weekday(now: datetime) -> int:
    """Pazar=0 ... Cumartesi=6 (ayarlarda saklanan gün numarası)."""
    return (now.weekday() + 1) % 7


def is_report_due(now: datetime, settings: AppSettings) -> bool:
    """Şu an ayarlardaki rapor günü ve dakikası mı?"""
    return (
        js_weekday(now) == settings.auto_report_day
        and now.strftime("%H:%M") == settings.auto_report_time
    )


def run_marker_key(now: datetime, settings: AppSettings) -> str:
    return f"auto_report_run_{now.date().isoformat()}_{settings.auto_report_time}"


class AutoReportScheduler:
    """Her tikte rapor zamanının gelip gelmediğini kontrol eder."""

    def __init__(
        self,
        settings_provider: Callable[[], AppSettings],
        marker_store: MarkerStore,
        on_due: Callable[[datetime], None],
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings_provider = settings_provider
        self.marker_store = marker_store
        self.on_due = on_due
        self.clock = clock

    def tick(self) -> bool:
        """Rapor tetiklendiyse True döner."""
        now = self.clock()
        settings = self.settings_provider()
        if not is_report_due(now, settings):
            logger.debug("Rapor zamanı değil: %s", now.isoformat(timespec="minutes"))
            return False

        key = run_marker_key(now, settings)
        if self.marker_store.get(key):
            return False

        logger.info("Otomatik rapor tetikleniyor: %s", key)
        self.on_due(now)
        self.marker_store.set(key, "true")
        return True

    def run(
        self,
        stop_event: threading.Event,
        poll_seconds: Optional[float] = None,
    ) -> None:
        """stop_event set edilene kadar belirli aralıklarla tick çağırır."""
        interval = config.REPORT_POLL_SECONDS if poll_seconds is None else poll_seconds
        while not stop_event.is_set():
            try:
                self.tick()
            except Exception as e:
                logger.error("Otomatik rapor hatası: %s", e)
            stop_event.wait(interval)
