"""Compliance Monitor Agent - koleksiyonları yükler, süreleri izler ve uyarı üretir.

- Firma, personel, ekipman, risk, kurul ve takvim notlarını DynamoDB'den yükler
- Koleksiyonları bütün olarak geri yazar (kısmi güncelleme yok)
- Günlük açılış uyarısını ve genel uyarı akışını hesaplar
- Otomatik rapor ayarlarını ve günlük işaretçileri saklar
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable, Optional

from botocore.exceptions import ClientError

from isg_takip.agents.base_agent import BaseAgent
from isg_takip.agents.markers import DynamoMarkerStore
from isg_takip.engine import lifecycle
from isg_takip.engine.alerts import AlertAggregator, DailyAlertGate
from isg_takip.engine.reports import build_next_week_plan
from isg_takip.engine.temporal import DateLike
from isg_takip.models.isg import (
    AppSettings,
    BoardMeetingRecord,
    CalendarNote,
    ComplianceData,
    Employee,
    Equipment,
    Firm,
    PlanningReport,
    RiskAssessmentRecord,
    User,
)

logger = logging.getLogger(__name__)

# Koleksiyon adı -> (ComplianceData alanı, kayıt tipi)
COLLECTIONS: dict[str, tuple[str, Callable[[dict], Any]]] = {
    "firms": ("firms", Firm.from_dict),
    "employees": ("employees", Employee.from_dict),
    "equipments": ("equipment", Equipment.from_dict),
    "risks": ("risks", RiskAssessmentRecord.from_dict),
    "meetings": ("meetings", BoardMeetingRecord.from_dict),
    "events": ("notes", CalendarNote.from_dict),
}
SETTINGS_COLLECTION = "settings"
USERS_COLLECTION = "users"


class ComplianceMonitorAgent(BaseAgent):
    """İSG sürelerini izleyen ve kritik durumları tespit eden agent."""

    def __init__(self, **kwargs: Any):
        super().__init__(agent_name="ComplianceMonitorAgent", **kwargs)
        self.markers = DynamoMarkerStore(self.markers_table)

    # --- Koleksiyon okuma / yazma ---

    def _load_raw(self, collection: str) -> Optional[Any]:
        try:
            response = self.collections_table.get_item(Key={"collection": collection})
        except ClientError as e:
            logger.error("Koleksiyon okuma hatası [%s]: %s", collection, e)
            raise
        item = response.get("Item")
        if not item:
            return None
        return json.loads(item["records"])

    def _save_raw(self, collection: str, payload: Any) -> None:
        try:
            self.collections_table.put_item(
                Item={
                    "collection": collection,
                    "records": json.dumps(payload, ensure_ascii=False),
                }
            )
        except ClientError as e:
            logger.error("Koleksiyon yazma hatası [%s]: %s", collection, e)
            raise

    def load_collection(self, collection: str) -> list:
        """Tek bir koleksiyonu kayıt nesneleri olarak döndürür (yoksa boş liste)."""
        _, factory = COLLECTIONS[collection]
        return [factory(raw) for raw in self._load_raw(collection) or []]

    def save_collection(self, collection: str, records: Iterable[Any]) -> None:
        """Koleksiyonun tamamını değiştirir."""
        if collection not in COLLECTIONS:
            raise KeyError(f"Bilinmeyen koleksiyon: {collection}")
        payload = [r.to_dict() for r in records]
        self._save_raw(collection, payload)
        logger.info("Koleksiyon kaydedildi: %s (%d kayıt)", collection, len(payload))

    def load_data(self) -> ComplianceData:
        data = ComplianceData()
        for collection, (attr, _) in COLLECTIONS.items():
            setattr(data, attr, self.load_collection(collection))
        return data

    def save_data(self, data: ComplianceData) -> None:
        for collection, (attr, _) in COLLECTIONS.items():
            self.save_collection(collection, getattr(data, attr))

    def load_users(self) -> list[User]:
        return [User.from_dict(raw) for raw in self._load_raw(USERS_COLLECTION) or []]

    def save_users(self, users: Iterable[User]) -> None:
        self._save_raw(USERS_COLLECTION, [u.to_dict() for u in users])

    def get_settings(self) -> AppSettings:
        raw = self._load_raw(SETTINGS_COLLECTION)
        return AppSettings.from_dict(raw) if raw else AppSettings()

    def save_settings(self, settings: AppSettings) -> None:
        self._save_raw(SETTINGS_COLLECTION, settings.to_dict())

    def delete_firm(self, firm_id: str) -> ComplianceData:
        """Firmayı ve bağlı tüm kayıtları siler, koleksiyonları geri yazar."""
        data = lifecycle.delete_firm(self.load_data(), firm_id)
        self.save_data(data)
        self.log_decision(
            decision_type="firm_deletion",
            input_data={"firm_id": firm_id},
            output_data={"remaining_firms": len(data.firms)},
            reasoning="Firma ve bağlı kayıtlar kalıcı olarak silindi.",
        )
        return data

    # --- İzleme ---

    def check_daily_alert(
        self,
        data: ComplianceData,
        today: Optional[DateLike] = None,
        visible_firm_ids: Optional[Iterable[str]] = None,
    ) -> Optional[dict]:
        """Günlük açılış uyarısı (gün içinde bir kez)."""
        aggregator = AlertAggregator(data, today, visible_firm_ids)
        summary = DailyAlertGate(self.markers).check(aggregator)
        if summary is None:
            return None

        result = {
            "employee_count": summary.employee_count,
            "equipment_count": summary.equipment_count,
            "meeting_count": summary.meeting_count,
        }
        self.log_decision(
            decision_type="daily_alert",
            input_data={"today": aggregator.today.isoformat()},
            output_data=result,
            reasoning="Süresi dolmuş veya bugün dolan eğitim, ekipman ya da kurul kaydı var.",
        )
        return result

    def weekly_plan(
        self,
        data: Optional[ComplianceData] = None,
        today: Optional[DateLike] = None,
    ) -> PlanningReport:
        report = build_next_week_plan(data or self.load_data(), today)
        self.log_decision(
            decision_type="weekly_plan",
            input_data={"start": report.start_date, "end": report.end_date},
            output_data={
                "total_actions": report.total_action_count,
                "active_firms": report.active_firm_count,
            },
            reasoning="Gelecek hafta için otomatik plan oluşturuldu.",
        )
        return report

    def process(
        self,
        today: Optional[DateLike] = None,
        visible_firm_ids: Optional[Iterable[str]] = None,
    ) -> dict:
        """Ana işlem döngüsü: verileri yükle, sayaçları ve uyarıları hesapla."""
        data = self.load_data()
        aggregator = AlertAggregator(data, today, visible_firm_ids)
        stats = aggregator.stats()
        alerts = aggregator.alert_feed()

        if stats.expired_count:
            self.log_decision(
                decision_type="expired_records_detection",
                input_data={"firm_count": stats.firm_count, "today": aggregator.today.isoformat()},
                output_data={
                    "expired_count": stats.expired_count,
                    "approaching_count": stats.approaching_count,
                },
                reasoning=f"{stats.expired_count} kaydın süresi dolmuş durumda.",
            )

        return {
            "agent": self.agent_name,
            "firm_count": stats.firm_count,
            "active_employee_count": stats.active_employee_count,
            "expired_count": stats.expired_count,
            "approaching_count": stats.approaching_count,
            "alerts": [
                {
                    "type": a.type.value,
                    "message": a.message,
                    "date": a.date,
                    "firm_id": a.firm_id,
                    "firm_name": a.firm_name,
                    "category": a.category.value,
                }
                for a in alerts
            ],
            "daily_alert": self.check_daily_alert(data, today, visible_firm_ids),
        }
