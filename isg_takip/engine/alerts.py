"""Uyarı toplayıcı - kayıt bazlı durumları firma ve genel uyarı listelerine çevirir.

- Genel sayaçlar (süresi dolmuş / yaklaşan)
- Sıralı ve sınırlı uyarı akışı (onay bekleyenler en önde)
- Günlük açılış uyarısı özeti
- Takvim için ay bazlı firma gruplaması
- Firma bazlı personel istatistikleri
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator, Optional, Protocol

from isg_takip.engine import temporal
from isg_takip.engine.temporal import DateLike
from isg_takip.models.isg import (
    Alert,
    AlertCategory,
    AlertType,
    BoardMeetingRecord,
    CalendarItem,
    CalendarNote,
    ComplianceData,
    DailyAlertSummary,
    DashboardStats,
    Employee,
    EmployeeStats,
    FirmMonthGroup,
    HazardTier,
    RecordState,
    RiskAssessmentRecord,
    Status,
)

logger = logging.getLogger(__name__)

ALERT_FEED_LIMIT = 10
UNKNOWN_FIRM_NAME = "Bilinmeyen Firma"
LAST_ALERT_MARKER_KEY = "last_alert_date"

# Kategori bazlı uyarı mesajları: (süresi doldu, yaklaşıyor)
ALERT_MESSAGES: dict[AlertCategory, tuple[str, str]] = {
    AlertCategory.RISK: ("Risk Analizi Süresi Doldu", "Risk Analizi Yenilemesi Yaklaşıyor"),
    AlertCategory.MEETING: ("Kurul Toplantısı Gecikti", "Kurul Toplantısı Yaklaşıyor"),
    AlertCategory.TRAINING: ("Eğitim Süresi Doldu", "Eğitim Yenilemesi Yaklaşıyor"),
    AlertCategory.EQUIPMENT: ("Ekipman Kontrolü Gecikti", "Ekipman Kontrolü Yaklaşıyor"),
}
PENDING_APPROVAL_MESSAGE = "Onay Bekleyen Personel"


class MarkerStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


def is_visible(firm_id: str, visible_firm_ids: Optional[Iterable[str]]) -> bool:
    """Görünür firma kümesi verilmemişse tüm firmalar görünürdür."""
    if visible_firm_ids is None:
        return True
    return firm_id in visible_firm_ids


@dataclass
class _DueRecord:
    category: AlertCategory
    entity_id: str
    firm_id: str
    due_date: str
    label: str = ""


class AlertAggregator:
    """Koleksiyonları tarih kurallarıyla değerlendirip uyarı çıktıları üretir."""

    def __init__(
        self,
        data: ComplianceData,
        today: Optional[DateLike] = None,
        visible_firm_ids: Optional[Iterable[str]] = None,
    ):
        self.data = data
        self.today: date = temporal.resolve_today(today)
        self._visible = None if visible_firm_ids is None else set(visible_firm_ids)
        self._firm_names = {f.id: f.name for f in data.firms}

    # --- Filtreler ---

    def _visible_to(self, firm_id: str) -> bool:
        return is_visible(firm_id, self._visible)

    def active_employees(self) -> list[Employee]:
        """Görünür firmalardaki aktif (ayrılmamış) personel."""
        return [e for e in self.data.employees if e.is_active and self._visible_to(e.firm_id)]

    def tracked_employees(self) -> list[Employee]:
        """Sayaçlara giren personel: aktif ve onaylı."""
        return [e for e in self.active_employees() if not e.is_pending]

    def pending_employees(self) -> list[Employee]:
        return [e for e in self.active_employees() if e.is_pending]

    def _due_records(self) -> Iterator[_DueRecord]:
        """Dört kategorideki tarihli kayıtlar (risk, kurul, eğitim, ekipman sırasıyla).

        Tarihi boş olan kayıtlar "kayıt yok" sayılır ve atlanır.
        """
        for r in self.data.risks:
            if r.valid_until and self._visible_to(r.firm_id):
                yield _DueRecord(AlertCategory.RISK, r.id, r.firm_id, r.valid_until)
        for m in self.data.meetings:
            if m.next_meeting_date and self._visible_to(m.firm_id):
                yield _DueRecord(AlertCategory.MEETING, m.id, m.firm_id, m.next_meeting_date)
        for e in self.tracked_employees():
            if e.next_training_date:
                yield _DueRecord(
                    AlertCategory.TRAINING, e.id, e.firm_id, e.next_training_date, e.name
                )
        for eq in self.data.equipment:
            if eq.next_inspection_date and self._visible_to(eq.firm_id):
                yield _DueRecord(
                    AlertCategory.EQUIPMENT, eq.id, eq.firm_id, eq.next_inspection_date, eq.name
                )

    def _status(self, record: _DueRecord) -> Status:
        return temporal.classify(
            record.due_date, self.today, temporal.threshold_for(record.category)
        )

    # --- Genel sayaçlar ---

    def stats(self) -> DashboardStats:
        """Süresi dolmuş ve yaklaşan kayıt sayıları (kesilmeden)."""
        expired = approaching = 0
        for record in self._due_records():
            status = self._status(record)
            if status == Status.EXPIRED:
                expired += 1
            elif status == Status.APPROACHING:
                approaching += 1

        return DashboardStats(
            firm_count=sum(1 for f in self.data.firms if self._visible_to(f.id)),
            active_employee_count=len(self.active_employees()),
            expired_count=expired,
            approaching_count=approaching,
        )

    # --- Uyarı akışı ---

    def all_alerts(self) -> list[Alert]:
        """Tüm uyarılar: önce onay bekleyenler (info), sonra tarihe göre artan."""
        alerts: list[Alert] = []

        for record in self._due_records():
            status = self._status(record)
            if status == Status.VALID:
                continue
            expired_msg, approaching_msg = ALERT_MESSAGES[record.category]
            if status == Status.EXPIRED:
                alert_type, message = AlertType.DANGER, expired_msg
            else:
                alert_type, message = AlertType.WARNING, approaching_msg
            if record.label:
                message = f"{message}: {record.label}"
            alerts.append(self._alert(alert_type, message, record.due_date, record.firm_id,
                                      record.category, record.entity_id))

        for emp in self.pending_employees():
            alerts.append(self._alert(
                AlertType.INFO,
                f"{PENDING_APPROVAL_MESSAGE}: {emp.name}",
                emp.next_training_date,
                emp.firm_id,
                AlertCategory.APPROVAL,
                emp.id,
            ))

        # sort kararlıdır: aynı tarihte tarama sırası korunur
        alerts.sort(key=lambda a: (a.type != AlertType.INFO, a.date or "9999-12-31"))
        return alerts

    def alert_feed(self, limit: int = ALERT_FEED_LIMIT) -> list[Alert]:
        """Gösterim için en acil ``limit`` uyarı."""
        return self.all_alerts()[:max(limit, 0)]

    def _alert(
        self,
        alert_type: AlertType,
        message: str,
        due_date: str,
        firm_id: str,
        category: AlertCategory,
        entity_id: str,
    ) -> Alert:
        return Alert(
            type=alert_type,
            message=message,
            date=due_date,
            firm_id=firm_id,
            category=category,
            firm_name=self._firm_names.get(firm_id, UNKNOWN_FIRM_NAME),
            entity_id=entity_id,
        )

    # --- Günlük açılış uyarısı ---

    def daily_summary(self) -> DailyAlertSummary:
        """Süresi dolmuş veya bugün dolan eğitim, ekipman ve kurul sayıları.

        Risk analizi bu özete dahil edilmez.
        """
        def due(value: str) -> bool:
            return bool(value) and temporal.is_due_or_overdue(value, self.today)

        return DailyAlertSummary(
            employee_count=sum(1 for e in self.tracked_employees() if due(e.next_training_date)),
            equipment_count=sum(
                1 for eq in self.data.equipment
                if self._visible_to(eq.firm_id) and due(eq.next_inspection_date)
            ),
            meeting_count=sum(
                1 for m in self.data.meetings
                if self._visible_to(m.firm_id) and due(m.next_meeting_date)
            ),
        )

    # --- Takvim: aylık firma gruplaması ---

    def _in_month_view(self, due_date: str, year: int, month: int) -> bool:
        """Kayıt seçili ayın görünümünde yer alır mı?

        Gerçek içinde bulunulan ay görüntüleniyorsa geçmiş aylardan sarkan
        gecikmiş kayıtlar da gösterilir; diğer aylarda yalnızca o aya düşenler.
        """
        if not due_date:
            return False
        due = temporal.parse_date(due_date)
        if due.year == year and due.month == month:
            return True
        viewing_current = year == self.today.year and month == self.today.month
        return viewing_current and due < self.today

    def _calendar_item(self, entity_id: str, text: str, due_date: str, detail: str = "") -> CalendarItem:
        status = Status.EXPIRED if temporal.is_expired(due_date, self.today) else Status.APPROACHING
        return CalendarItem(id=entity_id, text=text, date=due_date, status=status, detail=detail)

    def month_plan(self, year: int, month: int) -> list[FirmMonthGroup]:
        """Seçili ay için firma bazlı gruplar; gecikmesi olan firmalar önce."""
        groups: dict[str, FirmMonthGroup] = {}

        def group_for(firm_id: str) -> FirmMonthGroup:
            if firm_id not in groups:
                firm = self.data.firm(firm_id)
                groups[firm_id] = FirmMonthGroup(
                    firm_id=firm_id,
                    firm_name=firm.name if firm else UNKNOWN_FIRM_NAME,
                    hazard_tier=firm.hazard_tier if firm else HazardTier.LOW,
                )
            return groups[firm_id]

        def attach(firm_id: str, item: CalendarItem) -> FirmMonthGroup:
            group = group_for(firm_id)
            if item.status == Status.EXPIRED:
                group.has_expired = True
            return group

        for emp in self.tracked_employees():
            if self._in_month_view(emp.next_training_date, year, month):
                item = self._calendar_item(emp.id, emp.name, emp.next_training_date, emp.national_id)
                attach(emp.firm_id, item).trainings.append(item)

        for eq in self.data.equipment:
            if self._visible_to(eq.firm_id) and self._in_month_view(eq.next_inspection_date, year, month):
                item = self._calendar_item(eq.id, eq.name, eq.next_inspection_date)
                attach(eq.firm_id, item).equipment.append(item)

        for r in self.data.risks:
            if self._visible_to(r.firm_id) and self._in_month_view(r.valid_until, year, month):
                item = self._calendar_item(r.id, "Risk Analizi Yenileme", r.valid_until)
                attach(r.firm_id, item).risk = item

        for m in self.data.meetings:
            if self._visible_to(m.firm_id) and self._in_month_view(m.next_meeting_date, year, month):
                item = self._calendar_item(m.id, "Kurul Toplantısı", m.next_meeting_date)
                attach(m.firm_id, item).meeting = item

        return sorted(groups.values(), key=lambda g: (not g.has_expired, g.firm_name.casefold()))

    # --- Firma detayı ---

    def employee_stats(self, firm_id: str) -> EmployeeStats:
        """Firmanın aktif personeli için durum dağılımı."""
        active = [e for e in self.data.employees if e.firm_id == firm_id and e.is_active]
        expired = approaching = pending = 0
        for emp in active:
            if emp.is_pending:
                pending += 1
            elif not emp.next_training_date:
                continue
            elif temporal.is_expired(emp.next_training_date, self.today):
                expired += 1
            elif temporal.is_approaching(emp.next_training_date, self.today):
                approaching += 1
        return EmployeeStats(total=len(active), expired=expired, approaching=approaching, pending=pending)

    def record_state(self, firm_id: str, category: AlertCategory) -> RecordState:
        """Firmanın risk analizi veya kurul kaydının durumu (kayıt yoksa MISSING)."""
        record: Optional[RiskAssessmentRecord | BoardMeetingRecord]
        if category == AlertCategory.RISK:
            record = next((r for r in self.data.risks if r.firm_id == firm_id), None)
            due_date = record.valid_until if record else ""
        elif category == AlertCategory.MEETING:
            record = next((m for m in self.data.meetings if m.firm_id == firm_id), None)
            due_date = record.next_meeting_date if record else ""
        else:
            raise ValueError(f"Firma bazlı tekil kayıt kategorisi değil: {category}")

        if not due_date:
            return RecordState.MISSING
        return RecordState(temporal.classify(due_date, self.today, temporal.threshold_for(category)).value)


def notes_for_month(notes: Iterable[CalendarNote], year: int, month: int) -> list[CalendarNote]:
    """Seçili aya düşen manuel takvim notları, tarihe göre sıralı."""
    selected = []
    for note in notes:
        if not note.date:
            continue
        d = temporal.parse_date(note.date)
        if d.year == year and d.month == month:
            selected.append(note)
    return sorted(selected, key=lambda n: n.date)


class DailyAlertGate:
    """Günlük açılış uyarısını aynı gün içinde en fazla bir kez gösterir."""

    def __init__(self, marker_store: MarkerStore, marker_key: str = LAST_ALERT_MARKER_KEY):
        self.marker_store = marker_store
        self.marker_key = marker_key

    def check(self, aggregator: AlertAggregator) -> Optional[DailyAlertSummary]:
        """Bugün henüz gösterilmediyse ve uyarılacak kayıt varsa özeti döndürür."""
        today_str = temporal.to_iso(aggregator.today)
        if self.marker_store.get(self.marker_key) == today_str:
            return None

        summary = aggregator.daily_summary()
        if not summary.should_show:
            return None

        self.marker_store.set(self.marker_key, today_str)
        logger.info(
            "Günlük uyarı gösterildi: eğitim=%d ekipman=%d kurul=%d",
            summary.employee_count, summary.equipment_count, summary.meeting_count,
        )
        return summary
