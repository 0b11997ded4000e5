"""Planlama raporu - tarih aralığı için gecikmiş ve planlı işlemlerin seçimi.

Rapor düzeni (PDF) bu modülün konusu değildir; burada yalnızca hangi
kayıtların rapora gireceği ve durum etiketleri belirlenir.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from isg_takip.engine import temporal
from isg_takip.engine.alerts import is_visible
from isg_takip.engine.temporal import DateLike
from isg_takip.models.isg import (
    ComplianceData,
    FirmReportSection,
    PlanningReport,
    ReportItem,
    ReportStatus,
)

MONTH_NAMES_TR = [
    "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
    "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
]
WEEKLY_PLAN_TITLE = "Otomatik Haftalık Plan"
MONTHLY_PLAN_TITLE = "Aylık Plan"


def next_week_range(today: Optional[DateLike] = None) -> tuple[date, date]:
    """Bir sonraki haftanın Pazartesi ve Pazar günleri.

    Pazar günü çağrılırsa ertesi gün, Pazartesi çağrılırsa bir hafta sonrası döner.
    """
    ref = temporal.resolve_today(today)
    monday = ref + timedelta(days=7 - ref.weekday())
    return monday, monday + timedelta(days=6)


def month_range(year: int, month: int) -> tuple[date, date]:
    first = date(year, month, 1)
    last = temporal.parse_date(temporal.add_months(first, 1)) - timedelta(days=1)
    return first, last


def _report_status(due_date: str, today: date, start: date, end: date) -> Optional[ReportStatus]:
    if not due_date:
        return None
    due = temporal.parse_date(due_date)
    if due < today:
        return ReportStatus.EXPIRED
    if start <= due <= end:
        return ReportStatus.PLANNED
    return None


def build_planning_report(
    data: ComplianceData,
    start: DateLike,
    end: DateLike,
    title: str,
    period_label: str = "",
    today: Optional[DateLike] = None,
    visible_firm_ids: Optional[Iterable[str]] = None,
) -> PlanningReport:
    """Firma bazlı gecikmiş (bugünden önce) ve aralıkta planlı işlemler.

    Ayrılmış ve onay bekleyen personel rapora girmez. Firmalar ada göre,
    firma içindeki işlemler önce gecikmişler sonra tarihe göre sıralanır.
    """
    ref = temporal.resolve_today(today)
    start_d, end_d = temporal.parse_date(start), temporal.parse_date(end)
    visible = None if visible_firm_ids is None else set(visible_firm_ids)

    report = PlanningReport(
        title=title,
        period_label=period_label or (
            f"{temporal.format_date_tr(temporal.to_iso(start_d))} - "
            f"{temporal.format_date_tr(temporal.to_iso(end_d))}"
        ),
        start_date=temporal.to_iso(start_d),
        end_date=temporal.to_iso(end_d),
    )

    for firm in sorted(data.firms, key=lambda f: f.name.casefold()):
        if not is_visible(firm.id, visible):
            continue
        items: list[ReportItem] = []

        for emp in data.employees:
            if emp.firm_id != firm.id or not emp.is_active or emp.is_pending:
                continue
            status = _report_status(emp.next_training_date, ref, start_d, end_d)
            if status:
                detail = f"TC: {emp.national_id}" if emp.national_id else "-"
                items.append(ReportItem("Eğitim", emp.name, detail, emp.next_training_date, status))

        for eq in data.equipment:
            if eq.firm_id != firm.id:
                continue
            status = _report_status(eq.next_inspection_date, ref, start_d, end_d)
            if status:
                items.append(ReportItem(
                    "Ekipman", eq.name, f"{eq.period_months} Aylık", eq.next_inspection_date, status
                ))

        for r in data.risks:
            if r.firm_id != firm.id:
                continue
            status = _report_status(r.valid_until, ref, start_d, end_d)
            if status:
                items.append(ReportItem("Risk", "Risk Analizi", "Firma Geneli", r.valid_until, status))

        for m in data.meetings:
            if m.firm_id != firm.id:
                continue
            status = _report_status(m.next_meeting_date, ref, start_d, end_d)
            if status:
                items.append(ReportItem(
                    "Kurul", "Kurul Toplantısı", f"{m.period_months} Ayda Bir", m.next_meeting_date, status
                ))

        if not items:
            continue
        items.sort(key=lambda i: (i.status != ReportStatus.EXPIRED, i.date))
        report.sections.append(FirmReportSection(
            firm_id=firm.id, firm_name=firm.name, hazard_tier=firm.hazard_tier, items=items
        ))

    return report


def build_next_week_plan(
    data: ComplianceData,
    today: Optional[DateLike] = None,
    visible_firm_ids: Optional[Iterable[str]] = None,
) -> PlanningReport:
    """Otomatik yazdırma için gelecek haftanın planı."""
    start, end = next_week_range(today)
    return build_planning_report(
        data, start, end, WEEKLY_PLAN_TITLE, today=today, visible_firm_ids=visible_firm_ids
    )


def build_monthly_plan(
    data: ComplianceData,
    year: int,
    month: int,
    today: Optional[DateLike] = None,
    visible_firm_ids: Optional[Iterable[str]] = None,
) -> PlanningReport:
    start, end = month_range(year, month)
    return build_planning_report(
        data,
        start,
        end,
        MONTHLY_PLAN_TITLE,
        period_label=f"{MONTH_NAMES_TR[month - 1]} {year}",
        today=today,
        visible_firm_ids=visible_firm_ids,
    )
