"""Planlama raporu testleri."""

from datetime import date

import pytest

from isg_takip.engine.reports import (
    MONTHLY_PLAN_TITLE,
    WEEKLY_PLAN_TITLE,
    build_monthly_plan,
    build_next_week_plan,
    build_planning_report,
    month_range,
    next_week_range,
)
from isg_takip.models.isg import (
    ApprovalStatus,
    BoardMeetingRecord,
    ComplianceData,
    Employee,
    EmploymentStatus,
    Equipment,
    Firm,
    HazardTier,
    ReportStatus,
    RiskAssessmentRecord,
)

TODAY = "2024-06-15"  # Cumartesi


def _employee(emp_id: str, next_date: str, firm_id: str = "F1", **kwargs) -> Employee:
    return Employee(
        firm_id=firm_id,
        national_id=f"TC{emp_id}",
        name=f"Personel {emp_id}",
        last_training_date="2023-01-01",
        next_training_date=next_date,
        id=emp_id,
        **kwargs,
    )


def _data(**kwargs) -> ComplianceData:
    return ComplianceData(
        firms=[
            Firm("Delta Kimya", HazardTier.VERY_HIGH, id="F1"),
            Firm("Alfa Lojistik", HazardTier.HIGH, id="F2"),
        ],
        **kwargs,
    )


class TestRanges:
    """Rapor tarih aralıkları."""

    @pytest.mark.parametrize("today,monday,sunday", [
        ("2024-06-15", date(2024, 6, 17), date(2024, 6, 23)),   # Cumartesi
        ("2024-06-16", date(2024, 6, 17), date(2024, 6, 23)),   # Pazar: ertesi gün
        ("2024-06-17", date(2024, 6, 24), date(2024, 6, 30)),   # Pazartesi: bir hafta sonra
    ])
    def test_next_week_range(self, today, monday, sunday):
        assert next_week_range(today) == (monday, sunday)

    def test_month_range(self):
        assert month_range(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
        assert month_range(2024, 12) == (date(2024, 12, 1), date(2024, 12, 31))


class TestPlanningReport:
    """Gecikmiş ve planlı işlemlerin seçimi."""

    def test_selects_overdue_and_in_range(self):
        data = _data(
            employees=[
                _employee("E1", "2024-05-01"),    # gecikmiş
                _employee("E2", "2024-06-18"),    # aralıkta
                _employee("E3", "2024-06-30"),    # aralık dışı
            ],
            equipment=[Equipment("F1", "Kazan", "2024-03-20", 3, "2024-06-20", id="Q1")],
            risks=[RiskAssessmentRecord("F1", "2022-06-01", "2024-06-01", id="R1")],
            meetings=[BoardMeetingRecord("F1", "2024-05-21", 1, "2024-06-21", id="M1")],
        )
        report = build_next_week_plan(data, TODAY)
        assert report.title == WEEKLY_PLAN_TITLE
        assert report.start_date == "2024-06-17"
        assert report.end_date == "2024-06-23"
        assert report.period_label == "17.06.2024 - 23.06.2024"

        section = report.sections[0]
        assert section.heading == "Delta Kimya  -  (Çok Tehlikeli)"
        names = [i.name for i in section.items]
        assert "Personel E3" not in names
        assert [i.status for i in section.items[:2]] == [ReportStatus.EXPIRED, ReportStatus.EXPIRED]
        assert [i.date for i in section.items] == ["2024-05-01", "2024-06-01", "2024-06-18", "2024-06-20", "2024-06-21"]

    def test_item_details(self):
        data = _data(
            employees=[_employee("E1", "2024-06-18")],
            equipment=[Equipment("F1", "Kazan", "2024-03-20", 3, "2024-06-20", id="Q1")],
            risks=[RiskAssessmentRecord("F1", "2022-06-19", "2024-06-19", id="R1")],
            meetings=[BoardMeetingRecord("F1", "2024-05-21", 1, "2024-06-21", id="M1")],
        )
        items = {i.type: i for i in build_next_week_plan(data, TODAY).sections[0].items}
        assert items["Eğitim"].detail == "TC: TCE1"
        assert items["Ekipman"].detail == "3 Aylık"
        assert items["Risk"].detail == "Firma Geneli"
        assert items["Kurul"].detail == "1 Ayda Bir"
        assert items["Kurul"].status.label == "PLANLI"

    def test_excludes_terminated_and_pending(self):
        data = _data(employees=[
            _employee("E1", "2024-05-01", employment_status=EmploymentStatus.TERMINATED),
            _employee("E2", "2024-05-01", approval_status=ApprovalStatus.PENDING),
        ])
        report = build_next_week_plan(data, TODAY)
        assert report.sections == []
        assert report.total_action_count == 0

    def test_firms_sorted_by_name(self):
        data = _data(employees=[
            _employee("E1", "2024-06-18", firm_id="F1"),
            _employee("E2", "2024-06-18", firm_id="F2"),
        ])
        report = build_next_week_plan(data, TODAY)
        assert [s.firm_name for s in report.sections] == ["Alfa Lojistik", "Delta Kimya"]
        assert report.active_firm_count == 2
        assert report.total_action_count == 2

    def test_visibility(self):
        data = _data(employees=[
            _employee("E1", "2024-06-18", firm_id="F1"),
            _employee("E2", "2024-06-18", firm_id="F2"),
        ])
        report = build_next_week_plan(data, TODAY, visible_firm_ids={"F1"})
        assert [s.firm_id for s in report.sections] == ["F1"]

    def test_monthly_plan_label(self):
        data = _data(employees=[_employee("E1", "2024-07-10")])
        report = build_monthly_plan(data, 2024, 7, TODAY)
        assert report.title == MONTHLY_PLAN_TITLE
        assert report.period_label == "Temmuz 2024"
        assert report.sections[0].items[0].status == ReportStatus.PLANNED

    def test_custom_range(self):
        data = _data(employees=[_employee("E1", "2024-09-01")])
        report = build_planning_report(data, "2024-08-01", "2024-09-30", "Özel", today=TODAY)
        assert report.total_action_count == 1
