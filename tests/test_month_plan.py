"""Takvim - aylık firma gruplaması testleri."""

from isg_takip.engine.alerts import AlertAggregator, UNKNOWN_FIRM_NAME
from isg_takip.models.isg import (
    ApprovalStatus,
    BoardMeetingRecord,
    ComplianceData,
    Employee,
    Equipment,
    Firm,
    HazardTier,
    RiskAssessmentRecord,
    Status,
)

TODAY = "2024-06-15"


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
            Firm("zeta Yapı", HazardTier.VERY_HIGH, id="F1"),
            Firm("Alfa Lojistik", HazardTier.HIGH, id="F2"),
            Firm("Beta Tekstil", HazardTier.LOW, id="F3"),
        ],
        **kwargs,
    )


class TestMonthView:
    """Geçmiş aylardan sarkan gecikmiş kayıtlar yalnızca gerçek ayda görünür."""

    def test_overdue_item_not_in_other_past_month(self):
        data = _data(employees=[_employee("E1", "2024-03-10")])
        assert AlertAggregator(data, TODAY).month_plan(2024, 4) == []

    def test_overdue_item_in_current_month(self):
        data = _data(employees=[_employee("E1", "2024-03-10")])
        groups = AlertAggregator(data, TODAY).month_plan(2024, 6)
        assert len(groups) == 1
        assert groups[0].trainings[0].status == Status.EXPIRED
        assert groups[0].has_expired

    def test_item_in_its_own_month(self):
        data = _data(employees=[_employee("E1", "2024-03-10")])
        groups = AlertAggregator(data, TODAY).month_plan(2024, 3)
        assert [i.id for i in groups[0].trainings] == ["E1"]

    def test_future_item_only_in_its_month(self):
        data = _data(employees=[_employee("E1", "2024-08-20")])
        aggregator = AlertAggregator(data, TODAY)
        assert aggregator.month_plan(2024, 6) == []
        group = aggregator.month_plan(2024, 8)[0]
        assert group.trainings[0].status == Status.APPROACHING
        assert not group.has_expired


class TestGrouping:
    """Firma bazlı gruplama ve sıralama."""

    def test_groups_all_categories(self):
        data = _data(
            employees=[_employee("E1", "2024-06-20")],
            equipment=[Equipment("F1", "Vinç", "2024-03-01", 3, "2024-06-01", id="Q1")],
            risks=[RiskAssessmentRecord("F1", "2022-06-25", "2024-06-25", id="R1")],
            meetings=[BoardMeetingRecord("F1", "2024-05-28", 1, "2024-06-28", id="M1")],
        )
        group = AlertAggregator(data, TODAY).month_plan(2024, 6)[0]
        assert group.firm_name == "zeta Yapı"
        assert group.trainings[0].detail == "TCE1"
        assert group.equipment[0].status == Status.EXPIRED
        assert group.risk.id == "R1"
        assert group.meeting.id == "M1"
        assert group.total_count == 4
        assert group.has_expired

    def test_expired_firms_first_then_name(self):
        data = _data(employees=[
            _employee("E1", "2024-06-20", firm_id="F1"),
            _employee("E2", "2024-06-25", firm_id="F2"),
            _employee("E3", "2024-06-01", firm_id="F3"),
        ])
        names = [g.firm_name for g in AlertAggregator(data, TODAY).month_plan(2024, 6)]
        assert names == ["Beta Tekstil", "Alfa Lojistik", "zeta Yapı"]

    def test_pending_employees_excluded(self):
        data = _data(employees=[_employee("E1", "2024-06-20", approval_status=ApprovalStatus.PENDING)])
        assert AlertAggregator(data, TODAY).month_plan(2024, 6) == []

    def test_unknown_firm(self):
        data = _data(employees=[_employee("E1", "2024-06-20", firm_id="YOK")])
        group = AlertAggregator(data, TODAY).month_plan(2024, 6)[0]
        assert group.firm_name == UNKNOWN_FIRM_NAME
        assert group.hazard_tier == HazardTier.LOW

    def test_visibility(self):
        data = _data(employees=[
            _employee("E1", "2024-06-20", firm_id="F1"),
            _employee("E2", "2024-06-25", firm_id="F2"),
        ])
        groups = AlertAggregator(data, TODAY, visible_firm_ids=["F2"]).month_plan(2024, 6)
        assert [g.firm_id for g in groups] == ["F2"]
