"""Uyarı toplayıcı unit testleri."""

import pytest

from isg_takip.agents.markers import InMemoryMarkerStore
from isg_takip.engine.alerts import (
    ALERT_FEED_LIMIT,
    AlertAggregator,
    DailyAlertGate,
    UNKNOWN_FIRM_NAME,
    notes_for_month,
)
from isg_takip.models.isg import (
    AlertCategory,
    AlertType,
    ApprovalStatus,
    BoardMeetingRecord,
    CalendarNote,
    ComplianceData,
    Employee,
    EmploymentStatus,
    Equipment,
    Firm,
    HazardTier,
    RecordState,
    RiskAssessmentRecord,
)

TODAY = "2024-06-15"


def _employee(emp_id: str, next_date: str, firm_id: str = "F1", **kwargs) -> Employee:
    return Employee(
        firm_id=firm_id,
        national_id=f"TC{emp_id}",
        name=f"Personel {emp_id}",
        last_training_date="2022-06-15",
        next_training_date=next_date,
        id=emp_id,
        **kwargs,
    )


def _data(**kwargs) -> ComplianceData:
    defaults = dict(
        firms=[
            Firm("Alfa Metal", HazardTier.VERY_HIGH, id="F1"),
            Firm("Beta Gıda", HazardTier.HIGH, id="F2"),
        ],
    )
    defaults.update(kwargs)
    return ComplianceData(**defaults)


class TestDashboardStats:
    """Genel sayaçlar."""

    def test_counts_across_categories(self):
        data = _data(
            employees=[
                _employee("E1", "2024-06-01"),                       # dolmuş
                _employee("E2", "2024-07-01"),                       # yaklaşan
                _employee("E3", "2025-06-01"),                       # geçerli
            ],
            equipment=[Equipment("F1", "Vinç", "2024-03-01", 3, "2024-06-10", id="Q1")],
            risks=[RiskAssessmentRecord("F2", "2020-07-01", "2024-07-01", id="R1")],
            meetings=[BoardMeetingRecord("F1", "2024-06-05", 1, "2024-07-05", id="M1")],
        )
        stats = AlertAggregator(data, TODAY).stats()
        assert stats.firm_count == 2
        assert stats.active_employee_count == 3
        assert stats.expired_count == 2          # E1, Q1
        assert stats.approaching_count == 2      # E2, R1 (kurul 20 gün: 15 günlük eşik dışında)

    def test_terminated_employees_are_ignored(self):
        data = _data(employees=[
            _employee("E1", "2024-06-01", employment_status=EmploymentStatus.TERMINATED),
        ])
        stats = AlertAggregator(data, TODAY).stats()
        assert stats.active_employee_count == 0
        assert stats.expired_count == 0

    def test_empty_dates_are_not_classified(self):
        data = _data(
            risks=[RiskAssessmentRecord("F1", "", "", id="R1")],
            meetings=[BoardMeetingRecord("F1", "", 1, "", id="M1")],
        )
        stats = AlertAggregator(data, TODAY).stats()
        assert stats.expired_count == 0
        assert stats.approaching_count == 0

    def test_visibility_filter(self):
        data = _data(employees=[_employee("E1", "2024-06-01"), _employee("E2", "2024-06-01", firm_id="F2")])
        stats = AlertAggregator(data, TODAY, visible_firm_ids={"F2"}).stats()
        assert stats.firm_count == 1
        assert stats.active_employee_count == 1
        assert stats.expired_count == 1

    def test_empty_visibility_set_hides_everything(self):
        data = _data(employees=[_employee("E1", "2024-06-01")])
        stats = AlertAggregator(data, TODAY, visible_firm_ids=set()).stats()
        assert stats.firm_count == 0
        assert stats.expired_count == 0


class TestAlertFeed:
    """Uyarı akışı sırası, mesajları ve sınırı."""

    def test_pending_employee_is_info_first_and_not_counted(self):
        data = _data(employees=[
            _employee("E1", "2024-06-10"),
            _employee("E2", "2024-05-01", approval_status=ApprovalStatus.PENDING),
        ])
        aggregator = AlertAggregator(data, TODAY)
        alerts = aggregator.alert_feed()

        pending = [a for a in alerts if a.entity_id == "E2"]
        assert len(pending) == 1
        assert pending[0].type == AlertType.INFO
        assert pending[0].category == AlertCategory.APPROVAL
        assert alerts[0] is pending[0]
        assert aggregator.stats().expired_count == 1

    def test_sorted_by_date_ascending(self):
        data = _data(employees=[
            _employee("E1", "2024-07-10"),
            _employee("E2", "2024-05-01"),
            _employee("E3", "2024-06-20"),
        ])
        dates = [a.date for a in AlertAggregator(data, TODAY).alert_feed()]
        assert dates == sorted(dates)

    def test_danger_and_warning_messages(self):
        data = _data(
            employees=[_employee("E1", "2024-06-01")],
            equipment=[Equipment("F2", "Forklift", "2024-04-01", 3, "2024-07-01", id="Q1")],
        )
        alerts = {a.entity_id: a for a in AlertAggregator(data, TODAY).alert_feed()}
        assert alerts["E1"].type == AlertType.DANGER
        assert alerts["E1"].message == "Eğitim Süresi Doldu: Personel E1"
        assert alerts["Q1"].type == AlertType.WARNING
        assert alerts["Q1"].message == "Ekipman Kontrolü Yaklaşıyor: Forklift"
        assert alerts["Q1"].firm_name == "Beta Gıda"

    def test_unknown_firm_name(self):
        data = _data(employees=[_employee("E1", "2024-06-01", firm_id="SILINMIS")])
        alert = AlertAggregator(data, TODAY).alert_feed()[0]
        assert alert.firm_name == UNKNOWN_FIRM_NAME

    def test_feed_is_truncated_but_counts_are_not(self):
        employees = [_employee(f"E{i:02d}", f"2024-05-{i + 1:02d}") for i in range(15)]
        aggregator = AlertAggregator(_data(employees=employees), TODAY)
        assert len(aggregator.alert_feed()) == ALERT_FEED_LIMIT
        assert len(aggregator.all_alerts()) == 15
        assert aggregator.stats().expired_count == 15

    @pytest.mark.parametrize("limit", [0, -1, -5])
    def test_non_positive_limit_gives_empty_feed(self, limit):
        employees = [_employee(f"E{i}", f"2024-05-0{i + 1}") for i in range(3)]
        assert AlertAggregator(_data(employees=employees), TODAY).alert_feed(limit) == []

    def test_one_alert_per_record(self):
        data = _data(employees=[_employee("E1", "2024-06-15")])
        alerts = AlertAggregator(data, TODAY).all_alerts()
        assert len(alerts) == 1
        assert alerts[0].type == AlertType.WARNING


class TestDailySummary:
    """Günlük açılış uyarısı ve gün içinde tek gösterim."""

    def _aggregator(self, today: str = TODAY) -> AlertAggregator:
        data = _data(
            employees=[_employee("E1", "2024-06-15"), _employee("E2", "2024-06-16")],
            equipment=[Equipment("F1", "Vinç", "2024-03-01", 3, "2024-06-01", id="Q1")],
            risks=[RiskAssessmentRecord("F1", "2020-01-01", "2022-01-01", id="R1")],
            meetings=[BoardMeetingRecord("F1", "2024-05-15", 1, "2024-06-15", id="M1")],
        )
        return AlertAggregator(data, today)

    def test_counts_due_today_and_overdue(self):
        summary = self._aggregator().daily_summary()
        assert summary.employee_count == 1
        assert summary.equipment_count == 1
        assert summary.meeting_count == 1
        assert summary.should_show

    def test_risk_does_not_gate_summary(self):
        data = _data(risks=[RiskAssessmentRecord("F1", "2020-01-01", "2022-01-01", id="R1")])
        assert not AlertAggregator(data, TODAY).daily_summary().should_show

    def test_gate_shows_once_per_day(self):
        store = InMemoryMarkerStore()
        gate = DailyAlertGate(store)
        assert gate.check(self._aggregator()) is not None
        assert store.get("last_alert_date") == TODAY
        assert gate.check(self._aggregator()) is None

    def test_gate_shows_again_next_day(self):
        store = InMemoryMarkerStore({"last_alert_date": "2024-06-14"})
        assert DailyAlertGate(store).check(self._aggregator()) is not None

    def test_gate_does_not_mark_when_nothing_due(self):
        store = InMemoryMarkerStore()
        assert DailyAlertGate(store).check(AlertAggregator(_data(), TODAY)) is None
        assert store.get("last_alert_date") is None


class TestFirmDetail:
    """Firma bazlı personel istatistikleri ve tekil kayıt durumları."""

    def test_employee_stats(self):
        data = _data(employees=[
            _employee("E1", "2024-06-01"),
            _employee("E2", "2024-06-30"),
            _employee("E3", "2025-06-30"),
            _employee("E4", "2024-06-01", approval_status=ApprovalStatus.PENDING),
            _employee("E5", "2024-06-01", employment_status=EmploymentStatus.TERMINATED),
            _employee("E6", "2024-06-01", firm_id="F2"),
        ])
        stats = AlertAggregator(data, TODAY).employee_stats("F1")
        assert stats.total == 4
        assert stats.expired == 1
        assert stats.approaching == 1
        assert stats.pending == 1
        assert stats.valid == 1

    def test_record_state_missing(self):
        aggregator = AlertAggregator(_data(), TODAY)
        assert aggregator.record_state("F1", AlertCategory.RISK) == RecordState.MISSING
        assert aggregator.record_state("F1", AlertCategory.MEETING) == RecordState.MISSING

    def test_record_state_uses_category_threshold(self):
        data = _data(
            risks=[RiskAssessmentRecord("F1", "2020-07-10", "2024-07-10", id="R1")],
            meetings=[BoardMeetingRecord("F1", "2024-06-10", 1, "2024-07-10", id="M1")],
        )
        aggregator = AlertAggregator(data, TODAY)
        assert aggregator.record_state("F1", AlertCategory.RISK) == RecordState.APPROACHING
        assert aggregator.record_state("F1", AlertCategory.MEETING) == RecordState.VALID

    def test_record_state_rejects_other_categories(self):
        with pytest.raises(ValueError):
            AlertAggregator(_data(), TODAY).record_state("F1", AlertCategory.TRAINING)


class TestCalendarNotes:
    def test_notes_for_month(self):
        notes = [
            CalendarNote("B", "2024-06-20"),
            CalendarNote("A", "2024-06-02"),
            CalendarNote("C", "2024-07-01"),
            CalendarNote("Boş", ""),
        ]
        assert [n.title for n in notes_for_month(notes, 2024, 6)] == ["A", "B"]
