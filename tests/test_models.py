"""Veri modeli dönüşüm testleri."""

from isg_takip.models.isg import (
    AppSettings,
    ApprovalStatus,
    Employee,
    EmploymentStatus,
    Equipment,
    Firm,
    FirmNote,
    HazardTier,
    NotePriority,
    PlanningReport,
    ReportStatus,
    User,
    UserRole,
)


class TestLegacyKeys:
    """Eski depodaki camelCase alan adları okunabilmeli."""

    def test_employee_from_legacy(self):
        emp = Employee.from_dict({
            "id": "E1",
            "firmaId": "F1",
            "tcNo": "12345678901",
            "adSoyad": "Ali Veli",
            "sonEgitimTarihi": "2023-01-01",
            "sonrakiEgitimTarihi": "2025-01-01",
            "cikisTarihi": "2024-03-01T10:15:00.000Z",
            "calismaDurumu": "AYRILDI",
        })
        assert emp.firm_id == "F1"
        assert emp.name == "Ali Veli"
        assert emp.employment_status == EmploymentStatus.TERMINATED
        assert emp.termination_date == "2024-03-01"
        assert emp.approval_status == ApprovalStatus.APPROVED

    def test_missing_status_fields_default(self):
        emp = Employee.from_dict({
            "id": "E1", "firm_id": "F1", "national_id": "1", "name": "A",
            "last_training_date": "2023-01-01", "next_training_date": "2025-01-01",
        })
        assert emp.is_active
        assert not emp.is_pending
        assert emp.termination_date is None

    def test_firm_with_notes(self):
        firm = Firm.from_dict({
            "id": "F1",
            "ad": "Alfa",
            "tehlikeSinifi": "Çok Tehlikeli",
            "gelismisNotlar": [
                {"id": "N1", "baslik": "Denetim", "icerik": "KKD", "tarih": "2024-05-01", "oncelik": "YUKSEK"},
            ],
        })
        assert firm.hazard_tier == HazardTier.VERY_HIGH
        assert firm.notes == ""
        assert firm.firm_notes[0].priority == NotePriority.HIGH

    def test_equipment_period_is_int(self):
        eq = Equipment.from_dict({
            "id": "Q1", "firmaId": "F1", "ad": "Vinç", "sonKontrolTarihi": "2024-01-01",
            "periyotAy": "6", "sonrakiKontrolTarihi": "2024-07-01",
        })
        assert eq.period_months == 6

    def test_user_full_name(self):
        user = User.from_dict({
            "id": "U1", "username": "uzman", "role": "USER",
            "adSoyad": "Zeynep Kaya", "allowedFirmIds": ["F1"], "password": "gizli",
        })
        assert user.full_name == "Zeynep Kaya"
        assert user.role == UserRole.USER
        assert user.allowed_firm_ids == ["F1"]

    def test_settings(self):
        settings = AppSettings.from_dict({"autoReportDay": "1", "autoReportTime": "09:30"})
        assert settings.auto_report_day == 1
        assert settings.auto_report_time == "09:30"
        assert AppSettings.from_dict({}) == AppSettings()


class TestToDict:
    def test_enums_are_serialized_as_values(self):
        firm = Firm("Alfa", HazardTier.HIGH, firm_notes=[FirmNote("a", "b", "2024-01-01")], id="F1")
        data = firm.to_dict()
        assert data["hazard_tier"] == "Tehlikeli"
        assert data["firm_notes"][0]["priority"] == "ORTA"
        assert Firm.from_dict(data) == firm


class TestReportLabels:
    def test_status_labels(self):
        assert ReportStatus.EXPIRED.label == "GECİKMİŞ"
        assert ReportStatus.PLANNED.label == "PLANLI"

    def test_empty_report_counts(self):
        report = PlanningReport("Plan", "", "2024-06-17", "2024-06-23")
        assert report.total_action_count == 0
        assert report.active_firm_count == 0
