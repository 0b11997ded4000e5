"""İSG takip veri modelleri."""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


def new_id() -> str:
    return str(uuid.uuid4())


class HazardTier(str, Enum):
    LOW = "Az Tehlikeli"
    HIGH = "Tehlikeli"
    VERY_HIGH = "Çok Tehlikeli"


class EmploymentStatus(str, Enum):
    ACTIVE = "AKTIF"
    TERMINATED = "AYRILDI"


class ApprovalStatus(str, Enum):
    APPROVED = "ONAYLANDI"
    PENDING = "BEKLIYOR"


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    SECRETARY = "SECRETARY"


class NotePriority(str, Enum):
    LOW = "DUSUK"
    MEDIUM = "ORTA"
    HIGH = "YUKSEK"


class Status(str, Enum):
    EXPIRED = "expired"
    APPROACHING = "approaching"
    VALID = "valid"


class RecordState(str, Enum):
    """Firma başına tekil kayıtların (risk analizi, kurul) durumu."""

    MISSING = "missing"
    EXPIRED = "expired"
    APPROACHING = "approaching"
    VALID = "valid"


class AlertType(str, Enum):
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"


class AlertCategory(str, Enum):
    RISK = "risk"
    MEETING = "meeting"
    TRAINING = "training"
    EQUIPMENT = "equipment"
    APPROVAL = "approval"


class ReportStatus(str, Enum):
    EXPIRED = "EXPIRED"
    PLANNED = "PLANNED"

    @property
    def label(self) -> str:
        return "GECİKMİŞ" if self is ReportStatus.EXPIRED else "PLANLI"


# Eski depodaki (camelCase, Türkçe) alan adlarının karşılıkları
_LEGACY_KEYS: dict[str, str] = {
    "ad": "name",
    "tehlikeSinifi": "hazard_tier",
    "notlar": "notes",
    "gelismisNotlar": "firm_notes",
    "baslik": "title",
    "icerik": "body",
    "tarih": "date",
    "oncelik": "priority",
    "firmaId": "firm_id",
    "tcNo": "national_id",
    "adSoyad": "name",
    "sonEgitimTarihi": "last_training_date",
    "sonrakiEgitimTarihi": "next_training_date",
    "calismaDurumu": "employment_status",
    "cikisTarihi": "termination_date",
    "onayDurumu": "approval_status",
    "sonKontrolTarihi": "last_inspection_date",
    "sonrakiKontrolTarihi": "next_inspection_date",
    "periyotAy": "period_months",
    "sonTarih": "last_assessment_date",
    "gecerlilikTarihi": "valid_until",
    "sonToplantiTarihi": "last_meeting_date",
    "sonrakiToplantiTarihi": "next_meeting_date",
    "allowedFirmIds": "allowed_firm_ids",
    "autoReportDay": "auto_report_day",
    "autoReportTime": "auto_report_time",
}


def _normalize(raw: dict[str, Any], known: set[str]) -> dict[str, Any]:
    """Eski anahtarları çevirir, bilinmeyen alanları atar."""
    out: dict[str, Any] = {}
    for key, value in raw.items():
        key = _LEGACY_KEYS.get(key, key)
        if key in known:
            out[key] = value
    return out


class _Record:
    """Sözlük dönüşümleri için ortak yardımcılar."""

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Enum):
                data[key] = value.value
        return data

    @classmethod
    def _fields(cls) -> set[str]:
        return set(cls.__dataclass_fields__)  # type: ignore[attr-defined]


@dataclass
class FirmNote(_Record):
    title: str
    body: str
    date: str
    priority: NotePriority = NotePriority.MEDIUM
    id: str = field(default_factory=new_id)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> FirmNote:
        data = _normalize(raw, cls._fields())
        data["priority"] = NotePriority(data.get("priority", NotePriority.MEDIUM.value))
        return cls(**data)


@dataclass
class Firm(_Record):
    name: str
    hazard_tier: HazardTier
    notes: str = ""
    firm_notes: list[FirmNote] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["firm_notes"] = [n.to_dict() for n in self.firm_notes]
        return data

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Firm:
        data = _normalize(raw, cls._fields())
        data["hazard_tier"] = HazardTier(data["hazard_tier"])
        data["firm_notes"] = [FirmNote.from_dict(n) for n in data.get("firm_notes") or []]
        data["notes"] = data.get("notes") or ""
        return cls(**data)


@dataclass
class Employee(_Record):
    firm_id: str
    national_id: str
    name: str
    last_training_date: str
    next_training_date: str
    employment_status: EmploymentStatus = EmploymentStatus.ACTIVE
    termination_date: Optional[str] = None
    approval_status: ApprovalStatus = ApprovalStatus.APPROVED
    id: str = field(default_factory=new_id)

    @property
    def is_active(self) -> bool:
        return self.employment_status == EmploymentStatus.ACTIVE

    @property
    def is_pending(self) -> bool:
        return self.approval_status == ApprovalStatus.PENDING

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Employee:
        data = _normalize(raw, cls._fields())
        # Eski kayıtlarda durum alanları olmayabilir
        data["employment_status"] = EmploymentStatus(
            data.get("employment_status") or EmploymentStatus.ACTIVE.value
        )
        data["approval_status"] = ApprovalStatus(
            data.get("approval_status") or ApprovalStatus.APPROVED.value
        )
        # ISO datetime olarak saklanmış çıkış tarihlerini güne indir
        if data.get("termination_date"):
            data["termination_date"] = data["termination_date"][:10]
        else:
            data["termination_date"] = None
        return cls(**data)


@dataclass
class Equipment(_Record):
    firm_id: str
    name: str
    last_inspection_date: str
    period_months: int
    next_inspection_date: str
    id: str = field(default_factory=new_id)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Equipment:
        data = _normalize(raw, cls._fields())
        data["period_months"] = int(data["period_months"])
        return cls(**data)


@dataclass
class RiskAssessmentRecord(_Record):
    firm_id: str
    last_assessment_date: str
    valid_until: str
    id: str = field(default_factory=new_id)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> RiskAssessmentRecord:
        return cls(**_normalize(raw, cls._fields()))


@dataclass
class BoardMeetingRecord(_Record):
    firm_id: str
    last_meeting_date: str
    period_months: int
    next_meeting_date: str
    id: str = field(default_factory=new_id)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> BoardMeetingRecord:
        data = _normalize(raw, cls._fields())
        data["period_months"] = int(data["period_months"])
        return cls(**data)


@dataclass
class CalendarNote(_Record):
    title: str
    date: str
    description: str = ""
    id: str = field(default_factory=new_id)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> CalendarNote:
        data = _normalize(raw, cls._fields())
        data["description"] = data.get("description") or ""
        return cls(**data)


@dataclass
class User(_Record):
    username: str
    role: UserRole
    full_name: str = ""
    allowed_firm_ids: list[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> User:
        raw = dict(raw)
        if "adSoyad" in raw:
            raw["full_name"] = raw.pop("adSoyad")
        data = _normalize(raw, cls._fields())
        data["role"] = UserRole(data["role"])
        data["allowed_firm_ids"] = list(data.get("allowed_firm_ids") or [])
        return cls(**data)


@dataclass
class AppSettings(_Record):
    # 0: Pazar, 1: Pazartesi ... 6: Cumartesi
    auto_report_day: int = 5
    auto_report_time: str = "17:00"

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> AppSettings:
        data = _normalize(raw, cls._fields())
        if "auto_report_day" in data:
            data["auto_report_day"] = int(data["auto_report_day"])
        return cls(**data)


@dataclass
class ComplianceData:
    """Depodan okunan tüm koleksiyonların bellekteki anlık görüntüsü."""

    firms: list[Firm] = field(default_factory=list)
    employees: list[Employee] = field(default_factory=list)
    equipment: list[Equipment] = field(default_factory=list)
    risks: list[RiskAssessmentRecord] = field(default_factory=list)
    meetings: list[BoardMeetingRecord] = field(default_factory=list)
    notes: list[CalendarNote] = field(default_factory=list)

    def firm(self, firm_id: str) -> Optional[Firm]:
        return next((f for f in self.firms if f.id == firm_id), None)


# --- Çıktı kayıtları ---


@dataclass
class Alert:
    type: AlertType
    message: str
    date: str
    firm_id: str
    category: AlertCategory
    firm_name: str = ""
    entity_id: str = ""


@dataclass
class DashboardStats:
    firm_count: int
    active_employee_count: int
    expired_count: int
    approaching_count: int


@dataclass
class DailyAlertSummary:
    employee_count: int
    equipment_count: int
    meeting_count: int

    @property
    def should_show(self) -> bool:
        return self.employee_count > 0 or self.equipment_count > 0 or self.meeting_count > 0


@dataclass
class CalendarItem:
    id: str
    text: str
    date: str
    status: Status
    detail: str = ""


@dataclass
class FirmMonthGroup:
    firm_id: str
    firm_name: str
    hazard_tier: HazardTier
    trainings: list[CalendarItem] = field(default_factory=list)
    equipment: list[CalendarItem] = field(default_factory=list)
    risk: Optional[CalendarItem] = None
    meeting: Optional[CalendarItem] = None
    has_expired: bool = False

    @property
    def total_count(self) -> int:
        return (
            len(self.trainings)
            + len(self.equipment)
            + (1 if self.risk else 0)
            + (1 if self.meeting else 0)
        )


@dataclass
class EmployeeStats:
    total: int
    expired: int
    approaching: int
    pending: int

    @property
    def valid(self) -> int:
        return self.total - self.expired - self.approaching - self.pending


@dataclass
class ReportItem:
    type: str
    name: str
    detail: str
    date: str
    status: ReportStatus


@dataclass
class FirmReportSection:
    firm_id: str
    firm_name: str
    hazard_tier: HazardTier
    items: list[ReportItem] = field(default_factory=list)

    @property
    def heading(self) -> str:
        return f"{self.firm_name}  -  ({self.hazard_tier.value})"


@dataclass
class PlanningReport:
    title: str
    period_label: str
    start_date: str
    end_date: str
    sections: list[FirmReportSection] = field(default_factory=list)

    @property
    def total_action_count(self) -> int:
        return sum(len(s.items) for s in self.sections)

    @property
    def active_firm_count(self) -> int:
        return len(self.sections)


@dataclass
class AgentDecision:
    decision_id: str
    agent_name: str
    decision_type: str
    input_data: dict
    output_data: dict
    reasoning: str
    timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat())
