"""Personel yaşam döngüsü - işe alım, işten çıkış, geri alım ve transfer.

- İşten çıkış yumuşak silmedir (kayıt AYRILDI olarak saklanır)
- Geri alımda 6 ayı aşan ayrılıklar için yenileme eğitimi zorunludur
- Aynı TC ile başka firmada kayıt varsa transfer uygulanır
- Firma silme tüm bağlı kayıtları birlikte siler

Fonksiyonlar koleksiyonları yerinde değiştirmez, yeni liste döndürür.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional

from isg_takip.engine.temporal import (
    DateLike,
    add_months,
    next_training_date,
    parse_date,
    resolve_today,
    to_iso,
)
from isg_takip.models.isg import (
    ApprovalStatus,
    ComplianceData,
    Employee,
    EmploymentStatus,
    Firm,
    HazardTier,
    UserRole,
)

logger = logging.getLogger(__name__)

REHIRE_GAP_MONTHS = 6
REHIRE_GAP_DAYS = 183


class LifecycleError(Exception):
    """Personel yaşam döngüsü hatası."""
    pass


class RefresherTrainingRequiredError(LifecycleError):
    """6 ayı aşan ayrılıkta yeni eğitim tarihi verilmeden geri alım."""
    pass


class DuplicateEmployeeError(LifecycleError):
    """Aynı TC ile aynı firmada aktif kayıt mevcut."""
    pass


class EmployeeNotFoundError(LifecycleError):
    pass


class EmployeeNotTerminatedError(LifecycleError):
    """Geri alım yalnızca ayrılmış (AYRILDI) personel için yapılabilir."""
    pass


class RehirePolicy(str, Enum):
    CALENDAR_MONTHS = "calendar_months"
    FIXED_DAYS = "fixed_days"


class RegistrationOutcome(str, Enum):
    NEW = "new"
    DUPLICATE_ACTIVE = "duplicate_active"
    REHIRE = "rehire"
    TRANSFER = "transfer"


@dataclass
class RehireAssessment:
    employee_id: str
    reference_date: str
    gap_days: int
    gap_months: int
    refresher_required: bool
    policy: RehirePolicy

    @property
    def can_reuse_training(self) -> bool:
        return not self.refresher_required


@dataclass
class RegistrationResolution:
    outcome: RegistrationOutcome
    existing: Optional[Employee] = None


def approval_for(actor_role: Optional[UserRole]) -> ApprovalStatus:
    """Sekreterin girdiği kayıtlar onaya düşer."""
    if actor_role == UserRole.SECRETARY:
        return ApprovalStatus.PENDING
    return ApprovalStatus.APPROVED


def _find(employees: Iterable[Employee], employee_id: str) -> Employee:
    for emp in employees:
        if emp.id == employee_id:
            return emp
    raise EmployeeNotFoundError(f"Personel bulunamadı: {employee_id}")


def _whole_months_between(start: DateLike, end: DateLike) -> int:
    """İki tarih arasındaki tamamlanmış takvim ayı sayısı."""
    s, e = parse_date(start), parse_date(end)
    if e < s:
        s, e = e, s
    months = (e.year - s.year) * 12 + (e.month - s.month)
    if parse_date(add_months(s, months)) > e:
        months -= 1
    return months


# --- İşe geri alım ---


def assess_rehire(
    employee: Employee,
    today: Optional[DateLike] = None,
    policy: RehirePolicy = RehirePolicy.CALENDAR_MONTHS,
) -> RehireAssessment:
    """Ayrılmış personelin geri alımında yenileme eğitimi gerekip gerekmediğini belirler.

    Referans tarih işten çıkış tarihidir; çıkış tarihi olmayan eski kayıtlarda
    son eğitim tarihi kullanılır.

    CALENDAR_MONTHS: bugün > referans + 6 takvim ayı ise eğitim zorunlu.
    FIXED_DAYS: aradaki gün sayısı 183'ü aşıyorsa eğitim zorunlu.
    """
    ref_date = resolve_today(today)
    reference = employee.termination_date or employee.last_training_date
    if not reference:
        raise LifecycleError(
            f"{employee.name} ({employee.id}) için çıkış veya eğitim tarihi yok; "
            "ayrılık süresi hesaplanamaz"
        )
    ref = parse_date(reference)
    gap_days = abs((ref_date - ref).days)

    if policy == RehirePolicy.FIXED_DAYS:
        required = gap_days > REHIRE_GAP_DAYS
    else:
        required = ref_date > parse_date(add_months(ref, REHIRE_GAP_MONTHS))

    return RehireAssessment(
        employee_id=employee.id,
        reference_date=to_iso(ref),
        gap_days=gap_days,
        gap_months=_whole_months_between(ref, ref_date),
        refresher_required=required,
        policy=policy,
    )


def rehire(
    employee: Employee,
    tier: HazardTier,
    today: Optional[DateLike] = None,
    new_training_date: Optional[str] = None,
    actor_role: Optional[UserRole] = None,
    policy: RehirePolicy = RehirePolicy.CALENDAR_MONTHS,
) -> Employee:
    """Ayrılmış personeli yeniden aktif yapar.

    6 ayı aşan ayrılıkta yeni eğitim tarihi zorunludur. Aksi halde eski eğitim
    tarihi kullanılabilir ya da yeni tarih verilebilir; sonraki eğitim tarihi
    her durumda yeniden hesaplanır.
    """
    if employee.is_active:
        raise EmployeeNotTerminatedError(f"{employee.name} zaten aktif; geri alım yapılamaz")

    assessment = assess_rehire(employee, today, policy)
    if assessment.refresher_required and not new_training_date:
        raise RefresherTrainingRequiredError(
            f"{employee.name} {assessment.gap_months} ay önce ayrılmış; "
            "6 ayı geçtiği için yeniden eğitim verilmesi zorunludur"
        )

    last_training = new_training_date or employee.last_training_date
    logger.info(
        "Personel geri alındı: %s (ara: %d gün, eğitim: %s)",
        employee.id, assessment.gap_days, last_training,
    )
    return replace(
        employee,
        employment_status=EmploymentStatus.ACTIVE,
        termination_date=None,
        last_training_date=last_training,
        next_training_date=next_training_date(last_training, tier),
        approval_status=approval_for(actor_role),
    )


# --- Kayıt, onay, işten çıkış ---


def register_employee(
    firm: Firm,
    national_id: str,
    name: str,
    last_training_date: str,
    actor_role: Optional[UserRole] = None,
) -> Employee:
    """Yeni personel kaydı oluşturur; sonraki eğitim tarihi yazım anında hesaplanır."""
    return Employee(
        firm_id=firm.id,
        national_id=national_id,
        name=name,
        last_training_date=last_training_date,
        next_training_date=next_training_date(last_training_date, firm.hazard_tier),
        approval_status=approval_for(actor_role),
    )


def update_training(employee: Employee, last_training_date: str, tier: HazardTier) -> Employee:
    return replace(
        employee,
        last_training_date=last_training_date,
        next_training_date=next_training_date(last_training_date, tier),
    )


def terminate(employee: Employee, today: Optional[DateLike] = None) -> Employee:
    """İş çıkışı verir (yumuşak silme)."""
    return replace(
        employee,
        employment_status=EmploymentStatus.TERMINATED,
        termination_date=to_iso(resolve_today(today)),
    )


def terminate_in(
    employees: list[Employee], employee_id: str, today: Optional[DateLike] = None
) -> list[Employee]:
    _find(employees, employee_id)
    return [terminate(e, today) if e.id == employee_id else e for e in employees]


def approve(employees: list[Employee], employee_id: str) -> list[Employee]:
    _find(employees, employee_id)
    return [
        replace(e, approval_status=ApprovalStatus.APPROVED) if e.id == employee_id else e
        for e in employees
    ]


def bulk_update_training(
    employees: list[Employee],
    employee_ids: Iterable[str],
    last_training_date: str,
    tier: HazardTier,
) -> list[Employee]:
    """Seçili personelin eğitim tarihlerini topluca günceller."""
    selected = set(employee_ids)
    if not selected:
        return list(employees)
    return [
        update_training(e, last_training_date, tier) if e.id in selected else e
        for e in employees
    ]


# --- TC kontrolü ve transfer ---


def resolve_registration(
    national_id: str,
    firm_id: str,
    employees: Iterable[Employee],
    editing_id: Optional[str] = None,
) -> RegistrationResolution:
    """Aynı TC numarasının tüm firmalarda kaydını kontrol eder."""
    existing = next(
        (e for e in employees if e.national_id == national_id and e.id != editing_id),
        None,
    )
    if existing is None:
        return RegistrationResolution(RegistrationOutcome.NEW)
    if existing.firm_id != firm_id:
        return RegistrationResolution(RegistrationOutcome.TRANSFER, existing)
    if existing.is_active:
        return RegistrationResolution(RegistrationOutcome.DUPLICATE_ACTIVE, existing)
    return RegistrationResolution(RegistrationOutcome.REHIRE, existing)


def add_employee(employees: list[Employee], new_employee: Employee) -> list[Employee]:
    resolution = resolve_registration(new_employee.national_id, new_employee.firm_id, employees)
    if resolution.outcome == RegistrationOutcome.DUPLICATE_ACTIVE:
        raise DuplicateEmployeeError(
            f"{new_employee.national_id} TC numaralı personel bu firmada zaten aktif"
        )
    return [*employees, new_employee]


def transfer_employee(
    employees: list[Employee],
    existing_id: str,
    new_employee: Employee,
    today: Optional[DateLike] = None,
) -> list[Employee]:
    """Eski firmadaki kaydı AYRILDI yapar ve yeni firmaya kaydı ekler."""
    updated = terminate_in(employees, existing_id, today)
    logger.info("Personel transfer edildi: %s -> firma %s", existing_id, new_employee.firm_id)
    return [*updated, new_employee]


# --- Firma işlemleri ---


def update_firm(firms: list[Firm], updated: Firm) -> list[Firm]:
    """Firma kaydını değiştirir; tehlike sınıfı değişse de mevcut tarihler yeniden hesaplanmaz."""
    return [updated if f.id == updated.id else f for f in firms]


def delete_firm(data: ComplianceData, firm_id: str) -> ComplianceData:
    """Firmayı ve bağlı tüm kayıtları (personel, ekipman, risk, kurul) kalıcı siler."""
    return ComplianceData(
        firms=[f for f in data.firms if f.id != firm_id],
        employees=[e for e in data.employees if e.firm_id != firm_id],
        equipment=[e for e in data.equipment if e.firm_id != firm_id],
        risks=[r for r in data.risks if r.firm_id != firm_id],
        meetings=[m for m in data.meetings if m.firm_id != firm_id],
        notes=list(data.notes),
    )
