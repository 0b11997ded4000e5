"""Kayıt validasyonu - form ve toplu girişlerin kontrolü.

- Kurul periyodunun tehlike sınıfına uygunluğu
- Ekipman kontrol periyodu
- ISO tarih formatı
- Personel formu ve toplu personel ekleme satırları
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from isg_takip.engine.temporal import allowed_meeting_periods, parse_date
from isg_takip.models.isg import HazardTier

logger = logging.getLogger(__name__)

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class BulkEmployeeRow:
    line_no: int
    national_id: str
    name: str
    last_training_date: str


class RecordValidator:
    """Kullanıcı girişlerinin motor fonksiyonlarına verilmeden önce kontrolü."""

    def validate_iso_date(self, value: Optional[str], field_name: str = "Tarih") -> ValidationResult:
        errors = []
        if not value:
            errors.append(f"{field_name} girilmesi zorunludur")
        elif not ISO_DATE_RE.match(value):
            errors.append(f"{field_name} YYYY-AA-GG formatında olmalı: {value}")
        else:
            try:
                parse_date(value)
            except ValueError:
                errors.append(f"Geçersiz {field_name.lower()}: {value}")
        return ValidationResult(is_valid=len(errors) == 0, errors=errors)

    def validate_meeting_period(self, tier: HazardTier, period_months: int) -> ValidationResult:
        """Kurul periyodu tehlike sınıfının izin verdiği seçeneklerden biri olmalı."""
        allowed = allowed_meeting_periods(tier)
        errors = []
        if period_months not in allowed:
            errors.append(
                f"{tier.value} firmalar için kurul periyodu {allowed} ay olabilir, "
                f"girilen: {period_months}"
            )
        return ValidationResult(is_valid=len(errors) == 0, errors=errors)

    def validate_inspection_period(self, period_months: int) -> ValidationResult:
        errors = []
        if period_months < 1:
            errors.append(f"Kontrol periyodu en az 1 ay olmalı: {period_months}")
        return ValidationResult(is_valid=len(errors) == 0, errors=errors)

    def validate_employee_form(
        self, name: str, national_id: str, last_training_date: Optional[str]
    ) -> ValidationResult:
        errors = []
        warnings = []
        if not name or not national_id:
            errors.append("Lütfen İsim ve TC Kimlik No giriniz")
        elif not national_id.isdigit() or len(national_id) != 11:
            warnings.append(f"TC Kimlik No 11 haneli olmalı: {national_id}")
        errors.extend(self.validate_iso_date(last_training_date, "Eğitim tarihi").errors)
        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)

    def parse_bulk_employees(self, text: str) -> tuple[list[BulkEmployeeRow], ValidationResult]:
        """Her satırda ``TC, Ad Soyad, YYYY-AA-GG`` bekler; hatalı satırlar atlanır."""
        rows: list[BulkEmployeeRow] = []
        warnings = []
        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            parts = [p.strip() for p in line.split(",")]
            if len(parts) < 3 or not self.validate_iso_date(parts[2]).is_valid:
                warnings.append(f"Satır {line_no} atlandı: {line.strip()}")
                continue
            rows.append(BulkEmployeeRow(line_no, parts[0], parts[1], parts[2]))

        errors = [] if rows else ["Geçerli personel satırı bulunamadı"]
        if warnings:
            logger.warning("Toplu eklemede %d satır atlandı", len(warnings))
        return rows, ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)
