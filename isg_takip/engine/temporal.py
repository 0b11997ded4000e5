"""Süre hesaplama motoru - sonraki tarih hesapları ve durum sınıflandırması.

- Eğitim ve risk analizi periyotları firmanın tehlike sınıfından türetilir
- Ekipman kontrolü ve kurul toplantısı ay bazlı periyotla hesaplanır
- Her tarih "bugün"e göre süresi dolmuş / yaklaşan / geçerli olarak sınıflanır

Tüm fonksiyonlar saf fonksiyonlardır; "bugün" her yerde dışarıdan verilebilir.
Tarihler ISO 8601 (YYYY-MM-DD) string olarak alınır ve döndürülür.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional, Union

from isg_takip.models.isg import AlertCategory, HazardTier, Status

DateLike = Union[str, date]

# Tehlike sınıfına göre eğitim yenileme periyodu (yıl)
TRAINING_PERIOD_YEARS: dict[HazardTier, int] = {
    HazardTier.LOW: 3,
    HazardTier.HIGH: 2,
    HazardTier.VERY_HIGH: 1,
}

# Tehlike sınıfına göre risk analizi geçerlilik süresi (yıl)
RISK_VALIDITY_YEARS: dict[HazardTier, int] = {
    HazardTier.LOW: 6,
    HazardTier.HIGH: 4,
    HazardTier.VERY_HIGH: 2,
}

# Tehlike sınıfına göre izin verilen kurul toplantısı periyotları (ay)
MEETING_PERIOD_OPTIONS: dict[HazardTier, list[int]] = {
    HazardTier.VERY_HIGH: [1],
    HazardTier.HIGH: [1, 2],
    HazardTier.LOW: [1, 2, 3],
}

DEFAULT_APPROACHING_DAYS = 30
MEETING_APPROACHING_DAYS = 15


# --- Tarih yardımcıları ---


def parse_date(value: DateLike) -> date:
    """ISO tarih string'ini date nesnesine çevirir.

    Saat bilgisi içeren değerlerde (``2024-01-01T10:00:00``) yalnızca gün
    kısmı kullanılır; gün kısmından sonra ``T`` dışında karakter gelirse veya
    değer boşsa ValueError fırlatır.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise ValueError("Tarih boş olamaz")
    return date.fromisoformat(value.split("T", 1)[0])


def to_iso(value: date) -> str:
    return value.isoformat()


def resolve_today(today: Optional[DateLike] = None) -> date:
    """Verilen referans günü ya da yerel saatle bugünü döndürür."""
    if today is None:
        return date.today()
    return parse_date(today)


def add_months(value: DateLike, months: int) -> str:
    """Tarihe ay ekler; hedef ayda o gün yoksa ayın son gününe sabitler."""
    start = parse_date(value)
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return to_iso(date(year, month, min(start.day, last_day)))


def add_years(value: DateLike, years: int) -> str:
    """Tarihe yıl ekler (29 Şubat artık olmayan yılda 28 Şubat olur)."""
    return add_months(value, years * 12)


# --- Sonraki tarih hesapları ---


def next_training_date(last_date: DateLike, tier: HazardTier) -> str:
    """Son eğitim tarihinden bir sonraki eğitim tarihini hesaplar."""
    return add_years(last_date, TRAINING_PERIOD_YEARS[tier])


def next_risk_date(last_date: DateLike, tier: HazardTier) -> str:
    """Risk analizinin geçerlilik bitiş tarihini hesaplar."""
    return add_years(last_date, RISK_VALIDITY_YEARS[tier])


def next_date_by_month(last_date: DateLike, period_months: int) -> str:
    return add_months(last_date, period_months)


def next_equipment_date(last_date: DateLike, period_months: int) -> str:
    """Periyodik ekipman kontrolünün sonraki tarihini hesaplar."""
    return next_date_by_month(last_date, period_months)


def next_meeting_date(last_date: DateLike, period_months: int) -> str:
    """Kurul toplantısının sonraki tarihini hesaplar.

    Periyodun tehlike sınıfına uygunluğu burada kontrol edilmez; çağıran
    taraf yalnızca ``allowed_meeting_periods`` seçeneklerini sunmalıdır.
    """
    return next_date_by_month(last_date, period_months)


def allowed_meeting_periods(tier: HazardTier) -> list[int]:
    return list(MEETING_PERIOD_OPTIONS[tier])


def default_meeting_period(tier: HazardTier, current: Optional[int] = None) -> int:
    """Yeni kurul kaydı için varsayılan periyot; mevcut kayıt varsa onun periyodu."""
    if current:
        return current
    return max(MEETING_PERIOD_OPTIONS[tier])


# --- Durum sınıflandırması ---


def days_remaining(due_date: DateLike, today: Optional[DateLike] = None) -> int:
    """Bitiş tarihine kalan gün sayısı (geçmişse negatif)."""
    return (parse_date(due_date) - resolve_today(today)).days


def is_expired(due_date: DateLike, today: Optional[DateLike] = None) -> bool:
    return days_remaining(due_date, today) < 0


def is_approaching(
    due_date: DateLike,
    today: Optional[DateLike] = None,
    threshold_days: int = DEFAULT_APPROACHING_DAYS,
) -> bool:
    days = days_remaining(due_date, today)
    return 0 <= days <= threshold_days


def is_due_or_overdue(due_date: DateLike, today: Optional[DateLike] = None) -> bool:
    """Süresi dolmuş veya bugün dolan kayıtlar (günlük açılış uyarısı)."""
    return days_remaining(due_date, today) <= 0


def classify(
    due_date: DateLike,
    today: Optional[DateLike] = None,
    threshold_days: int = DEFAULT_APPROACHING_DAYS,
) -> Status:
    days = days_remaining(due_date, today)
    if days < 0:
        return Status.EXPIRED
    if days <= threshold_days:
        return Status.APPROACHING
    return Status.VALID


def threshold_for(category: AlertCategory) -> int:
    """Kategoriye göre yaklaşma eşiği; kurul toplantılarında pencere daha dar."""
    if category == AlertCategory.MEETING:
        return MEETING_APPROACHING_DAYS
    return DEFAULT_APPROACHING_DAYS


def format_date_tr(value: Optional[str]) -> str:
    """YYYY-MM-DD -> GG.AA.YYYY"""
    if not value:
        return "-"
    return parse_date(value).strftime("%d.%m.%Y")
