"""Örnek İSG verisi üretim modülü.

8 firma (üç tehlike sınıfından), firma başına 6-15 personel, ekipmanlar,
risk analizi ve kurul kayıtları ile birkaç takvim notu üretir.

Problemli senaryolar:
- Süresi dolmuş eğitim, ekipman kontrolü ve risk analizi
- 30 gün içinde dolacak kayıtlar
- 6 aydan uzun süre önce ayrılmış personel (geri alımda eğitim zorunlu)
- Sekreter tarafından eklenmiş, onay bekleyen personel
"""
import json
import os
import random
from datetime import date, timedelta
from typing import Dict, List, Optional

from isg_takip.engine import temporal
from isg_takip.models.isg import (
    ApprovalStatus,
    BoardMeetingRecord,
    CalendarNote,
    ComplianceData,
    Employee,
    EmploymentStatus,
    Equipment,
    Firm,
    FirmNote,
    HazardTier,
    NotePriority,
    RiskAssessmentRecord,
)


# --- SABİTLER ---

FIRMS = [
    ("Karadeniz Tekstil A.Ş.", HazardTier.LOW),
    ("Ege Gıda Sanayi", HazardTier.HIGH),
    ("Anadolu Metal Döküm", HazardTier.VERY_HIGH),
    ("Marmara Lojistik", HazardTier.HIGH),
    ("Toros Maden İşletmeleri", HazardTier.VERY_HIGH),
    ("Bursa Ofis Hizmetleri", HazardTier.LOW),
    ("Samsun Liman İşletmesi", HazardTier.HIGH),
    ("Akdeniz Yapı İnşaat", HazardTier.VERY_HIGH),
]

FIRST_NAMES = [
    "Ahmet", "Mehmet", "Ayşe", "Fatma", "Mustafa", "Zeynep", "Emre", "Elif",
    "Hüseyin", "Hatice", "Murat", "Merve", "Ali", "Esra", "Burak", "Selin",
]
LAST_NAMES = [
    "Yılmaz", "Kaya", "Demir", "Şahin", "Çelik", "Yıldız", "Öztürk", "Aydın",
    "Arslan", "Doğan", "Kılıç", "Aslan", "Koç", "Kurt", "Özdemir", "Polat",
]

EQUIPMENT_TYPES: Dict[HazardTier, List[str]] = {
    HazardTier.LOW: ["Yangın Söndürme Tüpü", "Asansör", "Jeneratör"],
    HazardTier.HIGH: ["Forklift", "Basınçlı Kap", "Yangın Söndürme Tüpü", "Kompresör"],
    HazardTier.VERY_HIGH: ["Vinç", "İskele", "Kaldırma Aracı", "Basınçlı Kap", "Topraklama Tesisatı"],
}

# Ekipman kontrol periyotları (ay)
INSPECTION_PERIODS = [3, 6, 12]


def _random_date(rng: random.Random, start: date, end: date) -> str:
    span = (end - start).days
    return temporal.to_iso(start + timedelta(days=rng.randint(0, max(span, 0))))


def _national_id(rng: random.Random) -> str:
    return str(rng.randint(1, 9)) + "".join(str(rng.randint(0, 9)) for _ in range(10))


def generate_firms() -> List[Firm]:
    firms = []
    for i, (name, tier) in enumerate(FIRMS, start=1):
        firms.append(Firm(name=name, hazard_tier=tier, id=f"FIRM{i:03d}"))
    # Bir firmaya örnek notlar ekle
    firms[2].notes = "Dökümhane bölümünde gürültü ölçümü yapılacak."
    firms[2].firm_notes = [
        FirmNote(
            title="KKD denetimi",
            body="Eldiven ve yüz siperliği kullanımı kontrol edilecek.",
            date="2024-05-02",
            priority=NotePriority.HIGH,
            id="NOTE001",
        )
    ]
    return firms


def generate_employees(firms: List[Firm], rng: random.Random, today: date) -> List[Employee]:
    """Firma başına 6-15 personel; bir kısmı ayrılmış, bir kısmı onay bekliyor."""
    employees = []
    counter = 0
    for firm in firms:
        period_years = temporal.TRAINING_PERIOD_YEARS[firm.hazard_tier]
        # Eğitim tarihleri: bir kısmının süresi dolacak şekilde periyodun biraz ötesine yay
        earliest = today - timedelta(days=int(365 * period_years * 1.15))
        for _ in range(rng.randint(6, 15)):
            counter += 1
            last = _random_date(rng, earliest, today)
            employee = Employee(
                firm_id=firm.id,
                national_id=_national_id(rng),
                name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                last_training_date=last,
                next_training_date=temporal.next_training_date(last, firm.hazard_tier),
                id=f"EMP{counter:04d}",
            )
            roll = rng.random()
            if roll < 0.10:
                employee.employment_status = EmploymentStatus.TERMINATED
                employee.termination_date = _random_date(rng, today - timedelta(days=400), today)
            elif roll < 0.15:
                employee.approval_status = ApprovalStatus.PENDING
            employees.append(employee)
    return employees


def generate_equipment(firms: List[Firm], rng: random.Random, today: date) -> List[Equipment]:
    equipment = []
    counter = 0
    for firm in firms:
        for name in EQUIPMENT_TYPES[firm.hazard_tier]:
            counter += 1
            period = rng.choice(INSPECTION_PERIODS)
            last = _random_date(rng, today - timedelta(days=period * 31 + 20), today)
            equipment.append(
                Equipment(
                    firm_id=firm.id,
                    name=name,
                    last_inspection_date=last,
                    period_months=period,
                    next_inspection_date=temporal.next_equipment_date(last, period),
                    id=f"EQ{counter:04d}",
                )
            )
    return equipment


def generate_risks(firms: List[Firm], rng: random.Random, today: date) -> List[RiskAssessmentRecord]:
    risks = []
    for firm in firms:
        # Bir firmada risk analizi hiç yapılmamış olsun
        if firm.id == "FIRM006":
            continue
        years = temporal.RISK_VALIDITY_YEARS[firm.hazard_tier]
        last = _random_date(rng, today - timedelta(days=365 * years + 60), today)
        risks.append(
            RiskAssessmentRecord(
                firm_id=firm.id,
                last_assessment_date=last,
                valid_until=temporal.next_risk_date(last, firm.hazard_tier),
                id=f"RISK-{firm.id}",
            )
        )
    return risks


def generate_meetings(firms: List[Firm], rng: random.Random, today: date) -> List[BoardMeetingRecord]:
    meetings = []
    for firm in firms:
        period = temporal.default_meeting_period(firm.hazard_tier)
        last = _random_date(rng, today - timedelta(days=period * 31 + 10), today)
        meetings.append(
            BoardMeetingRecord(
                firm_id=firm.id,
                last_meeting_date=last,
                period_months=period,
                next_meeting_date=temporal.next_meeting_date(last, period),
                id=f"MEET-{firm.id}",
            )
        )
    return meetings


def generate_notes(today: date) -> List[CalendarNote]:
    return [
        CalendarNote(
            title="Acil durum tatbikatı",
            date=temporal.to_iso(today + timedelta(days=5)),
            description="Toros Maden - tahliye tatbikatı",
            id="EVT001",
        ),
        CalendarNote(
            title="İSG kurul hazırlığı",
            date=temporal.to_iso(today + timedelta(days=12)),
            id="EVT002",
        ),
    ]


def generate_data(seed: int = 42, today: Optional[date] = None) -> ComplianceData:
    """Tohumlanmış rastgele üreteçle tekrarlanabilir örnek veri üretir."""
    rng = random.Random(seed)
    ref = today or date.today()
    firms = generate_firms()
    return ComplianceData(
        firms=firms,
        employees=generate_employees(firms, rng, ref),
        equipment=generate_equipment(firms, rng, ref),
        risks=generate_risks(firms, rng, ref),
        meetings=generate_meetings(firms, rng, ref),
        notes=generate_notes(ref),
    )


def save_json(data, filepath: str):
    os.makedirs(os.path.dirname(filepath), exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    print(f"  ✓ {filepath} ({len(data)} kayıt)")


def generate_all(output_dir: str = "data_layer/data", seed: int = 42) -> ComplianceData:
    """Tüm koleksiyonları üretir ve JSON olarak kaydeder."""
    print("=" * 60)
    print("🏭 İSG örnek veri üretimi")
    print("=" * 60)

    data = generate_data(seed)
    save_json([f.to_dict() for f in data.firms], f"{output_dir}/firms.json")
    save_json([e.to_dict() for e in data.employees], f"{output_dir}/employees.json")
    save_json([e.to_dict() for e in data.equipment], f"{output_dir}/equipments.json")
    save_json([r.to_dict() for r in data.risks], f"{output_dir}/risks.json")
    save_json([m.to_dict() for m in data.meetings], f"{output_dir}/meetings.json")
    save_json([n.to_dict() for n in data.notes], f"{output_dir}/events.json")

    terminated = sum(1 for e in data.employees if not e.is_active)
    pending = sum(1 for e in data.employees if e.is_pending)
    print(f"\n{'='*60}")
    print("✅ Üretim tamamlandı!")
    print(f"   Firmalar: {len(data.firms)}")
    print(f"   Personel: {len(data.employees)} (ayrılmış: {terminated}, onay bekleyen: {pending})")
    print(f"   Ekipman: {len(data.equipment)}")
    print(f"   Risk analizi: {len(data.risks)} / Kurul: {len(data.meetings)}")
    print(f"   Çıktı dizini: {output_dir}/")
    return data


if __name__ == "__main__":
    generate_all()
