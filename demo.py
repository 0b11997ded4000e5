"""
İSG Takip motoru için çevrimdışı demo script'i.

AWS bağlantısı gerektirmez: örnek veri üretir, panel sayaçlarını, uyarı
akışını, aylık takvimi, haftalık planı ve geri alım kuralını gösterir.

Kullanım:
    python demo.py
    python demo.py --aws     # Verileri DynamoDB'den oku (setup_aws sonrası)
"""

import logging
import sys
from datetime import date, datetime

import env_loader  # noqa: F401

from isg_takip import config
from isg_takip.agents.markers import InMemoryMarkerStore
from isg_takip.agents.scheduler import AutoReportScheduler
from isg_takip.engine import lifecycle
from isg_takip.engine.alerts import AlertAggregator, DailyAlertGate
from isg_takip.engine.reports import build_next_week_plan
from isg_takip.engine.temporal import format_date_tr
from isg_takip.models.isg import AppSettings, ComplianceData, EmploymentStatus

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s [%(name)s] %(levelname)s: %(message)s")


def load_data(use_aws: bool) -> ComplianceData:
    if use_aws:
        from isg_takip.agents.compliance_monitor import ComplianceMonitorAgent
        return ComplianceMonitorAgent().load_data()
    from data_layer.generators.generators import generate_data
    return generate_data(seed=42)


def show_dashboard(aggregator: AlertAggregator):
    print("\n--- Panel ---")
    stats = aggregator.stats()
    print(f"   Firma: {stats.firm_count}")
    print(f"   Aktif personel: {stats.active_employee_count}")
    print(f"   Süresi dolmuş: {stats.expired_count}")
    print(f"   Yaklaşan: {stats.approaching_count}")


def show_alerts(aggregator: AlertAggregator):
    print("\n--- Uyarılar ---")
    for alert in aggregator.alert_feed():
        icon = {"danger": "🔴", "warning": "🟠", "info": "🔵"}[alert.type.value]
        print(f"   {icon} {format_date_tr(alert.date)}  {alert.firm_name}: {alert.message}")

    summary = DailyAlertGate(InMemoryMarkerStore()).check(aggregator)
    if summary:
        print(
            f"\n   ⚠️  Günlük uyarı: {summary.employee_count} eğitim, "
            f"{summary.equipment_count} ekipman, {summary.meeting_count} kurul"
        )


def show_month(aggregator: AlertAggregator):
    today = aggregator.today
    print(f"\n--- {today.month:02d}/{today.year} Takvimi ---")
    for group in aggregator.month_plan(today.year, today.month):
        flag = "❗" if group.has_expired else "  "
        print(f"   {flag} {group.firm_name} ({group.hazard_tier.value}): {group.total_count} işlem")


def show_weekly_plan(data: ComplianceData, today: date):
    report = build_next_week_plan(data, today)
    print(f"\n--- {report.title} ({report.start_date} / {report.end_date}) ---")
    for section in report.sections:
        print(f"   {section.heading}")
        for item in section.items:
            print(f"      [{item.status.label}] {item.type}: {item.name} ({item.detail}) {format_date_tr(item.date)}")
    print(f"   Toplam: {report.total_action_count} işlem, {report.active_firm_count} firma")


def show_rehire(data: ComplianceData, today: date):
    print("\n--- Geri Alım Kontrolü ---")
    terminated = [e for e in data.employees if e.employment_status == EmploymentStatus.TERMINATED]
    for employee in terminated[:5]:
        assessment = lifecycle.assess_rehire(employee, today)
        verdict = "yeni eğitim zorunlu" if assessment.refresher_required else "eski eğitim geçerli"
        print(f"   {employee.name}: {assessment.gap_months} ay ({assessment.gap_days} gün) -> {verdict}")


def show_scheduler(data: ComplianceData):
    print("\n--- Otomatik Rapor ---")
    now = datetime.now()
    settings = AppSettings(auto_report_day=(now.weekday() + 1) % 7, auto_report_time=now.strftime("%H:%M"))
    fired = []
    scheduler = AutoReportScheduler(
        settings_provider=lambda: settings,
        marker_store=InMemoryMarkerStore(),
        on_due=lambda at: fired.append(build_next_week_plan(data, at.date())),
        clock=lambda: now,
    )
    scheduler.tick()
    scheduler.tick()
    print(f"   İki tikte üretilen rapor sayısı: {len(fired)}")


if __name__ == "__main__":
    print("🦺 İSG Takip - Demo")
    print("=" * 60)

    data = load_data("--aws" in sys.argv)
    today = date.today()
    aggregator = AlertAggregator(data, today)

    show_dashboard(aggregator)
    show_alerts(aggregator)
    show_month(aggregator)
    show_weekly_plan(data, today)
    show_rehire(data, today)
    show_scheduler(data)

    print("\n" + "=" * 60)
    print("🎉 Demo tamamlandı!")
