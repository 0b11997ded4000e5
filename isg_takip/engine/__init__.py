from isg_takip.engine.temporal import (
    classify,
    days_remaining,
    is_approaching,
    is_expired,
    next_equipment_date,
    next_meeting_date,
    next_risk_date,
    next_training_date,
)
from isg_takip.engine.alerts import AlertAggregator, DailyAlertGate
from isg_takip.engine.reports import build_next_week_plan, build_planning_report

__all__ = [
    "AlertAggregator",
    "DailyAlertGate",
    "build_next_week_plan",
    "build_planning_report",
    "classify",
    "days_remaining",
    "is_approaching",
    "is_expired",
    "next_equipment_date",
    "next_meeting_date",
    "next_risk_date",
    "next_training_date",
]
