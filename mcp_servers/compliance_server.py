"""
Compliance MCP Server

İSG uyum motorunu MCP istemcilerine açar: panel sayaçları, uyarı akışı,
aylık takvim, haftalık plan, sonraki tarih hesapları ve geri alım kontrolü.
Veriler ComplianceMonitorAgent üzerinden DynamoDB'den okunur.
"""

import json
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
import env_loader  # noqa: F401

from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Dict, List, Optional
from mcp.server import Server
from mcp.types import Tool, TextContent

from isg_takip.agents.compliance_monitor import ComplianceMonitorAgent
from isg_takip.engine import lifecycle, temporal
from isg_takip.engine.alerts import AlertAggregator
from isg_takip.engine.reports import build_next_week_plan
from isg_takip.models.isg import ComplianceData, HazardTier

app = Server("isg-compliance")

_AGENT: Optional[ComplianceMonitorAgent] = None


def _get_agent() -> ComplianceMonitorAgent:
    global _AGENT
    if _AGENT is None:
        _AGENT = ComplianceMonitorAgent()
    return _AGENT


def _load_data() -> ComplianceData:
    return _get_agent().load_data()


def _to_json(obj):
    """Dataclass ve enum değerlerini JSON serializable yapar."""
    if is_dataclass(obj):
        return _to_json(asdict(obj))
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: _to_json(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_to_json(i) for i in obj]
    return obj


def _result(data):
    return [TextContent(type="text", text=json.dumps(_to_json(data), indent=2, ensure_ascii=False))]


_SCOPE_PROPS = {
    "today": {"type": "string", "description": "YYYY-MM-DD (varsayılan: bugün)"},
    "firm_ids": {"type": "array", "items": {"type": "string"}},
}


@app.list_tools()
async def list_tools() -> List[Tool]:
    return [
        Tool(name="dashboard_summary", description="Firm, active employee, expired and approaching counts",
             inputSchema={"type": "object", "properties": dict(_SCOPE_PROPS)}),
        Tool(name="alert_feed", description="Most urgent compliance alerts (pending approvals first)",
             inputSchema={"type": "object", "properties": {**_SCOPE_PROPS, "limit": {"type": "integer"}}}),
        Tool(name="month_plan", description="Per-firm calendar groups for a month",
             inputSchema={"type": "object", "properties": {**_SCOPE_PROPS, "year": {"type": "integer"}, "month": {"type": "integer"}},
                          "required": ["year", "month"]}),
        Tool(name="weekly_plan", description="Overdue and planned actions for next week",
             inputSchema={"type": "object", "properties": dict(_SCOPE_PROPS)}),
        Tool(name="next_due_dates", description="Next training/risk dates for a hazard tier and last date",
             inputSchema={"type": "object", "properties": {"hazard_tier": {"type": "string"}, "last_date": {"type": "string"}},
                          "required": ["hazard_tier", "last_date"]}),
        Tool(name="rehire_check", description="Whether a terminated employee needs refresher training",
             inputSchema={"type": "object", "properties": {"employee_id": {"type": "string"}, "today": {"type": "string"}},
                          "required": ["employee_id"]}),
        Tool(name="list_firms", description="List all firms with hazard tiers",
             inputSchema={"type": "object", "properties": {}}),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> List[TextContent]:
    handlers = {
        "dashboard_summary": lambda a: dashboard_summary(a.get("today"), a.get("firm_ids")),
        "alert_feed": lambda a: alert_feed(a.get("today"), a.get("firm_ids"), a.get("limit", 10)),
        "month_plan": lambda a: month_plan(a["year"], a["month"], a.get("today"), a.get("firm_ids")),
        "weekly_plan": lambda a: weekly_plan(a.get("today"), a.get("firm_ids")),
        "next_due_dates": lambda a: next_due_dates(a["hazard_tier"], a["last_date"]),
        "rehire_check": lambda a: rehire_check(a["employee_id"], a.get("today")),
        "list_firms": lambda a: list_firms(),
    }
    handler = handlers.get(name)
    if not handler:
        raise ValueError(f"Unknown tool: {name}")
    return _result(handler(arguments))


# --- Implementation ---

def dashboard_summary(today: Optional[str] = None, firm_ids: Optional[List[str]] = None) -> Dict:
    try:
        stats = AlertAggregator(_load_data(), today, firm_ids).stats()
        return {"success": True, "data": stats}
    except Exception as e:
        return {"success": False, "error": str(e)}


def alert_feed(today: Optional[str] = None, firm_ids: Optional[List[str]] = None, limit: int = 10) -> Dict:
    try:
        alerts = AlertAggregator(_load_data(), today, firm_ids).alert_feed(limit)
        return {"success": True, "count": len(alerts), "data": alerts}
    except Exception as e:
        return {"success": False, "error": str(e)}


def month_plan(year: int, month: int, today: Optional[str] = None, firm_ids: Optional[List[str]] = None) -> Dict:
    try:
        groups = AlertAggregator(_load_data(), today, firm_ids).month_plan(year, month)
        return {
            "success": True,
            "count": len(groups),
            "data": [dict(_to_json(g), total_count=g.total_count) for g in groups],
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


def weekly_plan(today: Optional[str] = None, firm_ids: Optional[List[str]] = None) -> Dict:
    try:
        report = build_next_week_plan(_load_data(), today, firm_ids)
        return {
            "success": True,
            "total_actions": report.total_action_count,
            "active_firms": report.active_firm_count,
            "data": report,
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


def next_due_dates(hazard_tier: str, last_date: str) -> Dict:
    try:
        tier = HazardTier(hazard_tier)
        return {
            "success": True,
            "data": {
                "next_training_date": temporal.next_training_date(last_date, tier),
                "next_risk_date": temporal.next_risk_date(last_date, tier),
                "meeting_periods": temporal.allowed_meeting_periods(tier),
            },
        }
    except ValueError as e:
        return {"success": False, "error": str(e)}


def rehire_check(employee_id: str, today: Optional[str] = None) -> Dict:
    try:
        data = _load_data()
        employee = next((e for e in data.employees if e.id == employee_id), None)
        if employee is None:
            return {"success": False, "error": "Employee not found"}
        return {"success": True, "data": lifecycle.assess_rehire(employee, today)}
    except Exception as e:
        return {"success": False, "error": str(e)}


def list_firms() -> Dict:
    try:
        firms = _load_data().firms
        return {
            "success": True,
            "count": len(firms),
            "data": [{"id": f.id, "name": f.name, "hazard_tier": f.hazard_tier.value} for f in firms],
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


if __name__ == "__main__":
    import asyncio
    from mcp.server.stdio import stdio_server

    async def run():
        async with stdio_server() as (read, write):
            await app.run(read, write, app.create_initialization_options())

    asyncio.run(run())
