from isg_takip.agents.base_agent import BaseAgent
from isg_takip.agents.compliance_monitor import ComplianceMonitorAgent
from isg_takip.agents.markers import DynamoMarkerStore, InMemoryMarkerStore
from isg_takip.agents.record_validator import RecordValidator
from isg_takip.agents.scheduler import AutoReportScheduler

__all__ = [
    "AutoReportScheduler",
    "BaseAgent",
    "ComplianceMonitorAgent",
    "DynamoMarkerStore",
    "InMemoryMarkerStore",
    "RecordValidator",
]
