"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional


@dataclass(frozen=True)
class HolidayEntry:
    """Non-business national holiday"""

    day: date
    name: str


@dataclass
class Document:
    """Radicado: an officially logged incoming request awaiting a tracked response"""

    id: str
    number: str
    official: str = ""
    intake_date: Optional[date] = None
    assignment_date: Optional[date] = None
    deadline: Optional[date] = None
    topic: str = ""
    channel: str = ""
    sender: str = ""
    request: str = ""
    alert_flag: bool = False
    response_date: Optional[date] = None
    response_number: Optional[str] = None
    response_days: Optional[int] = None
    partial_response: Optional[str] = None  # "SI" | "NO"
    required_visit: Optional[bool] = None
    response_conclusion: Optional[str] = None
    extension_number: Optional[str] = None
    extension_request_date: Optional[date] = None
    created_at: Optional[datetime] = None

    @property
    def responded(self) -> bool:
        return self.response_date is not None


@dataclass(frozen=True)
class DeadlinePolicy:
    """Business-day windows and alert tiers applied to every document"""

    response_window: int = 16
    partial_response_window: int = 15
    alert_threshold: int = 10
    critical_threshold: int = 3
    warning_threshold: int = 7

    @classmethod
    def from_settings(cls, settings) -> "DeadlinePolicy":
        return cls(
            response_window=settings.response_window_business_days,
            partial_response_window=settings.partial_response_window_business_days,
            alert_threshold=settings.alert_threshold_business_days,
            critical_threshold=settings.critical_threshold_business_days,
            warning_threshold=settings.warning_threshold_business_days,
        )


class AlertLevel(str, Enum):
    """Urgency tier of a pending document"""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    NONE = "none"


class ResponseType(str, Enum):
    COMPLETE = "COMPLETA"
    PARTIAL = "PARCIAL"


@dataclass
class DeadlineStatus:
    """Computed deadline state of one pending document"""

    document_id: str
    deadline: date
    derived: bool  # True when projected from the assignment/intake date
    remaining_business_days: int
    level: AlertLevel

    @property
    def overdue(self) -> bool:
        return self.remaining_business_days <= 0

    @property
    def requires_attention(self) -> bool:
        return self.level is not AlertLevel.NONE


@dataclass
class DocumentAlert:
    document: Document
    status: DeadlineStatus


@dataclass
class AlertStatistics:
    overdue: int = 0
    due_soon: int = 0
    in_alert: int = 0
    total_pending: int = 0


@dataclass
class FlagChanges:
    """Document ids whose persisted alert flag no longer matches the computed one"""

    to_true: List[str] = field(default_factory=list)
    to_false: List[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.to_true and not self.to_false


@dataclass
class AlertEvaluation:
    """Output of one classification pass over the pending documents"""

    alerts: List[DocumentAlert]
    statistics: AlertStatistics
    flag_changes: FlagChanges
    levels: Dict[str, int] = field(default_factory=dict)
