"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field, model_validator
from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from radicados_gateway.domain.models import AlertLevel, DeadlineStatus, Document, ResponseType


class RadicadoCreate(BaseModel):
    """Request body for POST /v1/radicados"""

    number: str = Field(..., min_length=1, description="Número de radicado")
    official: str = Field(..., min_length=1, description="Funcionario asignado")
    intake_date: date = Field(..., description="Fecha de radicado")
    assignment_date: Optional[date] = Field(None, description="Fecha de asignación")
    deadline: Optional[date] = Field(None, description="Explicit deadline; projected from the assignment date when absent")
    topic: str = ""
    channel: str = ""
    sender: str = ""
    request: str = ""


class ResponseRequest(BaseModel):
    """Request body for POST /v1/radicados/{id}/respond"""

    response_number: str = Field(..., min_length=1, description="Radicado de salida")
    response_date: date
    response_type: ResponseType = ResponseType.COMPLETE
    required_visit: bool = False

    @model_validator(mode="after")
    def strip_number(self):
        self.response_number = self.response_number.strip()
        if not self.response_number:
            raise ValueError("response_number must not be blank")
        return self


class DeadlineStatusSchema(BaseModel):
    deadline: date
    derived: bool
    remaining_business_days: int
    overdue: bool
    level: AlertLevel

    @classmethod
    def from_domain(cls, status: DeadlineStatus) -> "DeadlineStatusSchema":
        return cls(
            deadline=status.deadline,
            derived=status.derived,
            remaining_business_days=status.remaining_business_days,
            overdue=status.overdue,
            level=status.level,
        )


class RadicadoResponse(BaseModel):
    """A radicado as stored, plus its computed deadline status when pending"""

    id: str
    number: str
    official: str
    intake_date: Optional[date] = None
    assignment_date: Optional[date] = None
    deadline: Optional[date] = None
    topic: str
    channel: str
    sender: str
    request: str
    alert_flag: bool
    response_date: Optional[date] = None
    response_number: Optional[str] = None
    response_days: Optional[int] = None
    partial_response: Optional[str] = None
    required_visit: Optional[bool] = None
    response_conclusion: Optional[str] = None
    extension_number: Optional[str] = None
    extension_request_date: Optional[date] = None
    created_at: Optional[datetime] = None
    status: Optional[DeadlineStatusSchema] = None

    @classmethod
    def from_domain(cls, document: Document, status: Optional[DeadlineStatus] = None) -> "RadicadoResponse":
        return cls(
            id=document.id,
            number=document.number,
            official=document.official,
            intake_date=document.intake_date,
            assignment_date=document.assignment_date,
            deadline=document.deadline,
            topic=document.topic,
            channel=document.channel,
            sender=document.sender,
            request=document.request,
            alert_flag=document.alert_flag,
            response_date=document.response_date,
            response_number=document.response_number,
            response_days=document.response_days,
            partial_response=document.partial_response,
            required_visit=document.required_visit,
            response_conclusion=document.response_conclusion,
            extension_number=document.extension_number,
            extension_request_date=document.extension_request_date,
            created_at=document.created_at,
            status=DeadlineStatusSchema.from_domain(status) if status else None,
        )


class RadicadoListResponse(BaseModel):
    """Response for GET /v1/radicados"""

    status: Literal["all", "pending", "responded", "alerts"]
    total: int
    radicados: List[RadicadoResponse]


class AlertItem(BaseModel):
    radicado: RadicadoResponse
    level: AlertLevel
    remaining_business_days: int
    deadline: date
    overdue: bool


class AlertStatisticsSchema(BaseModel):
    overdue: int
    due_soon: int
    in_alert: int
    total_pending: int


class AlertsResponse(BaseModel):
    """Response for GET /v1/alerts and POST /v1/alerts/refresh"""

    statistics: AlertStatisticsSchema
    alerts: List[AlertItem]
    flags_set: int = 0
    flags_cleared: int = 0
    flags_persisted: Optional[bool] = None  # None when nothing was written
    notifications: List[str] = []
    holidays_degraded: bool = False


class BusinessDaysResponse(BaseModel):
    start: date
    end: date
    business_days: int


class DeadlineResponse(BaseModel):
    start: date
    business_days: int
    deadline: date


class HolidaySchema(BaseModel):
    day: date
    name: str


class HolidaysResponse(BaseModel):
    year: int
    holidays: List[HolidaySchema]
    degraded: bool = False


class HolidayCheckResponse(BaseModel):
    day: date
    is_holiday: bool
    is_business_day: bool


class MonthlyItemSchema(BaseModel):
    id: str
    number: str
    topic: str
    intake_date: Optional[date] = None
    state: Literal["RESPONDIDO", "ALERTA", "PENDIENTE"]


class MonthlySummaryResponse(BaseModel):
    year: int
    month: int
    total: int
    responded: int
    pending: int
    in_alert: int
    pending_total: int
    by_channel: Dict[str, int]
    items: List[MonthlyItemSchema]
