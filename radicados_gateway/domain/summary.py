"""Monthly intake summary"""

import unicodedata
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.domain.alerts import evaluate_document
from radicados_gateway.domain.models import DeadlinePolicy, Document

# (keywords, label); first match wins
CHANNEL_KEYWORDS = [
    (("correo", "email"), "Correo electrónico"),
    (("telefono", "tel"), "Teléfono"),
    (("whatsapp", "wasap"), "WhatsApp"),
    (("presencial", "oficina", "ventanilla"), "Presencial"),
    (("web", "formulario"), "Web"),
    (("oficio", "memorando"), "Oficio"),
]


@dataclass
class MonthlyItem:
    id: str
    number: str
    topic: str
    intake_date: Optional[date]
    state: str  # RESPONDIDO | ALERTA | PENDIENTE


@dataclass
class MonthlySummary:
    year: int
    month: int
    total: int = 0
    responded: int = 0
    pending: int = 0
    in_alert: int = 0
    pending_total: int = 0
    by_channel: Dict[str, int] = field(default_factory=dict)
    items: List[MonthlyItem] = field(default_factory=list)


def strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_channel(raw: Optional[str]) -> str:
    """Group free-text intake channels into the labels used by the dashboards"""
    if not raw or not raw.strip():
        return "Otro"
    base = strip_accents(raw.strip().lower())
    for keywords, label in CHANNEL_KEYWORDS:
        if any(k in base for k in keywords):
            return label
    return raw.strip()


async def build_monthly_summary(
    documents: Sequence[Document],
    year: int,
    month: int,
    calendar: BusinessCalendar,
    today: date,
    policy: DeadlinePolicy,
) -> MonthlySummary:
    """
    Summarize documents received in a month.

    Pending and channel totals cover every document. Alert state for the
    month's documents is recomputed from their deadlines, independently of
    the stored flag.
    """
    summary = MonthlySummary(year=year, month=month)
    summary.pending_total = sum(1 for d in documents if not d.responded)

    for document in documents:
        channel = normalize_channel(document.channel)
        summary.by_channel[channel] = summary.by_channel.get(channel, 0) + 1

    for document in documents:
        intake = document.intake_date
        if intake is None or (intake.year, intake.month) != (year, month):
            continue

        summary.total += 1
        if document.responded:
            summary.responded += 1
            state = "RESPONDIDO"
        else:
            status = await evaluate_document(document, calendar, today, policy)
            if status is not None and status.requires_attention:
                summary.in_alert += 1
                state = "ALERTA"
            else:
                summary.pending += 1
                state = "PENDIENTE"

        summary.items.append(
            MonthlyItem(
                id=document.id,
                number=document.number,
                topic=document.topic,
                intake_date=intake,
                state=state,
            )
        )

    return summary
