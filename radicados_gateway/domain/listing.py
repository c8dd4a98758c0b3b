"""Document list filtering and export rows"""

from datetime import date
from typing import List, Optional, Sequence

from radicados_gateway.domain.models import Document

EXPORT_HEADERS = [
    "Número Radicado",
    "Funcionario",
    "Fecha Radicado",
    "Fecha Límite",
    "Estado",
    "Tema",
    "Canal",
    "Remitente",
]


def filter_documents(documents: Sequence[Document], status: str = "all", search: Optional[str] = None) -> List[Document]:
    """
    Apply the list screen filters.

    search matches number, official, topic and sender, case-insensitively.
    The alerts filter relies on the stored flag, as refreshed by the alert sync.
    """
    term = (search or "").strip().lower()
    result = list(documents)

    if term:
        result = [
            d for d in result
            if term in " ".join([d.number, d.official, d.topic, d.sender]).lower()
        ]

    if status == "pending":
        result = [d for d in result if not d.responded]
    elif status == "responded":
        result = [d for d in result if d.responded]
    elif status == "alerts":
        result = [d for d in result if d.alert_flag]

    return result


def document_state(document: Document) -> str:
    if document.responded:
        return "Respondido"
    if document.alert_flag:
        return "Alerta"
    return "Pendiente"


def format_date(day: Optional[date]) -> str:
    return day.strftime("%d/%m/%Y") if day else ""


def export_row(document: Document) -> List[str]:
    return [
        document.number,
        document.official,
        format_date(document.intake_date),
        format_date(document.deadline),
        document_state(document),
        document.topic,
        document.channel,
        document.sender,
    ]
