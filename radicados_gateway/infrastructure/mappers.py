"""Mapping between Document attributes and radicados table columns"""

from datetime import date, datetime
from typing import Any, Dict, Mapping

from radicados_gateway.domain.models import Document
from radicados_gateway.utils.date_utils import parse_local_iso, to_local_iso

DOCUMENT_COLUMNS = {
    "number": "numero_radicado",
    "official": "funcionario",
    "intake_date": "fecha_radicado",
    "assignment_date": "fecha_asignacion",
    "deadline": "fecha_limite_respuesta",
    "topic": "tema",
    "channel": "canal",
    "sender": "remitente",
    "request": "solicitud",
    "alert_flag": "alerta",
    "response_date": "fecha_radicado_respuesta",
    "response_number": "numero_radicado_respuesta",
    "response_days": "dias_respuesta",
    "partial_response": "respuesta_parcial",
    "required_visit": "requirio_visita",
    "response_conclusion": "conclusion_respuesta",
    "extension_number": "numero_radicado_prorroga",
    "extension_request_date": "fecha_solicitud_prorroga",
}

DATE_FIELDS = {"intake_date", "assignment_date", "deadline", "response_date", "extension_request_date"}
TEXT_FIELDS = {"official", "topic", "channel", "sender", "request"}

SELECT_COLUMNS = ",".join(["id", *DOCUMENT_COLUMNS.values(), "created_at"])


def _parse_created_at(value: Any):
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def document_from_row(row: Mapping[str, Any]) -> Document:
    """Build a Document from a table row keyed by column name"""
    values: Dict[str, Any] = {}
    for attribute, column in DOCUMENT_COLUMNS.items():
        value = row.get(column)
        if attribute in DATE_FIELDS:
            value = parse_local_iso(value)
        elif attribute in TEXT_FIELDS and value is None:
            value = ""
        elif attribute == "alert_flag":
            value = bool(value)
        values[attribute] = value

    return Document(
        id=str(row["id"]),
        created_at=_parse_created_at(row.get("created_at")),
        **values,
    )


def to_columns(changes: Mapping[str, Any], serialize_dates: bool = False) -> Dict[str, Any]:
    """
    Translate Document attribute changes into column values.

    serialize_dates renders dates as YYYY-MM-DD for JSON table APIs.
    """
    row: Dict[str, Any] = {}
    for attribute, value in changes.items():
        column = DOCUMENT_COLUMNS[attribute]
        if serialize_dates and isinstance(value, date):
            value = to_local_iso(value)
        row[column] = value
    return row
