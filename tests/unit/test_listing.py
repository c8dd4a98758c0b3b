"""Unit tests for list filtering and export rows"""

from datetime import date
from radicados_gateway.domain.listing import export_row, filter_documents
from radicados_gateway.domain.models import Document

DOCUMENTS = [
    Document(id="a", number="2025-001", official="Ana Ruiz", topic="Derecho de petición", sender="Junta de Acción Comunal"),
    Document(id="b", number="2025-002", official="Luis Gómez", topic="Queja", sender="Ana María", alert_flag=True),
    Document(id="c", number="2025-003", official="Luis Gómez", topic="Reclamo", response_date=date(2025, 2, 3)),
]


def test_status_filters():
    assert [d.id for d in filter_documents(DOCUMENTS, "all")] == ["a", "b", "c"]
    assert [d.id for d in filter_documents(DOCUMENTS, "pending")] == ["a", "b"]
    assert [d.id for d in filter_documents(DOCUMENTS, "responded")] == ["c"]
    assert [d.id for d in filter_documents(DOCUMENTS, "alerts")] == ["b"]


def test_search_is_case_insensitive_across_fields():
    # Matches official of "a" and sender of "b"
    assert [d.id for d in filter_documents(DOCUMENTS, "all", "ANA")] == ["a", "b"]
    assert [d.id for d in filter_documents(DOCUMENTS, "all", "2025-003")] == ["c"]
    assert [d.id for d in filter_documents(DOCUMENTS, "all", "reclamo")] == ["c"]


def test_search_combines_with_status():
    assert [d.id for d in filter_documents(DOCUMENTS, "pending", "gómez")] == ["b"]


def test_blank_search_is_ignored():
    assert len(filter_documents(DOCUMENTS, "all", "   ")) == 3


def test_export_row():
    document = Document(
        id="x",
        number="2025-020",
        official="Ana Ruiz",
        intake_date=date(2025, 3, 3),
        deadline=date(2025, 3, 25),
        topic="Petición",
        channel="Correo",
        sender="Carlos",
        alert_flag=True,
    )

    assert export_row(document) == [
        "2025-020",
        "Ana Ruiz",
        "03/03/2025",
        "25/03/2025",
        "Alerta",
        "Petición",
        "Correo",
        "Carlos",
    ]


def test_export_row_states_and_missing_dates():
    assert export_row(DOCUMENTS[0])[2:5] == ["", "", "Pendiente"]
    assert export_row(DOCUMENTS[2])[4] == "Respondido"
