"""Document store and holiday source backed by the hosted table API"""

from datetime import date
from typing import Any, Dict, List, Optional
from radicados_gateway.config import settings
from radicados_gateway.domain.exceptions import HolidaySourceUnavailableError, RecordStoreError
from radicados_gateway.domain.models import Document, HolidayEntry
from radicados_gateway.infrastructure.clients.postgrest import PostgRESTClient, in_filter
from radicados_gateway.infrastructure.mappers import SELECT_COLUMNS, document_from_row, to_columns
from radicados_gateway.utils.date_utils import parse_local_iso


def _to_document(row: Dict[str, Any]) -> Document:
    try:
        return document_from_row(row)
    except (KeyError, ValueError, TypeError) as e:
        raise RecordStoreError(f"Invalid radicado row: {e}") from e


class RemoteDocumentStore:
    """Radicados table reached through PostgREST"""

    def __init__(self, client: PostgRESTClient, table: str | None = None):
        self.client = client
        self.table = table or settings.radicados_table

    async def list_documents(self) -> List[Document]:
        rows = await self.client.select(self.table, SELECT_COLUMNS, order="created_at.desc")
        return [_to_document(row) for row in rows]

    async def list_pending(self) -> List[Document]:
        rows = await self.client.select(
            self.table,
            SELECT_COLUMNS,
            filters=[("fecha_radicado_respuesta", "is.null")],
            order="created_at.desc",
        )
        return [_to_document(row) for row in rows]

    async def get(self, document_id: str) -> Optional[Document]:
        rows = await self.client.select(
            self.table, SELECT_COLUMNS, filters=[("id", f"eq.{document_id}")], limit=1
        )
        return _to_document(rows[0]) if rows else None

    async def create(self, fields: Dict[str, Any]) -> Document:
        rows = await self.client.insert(self.table, to_columns(fields, serialize_dates=True))
        if not rows:
            raise RecordStoreError("Insert returned no representation")
        return _to_document(rows[0])

    async def update(self, document_id: str, changes: Dict[str, Any]) -> Optional[Document]:
        rows = await self.client.update(
            self.table,
            to_columns(changes, serialize_dates=True),
            filters=[("id", f"eq.{document_id}")],
        )
        return _to_document(rows[0]) if rows else None

    async def set_alert_flags(self, ids: List[str], value: bool) -> None:
        if not ids:
            return
        await self.client.update(self.table, {"alerta": value}, filters=[("id", in_filter(ids))])


class RemoteHolidaySource:
    """Holiday reference table reached through PostgREST"""

    name = "remote"

    def __init__(self, client: PostgRESTClient, table: str | None = None):
        self.client = client
        self.table = table or settings.holidays_table

    async def is_holiday(self, day: date) -> bool:
        try:
            rows = await self.client.select(
                self.table, "fecha", filters=[("fecha", f"eq.{day.isoformat()}")], limit=1
            )
        except RecordStoreError as e:
            raise HolidaySourceUnavailableError(str(e)) from e
        return bool(rows)

    async def holidays_for_year(self, year: int) -> List[HolidayEntry]:
        try:
            rows = await self.client.select(
                self.table,
                "fecha,nombre",
                filters=[("fecha", f"gte.{year}-01-01"), ("fecha", f"lte.{year}-12-31")],
                order="fecha.asc",
            )
            return [HolidayEntry(day=parse_local_iso(row["fecha"]), name=row.get("nombre") or "") for row in rows]
        except RecordStoreError as e:
            raise HolidaySourceUnavailableError(str(e)) from e
        except (KeyError, ValueError, TypeError) as e:
            raise HolidaySourceUnavailableError(f"Invalid holiday data: {e}") from e
