"""Data access layer for radicados and holiday reference data"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from radicados_gateway.infrastructure.database.models import FestivoColombia, Radicado
from radicados_gateway.infrastructure.mappers import DOCUMENT_COLUMNS, document_from_row, to_columns
from radicados_gateway.domain.exceptions import HolidaySourceUnavailableError, RecordStoreError
from radicados_gateway.domain.models import Document, HolidayEntry


def _parse_id(document_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(document_id))
    except ValueError:
        return None


def _to_document(db_radicado: Radicado) -> Document:
    row = {column: getattr(db_radicado, column) for column in DOCUMENT_COLUMNS.values()}
    row["id"] = db_radicado.id
    row["created_at"] = db_radicado.created_at
    return document_from_row(row)


class DocumentRepository:
    """Repository for radicados"""

    def __init__(self, db: Session):
        self.db = db

    def create_document(self, fields: Dict[str, Any]) -> Radicado:
        """Persist a new radicado"""
        db_radicado = Radicado(**to_columns(fields))
        self.db.add(db_radicado)
        self.db.flush()  # Get ID without committing
        return db_radicado

    def get_document(self, document_id: uuid.UUID) -> Optional[Radicado]:
        return self.db.get(Radicado, document_id)

    def list_documents(self, pending_only: bool = False) -> List[Radicado]:
        """Fetch radicados, newest first"""
        query = select(Radicado).order_by(Radicado.created_at.desc())
        if pending_only:
            query = query.where(Radicado.fecha_radicado_respuesta.is_(None))
        return list(self.db.execute(query).scalars().all())

    def update_document(self, db_radicado: Radicado, changes: Dict[str, Any]) -> Radicado:
        for column, value in to_columns(changes).items():
            setattr(db_radicado, column, value)
        self.db.flush()
        return db_radicado

    def set_alert_flags(self, ids: List[uuid.UUID], value: bool) -> int:
        """Single UPDATE for every id; returns affected rows"""
        result = self.db.execute(
            update(Radicado).where(Radicado.id.in_(ids)).values(alerta=value)
        )
        return result.rowcount


class SqlDocumentStore:
    """Document store over a SQLAlchemy session; every write commits or rolls back"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DocumentRepository(db)

    async def list_documents(self) -> List[Document]:
        try:
            return [_to_document(r) for r in self.repo.list_documents()]
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RecordStoreError(f"Could not list radicados: {e}") from e

    async def list_pending(self) -> List[Document]:
        try:
            return [_to_document(r) for r in self.repo.list_documents(pending_only=True)]
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RecordStoreError(f"Could not list pending radicados: {e}") from e

    async def get(self, document_id: str) -> Optional[Document]:
        parsed = _parse_id(document_id)
        if parsed is None:
            return None
        try:
            db_radicado = self.repo.get_document(parsed)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RecordStoreError(f"Could not read radicado {document_id}: {e}") from e
        return _to_document(db_radicado) if db_radicado else None

    async def create(self, fields: Dict[str, Any]) -> Document:
        try:
            db_radicado = self.repo.create_document(fields)
            self.db.commit()
            self.db.refresh(db_radicado)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RecordStoreError(f"Could not create radicado: {e}") from e
        return _to_document(db_radicado)

    async def update(self, document_id: str, changes: Dict[str, Any]) -> Optional[Document]:
        parsed = _parse_id(document_id)
        if parsed is None:
            return None
        try:
            db_radicado = self.repo.get_document(parsed)
            if db_radicado is None:
                return None
            self.repo.update_document(db_radicado, changes)
            self.db.commit()
            self.db.refresh(db_radicado)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RecordStoreError(f"Could not update radicado {document_id}: {e}") from e
        return _to_document(db_radicado)

    async def set_alert_flags(self, ids: List[str], value: bool) -> None:
        if not ids:
            return
        parsed = [p for p in (_parse_id(i) for i in ids) if p is not None]
        try:
            self.repo.set_alert_flags(parsed, value)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RecordStoreError(f"Could not set alerta={value} on {len(ids)} radicados: {e}") from e


class SqlHolidaySource:
    """Holiday source reading the festivos_colombia reference table"""

    name = "database"

    def __init__(self, db: Session):
        self.db = db

    async def is_holiday(self, day: date) -> bool:
        try:
            return self.db.get(FestivoColombia, day) is not None
        except SQLAlchemyError as e:
            self.db.rollback()
            raise HolidaySourceUnavailableError(f"Holiday table unavailable: {e}") from e

    async def holidays_for_year(self, year: int) -> List[HolidayEntry]:
        try:
            rows = self.db.execute(
                select(FestivoColombia)
                .where(FestivoColombia.fecha >= date(year, 1, 1), FestivoColombia.fecha <= date(year, 12, 31))
                .order_by(FestivoColombia.fecha)
            ).scalars().all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise HolidaySourceUnavailableError(f"Holiday table unavailable: {e}") from e
        return [HolidayEntry(day=row.fecha, name=row.nombre) for row in rows]
