"""Dependency injection for FastAPI endpoints"""

from datetime import date
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from radicados_gateway.config import settings
from radicados_gateway.domain.calendar import BusinessCalendar, StaticHolidaySource
from radicados_gateway.domain.models import DeadlinePolicy
from radicados_gateway.domain.store import DocumentStore
from radicados_gateway.infrastructure.clients.postgrest import PostgRESTClient
from radicados_gateway.infrastructure.clients.tables import RemoteDocumentStore, RemoteHolidaySource
from radicados_gateway.infrastructure.database.repositories import SqlDocumentStore, SqlHolidaySource
from radicados_gateway.infrastructure.database.session import get_db
from radicados_gateway.utils.date_utils import local_today


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def build_document_store(db: Session) -> DocumentStore:
    """Document store for the configured backend"""
    if settings.record_store_backend == "remote":
        return RemoteDocumentStore(PostgRESTClient())
    return SqlDocumentStore(db)


def build_holiday_source(db: Session):
    """Holiday source for the configured backend"""
    if settings.holiday_source_backend == "remote":
        return RemoteHolidaySource(PostgRESTClient())
    if settings.holiday_source_backend == "database":
        return SqlHolidaySource(db)
    return StaticHolidaySource.colombia()


def get_document_store(db: Session = Depends(get_db)) -> DocumentStore:
    return build_document_store(db)


def get_calendar(db: Session = Depends(get_db)) -> BusinessCalendar:
    """Fresh calendar per request: holidays are loaded once for the request only"""
    return BusinessCalendar(build_holiday_source(db))


def get_policy() -> DeadlinePolicy:
    return DeadlinePolicy.from_settings(settings)


def get_today() -> date:
    """Today's date in the office's timezone"""
    return local_today(settings.local_timezone)
