"""Integration tests for the hosted table backends against the local stand-in"""

import httpx
import pytest
from datetime import date
from mock_servers.postgrest.main import create_app as create_table_api
from radicados_gateway.config import settings
from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.domain.exceptions import HolidaySourceUnavailableError, RecordStoreError
from radicados_gateway.domain.holidays import COLOMBIA_HOLIDAYS_2025
from radicados_gateway.infrastructure.clients.postgrest import PostgRESTClient, in_filter
from radicados_gateway.infrastructure.clients.tables import RemoteDocumentStore, RemoteHolidaySource

pytestmark = pytest.mark.integration


@pytest.fixture
def table_api():
    return create_table_api()


@pytest.fixture
def postgrest(table_api) -> PostgRESTClient:
    return PostgRESTClient(
        base_url="http://tables.test",
        api_key="anon-key",
        transport=httpx.ASGITransport(app=table_api),
    )


@pytest.fixture
def no_backoff(monkeypatch):
    monkeypatch.setattr(settings, "http_backoff_base", 0)


def _failing_client(status_code: int, calls: list) -> PostgRESTClient:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(status_code, text="boom")

    return PostgRESTClient(base_url="http://tables.test", transport=httpx.MockTransport(handler))


def test_in_filter_quotes_values():
    assert in_filter(["a", "b-1"]) == 'in.("a","b-1")'


async def test_remote_store_round_trip(postgrest: PostgRESTClient):
    store = RemoteDocumentStore(postgrest, "radicados")

    created = await store.create(
        {"number": "2025-300", "official": "Ana Ruiz", "intake_date": date(2025, 3, 3), "deadline": date(2025, 3, 25)}
    )
    fetched = await store.get(created.id)

    assert fetched.number == "2025-300"
    assert fetched.intake_date == date(2025, 3, 3)
    assert fetched.deadline == date(2025, 3, 25)
    assert fetched.alert_flag is False
    assert await store.get("00000000-0000-4000-8000-000000000000") is None


async def test_remote_store_pending_excludes_answered(postgrest: PostgRESTClient):
    store = RemoteDocumentStore(postgrest, "radicados")
    open_doc = await store.create({"number": "open", "intake_date": date(2025, 3, 3)})
    answered = await store.create({"number": "answered", "intake_date": date(2025, 3, 3)})

    updated = await store.update(answered.id, {"response_date": date(2025, 3, 10), "response_days": 5})

    assert updated.response_date == date(2025, 3, 10)
    assert [d.id for d in await store.list_pending()] == [open_doc.id]
    assert len(await store.list_documents()) == 2


async def test_remote_store_flags_in_one_batch(postgrest: PostgRESTClient, table_api):
    store = RemoteDocumentStore(postgrest, "radicados")
    first = await store.create({"number": "1"})
    second = await store.create({"number": "2"})
    third = await store.create({"number": "3"})

    await store.set_alert_flags([first.id, third.id], True)

    flags = {row["numero_radicado"]: row["alerta"] for row in table_api.state.tables["radicados"]}
    assert flags == {"1": True, "2": False, "3": True}
    assert (await store.get(second.id)).alert_flag is False


async def test_remote_holidays_match_the_rules(postgrest: PostgRESTClient):
    source = RemoteHolidaySource(postgrest, "festivos_colombia")

    assert await source.holidays_for_year(2025) == COLOMBIA_HOLIDAYS_2025
    assert await source.is_holiday(date(2025, 3, 24)) is True
    assert await source.is_holiday(date(2025, 3, 25)) is False


async def test_calendar_over_remote_holidays(postgrest: PostgRESTClient):
    calendar = BusinessCalendar(RemoteHolidaySource(postgrest, "festivos_colombia"))

    assert await calendar.add_business_days(date(2025, 1, 6), 16) == date(2025, 1, 28)
    assert calendar.degraded is False


async def test_request_headers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    client = PostgRESTClient(
        base_url="http://tables.test", api_key="anon-key", schema="tramites", transport=httpx.MockTransport(handler)
    )
    await client.select("radicados", "id")
    await client.update("radicados", {"alerta": True}, filters=[("id", "eq.1")])

    read, write = seen
    assert read.url.path == "/rest/v1/radicados"
    assert read.headers["apikey"] == "anon-key"
    assert read.headers["Authorization"] == "Bearer anon-key"
    assert read.headers["Accept-Profile"] == "tramites"
    assert "Prefer" not in read.headers
    assert write.method == "PATCH"
    assert write.headers["Content-Profile"] == "tramites"
    assert write.headers["Prefer"] == "return=representation"


async def test_update_requires_filters(postgrest: PostgRESTClient):
    with pytest.raises(ValueError):
        await postgrest.update("radicados", {"alerta": False}, filters=[])


async def test_reads_are_retried_on_server_errors(no_backoff):
    calls = []
    client = _failing_client(503, calls)

    with pytest.raises(RecordStoreError):
        await client.select("radicados")

    assert len(calls) == settings.http_max_retries


async def test_inserts_are_not_retried(no_backoff):
    calls = []
    client = _failing_client(503, calls)

    with pytest.raises(RecordStoreError):
        await client.insert("radicados", {"numero_radicado": "1"})

    assert len(calls) == 1


async def test_client_errors_are_not_retried(no_backoff):
    calls = []
    client = _failing_client(400, calls)

    with pytest.raises(RecordStoreError):
        await client.select("radicados")

    assert len(calls) == 1


async def test_remote_holiday_failure_is_reported(no_backoff):
    source = RemoteHolidaySource(_failing_client(500, []), "festivos_colombia")

    with pytest.raises(HolidaySourceUnavailableError):
        await source.holidays_for_year(2025)


async def test_calendar_fails_open_when_table_api_is_down(no_backoff):
    calendar = BusinessCalendar(RemoteHolidaySource(_failing_client(500, []), "festivos_colombia"))

    # Monday 6 January counted as a business day
    assert await calendar.add_business_days(date(2025, 1, 3), 1) == date(2025, 1, 6)
    assert calendar.degraded is True


async def test_remote_store_rejects_malformed_rows(postgrest: PostgRESTClient, table_api):
    store = RemoteDocumentStore(postgrest, "radicados")
    await store.create({"number": "2025-400", "intake_date": date(2025, 3, 3)})
    table_api.state.tables["radicados"].append(
        {"id": "11111111-1111-4111-8111-111111111111", "numero_radicado": "2025-401", "fecha_radicado": "bad"}
    )

    with pytest.raises(RecordStoreError):
        await store.list_pending()
    with pytest.raises(RecordStoreError):
        await store.list_documents()
    with pytest.raises(RecordStoreError):
        await store.get("11111111-1111-4111-8111-111111111111")
