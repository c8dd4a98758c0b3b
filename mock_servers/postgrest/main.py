"""In-memory stand-in for the hosted table API (the PostgREST subset the gateway uses)"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Request

from radicados_gateway.domain.holidays import colombian_holidays


def _parse_in(raw: str) -> List[str]:
    return [v.strip().strip('"') for v in raw.strip("()").split(",") if v.strip()]


def _matches(row: Dict[str, Any], column: str, expression: str) -> bool:
    op, _, raw = expression.partition(".")
    value = row.get(column)
    if op == "is":
        return value is None if raw == "null" else str(value).lower() == raw
    if op == "in":
        return str(value) in _parse_in(raw)
    if value is None:
        return False
    text = str(value).lower() if isinstance(value, bool) else str(value)
    if op == "eq":
        return text == raw
    if op == "neq":
        return text != raw
    if op == "gte":
        return text >= raw
    if op == "lte":
        return text <= raw
    raise HTTPException(status_code=400, detail=f"unsupported operator {op}")


def _filtered(rows: List[Dict[str, Any]], request: Request) -> List[Dict[str, Any]]:
    selected = rows
    for column, expression in request.query_params.multi_items():
        if column in ("select", "order", "limit"):
            continue
        selected = [r for r in selected if _matches(r, column, expression)]
    return selected


def create_app(seed_years=(2024, 2025, 2026)) -> FastAPI:
    app = FastAPI(title="Mock Table API", version="1.0.0")
    tables: Dict[str, List[Dict[str, Any]]] = {
        "radicados": [],
        "festivos_colombia": [
            {"fecha": e.day.isoformat(), "nombre": e.name}
            for year in seed_years
            for e in colombian_holidays(year)
        ],
    }
    app.state.tables = tables

    def table_rows(table: str) -> List[Dict[str, Any]]:
        if table not in tables:
            raise HTTPException(status_code=404, detail=f"relation {table} does not exist")
        return tables[table]

    @app.get("/health")
    def health(): return {"status": "ok"}

    @app.get("/rest/v1/{table}")
    def select_rows(table: str, request: Request):
        rows = _filtered(table_rows(table), request)

        order = request.query_params.get("order")
        if order:
            column, _, direction = order.partition(".")
            rows = sorted(rows, key=lambda r: str(r.get(column) or ""), reverse=direction == "desc")

        limit = request.query_params.get("limit")
        if limit:
            rows = rows[: int(limit)]

        select = request.query_params.get("select", "*")
        if select != "*":
            columns = select.split(",")
            rows = [{c: r.get(c) for c in columns} for r in rows]
        return rows

    @app.post("/rest/v1/{table}", status_code=201)
    async def insert_row(table: str, request: Request):
        rows = table_rows(table)
        row = dict(await request.json())
        if table == "radicados":
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
            row.setdefault("alerta", False)
        rows.append(row)
        return [row]

    @app.patch("/rest/v1/{table}")
    async def update_rows(table: str, request: Request):
        values = await request.json()
        updated = _filtered(table_rows(table), request)
        for row in updated:
            row.update(values)
        return updated

    return app


app = create_app()
