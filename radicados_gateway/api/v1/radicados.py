"""Radicados endpoints - intake, listing, detail, responses and CSV export"""

import csv
import io
import logging
from datetime import date
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import StreamingResponse

from radicados_gateway.api.v1.schemas import RadicadoCreate, RadicadoListResponse, RadicadoResponse, ResponseRequest
from radicados_gateway.api.dependencies import get_calendar, get_document_store, get_policy, get_request_id, get_today
from radicados_gateway.domain.alerts import evaluate_document
from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.domain.exceptions import DocumentAlreadyRespondedError, DocumentNotFoundError, RecordStoreError
from radicados_gateway.domain.listing import EXPORT_HEADERS, export_row, filter_documents
from radicados_gateway.domain.models import DeadlinePolicy, ResponseType
from radicados_gateway.domain.responses import prepare_intake, record_response

router = APIRouter()

StatusFilter = Literal["all", "pending", "responded", "alerts"]


@router.post("/radicados", response_model=RadicadoResponse, status_code=201)
async def create_radicado(
    request_body: RadicadoCreate,
    request: Request,
    store=Depends(get_document_store),
    calendar: BusinessCalendar = Depends(get_calendar),
    policy: DeadlinePolicy = Depends(get_policy),
):
    """
    Register an incoming radicado.

    The response deadline is the one supplied or, for assigned radicados,
    the standard response window counted in business days from assignment.
    """
    request_id = get_request_id(request)
    fields = await prepare_intake(request_body.model_dump(), calendar, policy)

    try:
        document = await store.create(fields)
    except RecordStoreError as e:
        logging.error(f"Radicado intake failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="No se pudo registrar el radicado")

    logging.info(
        "Radicado registered",
        extra={"request_id": request_id, "step": "radicado_intake", "radicado": document.number},
    )
    return RadicadoResponse.from_domain(document)


@router.get("/radicados", response_model=RadicadoListResponse)
async def list_radicados(
    status: StatusFilter = Query("all", description="Filter by state"),
    q: Optional[str] = Query(None, description="Search number, official, topic and sender"),
    store=Depends(get_document_store),
):
    try:
        documents = await store.list_documents()
    except RecordStoreError as e:
        logging.error(f"Could not list radicados: {e}")
        raise HTTPException(status_code=503, detail="No se pudieron cargar los radicados")

    selected = filter_documents(documents, status, q)
    return RadicadoListResponse(
        status=status,
        total=len(selected),
        radicados=[RadicadoResponse.from_domain(d) for d in selected],
    )


@router.get("/radicados/export.csv")
async def export_radicados(
    status: StatusFilter = Query("all"),
    q: Optional[str] = Query(None),
    store=Depends(get_document_store),
):
    """Download the filtered list as CSV"""
    try:
        documents = await store.list_documents()
    except RecordStoreError as e:
        logging.error(f"Could not export radicados: {e}")
        raise HTTPException(status_code=503, detail="No se pudieron cargar los radicados")

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_HEADERS)
    for document in filter_documents(documents, status, q):
        writer.writerow(export_row(document))

    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=radicados.csv"},
    )


@router.get("/radicados/{radicado_id}", response_model=RadicadoResponse)
async def get_radicado(
    radicado_id: str,
    store=Depends(get_document_store),
    calendar: BusinessCalendar = Depends(get_calendar),
    policy: DeadlinePolicy = Depends(get_policy),
    today: date = Depends(get_today),
):
    """
    Retrieve a radicado with its deadline status.

    The status is absent for answered radicados and for those with no
    intake, assignment or deadline date.
    """
    try:
        document = await store.get(radicado_id)
    except RecordStoreError as e:
        logging.error(f"Could not read radicado: {e}")
        raise HTTPException(status_code=503, detail="No se pudo cargar el radicado")

    if not document:
        raise HTTPException(status_code=404, detail="Radicado not found")

    status = await evaluate_document(document, calendar, today, policy)
    return RadicadoResponse.from_domain(document, status)


async def _respond(
    radicado_id: str,
    response_type: ResponseType,
    response_date: date,
    store,
    calendar: BusinessCalendar,
    policy: DeadlinePolicy,
    request_id: str,
    response_number: Optional[str] = None,
    required_visit: Optional[bool] = None,
) -> RadicadoResponse:
    try:
        document = await store.get(radicado_id)
        if not document:
            raise DocumentNotFoundError(f"Radicado {radicado_id} not found")

        changes = await record_response(
            document,
            response_type,
            response_date,
            calendar,
            policy,
            response_number=response_number,
            required_visit=required_visit,
        )
        updated = await store.update(radicado_id, changes)
        if not updated:
            raise DocumentNotFoundError(f"Radicado {radicado_id} not found")

    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail="Radicado not found")

    except DocumentAlreadyRespondedError as e:
        raise HTTPException(status_code=409, detail=str(e))

    except RecordStoreError as e:
        logging.error(f"Response could not be saved: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="No se pudo guardar la respuesta")

    logging.info(
        "Radicado response recorded",
        extra={
            "request_id": request_id,
            "step": "radicado_response",
            "radicado": updated.number,
            "response_type": response_type.value,
            "response_days": updated.response_days,
        },
    )
    return RadicadoResponse.from_domain(updated)


@router.post("/radicados/{radicado_id}/respond", response_model=RadicadoResponse)
async def respond_radicado(
    radicado_id: str,
    request_body: ResponseRequest,
    request: Request,
    store=Depends(get_document_store),
    calendar: BusinessCalendar = Depends(get_calendar),
    policy: DeadlinePolicy = Depends(get_policy),
):
    """
    Record a complete or partial response.

    A partial response keeps the radicado open and moves its deadline to the
    partial response window counted from the response date.
    """
    return await _respond(
        radicado_id,
        request_body.response_type,
        request_body.response_date,
        store,
        calendar,
        policy,
        get_request_id(request),
        response_number=request_body.response_number,
        required_visit=request_body.required_visit,
    )


@router.post("/radicados/{radicado_id}/responded", response_model=RadicadoResponse)
async def mark_responded(
    radicado_id: str,
    request: Request,
    store=Depends(get_document_store),
    calendar: BusinessCalendar = Depends(get_calendar),
    policy: DeadlinePolicy = Depends(get_policy),
    today: date = Depends(get_today),
):
    """Mark a radicado as answered today"""
    return await _respond(
        radicado_id,
        ResponseType.COMPLETE,
        today,
        store,
        calendar,
        policy,
        get_request_id(request),
    )
