"""Document intake and response recording"""

from datetime import date
from typing import Any, Dict, Optional

from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.domain.exceptions import DocumentAlreadyRespondedError
from radicados_gateway.domain.models import DeadlinePolicy, Document, ResponseType


async def prepare_intake(
    fields: Dict[str, Any],
    calendar: BusinessCalendar,
    policy: DeadlinePolicy,
) -> Dict[str, Any]:
    """
    Complete the fields of a newly registered document.

    A deadline supplied by the caller is kept; otherwise the standard response
    window is projected from the assignment date. Unassigned documents are
    stored without a deadline and get one derived when they are evaluated.
    """
    values = dict(fields)
    if values.get("deadline") is None and values.get("assignment_date") is not None:
        values["deadline"] = await calendar.add_business_days(values["assignment_date"], policy.response_window)
    values["alert_flag"] = False
    return values


async def record_response(
    document: Document,
    response_type: ResponseType,
    response_date: date,
    calendar: BusinessCalendar,
    policy: DeadlinePolicy,
    response_number: Optional[str] = None,
    required_visit: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Field changes that register a response to a document.

    A complete response closes the document: it stores the response date and
    the business days elapsed since intake, computed once here. A partial
    response leaves the document open with a new deadline counted from the
    partial response date.

    Raises:
        DocumentAlreadyRespondedError: the document already has a final response
    """
    if document.responded:
        raise DocumentAlreadyRespondedError(
            f"Radicado {document.number} was already answered on {document.response_date.isoformat()}"
        )

    changes: Dict[str, Any] = {"alert_flag": False}
    if response_number is not None:
        changes["response_number"] = response_number
    if required_visit is not None:
        changes["required_visit"] = required_visit

    if response_type is ResponseType.PARTIAL:
        changes["partial_response"] = "SI"
        changes["deadline"] = await calendar.add_business_days(response_date, policy.partial_response_window)
        changes["response_date"] = None
        return changes

    changes["partial_response"] = "NO"
    changes["response_date"] = response_date
    changes["response_days"] = (
        await calendar.count_business_days(document.intake_date, response_date)
        if document.intake_date is not None
        else None
    )
    return changes
