"""Inbound call webhook: gives the voice agent the caller's form context."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends

from routers.deps import get_service
from service import I9Service

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/caller-context", tags=["webhook"])
def caller_context(
    phone: str,
    call_control_id: Optional[str] = None,
    service: I9Service = Depends(get_service),
):
    context = service.caller_context(phone)
    logger.info(
        "caller_context",
        employee_id=context["employee_id"],
        has_existing_form=context["has_existing_form"],
        call_control_id=call_control_id,
    )
    return context
