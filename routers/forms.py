"""I-9 form endpoints: submission, lookup and the HR review actions."""

from enum import Enum
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse

from errors import NotFound
from models import I9FormUpdate, I9Submission, ReviewAction, StatusOverride
from routers.deps import get_service
from service import I9Service

router = APIRouter()


class ReviewActionName(str, Enum):
    APPROVE_DATA = "approve-data"
    REQUEST_CORRECTIONS = "request-corrections"
    VERIFY_FINAL = "verify-final"


@router.post("", status_code=status.HTTP_201_CREATED, tags=["i9"])
@router.post("/submit", status_code=status.HTTP_201_CREATED, tags=["i9"])
def submit_form(body: I9Submission, service: I9Service = Depends(get_service)):
    """Full one-shot Section 1 submission; the form lands in 'completed'."""
    return service.submit_complete(body.model_dump())


@router.get("", tags=["i9"])
def list_forms(
    status: Optional[str] = None,
    employee_id: Optional[str] = None,
    service: I9Service = Depends(get_service),
):
    return service.list_forms(status=status, employee_id=employee_id)


@router.get("/{form_id}", tags=["i9"])
def get_form(form_id: str, service: I9Service = Depends(get_service)):
    return service.get_form(form_id)


@router.put("/{form_id}", tags=["i9"])
def update_form(form_id: str, body: I9FormUpdate, service: I9Service = Depends(get_service)):
    """HR correction of form data. Only the fields sent are changed."""
    return service.update_form(form_id, body.model_dump(exclude_unset=True))


@router.patch("/{form_id}", tags=["i9"])
def review_form(
    form_id: str,
    action: ReviewActionName,
    body: ReviewAction,
    service: I9Service = Depends(get_service),
):
    if action is ReviewActionName.APPROVE_DATA:
        return service.approve_data(form_id, body.reviewed_by)
    if action is ReviewActionName.REQUEST_CORRECTIONS:
        return service.request_corrections(form_id, body.reviewed_by, body.employer_notes)
    return service.verify_final(form_id, body.reviewed_by)


@router.patch("/{form_id}/status", tags=["i9"])
def override_status(form_id: str, body: StatusOverride, service: I9Service = Depends(get_service)):
    """Legacy direct status write. Bypasses the review workflow; use for repairs only."""
    return service.override_status(form_id, body.status)


@router.get("/{form_id}/pdf", tags=["i9"])
def download_pdf(form_id: str, service: I9Service = Depends(get_service)):
    form = service.get_form(form_id)
    path = service.review.pdf_path(form_id)
    if not path.exists():
        raise NotFound("PDF has not been generated for this form")
    filename = f"i9-{form['last_name'] or 'employee'}-{form_id}.pdf"
    return FileResponse(path, media_type="application/pdf", filename=filename)


@router.delete("/{form_id}", tags=["i9"])
def delete_form(form_id: str, service: I9Service = Depends(get_service)):
    service.delete_form(form_id)
    return {"message": "I-9 form deleted successfully"}
