"""HR review queue -- forms submitted by employees and waiting on HR."""

from fastapi import APIRouter, Depends

from models import FormStatus
from routers.deps import get_service
from service import I9Service

router = APIRouter()


@router.get("", tags=["review"])
def list_pending_review(service: I9Service = Depends(get_service)):
    """
    Return forms in 'completed' status, newest first.
    Each needs an HR decision: approve-data or request-corrections.
    """
    return service.list_forms(status=FormStatus.COMPLETED.value)


@router.get("/stats", tags=["review"])
def review_stats(service: I9Service = Depends(get_service)):
    """Form counts by status for the HR dashboard cards."""
    return service.stats()
