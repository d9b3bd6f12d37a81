"""Administrative maintenance endpoints."""

from fastapi import APIRouter, Depends

from routers.deps import get_service
from service import I9Service

router = APIRouter()


@router.post("/clean-duplicates", tags=["admin"])
def clean_duplicates(service: I9Service = Depends(get_service)):
    """Keep only the newest I-9 form per employee."""
    deleted = service.clean_duplicates()
    return {"deleted": deleted, "stats": service.stats()}
