"""Endpoints the voice assistant calls, one tool per utterance."""

from fastapi import APIRouter, Depends

import tools
from models import FieldWrite, ToolCall
from routers.deps import get_service
from service import I9Service

router = APIRouter()


@router.get("", tags=["tools"])
def list_tools():
    return {"tools": tools.list_tools()}


@router.post("/call", tags=["tools"])
def call_tool(body: ToolCall, service: I9Service = Depends(get_service)):
    return tools.dispatch(service, body.name, body.arguments)


@router.get("/lookup-city-state", tags=["tools"])
def lookup_city_state(zip: str, service: I9Service = Depends(get_service)):
    result = service.zip_lookup(zip)
    return {"city": result["city"], "state": result["state"]}


@router.get("/get-employee-status", tags=["tools"])
def get_employee_status(phone: str, service: I9Service = Depends(get_service)):
    """Resolve the caller by phone and report where their form stands."""
    lookup = service.find_or_create_employee(phone)
    employee = lookup["employee"]
    progress = service.get_progress(employee["id"])
    return {
        "employee_id": employee["id"],
        "was_found": lookup["found"],
        "form_exists": progress["exists"],
        "status": progress["status"],
        "completion_percentage": progress["completion_percentage"],
        "missing_fields": progress["missing_fields"],
    }


@router.post("/save-i9-field", tags=["tools"])
def save_i9_field(body: FieldWrite, service: I9Service = Depends(get_service)):
    result = service.save_field(body.employee_id, body.field_name, body.value)
    return {"success": True, "field_name": result["field_name"], "value": result["value"]}
