"""Employee identity endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from models import EmployeeLookup, EmployeeUpdate
from routers.deps import get_service
from service import I9Service

router = APIRouter()


@router.post("", tags=["employees"])
def find_or_create_employee(
    body: EmployeeLookup, response: Response, service: I9Service = Depends(get_service)
):
    result = service.find_or_create_employee(body.phone, body.email)
    if result["created"]:
        response.status_code = status.HTTP_201_CREATED
    return result


@router.get("", tags=["employees"])
def list_employees(phone: Optional[str] = None, service: I9Service = Depends(get_service)):
    """List all employees, or look one up by phone. Lookup only; POST creates."""
    if phone:
        return service.find_employee_by_phone(phone)
    return service.list_employees()


@router.get("/{employee_id}", tags=["employees"])
def get_employee(employee_id: str, service: I9Service = Depends(get_service)):
    return service.get_employee(employee_id)


@router.patch("/{employee_id}", tags=["employees"])
def update_employee(employee_id: str, body: EmployeeUpdate, service: I9Service = Depends(get_service)):
    """Only the email is mutable; the phone is the identity key."""
    return service.update_employee_email(employee_id, body.email)


@router.delete("/{employee_id}", tags=["employees"])
def delete_employee(employee_id: str, service: I9Service = Depends(get_service)):
    service.delete_employee(employee_id)
    return {"message": "Employee deleted successfully"}
