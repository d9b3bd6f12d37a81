"""Enumerations and request/response models for the I-9 service."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CitizenshipStatus(str, Enum):
    US_CITIZEN = "us_citizen"
    NONCITIZEN_NATIONAL = "noncitizen_national"
    LAWFUL_PERMANENT_RESIDENT = "lawful_permanent_resident"
    AUTHORIZED_ALIEN = "authorized_alien"


class FormStatus(str, Enum):
    NOT_STARTED = "not_started"  # virtual: no row exists yet
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    NEEDS_CORRECTION = "needs_correction"
    DATA_APPROVED = "data_approved"
    VERIFIED = "verified"


# Statuses that can actually be written to i9_forms.status.
STORED_STATUSES = tuple(s.value for s in FormStatus if s is not FormStatus.NOT_STARTED)


class EmployeeLookup(BaseModel):
    phone: str
    email: Optional[str] = None


class EmployeeUpdate(BaseModel):
    email: Optional[str] = None


class I9FormUpdate(BaseModel):
    """Any subset of Section 1 fields. Rules are enforced in validators."""

    phone: Optional[str] = None
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    middle_initial: Optional[str] = None
    other_last_names: Optional[str] = None
    address: Optional[str] = None
    apt_number: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    date_of_birth: Optional[str] = None
    ssn: Optional[str] = None
    email: Optional[str] = None
    citizenship_status: Optional[str] = None
    uscis_a_number: Optional[str] = None
    alien_expiration_date: Optional[str] = None
    form_i94_number: Optional[str] = None
    foreign_passport_number: Optional[str] = None
    country_of_issuance: Optional[str] = None


class I9Submission(I9FormUpdate):
    """Full Section 1 payload, checked as a whole by validators.validate_form."""

    phone: str


class FieldWrite(BaseModel):
    employee_id: str
    field_name: str
    value: str


class ReviewAction(BaseModel):
    reviewed_by: str = Field(..., min_length=1)
    employer_notes: Optional[str] = None


class StatusOverride(BaseModel):
    status: str


class ToolCall(BaseModel):
    name: str
    arguments: dict = Field(default_factory=dict)
