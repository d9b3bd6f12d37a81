"""
Voice assistant tools.

Tool names form a closed enum; each one maps to exactly one handler in a
static table checked at import time. Domain errors come back as
``{"success": False, "error": ...}`` so the assistant can read them out;
anything else propagates as an internal error.
"""

from enum import Enum

import structlog

from errors import I9Error, ValidationFailed

logger = structlog.get_logger(__name__)


class ToolName(str, Enum):
    VALIDATE_SSN = "validate_ssn"
    VALIDATE_CITIZENSHIP_STATUS = "validate_citizenship_status"
    GET_EMPLOYEE_BY_PHONE = "get_employee_by_phone"
    SAVE_I9_FIELD = "save_i9_field"
    GET_I9_PROGRESS = "get_i9_progress"
    COMPLETE_I9_SECTION1 = "complete_i9_section1"
    SUBMIT_COMPLETE_I9_FORM = "submit_complete_i9_form"
    LOOKUP_CITY_STATE = "lookup_city_state"


def _string(description: str) -> dict:
    return {"type": "string", "description": description}


_SUBMISSION_PROPERTIES = {
    "phone": _string("Employee phone number"),
    "first_name": _string("Legal first name"),
    "last_name": _string("Legal last name"),
    "middle_initial": _string("Middle initial"),
    "other_last_names": _string("Other last names used"),
    "address": _string("Street number and name"),
    "apt_number": _string("Apartment number"),
    "city": _string("City or town"),
    "state": _string("Two-letter state code"),
    "zip_code": _string("ZIP code"),
    "date_of_birth": _string("Date of birth, YYYY-MM-DD"),
    "ssn": _string("Social Security Number, XXX-XX-XXXX"),
    "email": _string("Email address"),
    "citizenship_status": _string(
        "us_citizen, noncitizen_national, lawful_permanent_resident or authorized_alien"
    ),
    "uscis_a_number": _string("USCIS or A-Number"),
    "alien_expiration_date": _string("Work authorization expiration date, YYYY-MM-DD"),
    "form_i94_number": _string("Form I-94 admission number"),
    "foreign_passport_number": _string("Foreign passport number"),
    "country_of_issuance": _string("Passport country of issuance"),
}

TOOL_DEFINITIONS: dict[ToolName, dict] = {
    ToolName.VALIDATE_SSN: {
        "description": "Validate Social Security Number format (XXX-XX-XXXX)",
        "properties": {"ssn": _string("Social Security Number to validate")},
        "required": ["ssn"],
    },
    ToolName.VALIDATE_CITIZENSHIP_STATUS: {
        "description": "Validate citizenship status value against allowed options",
        "properties": {"status": _string("Citizenship status to validate")},
        "required": ["status"],
    },
    ToolName.GET_EMPLOYEE_BY_PHONE: {
        "description": "Find existing employee by phone number or create new one if not found",
        "properties": {
            "phone": _string("Phone number to search for"),
            "email": _string("Email address for new employee creation (optional)"),
        },
        "required": ["phone"],
    },
    ToolName.SAVE_I9_FIELD: {
        "description": "Save a single field to the I-9 form",
        "properties": {
            "employee_id": _string("Employee id"),
            "field_name": _string("Name of the field to update"),
            "value": _string("Value to save for the field"),
        },
        "required": ["employee_id", "field_name", "value"],
    },
    ToolName.GET_I9_PROGRESS: {
        "description": "Get current I-9 completion status and list missing required fields",
        "properties": {"employee_id": _string("Employee id")},
        "required": ["employee_id"],
    },
    ToolName.COMPLETE_I9_SECTION1: {
        "description": "Sign and mark I-9 Section 1 as completed",
        "properties": {"employee_id": _string("Employee id")},
        "required": ["employee_id"],
    },
    ToolName.SUBMIT_COMPLETE_I9_FORM: {
        "description": "Submit a complete I-9 Section 1 in one call",
        "properties": _SUBMISSION_PROPERTIES,
        "required": [
            "phone", "first_name", "last_name", "address", "city", "state",
            "zip_code", "date_of_birth", "email", "citizenship_status",
        ],
    },
    ToolName.LOOKUP_CITY_STATE: {
        "description": "Look up city and state for a 5-digit ZIP code",
        "properties": {"zip_code": _string("5-digit ZIP code")},
        "required": ["zip_code"],
    },
}


def list_tools() -> list[dict]:
    return [
        {
            "name": name.value,
            "description": definition["description"],
            "inputSchema": {
                "type": "object",
                "properties": definition["properties"],
                "required": definition["required"],
            },
        }
        for name, definition in TOOL_DEFINITIONS.items()
    ]


def _submit(service, args):
    payload = {k: args.get(k) for k in _SUBMISSION_PROPERTIES}
    result = service.submit_complete(payload)
    return {
        "form_id": result["form_id"],
        "employee_id": result["employee_id"],
        "status": result["form"]["status"],
        "sms_sent": result["sms_sent"],
    }


_HANDLERS = {
    ToolName.VALIDATE_SSN: lambda s, a: s.validate_ssn(a["ssn"]),
    ToolName.VALIDATE_CITIZENSHIP_STATUS: lambda s, a: s.validate_citizenship(a["status"]),
    ToolName.GET_EMPLOYEE_BY_PHONE: lambda s, a: s.find_or_create_employee(a["phone"], a.get("email")),
    ToolName.SAVE_I9_FIELD: lambda s, a: s.save_field(a["employee_id"], a["field_name"], a["value"]),
    ToolName.GET_I9_PROGRESS: lambda s, a: s.get_progress(a["employee_id"]),
    ToolName.COMPLETE_I9_SECTION1: lambda s, a: s.complete_section1(a["employee_id"]),
    ToolName.SUBMIT_COMPLETE_I9_FORM: _submit,
    ToolName.LOOKUP_CITY_STATE: lambda s, a: s.zip_lookup(a["zip_code"]),
}

assert set(_HANDLERS) == set(ToolName), "every tool needs a handler"
assert set(TOOL_DEFINITIONS) == set(ToolName), "every tool needs a definition"


def _missing_arguments(tool: ToolName, arguments: dict) -> list[str]:
    return [
        name
        for name in TOOL_DEFINITIONS[tool]["required"]
        if arguments.get(name) is None
    ]


def dispatch(service, name: str, arguments: dict | None = None) -> dict:
    arguments = arguments or {}
    try:
        tool = ToolName(name)
    except ValueError:
        return {"success": False, "error": f"Unknown tool: {name}"}

    missing = _missing_arguments(tool, arguments)
    try:
        if missing:
            raise ValidationFailed(
                [{"field": m, "message": f"{m} is required"} for m in missing],
                detail=f"Missing required arguments: {', '.join(missing)}",
            )
        data = _HANDLERS[tool](service, arguments)
    except I9Error as e:
        logger.info("tool_failed", tool=tool.value, kind=e.kind, detail=e.detail)
        response = {"success": False, "error": e.detail, "kind": e.kind}
        if isinstance(e, ValidationFailed):
            response["errors"] = e.errors
        return response

    logger.info("tool_called", tool=tool.value)
    return {"success": True, "data": data}
