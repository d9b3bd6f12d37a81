"""
The I-9 service: every operation the API, voice tools and CLIs may call.

Built once per process (see ``build_service``) and handed to request
handlers; it holds no workflow state of its own, only its collaborators.
"""

import structlog

import fields
import identity
import submission
import workflow
from db import Store
from errors import NotFound
from models import STORED_STATUSES, CitizenshipStatus
from notify import SmsNotifier
from pdf_filler import PdfFiller
from progress import completed_fields, evaluate_progress
from review import ReviewOrchestrator
from validators import canonical_phone, validate_citizenship_status, validate_ssn
from zip_lookup import ZipLookup

logger = structlog.get_logger(__name__)


class I9Service:
    def __init__(self, store, notifier, pdf_filler, zip_lookup, employer: dict, pdf_dir: str, public_base_url: str):
        self.store = store
        self.notifier = notifier
        self.zip_client = zip_lookup
        self.review = ReviewOrchestrator(
            store, pdf_filler, notifier, employer, pdf_dir=pdf_dir, public_base_url=public_base_url
        )

    # -- validation --------------------------------------------------------

    def validate_ssn(self, ssn: str) -> dict:
        return {"valid": validate_ssn(ssn), "format": "XXX-XX-XXXX", "input": ssn}

    def validate_citizenship(self, status: str) -> dict:
        return {
            "valid": validate_citizenship_status(status),
            "input": status,
            "valid_options": [c.value for c in CitizenshipStatus],
        }

    # -- employee side -----------------------------------------------------

    def find_or_create_employee(self, phone: str, email: str | None = None) -> dict:
        employee, created = identity.find_or_create_employee(self.store, phone, email)
        return {"found": not created, "created": created, "employee": employee}

    def save_field(self, employee_id: str, field_name: str, value) -> dict:
        form = fields.save_field(self.store, employee_id, field_name, value)
        return {"field_name": field_name, "value": value, "updated_form": form}

    def get_progress(self, employee_id: str) -> dict:
        return evaluate_progress(self.store.fetch_form_by_employee(employee_id))

    def complete_section1(self, employee_id: str) -> dict:
        form = workflow.complete_section1(self.store, employee_id)
        return {
            "message": "I-9 Section 1 completed successfully",
            "completed_at": form["completed_at"],
            "form": form,
        }

    def submit_complete(self, payload: dict) -> dict:
        return submission.submit_complete(self.store, self.notifier, payload)

    def zip_lookup(self, zip_code: str) -> dict:
        return self.zip_client.lookup(zip_code)

    def caller_context(self, phone: str) -> dict:
        """Snapshot for the voice agent at the start of an inbound call."""
        employee = identity.find_or_create_employee(self.store, phone)[0]
        form = self.store.fetch_form_by_employee(employee["id"])
        context = {
            "employee_id": employee["id"],
            "phone": employee["phone"],
            "email": employee.get("email"),
            "has_existing_form": form is not None,
        }
        if form is None:
            context["message"] = "Ready to start I-9 form"
            return context

        progress = evaluate_progress(form)
        context.update(
            form_status=form["status"],
            completion_percentage=progress["completion_percentage"],
            completed_fields=completed_fields(form),
            missing_fields=progress["missing_fields"],
            last_updated=form.get("updated_at"),
            employer_notes=form.get("employer_notes"),
        )
        return context

    # -- HR side -----------------------------------------------------------

    def approve_data(self, form_id: str, reviewer: str) -> dict:
        return self.review.approve_data(form_id, reviewer)

    def request_corrections(self, form_id: str, reviewer: str, notes: str) -> dict:
        return self.review.request_corrections(form_id, reviewer, notes)

    def verify_final(self, form_id: str, reviewer: str) -> dict:
        return self.review.verify_final(form_id, reviewer)

    def override_status(self, form_id: str, status: str) -> dict:
        return workflow.override_status(self.store, form_id, status)

    # -- administration ----------------------------------------------------

    def find_employee_by_phone(self, phone: str) -> dict:
        """Read-only lookup; unlike find_or_create_employee it never inserts."""
        employee = self.store.fetch_employee_by_phone(canonical_phone(phone))
        if employee is None:
            raise NotFound("Employee not found")
        return employee

    def get_employee(self, employee_id: str) -> dict:
        employee = self.store.fetch_employee(employee_id)
        if employee is None:
            raise NotFound("Employee not found")
        return employee

    def list_employees(self) -> list[dict]:
        return self.store.fetch_all_employees()

    def update_employee_email(self, employee_id: str, email: str | None) -> dict:
        employee = self.store.update_employee_email(employee_id, email)
        if employee is None:
            raise NotFound("Employee not found")
        return employee

    def delete_employee(self, employee_id: str) -> None:
        if not self.store.delete_employee(employee_id):
            raise NotFound("Employee not found")
        logger.info("employee_deleted", employee_id=employee_id)

    def get_form(self, form_id: str) -> dict:
        form = self.store.fetch_form(form_id)
        if form is None:
            raise NotFound("I-9 form not found")
        return form

    def list_forms(self, status: str | None = None, employee_id: str | None = None) -> list[dict]:
        return self.store.fetch_forms(status=status, employee_id=employee_id)

    def update_form(self, form_id: str, changes: dict) -> dict:
        return fields.update_form(self.store, form_id, changes)

    def delete_form(self, form_id: str) -> None:
        if not self.store.delete_form(form_id):
            raise NotFound("I-9 form not found")
        logger.info("form_deleted", form_id=form_id)

    def stats(self) -> dict:
        counts = self.store.count_forms_by_status()
        by_status = {s: counts.get(s, 0) for s in STORED_STATUSES}
        return {"total": sum(by_status.values()), "by_status": by_status}

    def clean_duplicates(self) -> int:
        deleted = self.store.delete_duplicate_forms()
        logger.info("duplicate_forms_deleted", count=deleted)
        return deleted


def build_service(settings) -> I9Service:
    return I9Service(
        store=Store(settings.DATABASE_URL),
        notifier=SmsNotifier(
            api_key=settings.TELNYX_API_KEY,
            from_number=settings.TELNYX_PHONE_NUMBER,
            api_url=settings.TELNYX_API_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            company_name=settings.EMPLOYER_NAME,
            hr_contact_email=settings.HR_CONTACT_EMAIL,
        ),
        pdf_filler=PdfFiller(settings.PDF_TEMPLATE_PATH),
        zip_lookup=ZipLookup(settings.ZIP_LOOKUP_URL, timeout=settings.HTTP_TIMEOUT_SECONDS),
        employer=settings.employer_profile,
        pdf_dir=settings.PDF_OUTPUT_DIR,
        public_base_url=settings.PUBLIC_BASE_URL,
    )
