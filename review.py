"""
HR review pipeline: approve data, request corrections, final verification.

Each step persists the status change first and only then attempts its side
effects (PDF, SMS). A side effect that fails is logged and reported as a
False flag; it never reverts or blocks the transition that already landed.
"""

from pathlib import Path

import structlog

from errors import NotFound
from workflow import Action, apply_transition

logger = structlog.get_logger(__name__)


class ReviewOrchestrator:
    def __init__(self, store, pdf_filler, notifier, employer: dict, pdf_dir: str, public_base_url: str):
        self.store = store
        self.pdf_filler = pdf_filler
        self.notifier = notifier
        self.employer = employer
        self.pdf_dir = Path(pdf_dir)
        self.public_base_url = public_base_url.rstrip("/")

    def _load(self, form_id: str) -> dict:
        form = self.store.fetch_form(form_id)
        if form is None:
            raise NotFound("I-9 form not found")
        return form

    def pdf_path(self, form_id: str) -> Path:
        return self.pdf_dir / f"i9-{form_id}.pdf"

    def pdf_url(self, form_id: str) -> str:
        return f"{self.public_base_url}/i9/{form_id}/pdf"

    def _generate_pdf(self, form: dict) -> str | None:
        try:
            content = self.pdf_filler.render(form, self.employer)
            path = self.pdf_path(form["id"])
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except Exception:
            logger.exception("pdf_generation_failed", form_id=form["id"])
            return None
        return self.pdf_url(form["id"])

    def _notify(self, form_id: str, send, *args) -> bool:
        try:
            return bool(send(*args))
        except Exception:
            logger.exception("sms_notification_failed", form_id=form_id)
            return False

    def _recipient(self, form: dict) -> str | None:
        if form.get("phone"):
            return form["phone"]
        employee = self.store.fetch_employee(form["employee_id"])
        return employee["phone"] if employee else None

    def approve_data(self, form_id: str, reviewer: str) -> dict:
        form = apply_transition(self.store, self._load(form_id), Action.APPROVE_DATA, reviewer=reviewer)

        pdf_url = self._generate_pdf(form)
        recipient = self._recipient(form)
        sms_sent = bool(recipient) and self._notify(
            form_id, self.notifier.send_approved, recipient, pdf_url
        )
        logger.info(
            "form_approved", form_id=form_id, pdf_generated=pdf_url is not None, sms_sent=sms_sent
        )
        return {
            "form": form,
            "pdf_generated": pdf_url is not None,
            "pdf_url": pdf_url,
            "sms_sent": sms_sent,
            "notification_details": {"recipient": recipient, "type": "approval"},
        }

    def request_corrections(self, form_id: str, reviewer: str, notes: str) -> dict:
        form = apply_transition(
            self.store, self._load(form_id), Action.REQUEST_CORRECTIONS, reviewer=reviewer, notes=notes
        )

        recipient = self._recipient(form)
        sms_sent = bool(recipient) and self._notify(
            form_id, self.notifier.send_correction_request, recipient, form["employer_notes"]
        )
        logger.info("form_corrections_requested", form_id=form_id, sms_sent=sms_sent)
        return {
            "form": form,
            "sms_sent": sms_sent,
            "notification_details": {"recipient": recipient, "type": "correction_request"},
        }

    def verify_final(self, form_id: str, reviewer: str) -> dict:
        form = apply_transition(self.store, self._load(form_id), Action.VERIFY_FINAL, reviewer=reviewer)
        return {"form": form}
