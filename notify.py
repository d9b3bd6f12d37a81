"""
SMS notifications through the Telnyx Messaging API v2.

``send`` never raises: every failure is logged and reported as False so a
notification problem can never undo the workflow step that triggered it.
"""

import httpx
import structlog

from config import SMS_MAX_LENGTH
from validators import canonical_phone

logger = structlog.get_logger(__name__)


class SmsNotifier:
    def __init__(
        self,
        api_key: str,
        from_number: str,
        api_url: str = "https://api.telnyx.com/v2/messages",
        timeout: float = 10.0,
        company_name: str = "HR",
        hr_contact_email: str = "",
        client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.from_number = from_number
        self.api_url = api_url
        self.company_name = company_name
        self.hr_contact_email = hr_contact_email
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def send(self, to: str, text: str) -> bool:
        if not self.api_key or not self.from_number:
            logger.error("sms_not_configured", missing_api_key=not self.api_key,
                         missing_from_number=not self.from_number)
            return False
        if not to or not text:
            logger.error("sms_invalid_parameters")
            return False
        if len(text) > SMS_MAX_LENGTH:
            logger.error("sms_too_long", length=len(text), limit=SMS_MAX_LENGTH)
            return False

        recipient = canonical_phone(to)
        try:
            response = self._client.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"from": self.from_number, "to": recipient, "text": text},
            )
        except httpx.HTTPError as e:
            logger.error("sms_transport_error", error=str(e))
            return False

        if response.is_error:
            try:
                errors = response.json().get("errors", [])
            except ValueError:
                errors = []
            logger.error(
                "sms_api_error",
                status_code=response.status_code,
                errors=[f"{e.get('code')}: {e.get('title')}" for e in errors],
            )
            return False

        try:
            data = response.json().get("data", {})
        except ValueError:
            data = {}
        logger.info("sms_sent", message_id=data.get("id"), parts=data.get("parts"))
        return True

    # -- message templates -------------------------------------------------

    def send_submitted(self, phone: str) -> bool:
        text = (
            "Your I-9 Employment Eligibility Verification form has been submitted "
            "successfully! Our HR team will review your information within 24 hours "
            f"and notify you of the status. - {self.company_name}"
        )
        return self.send(phone, text)

    def send_approved(self, phone: str, pdf_url: str | None) -> bool:
        if pdf_url:
            text = (
                "Your I-9 form has been approved by our HR team. Your completed PDF "
                f"is ready for download: {pdf_url} Please save it for your records. "
                f"- {self.company_name}"
            )
        else:
            text = (
                "Your I-9 form has been approved by our HR team. Your completed PDF "
                f"is still being prepared and HR will send it to you shortly. - {self.company_name}"
            )
        return self.send(phone, text)

    def send_correction_request(self, phone: str, notes: str) -> bool:
        contact = f" Contact {self.hr_contact_email} with any questions." if self.hr_contact_email else ""
        text = (
            f'Your I-9 form needs some updates before approval. HR feedback: "{notes}" '
            f"Please call back to review and resubmit your form.{contact} - {self.company_name}"
        )
        return self.send(phone, text)
