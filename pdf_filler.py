"""
Render a filled I-9 PDF from an approved form.

Fillable templates get their AcroForm fields set with pypdf. Flattened
templates (no form fields) get a reportlab text layer stamped over page 1.
Field names the template does not know are logged and skipped.
"""

import io
from datetime import date, datetime
from pathlib import Path

import structlog
from pypdf import PdfReader, PdfWriter
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from models import CitizenshipStatus

logger = structlog.get_logger(__name__)

_CITIZENSHIP_CHECKBOXES = {
    "CB_1": CitizenshipStatus.US_CITIZEN.value,
    "CB_2": CitizenshipStatus.NONCITIZEN_NATIONAL.value,
    "CB_3": CitizenshipStatus.LAWFUL_PERMANENT_RESIDENT.value,
    "CB_4": CitizenshipStatus.AUTHORIZED_ALIEN.value,
}

# Approximate (x, y) positions on page 1 of the 08/01/23 edition, used only
# for flattened templates. reportlab's origin is the bottom-left corner.
_OVERLAY_COORDS = {
    "Last Name (Family Name)": (40, 600),
    "First Name Given Name": (200, 600),
    "Employee Middle Initial (if any)": (340, 600),
    "Employee Other Last Names Used (if any)": (420, 600),
    "Address Street Number and Name": (40, 575),
    "Apt Number (if any)": (230, 575),
    "City or Town": (290, 575),
    "State": (440, 575),
    "ZIP Code": (500, 575),
    "Date of Birth mmddyyyy": (40, 550),
    "US Social Security Number": (150, 550),
    "Employees E-mail Address": (290, 550),
    "Telephone Number": (480, 550),
    "Signature of Employee": (40, 440),
    "Today's Date mmddyyy": (400, 440),
}


def format_mmddyyyy(value) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%m%d%Y")


def build_field_map(form: dict, employer: dict, today: date | None = None) -> dict[str, str]:
    """Flatten a form row and employer profile into template field name -> text."""
    today = today or date.today()
    status = form.get("citizenship_status")
    ssn = "".join(ch for ch in (form.get("ssn") or "") if ch.isdigit())
    completed_at = form.get("completed_at")

    fields = {
        "Last Name (Family Name)": form.get("last_name"),
        "First Name Given Name": form.get("first_name"),
        "Employee Middle Initial (if any)": form.get("middle_initial"),
        "Employee Other Last Names Used (if any)": form.get("other_last_names"),
        "Address Street Number and Name": form.get("address"),
        "Apt Number (if any)": form.get("apt_number"),
        "City or Town": form.get("city"),
        "State": (form.get("state") or "").upper(),
        "ZIP Code": form.get("zip_code"),
        "Date of Birth mmddyyyy": format_mmddyyyy(form.get("date_of_birth")),
        "US Social Security Number": ssn,
        "Employees E-mail Address": form.get("email"),
        "Telephone Number": form.get("phone"),
    }

    if status == CitizenshipStatus.LAWFUL_PERMANENT_RESIDENT.value:
        fields["3 A lawful permanent resident Enter USCIS or ANumber"] = form.get("uscis_a_number")
    elif status == CitizenshipStatus.AUTHORIZED_ALIEN.value:
        fields["Exp Date mmddyyyy"] = format_mmddyyyy(form.get("alien_expiration_date"))
        # The form takes exactly one of the three identifiers.
        if form.get("uscis_a_number"):
            fields["USCIS ANumber"] = form.get("uscis_a_number")
        elif form.get("form_i94_number"):
            fields["Form I94 Admission Number"] = form.get("form_i94_number")
        elif form.get("foreign_passport_number"):
            passport = " ".join(
                p for p in (form.get("foreign_passport_number"), form.get("country_of_issuance")) if p
            )
            fields["Foreign Passport Number and Country of IssuanceRow1"] = passport

    signed_on = format_mmddyyyy(form.get("employee_signature_date") or completed_at or today)
    method = form.get("employee_signature_method") or "voice"
    fields["Signature of Employee"] = f"Signed via {method}"
    fields["Today's Date mmddyyy"] = signed_on

    employer_address = ", ".join(
        p
        for p in (
            employer.get("company_address"),
            employer.get("company_city"),
            f"{employer.get('company_state', '')} {employer.get('company_zip', '')}".strip(),
        )
        if p
    )
    representative = ", ".join(
        p for p in (employer.get("hr_representative_name"), employer.get("hr_representative_title")) if p
    )
    fields["Employers Business or Org Name"] = employer.get("company_name")
    fields["Employers Business or Org Address"] = employer_address
    fields["Last Name First Name and Title of Employer or Authorized Representative"] = representative
    fields["Signature of Employer or AR"] = (
        f"{employer.get('hr_representative_name')} (Electronic Signature)"
        if employer.get("hr_representative_name")
        else ""
    )
    fields["S2 Todays Date mmddyyyy"] = format_mmddyyyy(today)

    for checkbox, category in _CITIZENSHIP_CHECKBOXES.items():
        fields[checkbox] = "/On" if status == category else "/Off"

    return {k: ("" if v is None else str(v)) for k, v in fields.items()}


class PdfFiller:
    def __init__(self, template_path: str):
        self.template_path = Path(template_path)

    def render(self, form: dict, employer: dict) -> bytes:
        if not self.template_path.exists():
            raise FileNotFoundError(f"I-9 template not found at {self.template_path}")

        values = build_field_map(form, employer)
        reader = PdfReader(str(self.template_path))
        template_fields = reader.get_fields() or {}

        if template_fields:
            writer = self._fill_acroform(reader, template_fields, values)
        else:
            writer = self._stamp_overlay(reader, values)

        buf = io.BytesIO()
        writer.write(buf)
        logger.info("pdf_rendered", form_id=form.get("id"), size=buf.tell())
        return buf.getvalue()

    def _fill_acroform(self, reader: PdfReader, template_fields: dict, values: dict) -> PdfWriter:
        unknown = sorted(name for name in values if name not in template_fields)
        if unknown:
            logger.warning("pdf_fields_unknown", fields=unknown)
        known = {k: v for k, v in values.items() if k in template_fields}

        writer = PdfWriter(clone_from=reader)
        writer.set_need_appearances_writer(True)
        for page in writer.pages:
            writer.update_page_form_field_values(page, known, auto_regenerate=False)
        return writer

    def _stamp_overlay(self, reader: PdfReader, values: dict) -> PdfWriter:
        packet = io.BytesIO()
        can = canvas.Canvas(packet, pagesize=letter)
        can.setFont("Helvetica", 9)
        for name, (x, y) in _OVERLAY_COORDS.items():
            text = values.get(name)
            if text:
                can.drawString(x, y, text)
        can.save()
        packet.seek(0)
        overlay = PdfReader(packet)

        writer = PdfWriter()
        first = reader.pages[0]
        first.merge_page(overlay.pages[0])
        writer.add_page(first)
        for page in reader.pages[1:]:
            writer.add_page(page)
        return writer
