"""Tests for I-9 PDF rendering."""

import io
from datetime import date, datetime, timezone

import pytest
from pypdf import PdfReader
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from pdf_filler import PdfFiller, build_field_map, format_mmddyyyy
from tests.conftest import EMPLOYER, REQUIRED_VALUES

TODAY = date(2026, 3, 2)


def _form(**extra):
    return {"id": "form-1", **REQUIRED_VALUES, "ssn": "123456789",
            "employee_signature_date": datetime(2026, 3, 1, tzinfo=timezone.utc),
            "employee_signature_method": "voice", **extra}


def test_format_mmddyyyy():
    assert format_mmddyyyy("1985-05-15") == "05151985"
    assert format_mmddyyyy(datetime(2026, 3, 1, 9, 30)) == "03012026"
    assert format_mmddyyyy("") == ""
    assert format_mmddyyyy("garbage") == ""


def test_field_map_section1():
    fields = build_field_map(_form(), EMPLOYER, today=TODAY)
    assert fields["Last Name (Family Name)"] == "Doe"
    assert fields["Date of Birth mmddyyyy"] == "05151985"
    assert fields["US Social Security Number"] == "123456789"
    assert fields["Signature of Employee"] == "Signed via voice"
    assert fields["Today's Date mmddyyy"] == "03012026"
    assert fields["Employee Middle Initial (if any)"] == ""


def test_field_map_checks_one_citizenship_box():
    fields = build_field_map(_form(citizenship_status="authorized_alien"), EMPLOYER, today=TODAY)
    assert [k for k in ("CB_1", "CB_2", "CB_3", "CB_4") if fields[k] == "/On"] == ["CB_4"]


def test_field_map_lawful_permanent_resident_number():
    fields = build_field_map(
        _form(citizenship_status="lawful_permanent_resident", uscis_a_number="A123"), EMPLOYER, today=TODAY
    )
    assert fields["3 A lawful permanent resident Enter USCIS or ANumber"] == "A123"


def test_field_map_authorized_alien_uses_first_identifier():
    fields = build_field_map(
        _form(
            citizenship_status="authorized_alien",
            alien_expiration_date="2027-12-31",
            foreign_passport_number="X99",
            country_of_issuance="Canada",
        ),
        EMPLOYER,
        today=TODAY,
    )
    assert fields["Exp Date mmddyyyy"] == "12312027"
    assert fields["Foreign Passport Number and Country of IssuanceRow1"] == "X99 Canada"
    assert "USCIS ANumber" not in fields


def test_field_map_employer_section():
    fields = build_field_map(_form(), EMPLOYER, today=TODAY)
    assert fields["Employers Business or Org Name"] == "Acme Corp"
    assert fields["Employers Business or Org Address"] == "1 Main St, Chicago, IL 60654"
    assert fields["Last Name First Name and Title of Employer or Authorized Representative"] == (
        "Sarah Johnson, HR Manager"
    )
    assert fields["S2 Todays Date mmddyyyy"] == "03022026"


def test_missing_template_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        PdfFiller(str(tmp_path / "nope.pdf")).render(_form(), EMPLOYER)


def test_flattened_template_gets_overlay(tmp_path):
    template = tmp_path / "flat.pdf"
    buf = io.BytesIO()
    can = canvas.Canvas(buf, pagesize=letter)
    can.drawString(40, 700, "Employment Eligibility Verification")
    can.showPage()
    can.drawString(40, 700, "Page two")
    can.save()
    template.write_bytes(buf.getvalue())

    content = PdfFiller(str(template)).render(_form(), EMPLOYER)

    reader = PdfReader(io.BytesIO(content))
    assert len(reader.pages) == 2
    text = reader.pages[0].extract_text()
    assert "Doe" in text
    assert "Signed via voice" in text
