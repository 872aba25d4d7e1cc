"""Tests for building the multipart submission payload."""

from claim_intake.core.models import ClaimForm
from claim_intake.submission.payload import build_payload


def test_text_fields_use_submission_names(valid_form):
    payload = build_payload(valid_form)
    assert payload.fields == {
        "policyNumber": "POL-123456",
        "causeOfDeath": "Natural",
        "deceasedFullName": "Asha Verma",
        "deceasedEmail": "asha.verma@example.com",
        "deceasedMobile": "98765-43210",
        "deceasedAddress": "12 MG Road, Pune",
        "nomineeFullName": "Ravi Verma",
        "nomineeRelationship": "Spouse",
        "nomineeMobile": "9123456780",
    }


def test_provided_documents_are_included_under_canonical_names(valid_form):
    payload = build_payload(valid_form)
    assert set(payload.files) == {"claimForm", "deathCertificate", "doctorReport"}
    assert payload.files["deathCertificate"].name == "death_certificate.pdf"


def test_zero_byte_document_is_never_sent(valid_form, document):
    valid_form.doctor_report = document("empty.pdf", b"")
    valid_form.police_report = document("police.pdf", b"")
    payload = build_payload(valid_form)
    assert "doctorReport" not in payload.files
    assert "policeReport" not in payload.files


def test_police_report_included_whenever_provided(valid_form, document):
    valid_form.police_report = document("police.pdf")
    assert "policeReport" in build_payload(valid_form).files


def test_invalid_form_still_builds():
    payload = build_payload(ClaimForm())
    assert payload.files == {}
    assert all(value == "" for value in payload.fields.values())
    assert len(payload.fields) == 9


def test_multipart_files_shape(valid_form):
    parts = build_payload(valid_form).multipart_files()
    name, content, content_type = parts["doctorReport"]
    assert name == "doctor_report.jpg"
    assert content == b"\xff\xd8\xff jpeg bytes"
    assert content_type == "image/jpeg"
