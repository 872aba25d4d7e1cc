"""Shared fixtures for the claim intake tests."""

from typing import Callable
from unittest.mock import MagicMock

import pytest

from claim_intake.core.models import Attachment, ClaimForm

DocumentFactory = Callable[..., Attachment]


@pytest.fixture
def document() -> DocumentFactory:
    """Factory for small in-memory documents."""

    def _make(name: str = "document.pdf", content: bytes = b"%PDF-1.4 test document") -> Attachment:
        content_type = "application/pdf" if name.endswith(".pdf") else "image/jpeg"
        return Attachment.from_bytes(name=name, content=content, content_type=content_type)

    return _make


@pytest.fixture
def valid_form(document: DocumentFactory) -> ClaimForm:
    """A complete claim for a natural death."""
    return ClaimForm(
        full_name="Asha Verma",
        policy_number="POL-123456",
        email="asha.verma@example.com",
        mobile_number="98765-43210",
        address="12 MG Road, Pune",
        cause_of_death="Natural",
        nominee_full_name="Ravi Verma",
        nominee_relationship="Spouse",
        nominee_mobile_number="9123456780",
        claim_form=document("claim_form.pdf"),
        death_certificate=document("death_certificate.pdf"),
        doctor_report=document("doctor_report.jpg", b"\xff\xd8\xff jpeg bytes"),
    )


def make_response(data=None, status_code: int = 200) -> MagicMock:
    """Fake ``requests`` response returning ``data`` from ``.json()``."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = data
    return response


@pytest.fixture
def json_response() -> Callable[..., MagicMock]:
    return make_response
