"""Tests for the adjudication submission client.

The transport is replaced with ``unittest.mock.patch`` on ``requests.post``;
no adjudication service is needed.
"""

import json
from unittest.mock import patch

import pytest
import requests

from claim_intake import config
from claim_intake.core.errors import TransportError
from claim_intake.core.states import OutcomeStatus
from claim_intake.submission.client import SubmissionClient, map_status_token, parse_outcome
from claim_intake.submission.payload import build_payload

POST = "claim_intake.submission.client.requests.post"


@pytest.fixture
def client() -> SubmissionClient:
    return SubmissionClient(base_url="http://adjudicator.test/", timeout=5)


# ─── status tokens ────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "token, expected",
    [
        ("APPROVED", OutcomeStatus.APPROVED),
        ("REJECTED", OutcomeStatus.REJECTED),
        ("MANUAL_REVIEW", OutcomeStatus.MANUAL_REVIEW),
        ("WEIRD_TOKEN", OutcomeStatus.MANUAL_REVIEW),
        ("approved", OutcomeStatus.MANUAL_REVIEW),
        ("", OutcomeStatus.MANUAL_REVIEW),
        (None, OutcomeStatus.MANUAL_REVIEW),
        (1, OutcomeStatus.MANUAL_REVIEW),
    ],
)
def test_map_status_token(token, expected):
    assert map_status_token(token) is expected


def test_parse_outcome_carries_message_and_reference():
    outcome = parse_outcome(
        {"status": "REJECTED", "message": "Policy lapsed", "claimReference": "CLM-42"}
    )
    assert outcome.status is OutcomeStatus.REJECTED
    assert outcome.reason == "Policy lapsed"
    assert outcome.claim_reference == "CLM-42"


def test_parse_outcome_missing_status_is_manual_review():
    outcome = parse_outcome({"message": "Received"})
    assert outcome.status is OutcomeStatus.MANUAL_REVIEW
    assert outcome.reason == "Received"
    assert outcome.claim_reference is None


def test_parse_outcome_rejects_non_object_body():
    with pytest.raises(TransportError):
        parse_outcome(["APPROVED"])


@pytest.mark.parametrize(
    "token, expected",
    [
        ("APPROVED", "Your claim has been approved and will be processed within 5-7 business days."),
        ("REJECTED", "Your claim does not meet the policy requirements."),
        ("MANUAL_REVIEW", "Your claim requires additional review. Our team will contact you within 2-3 business days."),
        ("WEIRD_TOKEN", "Your claim requires additional review. Our team will contact you within 2-3 business days."),
    ],
)
def test_outcome_without_message_shows_standard_wording(token, expected):
    outcome = parse_outcome({"status": token})
    assert outcome.reason is None
    assert outcome.display_reason() == expected


def test_service_message_takes_precedence_over_standard_wording():
    assert parse_outcome({"status": "APPROVED", "message": "Paid"}).display_reason() == "Paid"


# ─── request ──────────────────────────────────────────────────────────────────


def test_submit_posts_multipart_to_submit_path(client, valid_form, json_response):
    payload = build_payload(valid_form)
    with patch(POST, return_value=json_response({"status": "APPROVED"})) as mock_post:
        client.submit(payload)

    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == "http://adjudicator.test/api/claim/submit"
    assert kwargs["data"]["deceasedFullName"] == "Asha Verma"
    assert set(kwargs["files"]) == {"claimForm", "deathCertificate", "doctorReport"}
    assert kwargs["timeout"] == 5


def test_default_base_url_comes_from_config(monkeypatch):
    monkeypatch.setattr(config, "_runtime_claim_api_url", "http://override.test")
    assert SubmissionClient().submit_url == "http://override.test/api/claim/submit"


def test_runtime_url_override_is_followed_by_existing_clients(monkeypatch):
    monkeypatch.setattr(config, "_runtime_claim_api_url", None)
    default_client = SubmissionClient()

    config.set_claim_api_url("http://sidebar.test/")
    assert default_client.submit_url == "http://sidebar.test/api/claim/submit"

    config.set_claim_api_url(None)
    assert default_client.base_url == config.CLAIM_API_URL.rstrip("/")


def test_successful_response_is_mapped(client, valid_form, json_response):
    body = {"status": "APPROVED", "message": "All documents verified", "claimReference": "CLM-1001"}
    with patch(POST, return_value=json_response(body)):
        outcome = client.submit(build_payload(valid_form))

    assert outcome.status is OutcomeStatus.APPROVED
    assert outcome.reason == "All documents verified"
    assert outcome.claim_reference == "CLM-1001"


def test_unknown_token_fails_safe(client, valid_form, json_response):
    with patch(POST, return_value=json_response({"status": "WEIRD_TOKEN"})):
        outcome = client.submit(build_payload(valid_form))
    assert outcome.status is OutcomeStatus.MANUAL_REVIEW


# ─── transport failures ───────────────────────────────────────────────────────


def test_http_error_status_raises_transport_error(client, valid_form, json_response):
    response = json_response({"status": "APPROVED"}, status_code=500)
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("500 Server Error", response=response)

    with patch(POST, return_value=response):
        with pytest.raises(TransportError) as exc_info:
            client.submit(build_payload(valid_form))

    assert exc_info.value.status_code == 500


@pytest.mark.parametrize(
    "error",
    [
        requests.exceptions.ConnectionError("connection refused"),
        requests.exceptions.Timeout("read timed out"),
    ],
)
def test_network_failure_raises_transport_error(client, valid_form, error):
    with patch(POST, side_effect=error):
        with pytest.raises(TransportError):
            client.submit(build_payload(valid_form))


def test_non_json_body_raises_transport_error(client, valid_form, json_response):
    response = json_response()
    response.json.side_effect = ValueError("Expecting value")

    with patch(POST, return_value=response):
        with pytest.raises(TransportError):
            client.submit(build_payload(valid_form))


def test_deeply_nested_body_raises_transport_error(client, valid_form, json_response):
    """A body too deep to decode is malformed, not a crash."""
    nested = "[" * 100000 + "]" * 100000
    response = json_response()
    response.json.side_effect = lambda: json.loads(nested)

    with patch(POST, return_value=response):
        with pytest.raises(TransportError):
            client.submit(build_payload(valid_form))
