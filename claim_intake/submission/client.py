"""
Adjudication Submission Client

Sends a built claim payload to the adjudication service and interprets its
verdict as a SubmissionOutcome.
"""
import logging
from typing import Any, Optional

import requests

from claim_intake import config
from claim_intake.core.errors import TransportError
from claim_intake.core.models import SubmissionOutcome
from claim_intake.core.states import OutcomeStatus
from claim_intake.submission.payload import ClaimPayload

logger = logging.getLogger(__name__)


def map_status_token(token: Any) -> OutcomeStatus:
    """
    Map the service's status token onto an outcome status.

    Anything outside the known vocabulary, including a missing token, is sent
    to manual review. A new server-side status needs a new branch here.
    """
    if token == "APPROVED":
        return OutcomeStatus.APPROVED
    if token == "REJECTED":
        return OutcomeStatus.REJECTED
    if token == "MANUAL_REVIEW":
        return OutcomeStatus.MANUAL_REVIEW

    # Fail-safe: never resolve an unknown verdict as approved
    logger.warning(f"Unrecognized status token {token!r}; defaulting to manual review")
    return OutcomeStatus.MANUAL_REVIEW


def parse_outcome(data: Any) -> SubmissionOutcome:
    """
    Build a SubmissionOutcome from a decoded response body.

    Raises:
        TransportError: If the body is not a JSON object
    """
    if not isinstance(data, dict):
        raise TransportError(f"Malformed response body: expected an object, got {type(data).__name__}")

    message = data.get("message")
    reference = data.get("claimReference")
    return SubmissionOutcome(
        status=map_status_token(data.get("status")),
        reason=str(message) if message is not None else None,
        claim_reference=str(reference) if reference else None
    )


class SubmissionClient:
    """
    Client for the claim submission endpoint.

    One call to submit() is one multipart POST. Every transport problem is
    raised as TransportError so the workflow can degrade it to manual review.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Args:
            base_url: Adjudication service base address. Defaults to the
                configured CLAIM_API_URL (or its runtime override).
            timeout: Seconds to wait for the service before giving up.
        """
        self._base_url = base_url
        self.timeout = timeout if timeout is not None else config.SUBMISSION_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        return (self._base_url or config.get_claim_api_url()).rstrip("/")

    @property
    def submit_url(self) -> str:
        return f"{self.base_url}{config.CLAIM_SUBMIT_PATH}"

    def submit(self, payload: ClaimPayload) -> SubmissionOutcome:
        """
        Send the payload and interpret the verdict.

        Args:
            payload: Text fields and file parts to send

        Returns:
            The mapped SubmissionOutcome

        Raises:
            TransportError: On network failure, timeout, non-success status
                or a malformed response body
        """
        logger.info(
            f"Submitting claim to {self.submit_url} "
            f"({len(payload.fields)} fields, files: {sorted(payload.files) or 'none'})"
        )

        try:
            response = requests.post(
                self.submit_url,
                data=payload.fields,
                files=payload.multipart_files(),
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise TransportError(f"Adjudication service returned an error: {e}", status_code) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Failed to reach adjudication service: {e}") from e

        try:
            data = response.json()
        except (ValueError, RecursionError) as e:
            raise TransportError(f"Malformed response body: {e!r}", response.status_code) from e

        outcome = parse_outcome(data)
        logger.info(
            f"Adjudication verdict: {outcome.status.value}"
            + (f" (reference {outcome.claim_reference})" if outcome.claim_reference else "")
        )
        return outcome
