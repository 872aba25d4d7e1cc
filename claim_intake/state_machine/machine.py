"""
Claim Intake Workflow

State machine for one claimant session: holds the form and its errors,
validates on submit, sends at most one submission at a time and records the
adjudication outcome.
"""
import asyncio
import logging
from typing import Dict, List, Optional, Set

from claim_intake.core.errors import (
    SubmissionInProgressError,
    TransportError,
    WorkflowTransitionError,
)
from claim_intake.core.models import Attachment, ClaimForm, ClaimSession, SubmissionOutcome
from claim_intake.core.states import OutcomeStatus, WorkflowState
from claim_intake.submission.client import SubmissionClient
from claim_intake.submission.payload import build_payload
from claim_intake.validation.validator import validate_claim

logger = logging.getLogger(__name__)

GENERIC_FAILURE_REASON = "Error submitting claim. Please try again or contact support."


class ClaimWorkflow:
    """
    Workflow controller for a claim intake session.

    Every change to the session goes through a named transition:
    set_field, set_attachment, validate, submit and reset.
    """

    # Define valid transitions (from_state -> set of valid to_states)
    TRANSITIONS: Dict[WorkflowState, Set[WorkflowState]] = {
        WorkflowState.IDLE: {WorkflowState.SUBMITTING},
        WorkflowState.SUBMITTING: {WorkflowState.RESOLVED},
        WorkflowState.RESOLVED: {WorkflowState.IDLE}
    }

    def __init__(
        self,
        client: Optional[SubmissionClient] = None,
        session: Optional[ClaimSession] = None
    ):
        """
        Initialize the workflow.

        Args:
            client: Client used to reach the adjudication service
            session: Existing session to drive; a fresh one by default
        """
        self.client = client or SubmissionClient()
        self.session = session or ClaimSession()

    @property
    def state(self) -> WorkflowState:
        return self.session.state

    @property
    def form(self) -> ClaimForm:
        return self.session.form

    @property
    def errors(self) -> Dict[str, str]:
        return self.session.errors

    @property
    def outcome(self) -> Optional[SubmissionOutcome]:
        return self.session.outcome

    @property
    def is_submitting(self) -> bool:
        return self.session.state == WorkflowState.SUBMITTING

    def get_valid_transitions(self) -> List[WorkflowState]:
        return list(self.TRANSITIONS.get(self.session.state, set()))

    def can_transition(self, target_state: WorkflowState) -> bool:
        return target_state in self.TRANSITIONS.get(self.session.state, set())

    def _transition(self, target_state: WorkflowState) -> None:
        if not self.can_transition(target_state):
            raise WorkflowTransitionError(
                f"Invalid transition from {self.session.state.value} to {target_state.value}. "
                f"Valid transitions: {[s.value for s in self.get_valid_transitions()]}"
            )
        self.session.record_state_change(target_state)

    def set_field(self, name: str, value: str) -> None:
        """Update one text field and drop its error, if any."""
        self.session.form.set_field(name, value)
        self.session.errors.pop(name, None)

    def set_attachment(self, slot: str, attachment: Optional[Attachment]) -> None:
        """Set or clear one attachment slot and drop its error, if any."""
        self.session.form.set_attachment(slot, attachment)
        self.session.errors.pop(slot, None)

    def validate(self) -> Dict[str, str]:
        """Recompute the error map from the current form."""
        self.session.errors = validate_claim(self.session.form)
        return self.session.errors

    async def submit(self) -> WorkflowState:
        """
        Validate and, if valid, submit the claim.

        Returns:
            The workflow state afterwards: IDLE when validation refused the
            submission, RESOLVED otherwise

        Raises:
            SubmissionInProgressError: If a submission is already in flight
            WorkflowTransitionError: If the session is already resolved
        """
        if self.session.state == WorkflowState.SUBMITTING:
            logger.warning(f"Session {self.session.id}: submit rejected, submission already in flight")
            raise SubmissionInProgressError("A submission is already in progress for this session")
        if not self.can_transition(WorkflowState.SUBMITTING):
            raise WorkflowTransitionError(
                f"Cannot submit from {self.session.state.value}; reset the session first"
            )

        errors = self.validate()
        if errors:
            logger.info(f"Session {self.session.id}: submission refused, invalid fields {sorted(errors)}")
            self.session.add_audit_entry(
                actor="Validator",
                event="VALIDATION_FAILED",
                detail=", ".join(sorted(errors))
            )
            return self.session.state

        self._transition(WorkflowState.SUBMITTING)
        payload = build_payload(self.session.form)
        self.session.add_audit_entry(
            actor="SubmissionClient",
            event="SUBMITTED",
            detail=f"Files: {', '.join(sorted(payload.files))}"
        )

        try:
            outcome = await asyncio.to_thread(self.client.submit, payload)
        except TransportError as e:
            logger.error(f"Session {self.session.id}: submission failed: {e}")
            self.session.add_audit_entry(actor="SubmissionClient", event="TRANSPORT_ERROR", detail=str(e))
            outcome = SubmissionOutcome(status=OutcomeStatus.MANUAL_REVIEW, reason=GENERIC_FAILURE_REASON)
        except Exception as e:
            # Any failure still resolves; the session must never stay SUBMITTING
            logger.exception(f"Session {self.session.id}: unexpected submission failure")
            self.session.add_audit_entry(
                actor="SubmissionClient",
                event="SUBMISSION_ERROR",
                detail=f"{type(e).__name__}: {e}"
            )
            outcome = SubmissionOutcome(status=OutcomeStatus.MANUAL_REVIEW, reason=GENERIC_FAILURE_REASON)

        self.session.outcome = outcome
        self._transition(WorkflowState.RESOLVED)
        self.session.add_audit_entry(
            actor="ClaimWorkflow",
            event="RESOLVED",
            detail=outcome.status.value + (f": {outcome.reason}" if outcome.reason else "")
        )
        logger.info(f"Session {self.session.id}: resolved as {outcome.status.value}")
        return self.session.state

    def reset(self) -> None:
        """
        Start a new claim: empty form, no errors, no outcome.

        Raises:
            SubmissionInProgressError: If a submission is in flight
        """
        if self.session.state == WorkflowState.SUBMITTING:
            raise SubmissionInProgressError("Cannot reset while a submission is in progress")

        if self.session.state == WorkflowState.RESOLVED:
            self._transition(WorkflowState.IDLE)

        self.session.form = ClaimForm()
        self.session.errors = {}
        self.session.outcome = None
        self.session.add_audit_entry(actor="ClaimWorkflow", event="RESET")
        logger.info(f"Session {self.session.id}: reset")
