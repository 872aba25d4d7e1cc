"""
Claim Intake Pydantic Models

Defines the claimant-entered death claim form, its file attachments, the
outcome of a submission and the per-session state that ties them together.
"""
import time
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from .states import OutcomeStatus, WorkflowState


class CauseOfDeath(str, Enum):
    """Claimant-selected cause of death. Drives the mandatory documents."""
    NATURAL = "Natural"
    DISEASE = "Disease"
    ACCIDENT = "Accident"
    SUICIDE = "Suicide"


class NomineeRelationship(str, Enum):
    """Relationship of the nominee to the deceased."""
    SPOUSE = "Spouse"
    CHILD = "Child"
    PARENT = "Parent"
    SIBLING = "Sibling"
    OTHER = "Other"


TEXT_FIELDS: tuple[str, ...] = (
    "full_name",
    "policy_number",
    "email",
    "mobile_number",
    "address",
    "cause_of_death",
    "nominee_full_name",
    "nominee_relationship",
    "nominee_mobile_number",
)

ATTACHMENT_SLOTS: tuple[str, ...] = (
    "claim_form",
    "death_certificate",
    "doctor_report",
    "police_report",
)

POLICE_REPORT_CAUSES: frozenset[str] = frozenset(
    {CauseOfDeath.ACCIDENT.value, CauseOfDeath.SUICIDE.value}
)

# Shown to the claimant when the service sends no message
DEFAULT_OUTCOME_REASONS: Dict[OutcomeStatus, str] = {
    OutcomeStatus.APPROVED: "Your claim has been approved and will be processed within 5-7 business days.",
    OutcomeStatus.REJECTED: "Your claim does not meet the policy requirements.",
    OutcomeStatus.MANUAL_REVIEW: (
        "Your claim requires additional review. Our team will contact you within 2-3 business days."
    ),
}


def requires_police_report(cause_of_death: str) -> bool:
    """True when the cause of death makes a police report mandatory."""
    return cause_of_death in POLICE_REPORT_CAUSES


def required_documents(cause_of_death: str) -> List[str]:
    """Attachment slots that must be provided for the given cause of death."""
    slots = ["claim_form", "death_certificate", "doctor_report"]
    if requires_police_report(cause_of_death):
        slots.append("police_report")
    return slots


def fallback_claim_reference(policy_number: str, now: Optional[float] = None) -> str:
    """
    Build a local claim reference for display when the service gave none.

    Policy number plus the last six digits of the epoch time in milliseconds.
    Only an orientation aid for the claimant, not unique server-side.
    """
    millis = int((time.time() if now is None else now) * 1000)
    return f"{policy_number}-{str(millis)[-6:]}"


class Attachment(BaseModel):
    """A claimant-selected document."""
    name: str = Field(..., description="Original file name")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    content: bytes = Field(default=b"", repr=False, description="Raw file bytes")
    content_type: str = Field(
        default="application/octet-stream",
        description="MIME type reported by the file selector"
    )

    @classmethod
    def from_bytes(
        cls,
        name: str,
        content: bytes,
        content_type: str = "application/octet-stream"
    ) -> "Attachment":
        return cls(name=name, size=len(content), content=content, content_type=content_type)

    @property
    def is_provided(self) -> bool:
        """A zero-byte file counts as not attached."""
        return self.size > 0


class ClaimForm(BaseModel):
    """
    Death Claim Form

    Everything the claimant has entered so far. Text fields start empty and
    attachment slots start unset; nothing is validated on update.
    """
    full_name: str = Field(default="", description="Full name of the deceased")
    policy_number: str = Field(default="", description="Life policy number")
    email: str = Field(default="", description="Contact email")
    mobile_number: str = Field(default="", description="Contact mobile number")
    address: str = Field(default="", description="Address of the deceased")
    cause_of_death: str = Field(default="", description="One of CauseOfDeath")
    nominee_full_name: str = Field(default="", description="Full name of the nominee")
    nominee_relationship: str = Field(default="", description="One of NomineeRelationship")
    nominee_mobile_number: str = Field(default="", description="Nominee mobile number")

    claim_form: Optional[Attachment] = None
    death_certificate: Optional[Attachment] = None
    doctor_report: Optional[Attachment] = None
    police_report: Optional[Attachment] = None

    def set_field(self, name: str, value: str) -> None:
        """Update one text field, leaving the others unchanged."""
        if name not in TEXT_FIELDS:
            raise ValueError(f"Unknown claim form field: {name}")
        setattr(self, name, value)

    def set_attachment(self, slot: str, attachment: Optional[Attachment]) -> None:
        """Set or clear one attachment slot."""
        if slot not in ATTACHMENT_SLOTS:
            raise ValueError(f"Unknown attachment slot: {slot}")
        setattr(self, slot, attachment)

    def attachment_provided(self, slot: str) -> bool:
        attachment = getattr(self, slot)
        return attachment is not None and attachment.is_provided

    @property
    def police_report_required(self) -> bool:
        return requires_police_report(self.cause_of_death)


class SubmissionOutcome(BaseModel):
    """Result of one submission attempt."""
    status: OutcomeStatus = Field(..., description="Approved, Rejected or Manual Review")
    reason: Optional[str] = Field(default=None, description="Human-readable explanation")
    claim_reference: Optional[str] = Field(
        default=None,
        description="Server-issued claim reference, if any"
    )

    def display_reference(self, policy_number: str) -> str:
        """Server reference, or a locally synthesized one when absent."""
        return self.claim_reference or fallback_claim_reference(policy_number)

    def display_reason(self) -> str:
        """Service explanation, or the standard wording for the status when absent."""
        return self.reason or DEFAULT_OUTCOME_REASONS[self.status]


class AuditLogEntry(BaseModel):
    """Entry in the session audit log."""
    actor: str = Field(..., description="Component that recorded the event")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the event occurred")
    event: str = Field(..., description="What happened")
    detail: str = Field(default="", description="Supporting detail")


class ClaimSession(BaseModel):
    """
    Claim Intake Session

    The two-part state (form, errors) of one claimant session plus the
    workflow state, the latest outcome and a history of what happened.
    """
    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique session identifier")
    form: ClaimForm = Field(default_factory=ClaimForm)
    errors: Dict[str, str] = Field(
        default_factory=dict,
        description="Field name -> message; empty means valid"
    )
    state: WorkflowState = Field(default=WorkflowState.IDLE)
    state_history: List[WorkflowState] = Field(
        default_factory=list,
        description="States the session has left, oldest first"
    )
    outcome: Optional[SubmissionOutcome] = None
    audit_log: List[AuditLogEntry] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    def record_state_change(self, new_state: WorkflowState) -> None:
        """Record a state transition in history."""
        self.state_history.append(self.state)
        self.state = new_state
        self.updated_at = datetime.now()

    def add_audit_entry(self, actor: str, event: str, detail: str = "") -> None:
        """Add an entry to the audit log."""
        self.audit_log.append(AuditLogEntry(actor=actor, event=event, detail=detail))
        self.updated_at = datetime.now()
