# Core module - states, models and errors
from .states import OutcomeStatus, WorkflowState
from .models import (
    Attachment,
    AuditLogEntry,
    CauseOfDeath,
    ClaimForm,
    ClaimSession,
    NomineeRelationship,
    SubmissionOutcome,
)
from .errors import SubmissionInProgressError, TransportError, WorkflowTransitionError

__all__ = [
    "OutcomeStatus",
    "WorkflowState",
    "Attachment",
    "AuditLogEntry",
    "CauseOfDeath",
    "ClaimForm",
    "ClaimSession",
    "NomineeRelationship",
    "SubmissionOutcome",
    "SubmissionInProgressError",
    "TransportError",
    "WorkflowTransitionError",
]
