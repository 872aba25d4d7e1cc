"""
Claim Intake Errors

Exceptions raised by the submission client and the intake workflow.
"""
from typing import Optional


class TransportError(Exception):
    """
    The adjudication service could not be reached or answered unusably.

    Covers network failures, timeouts, non-success HTTP statuses and
    response bodies that are not a JSON object.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class WorkflowTransitionError(ValueError):
    """Raised when an operation is not valid in the current workflow state."""


class SubmissionInProgressError(WorkflowTransitionError):
    """Raised when a submit or reset is requested while a submission is in flight."""
