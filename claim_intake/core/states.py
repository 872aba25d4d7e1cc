"""
Workflow State Definitions

Defines the states of a claim intake session and the closed set of
adjudication outcomes a submission can resolve to.
"""
from enum import Enum


class WorkflowState(str, Enum):
    """
    Enum representing the states of a claim intake session.

    Flow: IDLE -> SUBMITTING -> RESOLVED -> IDLE (via reset)
    """
    IDLE = "IDLE"
    SUBMITTING = "SUBMITTING"  # Single in-flight request
    RESOLVED = "RESOLVED"  # Terminal until reset


class OutcomeStatus(str, Enum):
    """User-facing outcome of one submission attempt."""
    APPROVED = "Approved"
    REJECTED = "Rejected"
    MANUAL_REVIEW = "Manual Review"
