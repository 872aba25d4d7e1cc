# State machine module
from .machine import GENERIC_FAILURE_REASON, ClaimWorkflow

__all__ = ["GENERIC_FAILURE_REASON", "ClaimWorkflow"]
