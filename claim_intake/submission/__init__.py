# Submission module
from .payload import ClaimPayload, build_payload
from .client import SubmissionClient, map_status_token, parse_outcome

__all__ = [
    "ClaimPayload",
    "build_payload",
    "SubmissionClient",
    "map_status_token",
    "parse_outcome",
]
