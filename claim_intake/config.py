"""Configuration for the claim intake service and portal."""

import os

CLAIM_API_URL = os.environ.get("CLAIM_API_URL", "http://localhost:8080")
CLAIM_SUBMIT_PATH = "/api/claim/submit"
SUBMISSION_TIMEOUT_SECONDS = float(os.environ.get("SUBMISSION_TIMEOUT_SECONDS", "60"))
BACKEND_PORT = int(os.environ.get("BACKEND_PORT", "8000"))

# Declared to the claimant; enforced by the file selector and the adjudication service
ACCEPTED_FILE_TYPES = ["pdf", "jpg", "jpeg", "png"]
MAX_DOCUMENT_SIZE_MB = 10

# Runtime override for the adjudication service URL
_runtime_claim_api_url: str | None = None


def get_claim_api_url() -> str:
    return _runtime_claim_api_url or CLAIM_API_URL


def set_claim_api_url(url: str | None):
    global _runtime_claim_api_url
    _runtime_claim_api_url = url
