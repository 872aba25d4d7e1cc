"""
Claim Payload Builder

Turns a claim form into the multipart payload the adjudication service
expects: translated text fields plus whichever documents were provided.
"""
from typing import Dict, Tuple

from pydantic import BaseModel, Field

from claim_intake.core.models import Attachment, ClaimForm

# Wire name <- form field name
FIELD_NAMES: Dict[str, str] = {
    "policyNumber": "policy_number",
    "causeOfDeath": "cause_of_death",
    "deceasedFullName": "full_name",
    "deceasedEmail": "email",
    "deceasedMobile": "mobile_number",
    "deceasedAddress": "address",
    "nomineeFullName": "nominee_full_name",
    "nomineeRelationship": "nominee_relationship",
    "nomineeMobile": "nominee_mobile_number",
}

# Wire name <- attachment slot
FILE_NAMES: Dict[str, str] = {
    "claimForm": "claim_form",
    "deathCertificate": "death_certificate",
    "doctorReport": "doctor_report",
    "policeReport": "police_report",
}


class ClaimPayload(BaseModel):
    """Named text fields and named file parts for one submission."""
    fields: Dict[str, str] = Field(default_factory=dict)
    files: Dict[str, Attachment] = Field(default_factory=dict)

    def multipart_files(self) -> Dict[str, Tuple[str, bytes, str]]:
        """File parts in the shape ``requests`` takes for ``files=``."""
        return {
            wire_name: (attachment.name, attachment.content, attachment.content_type)
            for wire_name, attachment in self.files.items()
        }


def build_payload(form: ClaimForm) -> ClaimPayload:
    """
    Build the submission payload for a form.

    Does not validate. Empty or zero-byte attachments are left out entirely
    rather than sent as empty parts.
    """
    fields = {wire_name: getattr(form, field) for wire_name, field in FIELD_NAMES.items()}

    files: Dict[str, Attachment] = {}
    for wire_name, slot in FILE_NAMES.items():
        if form.attachment_provided(slot):
            files[wire_name] = getattr(form, slot)

    return ClaimPayload(fields=fields, files=files)
