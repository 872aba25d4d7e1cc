"""
Claim Form Validator

Checks a death claim form against the required-field and document rules.
Every rule is evaluated independently so all problems are reported at once.
"""
import re
from typing import Dict

from claim_intake.core.models import CauseOfDeath, ClaimForm

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# Formatting characters only; letters are kept so they fail the digit check
PHONE_SEPARATORS = re.compile(r"[\W_]")
TEN_DIGITS = re.compile(r"[0-9]{10}")

CAUSES_OF_DEATH = {cause.value for cause in CauseOfDeath}

REQUIRED_TEXT_MESSAGES: Dict[str, str] = {
    "full_name": "Full name is required",
    "policy_number": "Policy number is required",
    "address": "Address is required",
    "nominee_full_name": "Nominee name is required",
    "nominee_relationship": "Nominee relationship is required",
}

REQUIRED_DOCUMENT_MESSAGES: Dict[str, str] = {
    "claim_form": "Claim form is required",
    "death_certificate": "Death certificate is required",
    "doctor_report": "Doctor report is required",
}

INVALID_MOBILE_MESSAGE = "Please enter a valid 10-digit mobile number"


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(value))


def is_valid_mobile(value: str) -> bool:
    """Exactly ten digits once spaces, dashes and other punctuation are removed."""
    return bool(TEN_DIGITS.fullmatch(PHONE_SEPARATORS.sub("", value)))


def _check_mobile(errors: Dict[str, str], field: str, value: str, required_message: str) -> None:
    if not value.strip():
        errors[field] = required_message
    elif not is_valid_mobile(value):
        errors[field] = INVALID_MOBILE_MESSAGE


def validate_claim(form: ClaimForm) -> Dict[str, str]:
    """
    Validate a claim form snapshot.

    Args:
        form: The form to check. It is not modified.

    Returns:
        Mapping of field name to message. Empty when the form is valid.
    """
    errors: Dict[str, str] = {}

    for field, message in REQUIRED_TEXT_MESSAGES.items():
        if not getattr(form, field).strip():
            errors[field] = message

    if not form.email.strip():
        errors["email"] = "Email is required"
    elif not is_valid_email(form.email):
        errors["email"] = "Please enter a valid email address"

    _check_mobile(errors, "mobile_number", form.mobile_number, "Mobile number is required")
    _check_mobile(
        errors,
        "nominee_mobile_number",
        form.nominee_mobile_number,
        "Nominee mobile number is required"
    )

    if not form.cause_of_death:
        errors["cause_of_death"] = "Cause of death is required"
    elif form.cause_of_death not in CAUSES_OF_DEATH:
        errors["cause_of_death"] = "Please select a valid cause of death"

    for slot, message in REQUIRED_DOCUMENT_MESSAGES.items():
        if not form.attachment_provided(slot):
            errors[slot] = message

    if form.police_report_required and not form.attachment_provided("police_report"):
        errors["police_report"] = "Police report is required for this case"

    return errors
