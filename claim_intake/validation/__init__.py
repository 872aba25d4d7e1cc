# Validation module
from .validator import is_valid_email, is_valid_mobile, validate_claim

__all__ = ["is_valid_email", "is_valid_mobile", "validate_claim"]
