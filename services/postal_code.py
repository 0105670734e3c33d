"""Postal code validation and normalization."""

from __future__ import annotations

import re

from models.records import PostalCode
from services.errors import PostalCodeValidationError

SEPARATOR = "-"

_POSTAL_CODE_PATTERN = re.compile(r"^[0-9]{5}-?[0-9]{3}$")


def normalize(code: str) -> str:
    return code.replace(SEPARATOR, "")


def is_valid_postal_code(raw: str) -> bool:
    # fullmatch so a trailing newline is not accepted the way ``$`` would
    return _POSTAL_CODE_PATTERN.fullmatch(raw) is not None


def validate_postal_code(raw: str) -> PostalCode:
    """Trim, check the ``12345-678`` / ``12345678`` shape and normalize."""
    candidate = raw.strip()
    if not is_valid_postal_code(candidate):
        raise PostalCodeValidationError("invalid zipcode")
    return PostalCode(digits=normalize(candidate))
