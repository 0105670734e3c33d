"""Unit tests for postal code validation."""

from __future__ import annotations

import pytest

from services.errors import PostalCodeValidationError
from services.postal_code import is_valid_postal_code, normalize, validate_postal_code


@pytest.mark.parametrize("raw", ["12345-678", "12345678", "01310-100", "00000000"])
def test_canonical_shapes_are_accepted(raw: str) -> None:
    assert is_valid_postal_code(raw)
    assert validate_postal_code(raw).digits == raw.replace("-", "")


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "abc",
        "1234-5678",
        "123456789",
        "1234567",
        "12345--678",
        "12345_678",
        "12345-67a",
        "١٢٣٤٥٦٧٨",
    ],
)
def test_other_strings_fail_validation(raw: str) -> None:
    assert not is_valid_postal_code(raw)
    with pytest.raises(PostalCodeValidationError) as excinfo:
        validate_postal_code(raw)
    assert excinfo.value.status_code == 422


def test_surrounding_whitespace_is_ignored() -> None:
    assert validate_postal_code(" \t01310-100 \n").digits == "01310100"


def test_pattern_rejects_trailing_newline_before_trimming() -> None:
    assert not is_valid_postal_code("12345678\n")


@pytest.mark.parametrize("code", ["01310100", "01310-100"])
def test_normalization_is_idempotent(code: str) -> None:
    once = normalize(code)

    assert normalize(once) == once
    assert once == "01310100"
