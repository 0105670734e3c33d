"""Domain records passed between the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PostalCode:
    """A validated postal code reduced to its eight digits."""

    digits: str


@dataclass(frozen=True, slots=True)
class Locality:
    """City and region resolved for a postal code."""

    city: str
    region: str = ""
    not_found: bool = False


@dataclass(frozen=True, slots=True)
class WeatherReading:
    """Current temperature reported for a locality."""

    temp_c: float
