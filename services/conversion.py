"""Temperature conversion for resolved weather readings."""

from __future__ import annotations

from app.schemas import WeatherResult
from models.records import Locality, WeatherReading

KELVIN_OFFSET = 273.15


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + KELVIN_OFFSET


def build_weather_result(locality: Locality, reading: WeatherReading) -> WeatherResult:
    """Combine a found locality with its reading; values are not rounded."""
    if locality.not_found:
        raise ValueError("Cannot build a weather result for an unresolved locality.")
    celsius = reading.temp_c
    return WeatherResult(
        city=locality.city,
        temp_c=celsius,
        temp_f=celsius_to_fahrenheit(celsius),
        temp_k=celsius_to_kelvin(celsius),
    )
