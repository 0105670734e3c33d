"""Unit tests for temperature conversion."""

from __future__ import annotations

import pytest

from models.records import Locality, WeatherReading
from services.conversion import build_weather_result, celsius_to_fahrenheit, celsius_to_kelvin


def test_twenty_celsius() -> None:
    assert celsius_to_fahrenheit(20.0) == pytest.approx(68.0)
    assert celsius_to_kelvin(20.0) == pytest.approx(293.15)


def test_freezing_and_negative_values() -> None:
    assert celsius_to_fahrenheit(0.0) == 32.0
    assert celsius_to_kelvin(0.0) == 273.15
    assert celsius_to_fahrenheit(-40.0) == pytest.approx(-40.0)


def test_result_keeps_full_precision() -> None:
    result = build_weather_result(
        Locality(city="Curitiba", region="PR"), WeatherReading(temp_c=12.345)
    )

    assert result.city == "Curitiba"
    assert result.temp_c == 12.345
    assert result.temp_f == 12.345 * 1.8 + 32
    assert result.temp_k == 12.345 + 273.15
    assert result.model_dump(by_alias=True) == {
        "city": "Curitiba",
        "temp_C": 12.345,
        "temp_F": 12.345 * 1.8 + 32,
        "temp_K": 12.345 + 273.15,
    }


def test_unresolved_locality_never_produces_a_result() -> None:
    with pytest.raises(ValueError):
        build_weather_result(Locality(city="", not_found=True), WeatherReading(temp_c=20.0))
