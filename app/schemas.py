"""Pydantic schemas shared by the gateway and the resolver HTTP layers."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class PostalCodeRequest(BaseModel):
    """Raw inbound body of ``POST /cep``; not yet validated."""

    model_config = ConfigDict(frozen=True)

    cep: Optional[StrictStr] = ""

    @field_validator("cep")
    @classmethod
    def _null_is_empty(cls, value: Optional[str]) -> str:
        # ``{"cep": null}`` is a missing code, not a malformed body
        return value or ""


class WeatherResult(BaseModel):
    """City plus current temperature in Celsius, Fahrenheit and Kelvin."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    city: str
    temp_c: float = Field(..., alias="temp_C")
    temp_f: float = Field(..., alias="temp_F")
    temp_k: float = Field(..., alias="temp_K")


class ErrorResponse(BaseModel):
    """Body returned with every non-success status."""

    message: str


class GeocodingPayload(BaseModel):
    """Subset of the geocoding API response the resolver relies on."""

    localidade: str = ""
    uf: str = ""
    erro: bool = False


class CurrentConditions(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    temp_c: float


class WeatherPayload(BaseModel):
    """Subset of the weather API ``current.json`` response."""

    current: CurrentConditions
