from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_weather(cep: str, payload: Dict[str, Any]) -> None:
    echo_heading(f"Weather for {cep}")
    echo_key_values(
        [
            ("city", payload.get("city")),
            ("celsius", payload.get("temp_C")),
            ("fahrenheit", payload.get("temp_F")),
            ("kelvin", payload.get("temp_K")),
        ]
    )
