from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import typer
import uvicorn

from app.main import create_gateway_app, create_resolver_app
from cli.client import GatewayClient
from cli.config import CLIConfig, load_config
from cli.render import render_weather
from settings import get_settings
from tracing import TracingInitError

logger = logging.getLogger(__name__)


class ServiceName(str, Enum):
    gateway = "gateway"
    resolver = "resolver"


@dataclass
class CLIState:
    config: CLIConfig
    client: GatewayClient


app = typer.Typer(
    help="Run and query the CEP weather gateway and resolver.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Gateway base URL (defaults to GATEWAY_BASE_URL env or http://localhost:8080).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the gateway to answer.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = GatewayClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("lookup")
def lookup_command(
    ctx: typer.Context,
    cep: str = typer.Argument(..., help="Postal code, e.g. 01310-100 or 01310100."),
) -> None:
    """Ask the gateway for the current temperature at a postal code."""
    state = _get_state(ctx)
    payload = state.client.lookup(cep)
    render_weather(cep, payload)


@app.command("serve")
def serve_command(
    service: ServiceName = typer.Argument(..., help="Which service to run."),
    host: str = typer.Option("0.0.0.0", "--host", help="Interface to bind."),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to bind (defaults to GATEWAY_PORT or RESOLVER_PORT).",
    ),
) -> None:
    """Run the gateway or the resolver until interrupted."""
    settings = get_settings()
    if service is ServiceName.gateway:
        factory, default_port = create_gateway_app, settings.gateway_port
    else:
        factory, default_port = create_resolver_app, settings.resolver_port

    try:
        asgi_app = factory(settings)
    except TracingInitError as exc:
        logger.critical("Tracing initialization failed: %s", exc, extra={"service": service.value})
        raise typer.Exit(code=1) from exc

    bind_port = port or default_port
    logger.info("Starting %s on %s:%s", service.value, host, bind_port, extra={"service": service.value})
    uvicorn.run(asgi_app, host=host, port=bind_port, log_config=None)
