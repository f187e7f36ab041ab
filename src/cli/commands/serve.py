"""Run the relay server."""

import dataclasses
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from src.cli.output import format_error
from src.server.app import create_app
from src.server.config import load_config_from_env

console = Console()

SHUTDOWN_GRACE_SECONDS = 10


def serve_command(host: Optional[str], port: Optional[int]) -> None:
    """Start uvicorn with configuration from the environment.

    Command-line host and port override HOST and PORT. uvicorn's
    WebSocket keepalive uses the relay liveness interval, and SIGTERM
    stops accepting connections before draining in-flight work.
    """
    try:
        config = load_config_from_env()
    except ValueError as e:
        format_error(console, f"Invalid configuration: {e}")
        raise typer.Exit(code=2)

    overrides = {}
    if host:
        overrides["host"] = host
    if port:
        overrides["port"] = port
    if overrides:
        config = dataclasses.replace(config, **overrides)

    console.print(f"[green]Relay listening on {config.host}:{config.port}[/green]")
    console.print(f"[cyan]WebSocket endpoint:[/cyan] ws://{config.host}:{config.port}/")
    console.print(f"[cyan]Guest URL:[/cyan] {config.guest_url}")

    interval = config.relay.liveness_interval_seconds
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        ws_ping_interval=interval,
        ws_ping_timeout=interval,
        timeout_graceful_shutdown=SHUTDOWN_GRACE_SECONDS,
    )
