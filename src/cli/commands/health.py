"""Query relay server health."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_error, format_key_value, json_output
from src.cli.utils import validate_server_url
from src.client import RelayClient

console = Console()


async def _health(url: str) -> dict:
    async with RelayClient(url) as client:
        return await client.health()


def health_command(url: str, json_flag: bool) -> None:
    try:
        url = validate_server_url(url)
    except ValueError as e:
        format_error(console, str(e))
        raise typer.Exit(code=2)

    try:
        health = asyncio.run(_health(url))
    except Exception as e:
        format_error(console, f"Relay unreachable: {e}")
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, health)
    else:
        format_key_value(
            console,
            {
                "status": health["status"],
                "sessions": health["activeSessionCount"],
                "uptime": f"{health['processUptime']:.0f}s",
            },
        )
