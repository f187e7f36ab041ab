"""Create a new relay session."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_credentials, format_error, json_output
from src.cli.utils import validate_server_url
from src.client import RelayClient

console = Console()


async def _create_session(url: str) -> dict:
    async with RelayClient(url) as client:
        return await client.create_session()


def create_command(url: str, json_flag: bool) -> None:
    """Create a session and print the host credentials and guest link."""
    try:
        url = validate_server_url(url)
    except ValueError as e:
        format_error(console, str(e))
        raise typer.Exit(code=2)

    try:
        created = asyncio.run(_create_session(url))
    except Exception as e:
        format_error(console, f"Failed to create session: {e}", hint=f"Is the relay running at {url}?")
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, {"status": "created", **created})
        return

    format_credentials(console, created)
