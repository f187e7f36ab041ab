"""Show the state of a relay session."""

import asyncio
from typing import Optional

import typer
from rich.console import Console

from src.cli.output import format_error, format_presence, format_table, format_warning, json_output
from src.cli.utils import validate_server_url, validate_session_id
from src.client import RelayClient

console = Console()


async def _get_session(url: str, session_id: str) -> Optional[dict]:
    async with RelayClient(url) as client:
        return await client.get_session(session_id)


def status_command(url: str, session_id: str, json_flag: bool) -> None:
    """Show which roles are connected to a session."""
    try:
        url = validate_server_url(url)
        session_id = validate_session_id(session_id)
    except ValueError as e:
        format_error(console, str(e))
        raise typer.Exit(code=2)

    try:
        info = asyncio.run(_get_session(url, session_id))
    except Exception as e:
        format_error(console, f"Failed to get session: {e}")
        raise typer.Exit(code=1)

    if info is None:
        if json_flag:
            json_output(console, {"status": "not_found", "sessionId": session_id})
        else:
            format_error(console, f"Session {session_id} not found", hint="It may have expired")
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, info)
        return

    format_table(
        console,
        f"Session {info['sessionId']}",
        ["Role", "Connected"],
        [
            ["host", format_presence(info["hasHost"])],
            ["guest", format_presence(info["hasGuest"])],
        ],
    )
    console.print(f"[cyan]Created:[/cyan] {info['createdAt']}")
    if not info["hasHost"] and not info["hasGuest"]:
        format_warning(console, "No peers connected; the session is removed once its grace period ends")
