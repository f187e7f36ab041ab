"""Main CLI entry point for the duplex relay."""

import typer
from rich.console import Console

from src.cli.commands.create import create_command
from src.cli.commands.health import health_command
from src.cli.commands.serve import serve_command
from src.cli.commands.status import status_command

DEFAULT_URL = "http://localhost:3000"

app = typer.Typer(
    name="relay",
    help="Duplex Relay - pairs a host and a guest and relays messages between them",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()


@app.command("serve")
def serve(
    host: str = typer.Option(None, "-H", "--host", help="Bind address (default: $HOST)"),
    port: int = typer.Option(None, "-p", "--port", help="Port (default: $PORT)"),
) -> None:
    """Run the relay server."""
    serve_command(host, port)


@app.command("create")
def create(
    url: str = typer.Option(DEFAULT_URL, "-u", "--url", envvar="RELAY_URL", help="Relay base URL"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create a new session."""
    create_command(url, json_flag)


@app.command("status")
def status(
    session_id: str = typer.Argument(..., help="Session ID"),
    url: str = typer.Option(DEFAULT_URL, "-u", "--url", envvar="RELAY_URL", help="Relay base URL"),
    json_flag: bool = typer.Option(False, "--json"),
) -> None:
    """Show which peers are connected to a session."""
    status_command(url, session_id, json_flag)


@app.command("health")
def health(
    url: str = typer.Option(DEFAULT_URL, "-u", "--url", envvar="RELAY_URL", help="Relay base URL"),
    json_flag: bool = typer.Option(False, "--json"),
) -> None:
    """Check relay server health."""
    health_command(url, json_flag)


def main() -> None:
    """Entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(130)
