"""Rich terminal output formatters."""

from typing import Any, Mapping, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table


def format_error(console: Console, message: str, hint: str | None = None) -> None:
    """Display error message in red with optional hint."""
    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[yellow]Hint:[/yellow] {hint}")


def format_warning(console: Console, message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {message}")


def format_table(
    console: Console,
    title: str,
    columns: Sequence[str],
    rows: Sequence[Sequence[str]],
) -> None:
    table = Table(title=title)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*row)
    console.print(table)


def format_presence(connected: bool) -> str:
    """Render a role's connection state for a table cell."""
    return "[green]connected[/green]" if connected else "[dim]absent[/dim]"


def format_credentials(console: Console, created: Mapping[str, str]) -> None:
    """Show a new session's host credentials and guest link in one panel.

    The host secret is shown only here; the relay never returns it again.
    """
    body = (
        f"[cyan]Session ID:[/cyan]  {created['sessionId']}\n"
        f"[cyan]Host secret:[/cyan] {created['hostSecret']}\n"
        f"[cyan]Guest URL:[/cyan]   {created['guestUrl']}"
    )
    console.print(Panel(body, title="Session created", expand=False))


def format_key_value(console: Console, data: dict[str, Any]) -> None:
    max_key_len = max(len(k) for k in data.keys()) if data else 0
    for key, value in data.items():
        console.print(f"[cyan]{key.ljust(max_key_len)}[/cyan]: {value}")
