"""JSON output mode utilities."""

import json
from datetime import datetime
from typing import Any

from rich.console import Console

from src.relay.events import format_timestamp


class CLIJSONEncoder(json.JSONEncoder):
    """Encodes datetimes in the relay's millisecond UTC format."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return format_timestamp(obj)
        return super().default(obj)


def json_output(console: Console, data: Any) -> None:
    """Output data as formatted JSON."""
    console.print_json(json.dumps(data, cls=CLIJSONEncoder))
