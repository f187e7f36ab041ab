"""Forwarding of inbound frames to the peer connection."""
import json
import logging
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from src.relay.binder import Connection
from src.relay.errors import MalformedMessageError
from src.relay.events import stamp_forwarded
from src.relay.transport import TransportClosedError

logger = logging.getLogger(__name__)


class RelayEnvelope(BaseModel):
    """Minimum shape of a relayed message: an object with a string type.

    All other fields are carried through untouched.
    """

    model_config = ConfigDict(extra="allow", strict=True)

    type: str


def parse_frame(raw: Union[str, bytes]) -> dict[str, Any]:
    """Decode a text or binary frame into a message dict.

    Raises:
        MalformedMessageError: The frame is not a JSON object with a
            string ``type`` field.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedMessageError(f"Frame is not UTF-8: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedMessageError(f"Invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise MalformedMessageError("JSON nested too deeply") from exc
    if not isinstance(data, dict):
        raise MalformedMessageError(f"Expected a JSON object, got {type(data).__name__}")
    try:
        RelayEnvelope.model_validate(data)
    except ValidationError as exc:
        raise MalformedMessageError(f"Invalid envelope: {exc.error_count()} error(s)") from exc
    return data


class RelayEngine:
    """Relays messages between the two roles of a session.

    Delivery is best effort and at most once: when the peer is absent or
    its connection fails the message is dropped, never queued.
    """

    async def handle_frame(self, connection: Connection, raw: Union[str, bytes]) -> bool:
        """Parse and forward one inbound frame.

        Malformed frames are logged and discarded; the connection stays
        usable. Returns True when the message reached the peer.
        """
        try:
            message = parse_frame(raw)
        except MalformedMessageError as exc:
            logger.warning(
                "Discarding malformed message from %s in session %s: %s",
                connection.role.value, connection.session_id, exc,
            )
            return False
        return await self.forward(connection, message)

    async def forward(self, connection: Connection, message: dict[str, Any]) -> bool:
        session, role = connection.session, connection.role
        session.touch()
        logger.debug("Message from %s in session %s: %s", role.value, session.session_id, message.get("type"))

        target = session.live_transport(role.peer)
        if target is None:
            logger.debug("Target not connected for session %s", session.session_id)
            return False
        try:
            await target.send_json(stamp_forwarded(message, role))
        except TransportClosedError as exc:
            logger.info("Dropped message for %s in session %s: %s", role.peer.value, session.session_id, exc)
            return False
        return True
