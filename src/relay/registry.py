"""In-memory registry of live relay sessions."""
import logging
import threading
import uuid
from typing import Callable, Optional

from src.relay.session import Session, utcnow

logger = logging.getLogger(__name__)

SESSION_ID_LENGTH = 8
_MAX_ID_ATTEMPTS = 100


def generate_session_id() -> str:
    """Return a short upper-case hex identifier."""
    return uuid.uuid4().hex[:SESSION_ID_LENGTH].upper()


def generate_secret() -> str:
    return str(uuid.uuid4())


def normalize_session_id(session_id: Optional[str]) -> str:
    return (session_id or "").strip().upper()


class SessionRegistry:
    """Owns the mapping from session id to Session.

    Membership changes are guarded by a single lock. The lock is never
    held across an await, so lookups from connection tasks do not
    suspend.
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = generate_session_id,
        secret_factory: Callable[[], str] = generate_secret,
    ) -> None:
        self._id_factory = id_factory
        self._secret_factory = secret_factory
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self) -> Session:
        """Create, register and return a session with a fresh id and secret.

        Raises:
            RuntimeError: If no unused id could be generated.
        """
        with self._lock:
            for _ in range(_MAX_ID_ATTEMPTS):
                session_id = normalize_session_id(self._id_factory())
                if session_id and session_id not in self._sessions:
                    break
            else:
                raise RuntimeError("Could not generate a unique session id")
            now = utcnow()
            session = Session(
                session_id=session_id,
                host_secret=self._secret_factory(),
                created_at=now,
                last_activity=now,
            )
            self._sessions[session_id] = session
        logger.info("Session created: %s", session_id)
        return session

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        """Look up a session without touching its activity timestamp."""
        key = normalize_session_id(session_id)
        if not key:
            return None
        with self._lock:
            return self._sessions.get(key)

    def delete(self, session_id: str) -> bool:
        """Remove a session. Deleting an unknown id is a no-op."""
        with self._lock:
            removed = self._sessions.pop(normalize_session_id(session_id), None)
        return removed is not None

    def delete_if(self, session: Session, predicate: Callable[[Session], bool]) -> bool:
        """Remove *session* only if it is still registered and *predicate* holds."""
        with self._lock:
            if self._sessions.get(session.session_id) is not session:
                return False
            if not predicate(session):
                return False
            del self._sessions[session.session_id]
        return True

    def contains(self, session: Session) -> bool:
        with self._lock:
            return self._sessions.get(session.session_id) is session

    def sessions(self) -> list[Session]:
        """Point-in-time list of live sessions."""
        with self._lock:
            return list(self._sessions.values())

    def snapshot(self) -> int:
        """Number of live sessions."""
        with self._lock:
            return len(self._sessions)

    def __len__(self) -> int:
        return self.snapshot()
