"""
Tienda Back Office — Server-Side Session Store
================================================

What:  Maps opaque session tokens to the logged-in user's id and display name.
Why:   The browser only ever holds a random token in a cookie; who the user
       is stays on the server, and logout can revoke it immediately.
How:   In-memory dict keyed by token, with a sliding expiry checked lazily on
       read and swept periodically on write.
Who:   One instance per application, stored on `app.state.session_store`
       and handed to handlers through the `get_session_store` dependency.

Lifecycle:
    login  → create()  (new random token)
    /menu  → get()     (refreshes expiry)
    logout → delete()
    idle for session_ttl_seconds → dropped on next get() or sweep

Production Upgrade Path:
    This implementation is per-process. With several uvicorn workers each
    worker has its own sessions; back the same interface with Redis for a
    shared store.
"""

import logging
import secrets
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from starlette.requests import Request

logger = logging.getLogger(__name__)

# 32 random bytes → 43 URL-safe characters
TOKEN_BYTES = 32


@dataclass
class SessionData:
    """What a session remembers about the authenticated user."""
    user_id: int
    display_name: str
    expires_at: float


class SessionStore:
    """In-memory session store with sliding expiration."""

    # Sweep expired entries every N creations
    SWEEP_INTERVAL = 100

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, SessionData] = {}
        self._created = 0

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, user_id: int, display_name: str) -> str:
        """Start a session for the user and return its token."""
        token = secrets.token_urlsafe(TOKEN_BYTES)
        self._sessions[token] = SessionData(
            user_id=user_id,
            display_name=display_name,
            expires_at=self._clock() + self._ttl,
        )
        self._created += 1
        if self._created % self.SWEEP_INTERVAL == 0:
            self.purge_expired()
        logger.debug("Session created for user %s", user_id)
        return token

    def get(self, token: Optional[str]) -> Optional[SessionData]:
        """Return the live session for `token`, or None if unknown or expired."""
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        now = self._clock()
        if session.expires_at <= now:
            del self._sessions[token]
            return None
        session.expires_at = now + self._ttl
        return session

    def delete(self, token: Optional[str]) -> None:
        """End the session; unknown tokens are ignored."""
        if token and self._sessions.pop(token, None) is not None:
            logger.debug("Session destroyed")

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))
        return len(expired)


def get_session_store(request: Request) -> SessionStore:
    """FastAPI dependency returning the application's session store."""
    return request.app.state.session_store
