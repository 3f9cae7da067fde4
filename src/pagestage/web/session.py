"""Signed cookie sessions.

Session data (render mode, return-to location, user id) lives in a cookie
signed with itsdangerous, so it cannot be forged by the client.
"""

from typing import Any

from aiohttp import web
from itsdangerous import BadData, URLSafeSerializer

from pagestage.core.session import MemorySession

SESSION_SALT = "pagestage-session"


class SessionCodec:
    """Reads and writes session cookies."""

    def __init__(self, secret: str, cookie_name: str) -> None:
        self._serializer = URLSafeSerializer(secret, salt=SESSION_SALT)
        self._cookie_name = cookie_name

    @property
    def cookie_name(self) -> str:
        """Name of the session cookie."""
        return self._cookie_name

    def load(self, request: web.Request) -> MemorySession:
        """Load the session for a request.

        Missing, tampered or malformed cookies give an empty session.
        """
        raw = request.cookies.get(self._cookie_name)
        if not raw:
            return MemorySession()
        return self.decode(raw)

    def decode(self, raw: str) -> MemorySession:
        """Decode a signed cookie value, or give an empty session if invalid."""
        try:
            data: Any = self._serializer.loads(raw)
        except BadData:
            return MemorySession()
        if not isinstance(data, dict):
            return MemorySession()
        return MemorySession(data)

    def dump(self, session: MemorySession) -> str:
        """Serialize a session into a signed cookie value."""
        return self._serializer.dumps(session.to_dict())

    def save(self, response: web.StreamResponse, session: MemorySession) -> None:
        """Write the session cookie if the session changed."""
        if not session.modified:
            return
        response.set_cookie(
            self._cookie_name,
            self.dump(session),
            httponly=True,
            samesite="Lax",
        )
