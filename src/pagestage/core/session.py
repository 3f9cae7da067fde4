"""Session-scoped state shared between requests of one client."""

from typing import Any, Protocol

PAGE_MODE_KEY = "page_mode"
RETURN_TO_KEY = "return_to"
USER_KEY = "user"


class SessionStore(Protocol):
    """Key-value store scoped to a client session."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class MemorySession:
    """Dictionary-backed session, used in tests and by the cookie session."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data) if data else {}
        self._modified = False

    @property
    def modified(self) -> bool:
        """Whether any value was written since construction."""
        return self._modified

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if self._data.get(key) != value:
            self._modified = True
        self._data[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the session data."""
        return dict(self._data)
