"""Tests for session stores."""

from pagestage.core.session import PAGE_MODE_KEY, MemorySession
from pagestage.web.session import SessionCodec


class TestMemorySession:
    """Tests for MemorySession."""

    def test__new_session__not_modified(self) -> None:
        """A fresh session is not modified."""
        session = MemorySession({PAGE_MODE_KEY: "edit"})

        assert session.modified is False
        assert session.get(PAGE_MODE_KEY) == "edit"
        assert session.get("missing", "default") == "default"

    def test__same_value__not_modified(self) -> None:
        """Writing the stored value again does not mark the session modified."""
        session = MemorySession({PAGE_MODE_KEY: "edit"})

        session.set(PAGE_MODE_KEY, "edit")

        assert session.modified is False

    def test__new_value__modified(self) -> None:
        """Writing a new value marks the session modified."""
        session = MemorySession()

        session.set(PAGE_MODE_KEY, "view")

        assert session.modified is True
        assert session.to_dict() == {PAGE_MODE_KEY: "view"}


class TestSessionCodec:
    """Tests for SessionCodec."""

    def test__dump_then_decode__same_data(self) -> None:
        """Signed cookies decode to the stored data."""
        codec = SessionCodec("secret", "session")

        decoded = codec.decode(codec.dump(MemorySession({"user": "editor"})))

        assert decoded.get("user") == "editor"

    def test__other_secret__empty_session(self) -> None:
        """Cookies signed with another secret are rejected."""
        cookie = SessionCodec("secret", "session").dump(MemorySession({"user": "editor"}))

        decoded = SessionCodec("other", "session").decode(cookie)

        assert decoded.get("user") is None

    def test__garbage__empty_session(self) -> None:
        """Malformed cookie values give an empty session."""
        assert SessionCodec("secret", "session").decode("not-a-cookie").to_dict() == {}
