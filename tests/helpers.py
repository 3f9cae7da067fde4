"""Test principals and request builders."""

from pagestage.core.context import DispatchRequest
from pagestage.core.principal import ANONYMOUS, Principal, User
from pagestage.core.session import MemorySession
from pagestage.core.types import EDIT_CONTENT, PUBLISH_CONTENT

EDITOR = User(id="editor", capabilities=frozenset({EDIT_CONTENT, PUBLISH_CONTENT}))
PUBLISHER = User(id="publisher", capabilities=frozenset({PUBLISH_CONTENT}))
MEMBER = User(id="member", groups=frozenset({"members"}))


def make_request(
    segments: list[str] | None,
    *,
    principal: Principal = ANONYMOUS,
    session: MemorySession | None = None,
    params: dict | None = None,
    admin_site: bool = False,
    public_url: str = "http://example.com/",
) -> DispatchRequest:
    """Build a DispatchRequest with sensible defaults."""
    return DispatchRequest(
        segments=segments,
        params=params or {},
        principal=principal,
        session=session if session is not None else MemorySession(),
        admin_site=admin_site,
        public_url=public_url,
    )
