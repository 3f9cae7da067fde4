"""Per-request dispatch state.

A RequestContext is created when a request starts and discarded when it
ends. It is immutable: stages derive updated copies with
``dataclasses.replace``. The only mutable part is the fragment buffer the
renderer writes captured blocks into, and clearing it is an explicit
operation performed by error recovery.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from pagestage.core.entities import Attachment, Page
from pagestage.core.principal import Principal
from pagestage.core.session import SessionStore
from pagestage.core.types import RenderMode, URLPath


@dataclass(frozen=True)
class DispatchRequest:
    """Inputs of a single dispatch.

    Attributes:
        segments: Path segments from routing, or None when absent
        params: Query parameters (``mode``, ``cms_cache``, ``prepare_with``)
        principal: Current caller
        session: Session store for the caller
        admin_site: Whether the request arrived on the admin host
        public_url: Same URL on the public host
    """

    segments: Sequence[str] | None
    params: Mapping[str, Any]
    principal: Principal
    session: SessionStore
    admin_site: bool = False
    public_url: str = "/"


@dataclass(frozen=True)
class RequestContext:
    """Resolved state of a request as it moves through the pipeline."""

    path: URLPath
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    page: Page | None = None
    attachment: Attachment | None = None
    mode: RenderMode = RenderMode.VIEW
    show_toolbar: bool = False
    cache_eligible: bool = False
    fragments: dict[str, str] = field(default_factory=dict)

    def with_params(self, params: Mapping[str, Any]) -> RequestContext:
        """Return a copy holding a read-only view of the given parameters."""
        return replace(self, params=MappingProxyType(dict(params)))

    def capture(self, name: str, html: str) -> None:
        """Append a rendered fragment under the given name."""
        self.fragments[name] = self.fragments.get(name, "") + html

    def reset_fragments(self) -> RequestContext:
        """Return a copy with an empty fragment buffer."""
        return replace(self, fragments={})
