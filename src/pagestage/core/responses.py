"""Dispatch results, independent of the HTTP framework."""

from dataclasses import dataclass

from pagestage.core.types import RenderMode


@dataclass(frozen=True)
class RedirectResponse:
    """Send the client to another location."""

    location: str


@dataclass(frozen=True)
class FileStream:
    """Binary attachment body with its declared name and type."""

    body: bytes
    file_name: str
    content_type: str
    disposition: str = "inline"


@dataclass(frozen=True)
class RenderedPage:
    """Rendered content page."""

    html: str
    layout: str
    status: int = 200
    mode: RenderMode = RenderMode.VIEW
    cache_eligible: bool = False
    from_cache: bool = False


@dataclass(frozen=True)
class RawError:
    """Unstyled error surface, used when no error page applies."""

    status: int
    title: str
    detail: str


Response = RedirectResponse | FileStream | RenderedPage | RawError
