"""Canonical content paths."""

from collections.abc import Sequence

from pagestage.core.types import URLPath


def construct_path(segments: Sequence[str] | None) -> URLPath:
    """Join routing segments into a canonical path.

    Args:
        segments: Path segments, e.g. ["blog", "2020", "post"]; may be None

    Returns:
        "/" for no segments, otherwise "/" followed by the joined segments
    """
    if not segments:
        return URLPath("/")
    return URLPath("/" + "/".join(segments))


def file_extension(segments: Sequence[str] | None) -> str | None:
    """Return the lower-cased extension of the last segment, if any.

    A segment has an extension only when it contains a dot followed by a
    non-empty suffix ("report.pdf" -> "pdf"; "notes." and "readme" -> None).
    """
    if not segments:
        return None
    parts = segments[-1].split(".")
    if len(parts) < 2:
        return None
    return parts[-1].lower() or None
