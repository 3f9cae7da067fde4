"""Streaming of attachment files addressed by content paths."""

import logging
from collections.abc import Sequence
from pathlib import Path

from pagestage.core.errors import AccessDenied, ServerError
from pagestage.core.entities import Attachment
from pagestage.core.paths import file_extension
from pagestage.core.principal import Principal
from pagestage.core.responses import FileStream
from pagestage.core.store import ContentStore
from pagestage.core.types import URLPath

logger = logging.getLogger(__name__)


class AttachmentStreamer:
    """Intercepts paths that resolve to a live attachment file.

    Paths without an extension, paths with no live attachment and
    attachments whose file has not been materialized yet all fall through
    to page resolution.
    """

    def __init__(self, store: ContentStore, attachments_dir: Path) -> None:
        """Initialize streamer.

        Args:
            store: Content store for attachment lookup
            attachments_dir: Root directory of stored attachment files
        """
        self._store = store
        self._attachments_dir = attachments_dir

    def find(self, segments: Sequence[str] | None, path: URLPath) -> Attachment | None:
        """Return the live attachment for a path with an extension."""
        if file_extension(segments) is None:
            return None
        return self._store.find_live_attachment_by_path(path)

    def stream(self, attachment: Attachment, path: URLPath, principal: Principal) -> FileStream | None:
        """Read the attachment file if the caller may see it and it exists.

        Args:
            attachment: Live attachment matching the path
            path: Canonical request path
            principal: Current caller

        Returns:
            FileStream, or None when the file is not on disk

        Raises:
            AccessDenied: If the caller may not view the attachment
            ServerError: If the file disappears between check and read
        """
        if not principal.able_to_view(attachment):
            raise AccessDenied(f"Access denied to attachment '{path}'")

        location = attachment.full_file_location(self._attachments_dir)
        if path == "/" or not location.exists():
            return None

        try:
            body = location.read_bytes()
        except OSError as e:
            raise ServerError(f"Could not read attachment '{path}': {e}") from e

        logger.info(f"Streaming {attachment.file_name} ({attachment.file_type})")
        return FileStream(
            body=body,
            file_name=attachment.file_name,
            content_type=attachment.file_type,
        )
