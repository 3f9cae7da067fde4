"""Read-only lookup of content entities.

The pipeline depends on the ContentStore protocol only. MemoryContentStore
is the shipped implementation, loaded from a TOML content manifest:

    [[pages]]
    path = "/blog/2020/post"
    layout = "default"
    title = "Post"
    body_file = "pages/post.md"

    [[attachments]]
    path = "/files/report.pdf"
    file_name = "report.pdf"
    file_type = "application/pdf"
    file_location = "files/report.pdf"

    [[redirects]]
    from = "/old"
    to = "/new"

    [[users]]
    id = "editor"
    capabilities = ["edit_content", "publish_content"]
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Protocol

from pagestage.core.entities import Attachment, Page, Redirect
from pagestage.core.principal import User
from pagestage.core.types import PageState

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    """Lookup services for pages, attachments and redirects."""

    def find_page_by_path(self, path: str) -> Page | None:
        """Find a page with exactly this path in any state."""
        ...

    def find_live_page_by_path(self, path: str) -> Page | None:
        """Find the live version of the page at this path."""
        ...

    def find_live_attachment_by_path(self, path: str) -> Attachment | None:
        """Find the live attachment at this path."""
        ...

    def find_redirect(self, from_path: str) -> Redirect | None:
        """Find a redirect whose source is exactly this path."""
        ...


class MemoryContentStore:
    """In-memory content store.

    Several pages may share a path (drafts and archived versions next to
    the live one); only one of them is live.
    """

    def __init__(
        self,
        pages: list[Page] | None = None,
        attachments: list[Attachment] | None = None,
        redirects: list[Redirect] | None = None,
        users: list[User] | None = None,
    ) -> None:
        self._pages = list(pages or [])
        self._attachments = list(attachments or [])
        self._redirects = {r.from_path: r for r in redirects or []}
        self._users = {u.id: u for u in users or []}

    def find_page_by_path(self, path: str) -> Page | None:
        for page in self._pages:
            if page.path == path:
                return page
        return None

    def find_live_page_by_path(self, path: str) -> Page | None:
        for page in self._pages:
            if page.path == path and page.is_live:
                return page
        return None

    def find_live_attachment_by_path(self, path: str) -> Attachment | None:
        for attachment in self._attachments:
            if attachment.path == path and attachment.is_live:
                return attachment
        return None

    def find_redirect(self, from_path: str) -> Redirect | None:
        return self._redirects.get(from_path)

    def find_user(self, user_id: str) -> User | None:
        """Find a user record by id."""
        return self._users.get(user_id)

    @property
    def pages(self) -> list[Page]:
        """All pages in the store."""
        return list(self._pages)

    @classmethod
    def load(cls, manifest_path: Path) -> MemoryContentStore:
        """Load a content manifest.

        Args:
            manifest_path: Path to the TOML manifest

        Returns:
            MemoryContentStore with the manifest's entities

        Raises:
            FileNotFoundError: If the manifest or a page body file is missing
            ValueError: If the manifest is invalid
        """
        if not manifest_path.exists():
            raise FileNotFoundError(f"Content manifest not found: {manifest_path}")

        with manifest_path.open("rb") as f:
            data = tomllib.load(f)

        base_dir = manifest_path.parent
        pages = [_parse_page(item, base_dir) for item in _table_list(data, "pages")]
        attachments = [_parse_attachment(item) for item in _table_list(data, "attachments")]
        redirects = [_parse_redirect(item) for item in _table_list(data, "redirects")]
        users = [_parse_user(item) for item in _table_list(data, "users")]

        logger.info(
            f"Loaded {len(pages)} pages, {len(attachments)} attachments, "
            f"{len(redirects)} redirects from {manifest_path}"
        )
        return cls(pages=pages, attachments=attachments, redirects=redirects, users=users)


def _table_list(data: dict, key: str) -> list[dict]:
    items = data.get(key, [])
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise ValueError(f"{key} must be an array of tables")
    return items


def _required_str(item: dict, section: str, key: str) -> str:
    value = item.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{section}.{key} must be a string")
    return value


def _optional_str(item: dict, section: str, key: str, default: str) -> str:
    value = item.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"{section}.{key} must be a string")
    return value


def _string_set(item: dict, section: str, key: str) -> frozenset[str]:
    values = item.get(key, [])
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ValueError(f"{section}.{key} must be a list of strings")
    return frozenset(values)


def _parse_state(item: dict, section: str) -> PageState:
    raw = _optional_str(item, section, "state", PageState.LIVE.value)
    try:
        return PageState(raw)
    except ValueError:
        raise ValueError(f"{section}.state must be one of draft, live, archived") from None


def _parse_page(item: dict, base_dir: Path) -> Page:
    path = _required_str(item, "pages", "path")
    body = _optional_str(item, "pages", "body", "")
    body_file = item.get("body_file")
    if body_file is not None:
        if not isinstance(body_file, str):
            raise ValueError("pages.body_file must be a string")
        body_path = base_dir / body_file
        if not body_path.exists():
            raise FileNotFoundError(f"Page body not found: {body_path}")
        body = body_path.read_text(encoding="utf-8")

    cacheable = item.get("cacheable", True)
    if not isinstance(cacheable, bool):
        raise ValueError("pages.cacheable must be a boolean")

    state = _parse_state(item, "pages")
    archived = item.get("archived", state is PageState.ARCHIVED)
    if not isinstance(archived, bool):
        raise ValueError("pages.archived must be a boolean")

    return Page(
        path=path,
        layout=_optional_str(item, "pages", "layout", "default"),
        title=_optional_str(item, "pages", "title", ""),
        body=body,
        cacheable=cacheable,
        archived=archived,
        state=state,
        groups=_string_set(item, "pages", "groups"),
    )


def _parse_attachment(item: dict) -> Attachment:
    return Attachment(
        path=_required_str(item, "attachments", "path"),
        file_name=_required_str(item, "attachments", "file_name"),
        file_type=_optional_str(item, "attachments", "file_type", "application/octet-stream"),
        file_location=_required_str(item, "attachments", "file_location"),
        state=_parse_state(item, "attachments"),
        groups=_string_set(item, "attachments", "groups"),
    )


def _parse_redirect(item: dict) -> Redirect:
    return Redirect(
        from_path=_required_str(item, "redirects", "from"),
        to_path=_required_str(item, "redirects", "to"),
    )


def _parse_user(item: dict) -> User:
    return User(
        id=_required_str(item, "users", "id"),
        capabilities=_string_set(item, "users", "capabilities"),
        groups=_string_set(item, "users", "groups"),
    )
