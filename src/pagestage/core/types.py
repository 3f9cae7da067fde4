"""Core type definitions."""

from enum import StrEnum
from typing import NewType

# Canonical content path (e.g., "/", "/blog/2020/post")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

EDIT_CONTENT = "edit_content"
PUBLISH_CONTENT = "publish_content"

# Either capability lets a principal author content and see drafts
EDITOR_CAPABILITIES = (EDIT_CONTENT, PUBLISH_CONTENT)


class RenderMode(StrEnum):
    """Page rendering mode."""

    VIEW = "view"
    EDIT = "edit"


class PageState(StrEnum):
    """Lifecycle state of a page or attachment."""

    DRAFT = "draft"
    LIVE = "live"
    ARCHIVED = "archived"


# Query parameters that steer dispatch and never reach a layout
CONTROL_PARAMS = frozenset({"mode", "cms_cache", "prepare_with"})
