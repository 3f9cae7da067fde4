"""Content entities served by the dispatch pipeline.

Pages, attachments and redirects are owned by the content store; the
pipeline only reads them.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pagestage.core.types import PageState


@dataclass(frozen=True)
class Page:
    """Content page at a unique path."""

    path: str
    layout: str = "default"
    title: str = ""
    body: str = ""
    cacheable: bool = True
    archived: bool = False
    state: PageState = PageState.LIVE
    groups: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_live(self) -> bool:
        """Whether this is the published version of the page."""
        return self.state is PageState.LIVE


@dataclass(frozen=True)
class Attachment:
    """Static file asset addressed by a content path."""

    path: str
    file_name: str
    file_type: str
    file_location: str
    state: PageState = PageState.LIVE
    groups: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_live(self) -> bool:
        """Whether this is the published version of the attachment."""
        return self.state is PageState.LIVE

    def full_file_location(self, root: Path) -> Path:
        """Resolve where the attachment file lives on disk.

        Args:
            root: Attachments storage directory

        Returns:
            Absolute or root-relative path to the stored file
        """
        return root / self.file_location


@dataclass(frozen=True)
class Redirect:
    """Exact-match redirect from one content path to another."""

    from_path: str
    to_path: str
