"""Shared test fixtures."""

from pathlib import Path

import pytest
from pagestage.config import (
    CacheConfig,
    Config,
    ContentConfig,
    ErrorsConfig,
    ServerConfig,
    SessionConfig,
)
from pagestage.core.entities import Attachment, Page, Redirect
from pagestage.core.renderer import LayoutRenderer
from pagestage.core.store import MemoryContentStore
from pagestage.core.types import PageState

from tests.helpers import EDITOR, MEMBER, PUBLISHER


@pytest.fixture
def attachments_dir(tmp_path: Path) -> Path:
    """Create attachments directory with a stored report."""
    directory = tmp_path / "attachments"
    (directory / "files").mkdir(parents=True)
    (directory / "files" / "report.pdf").write_bytes(b"%PDF-1.4 report")
    return directory


@pytest.fixture
def store() -> MemoryContentStore:
    """Content store with live, draft, archived, restricted and error pages."""
    return MemoryContentStore(
        pages=[
            Page(path="/", layout="default", title="Home", body="Welcome"),
            Page(path="/blog/2020/post", layout="default", title="Post", body="# Post\n\nHello."),
            Page(path="/draft", title="Draft", body="Unpublished", state=PageState.DRAFT),
            Page(
                path="/old",
                title="Old",
                body="Gone",
                state=PageState.ARCHIVED,
                archived=True,
            ),
            Page(path="/live-archived", title="Live but archived", archived=True),
            Page(path="/members", title="Members", body="Secret", groups=frozenset({"members"})),
            Page(path="/volatile", title="Volatile", body="Fresh", cacheable=False),
            Page(path="/system/not_found", layout="error", title="Not Found", body="Missing"),
            Page(
                path="/system/access_denied",
                layout="error",
                title="Access Denied",
                body="Forbidden",
            ),
            Page(
                path="/system/server_error",
                layout="error",
                title="Server Error",
                body="Broken",
            ),
        ],
        attachments=[
            Attachment(
                path="/files/report.pdf",
                file_name="report.pdf",
                file_type="application/pdf",
                file_location="files/report.pdf",
            ),
            Attachment(
                path="/files/private.pdf",
                file_name="private.pdf",
                file_type="application/pdf",
                file_location="files/report.pdf",
                groups=frozenset({"staff"}),
            ),
            Attachment(
                path="/files/pending.pdf",
                file_name="pending.pdf",
                file_type="application/pdf",
                file_location="files/pending.pdf",
            ),
        ],
        redirects=[Redirect(from_path="/moved", to_path="/blog/2020/post")],
        users=[EDITOR, PUBLISHER, MEMBER],
    )


@pytest.fixture
def renderer() -> LayoutRenderer:
    """Renderer using the built-in layout."""
    return LayoutRenderer()


@pytest.fixture
def test_config(tmp_path: Path, attachments_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories."""
    return Config(
        server=ServerConfig(),
        content=ContentConfig(
            manifest=tmp_path / "content.toml",
            layouts_dir=None,
            attachments_dir=attachments_dir,
        ),
        cache=CacheConfig(enabled=True, cache_dir=tmp_path / ".cache"),
        errors=ErrorsConfig(),
        session=SessionConfig(secret="test-secret"),
    )
