"""Tests for the content store and manifest loading."""

from pathlib import Path

import pytest
from pagestage.core.entities import Page
from pagestage.core.store import MemoryContentStore
from pagestage.core.types import PageState


class TestMemoryContentStore:
    """Tests for MemoryContentStore lookups."""

    def test__live_lookup__skips_drafts(self) -> None:
        """Live lookup ignores non-live versions at the same path."""
        draft = Page(path="/about", title="Draft", state=PageState.DRAFT)
        live = Page(path="/about", title="Live")
        store = MemoryContentStore(pages=[draft, live])

        assert store.find_live_page_by_path("/about") == live
        assert store.find_page_by_path("/about") == draft

    def test__missing_path__returns_none(self, store: MemoryContentStore) -> None:
        """Return None when nothing matches."""
        assert store.find_page_by_path("/nowhere") is None
        assert store.find_live_attachment_by_path("/nowhere.pdf") is None
        assert store.find_redirect("/nowhere") is None

    def test__redirect__exact_match_only(self, store: MemoryContentStore) -> None:
        """Redirects match the exact source path."""
        assert store.find_redirect("/moved") is not None
        assert store.find_redirect("/moved/") is None


class TestLoad:
    """Tests for MemoryContentStore.load()."""

    def test__full_manifest__loads_entities(self, tmp_path: Path) -> None:
        """Load pages, attachments, redirects and users."""
        (tmp_path / "pages").mkdir()
        (tmp_path / "pages" / "post.md").write_text("# Post\n\nBody.")
        manifest = tmp_path / "content.toml"
        manifest.write_text(
            """
[[pages]]
path = "/blog/post"
title = "Post"
body_file = "pages/post.md"
cacheable = false

[[pages]]
path = "/old"
state = "archived"

[[attachments]]
path = "/files/report.pdf"
file_name = "report.pdf"
file_type = "application/pdf"
file_location = "files/report.pdf"

[[redirects]]
from = "/moved"
to = "/blog/post"

[[users]]
id = "editor"
capabilities = ["edit_content"]
groups = ["staff"]
"""
        )

        store = MemoryContentStore.load(manifest)

        page = store.find_live_page_by_path("/blog/post")
        assert page is not None
        assert page.body == "# Post\n\nBody."
        assert page.cacheable is False
        assert page.layout == "default"

        archived = store.find_page_by_path("/old")
        assert archived is not None
        assert archived.archived is True
        assert store.find_live_page_by_path("/old") is None

        attachment = store.find_live_attachment_by_path("/files/report.pdf")
        assert attachment is not None
        assert attachment.file_type == "application/pdf"

        redirect = store.find_redirect("/moved")
        assert redirect is not None
        assert redirect.to_path == "/blog/post"

        user = store.find_user("editor")
        assert user is not None
        assert user.able_to("edit_content")
        assert user.groups == frozenset({"staff"})

    def test__missing_manifest__raises_file_not_found(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for a missing manifest."""
        with pytest.raises(FileNotFoundError, match="Content manifest not found"):
            MemoryContentStore.load(tmp_path / "content.toml")

    def test__missing_body_file__raises_file_not_found(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError when a page body file is missing."""
        manifest = tmp_path / "content.toml"
        manifest.write_text('[[pages]]\npath = "/a"\nbody_file = "a.md"\n')

        with pytest.raises(FileNotFoundError, match="Page body not found"):
            MemoryContentStore.load(manifest)

    def test__page_without_path__raises_value_error(self, tmp_path: Path) -> None:
        """Raise ValueError when a page has no path."""
        manifest = tmp_path / "content.toml"
        manifest.write_text('[[pages]]\ntitle = "No path"\n')

        with pytest.raises(ValueError, match="pages.path must be a string"):
            MemoryContentStore.load(manifest)

    def test__unknown_state__raises_value_error(self, tmp_path: Path) -> None:
        """Raise ValueError for an unknown lifecycle state."""
        manifest = tmp_path / "content.toml"
        manifest.write_text('[[pages]]\npath = "/a"\nstate = "published"\n')

        with pytest.raises(ValueError, match="pages.state must be one of"):
            MemoryContentStore.load(manifest)
