"""Page cache eligibility and storage.

CachePolicy decides whether a rendered page may be persisted. PageCache
stores eligible pages on disk, keyed by canonical path:

    .cache/
    └── pages/
        ├── index.html               # "/"
        └── blog/
            └── 2020/
                └── post.html        # "/blog/2020/post"

Writes are idempotent: rendering and storing the same path twice is
harmless, so no locking is done.
"""

import logging
import shutil
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pagestage.core.entities import Page
from pagestage.core.principal import Principal, is_editor
from pagestage.core.types import CONTROL_PARAMS

logger = logging.getLogger(__name__)

_CACHE_SAFE_PARAMS = CONTROL_PARAMS - {"prepare_with"}


@dataclass(frozen=True)
class CacheDecision:
    """Whether the current render may go to the cache, and why not."""

    eligible: bool
    reason: str | None = None


class CachePolicy:
    """Decides cache eligibility after access has been confirmed."""

    def decide(
        self,
        principal: Principal,
        page: Page,
        params: Mapping[str, Any],
    ) -> CacheDecision:
        """Decide whether the rendered page may be cached.

        Editors always see fresh content, non-cacheable pages are never
        stored, and ``cms_cache=false`` disables caching for one request.
        Requests carrying any other parameter, including ``prepare_with``,
        may render per-request values and are not cached either.

        Args:
            principal: Current caller
            page: Resolved page
            params: Request parameters

        Returns:
            CacheDecision; ineligible decisions carry the reason
        """
        if principal.authenticated and is_editor(principal):
            reason = "user is logged in"
        elif not page.cacheable:
            reason = "page cacheable is false"
        elif params.get("cms_cache") == "false":
            reason = "cms_cache is false"
        elif any(name not in _CACHE_SAFE_PARAMS for name in params):
            reason = "request has parameters"
        else:
            return CacheDecision(eligible=True)

        logger.info(f"Not Caching, {reason}")
        return CacheDecision(eligible=False, reason=reason)


class PageCache:
    """File-based store for rendered pages."""

    _GITIGNORE_CONTENT = "# Ignore everything in this directory\n*\n"

    def __init__(self, cache_dir: Path) -> None:
        """Initialize cache with directory path.

        Args:
            cache_dir: Root directory for cache files (e.g., .cache/)
        """
        self._cache_dir = cache_dir
        self._pages_dir = cache_dir / "pages"

    @property
    def cache_dir(self) -> Path:
        """Root cache directory."""
        return self._cache_dir

    def _ensure_cache_dir(self) -> None:
        """Create cache directory with .gitignore if it doesn't exist."""
        if not self._cache_dir.exists():
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            gitignore_path = self._cache_dir / ".gitignore"
            gitignore_path.write_text(self._GITIGNORE_CONTENT, encoding="utf-8")

    def _html_path(self, path: str) -> Path:
        relative = path.strip("/") or "index"
        return self._pages_dir / f"{relative}.html"

    def get(self, path: str) -> str | None:
        """Retrieve cached HTML for a canonical path.

        Args:
            path: Canonical path (e.g., "/blog/2020/post")

        Returns:
            Cached HTML, or None on a miss
        """
        html_path = self._html_path(path)
        if not html_path.exists():
            return None

        try:
            return html_path.read_text(encoding="utf-8")
        except OSError:
            return None

    def set(self, path: str, html: str) -> None:
        """Store rendered HTML for a canonical path.

        Args:
            path: Canonical path (e.g., "/blog/2020/post")
            html: Rendered HTML content
        """
        self._ensure_cache_dir()

        html_path = self._html_path(path)
        html_path.parent.mkdir(parents=True, exist_ok=True)
        html_path.write_text(html, encoding="utf-8")
        logger.debug(f"Cached {path} at {html_path}")

    def invalidate(self, path: str) -> None:
        """Remove the cached page for a path.

        Args:
            path: Canonical path to invalidate
        """
        html_path = self._html_path(path)
        if html_path.exists():
            html_path.unlink()

    def clear(self) -> None:
        """Remove all cached pages."""
        if self._pages_dir.exists():
            shutil.rmtree(self._pages_dir)
