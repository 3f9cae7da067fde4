"""Configured redirects, checked before anything else runs."""

import logging

from pagestage.core.responses import RedirectResponse
from pagestage.core.store import ContentStore
from pagestage.core.types import URLPath

logger = logging.getLogger(__name__)


class RedirectLookup:
    """Exact-match redirect lookup."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    def lookup(self, path: URLPath) -> RedirectResponse | None:
        """Return a redirect response if one is configured for the path."""
        redirect = self._store.find_redirect(path)
        if redirect is None:
            return None
        logger.info(f"Redirecting {path} to {redirect.to_path}")
        return RedirectResponse(redirect.to_path)
