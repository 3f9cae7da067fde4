"""Page resolution and view permission."""

import logging

from pagestage.core.entities import Page
from pagestage.core.errors import AccessDenied, NotFound
from pagestage.core.principal import Principal, is_editor
from pagestage.core.session import RETURN_TO_KEY, SessionStore
from pagestage.core.store import ContentStore
from pagestage.core.types import URLPath

logger = logging.getLogger(__name__)


class AccessGate:
    """Resolves the target page and enforces visibility.

    Editors see pages in any state. Everybody else only sees live,
    non-archived pages.
    """

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    def resolve(self, path: URLPath, principal: Principal, session: SessionStore) -> Page:
        """Find the page for a path and check the caller may view it.

        Args:
            path: Canonical request path
            principal: Current caller
            session: Session store; receives the return-to location on denial

        Returns:
            The resolved page

        Raises:
            NotFound: If no visible page exists at the path
            AccessDenied: If the caller may not view the page
        """
        if is_editor(principal):
            page = self._store.find_page_by_path(path)
        else:
            page = self._store.find_live_page_by_path(path)
            if page is not None and page.archived:
                page = None

        if page is None:
            raise NotFound(f"No page at '{path}'")

        if not principal.able_to_view(page):
            session.set(RETURN_TO_KEY, path)
            raise AccessDenied(f"Access denied to '{path}'")

        return page
