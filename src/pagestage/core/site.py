"""Admin-site handling and toolbar visibility.

With caching enabled, editing happens on a separate admin host so that
public traffic can be served from the page cache. Only editors may use
the admin host; everybody else is sent to the public site.
"""

import logging
from dataclasses import dataclass

from pagestage.core.principal import Principal, is_editor
from pagestage.core.responses import RedirectResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiteDecision:
    """Toolbar visibility, or a redirect away from the admin site."""

    show_toolbar: bool = False
    redirect: RedirectResponse | None = None


class SiteGate:
    """Decides toolbar visibility for the current host."""

    def __init__(self, *, caching_enabled: bool) -> None:
        self._caching_enabled = caching_enabled

    def check(self, principal: Principal, *, admin_site: bool, public_url: str) -> SiteDecision:
        """Decide toolbar visibility for a request.

        Args:
            principal: Current caller
            admin_site: Whether the request arrived on the admin host
            public_url: Same URL on the public host

        Returns:
            SiteDecision with the toolbar flag or a redirect to the public site
        """
        if not self._caching_enabled:
            logger.info("Caching is disabled")
            return SiteDecision(show_toolbar=is_editor(principal))

        logger.info("Caching is enabled")
        if not admin_site:
            return SiteDecision()
        if is_editor(principal):
            return SiteDecision(show_toolbar=True)

        logger.info("User does not have access to the admin site")
        return SiteDecision(redirect=RedirectResponse(public_url))
