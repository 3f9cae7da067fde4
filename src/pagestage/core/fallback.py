"""Recovery from dispatch failures with configured error pages."""

import logging
import traceback
from dataclasses import dataclass, replace

from pagestage.core.context import DispatchRequest, RequestContext
from pagestage.core.errors import AccessDenied, DispatchError, NotFound
from pagestage.core.principal import is_editor
from pagestage.core.renderer import Renderer
from pagestage.core.responses import RawError, RenderedPage
from pagestage.core.store import ContentStore
from pagestage.core.types import RenderMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorPages:
    """Error page paths and when to skip them.

    Attributes:
        not_found: Page rendered for NotFound (404)
        access_denied: Page rendered for AccessDenied (403)
        server_error: Page rendered for everything else (500)
        raw_errors_for_editors: Show authenticated editors the raw error
        raw_errors_on_admin_site: Show the raw error on the admin site
    """

    not_found: str = "/system/not_found"
    access_denied: str = "/system/access_denied"
    server_error: str = "/system/server_error"
    raw_errors_for_editors: bool = True
    raw_errors_on_admin_site: bool = True

    def path_for(self, error: DispatchError) -> str:
        """Return the error page path for a failure kind."""
        if isinstance(error, NotFound):
            return self.not_found
        if isinstance(error, AccessDenied):
            return self.access_denied
        return self.server_error


class ErrorFallback:
    """Substitutes a configured error page for a failed dispatch.

    Editors authoring content get the raw error instead, so they can debug
    their pages. When no live error page exists, or the error page itself
    fails to render, the raw error is returned. Recovery is never retried.
    """

    def __init__(
        self,
        store: ContentStore,
        renderer: Renderer,
        error_pages: ErrorPages | None = None,
    ) -> None:
        self._store = store
        self._renderer = renderer
        self._error_pages = error_pages or ErrorPages()

    def recover(
        self,
        error: DispatchError,
        request: DispatchRequest,
        context: RequestContext,
    ) -> RenderedPage | RawError:
        """Produce the response for a failed dispatch.

        Args:
            error: The failure raised by a stage
            request: The original dispatch request
            context: Context as it was when the failure happened

        Returns:
            Rendered error page, or the raw error surface
        """
        _log_error(error)

        if self._escalate(request):
            return _raw_error(error, detailed=True)

        error_path = self._error_pages.path_for(error)
        page = self._store.find_live_page_by_path(error_path)
        if page is None:
            return _raw_error(error, detailed=False)

        logger.info(f"Rendering Error Page: {page.path}")
        error_context = replace(
            context.reset_fragments(),
            page=page,
            attachment=None,
            mode=RenderMode.VIEW,
            show_toolbar=False,
            cache_eligible=False,
        )
        try:
            return self._renderer.render(error_context, status=error.status)
        except Exception:
            logger.exception(f"Error page {error_path} failed to render")
            return _raw_error(error, detailed=False)

    def _escalate(self, request: DispatchRequest) -> bool:
        principal = request.principal
        if not is_editor(principal):
            return False
        if self._error_pages.raw_errors_for_editors and principal.authenticated:
            return True
        return self._error_pages.raw_errors_on_admin_site and request.admin_site


def _log_error(error: DispatchError) -> None:
    if isinstance(error, NotFound):
        logger.warning("Page Not Found")
    elif isinstance(error, AccessDenied):
        logger.warning("Access Denied")
    else:
        logger.warning(f"Exception: {error}")
        logger.warning("".join(traceback.format_exception(error)))


def _raw_error(error: DispatchError, *, detailed: bool) -> RawError:
    if detailed:
        detail = "".join(traceback.format_exception(error))
    else:
        detail = str(error)
    return RawError(status=error.status, title=error.title, detail=detail)
