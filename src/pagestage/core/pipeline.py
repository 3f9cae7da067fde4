"""Request dispatch pipeline.

Stages run in a fixed order and the first one that produces a response
ends the dispatch:

1. site gate      - non-editors on the admin site go to the public site
2. redirects      - configured exact-match redirects
3. attachments    - live attachment files that exist on disk
4. access gate    - page resolution and view permission
5. page mode      - edit/view mode, persisted in the session
6. caching        - cache eligibility, cache hit or render and store

Stages only raise. Failures are caught once, here, and handed to
ErrorFallback.
"""

import logging
from dataclasses import replace
from pathlib import Path

from pagestage.core.access import AccessGate
from pagestage.core.attachments import AttachmentStreamer
from pagestage.core.caching import CachePolicy, PageCache
from pagestage.core.context import DispatchRequest, RequestContext
from pagestage.core.errors import DispatchError, Err, Ok, Outcome, ServerError
from pagestage.core.fallback import ErrorFallback, ErrorPages
from pagestage.core.hooks import PrepareHookRegistry
from pagestage.core.mode import PageModeResolver
from pagestage.core.paths import construct_path
from pagestage.core.redirects import RedirectLookup
from pagestage.core.renderer import Renderer
from pagestage.core.responses import RenderedPage, Response
from pagestage.core.site import SiteGate
from pagestage.core.store import ContentStore

logger = logging.getLogger(__name__)


class RequestPipeline:
    """Resolves a content path to exactly one response."""

    def __init__(
        self,
        store: ContentStore,
        renderer: Renderer,
        *,
        attachments_dir: Path,
        cache: PageCache | None = None,
        hooks: PrepareHookRegistry | None = None,
        error_pages: ErrorPages | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            store: Content store for pages, attachments and redirects
            renderer: Renderer for pages and error pages
            attachments_dir: Root directory of attachment files
            cache: Page cache; None disables caching
            hooks: Registry of ``prepare_with`` hooks
            error_pages: Error page paths and escalation flags
        """
        self._renderer = renderer
        self._cache = cache
        self._hooks = hooks or PrepareHookRegistry()
        self._site_gate = SiteGate(caching_enabled=cache is not None)
        self._redirects = RedirectLookup(store)
        self._attachments = AttachmentStreamer(store, attachments_dir)
        self._access = AccessGate(store)
        self._cache_policy = CachePolicy()
        self._fallback = ErrorFallback(store, renderer, error_pages)

    @property
    def cache(self) -> PageCache | None:
        """Page cache, or None when caching is disabled."""
        return self._cache

    @property
    def hooks(self) -> PrepareHookRegistry:
        """Registry of pre-render hooks."""
        return self._hooks

    def dispatch(self, request: DispatchRequest) -> Response:
        """Dispatch a request.

        Args:
            request: Dispatch inputs

        Returns:
            Redirect, file stream, rendered page or raw error
        """
        match self._run(request):
            case Ok(response):
                return response
            case Err(error, context):
                return self._fallback.recover(error, request, context)

    def _run(self, request: DispatchRequest) -> Outcome:
        context = RequestContext(path=construct_path(request.segments)).with_params(request.params)
        try:
            site = self._site_gate.check(
                request.principal,
                admin_site=request.admin_site,
                public_url=request.public_url,
            )
            if site.redirect is not None:
                return Ok(site.redirect)
            context = replace(context, show_toolbar=site.show_toolbar)

            redirect = self._redirects.lookup(context.path)
            if redirect is not None:
                return Ok(redirect)

            attachment = self._attachments.find(request.segments, context.path)
            if attachment is not None:
                context = replace(context, attachment=attachment)
                stream = self._attachments.stream(attachment, context.path, request.principal)
                if stream is not None:
                    return Ok(stream)

            page = self._access.resolve(context.path, request.principal, request.session)
            context = replace(context, page=page)

            mode = PageModeResolver(request.session).resolve(
                request.principal,
                context.params,
                show_toolbar=context.show_toolbar,
            )
            context = replace(context, mode=mode)

            decision = self._cache_policy.decide(request.principal, page, context.params)
            context = replace(context, cache_eligible=decision.eligible)
            return Ok(self._render(context))
        except DispatchError as e:
            return Err(e, context)
        except Exception as e:
            logger.exception(f"Unhandled error while dispatching {context.path}")
            error = ServerError(str(e) or type(e).__name__)
            error.__cause__ = e
            return Err(error, context)

    def _render(self, context: RequestContext) -> RenderedPage:
        if context.cache_eligible and self._cache is not None:
            cached = self._cache.get(context.path)
            if cached is not None:
                return RenderedPage(
                    html=cached,
                    layout=context.page.layout if context.page else "",
                    cache_eligible=True,
                    from_cache=True,
                )

        context = context.with_params(self._hooks.prepare(context.params))
        rendered = self._renderer.render(context)

        if context.cache_eligible and self._cache is not None:
            self._cache.set(context.path, rendered.html)
        return rendered
