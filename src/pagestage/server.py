"""aiohttp server for Pagestage.

Application factory and route registration.
"""

import logging

from aiohttp import web

from pagestage.api.content import create_content_routes
from pagestage.app_keys import admin_host_prefix_key, pipeline_key, session_codec_key, store_key
from pagestage.config import Config
from pagestage.core.caching import PageCache
from pagestage.core.fallback import ErrorPages
from pagestage.core.hooks import PrepareHookRegistry
from pagestage.core.pipeline import RequestPipeline
from pagestage.core.renderer import LayoutRenderer
from pagestage.core.store import MemoryContentStore
from pagestage.web.session import SessionCodec

logger = logging.getLogger(__name__)


def create_pipeline(
    config: Config,
    store: MemoryContentStore,
    *,
    hooks: PrepareHookRegistry | None = None,
) -> RequestPipeline:
    """Build the dispatch pipeline from configuration.

    Args:
        config: Application configuration
        store: Content store
        hooks: Registry of ``prepare_with`` hooks

    Returns:
        Configured RequestPipeline
    """
    errors = config.errors
    return RequestPipeline(
        store,
        LayoutRenderer(config.content.layouts_dir),
        attachments_dir=config.content.attachments_dir,
        cache=PageCache(config.cache.cache_dir) if config.cache.enabled else None,
        hooks=hooks,
        error_pages=ErrorPages(
            not_found=errors.not_found,
            access_denied=errors.access_denied,
            server_error=errors.server_error,
            raw_errors_for_editors=errors.raw_errors_for_editors,
            raw_errors_on_admin_site=errors.raw_errors_on_admin_site,
        ),
    )


def create_app(
    config: Config,
    *,
    store: MemoryContentStore | None = None,
    hooks: PrepareHookRegistry | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        store: Content store; loaded from the configured manifest if None
        hooks: Registry of ``prepare_with`` hooks

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    if store is None:
        store = MemoryContentStore.load(config.content.manifest)

    app[store_key] = store
    app[pipeline_key] = create_pipeline(config, store, hooks=hooks)
    app[session_codec_key] = SessionCodec(config.session.secret, config.session.cookie_name)
    app[admin_host_prefix_key] = config.server.admin_host_prefix

    # Catch-all content route
    app.router.add_routes(create_content_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Serving content from {config.content.manifest}")
    web.run_app(app, host=config.server.host, port=config.server.port)
