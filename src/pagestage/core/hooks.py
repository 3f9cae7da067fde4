"""Pre-render parameter hooks.

A request may name a hook with ``prepare_with[content_type]`` and
``prepare_with[method]``. Hooks are looked up in an explicit registry by
that pair and get a chance to modify the request parameters before the
page renders (e.g. turning an SEO-friendly path into record ids). Unknown
hooks are ignored.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

PrepareHook = Callable[[dict[str, Any]], None]


class PrepareHookRegistry:
    """Mapping of ``(content_type, method)`` to pre-render hooks."""

    def __init__(self) -> None:
        self._hooks: dict[tuple[str, str], PrepareHook] = {}

    def register(self, content_type: str, method: str, hook: PrepareHook) -> None:
        """Register a hook under a content type and method name."""
        self._hooks[(content_type, method)] = hook

    def hook(self, content_type: str, method: str) -> Callable[[PrepareHook], PrepareHook]:
        """Decorator form of register()."""

        def decorator(func: PrepareHook) -> PrepareHook:
            self.register(content_type, method, func)
            return func

        return decorator

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._hooks

    def prepare(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Run the hook named by ``prepare_with``, if any.

        Args:
            params: Request parameters

        Returns:
            A new parameter dict, possibly modified by the hook
        """
        prepared = dict(params)
        prepare_with = prepared.get("prepare_with")
        if not isinstance(prepare_with, Mapping):
            logger.debug("No Prepare Method")
            return prepared

        content_type = prepare_with.get("content_type")
        method = prepare_with.get("method")
        if not content_type or not method:
            logger.debug("No Prepare Method")
            return prepared

        hook = self._hooks.get((content_type, method))
        if hook is None:
            logger.debug(f"{content_type} has no prepare method {method}")
            return prepared

        logger.debug(f"Calling {content_type}.{method} prepare method")
        hook(prepared)
        return prepared
