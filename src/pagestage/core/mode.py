"""Edit/view rendering mode, remembered for the session."""

from collections.abc import Mapping
from typing import Any

from pagestage.core.principal import Principal
from pagestage.core.session import PAGE_MODE_KEY, SessionStore
from pagestage.core.types import EDIT_CONTENT, RenderMode


class PageModeResolver:
    """Chooses the render mode and persists it in the session."""

    def __init__(self, session: SessionStore) -> None:
        self._session = session

    def resolve(
        self,
        principal: Principal,
        params: Mapping[str, Any],
        *,
        show_toolbar: bool,
    ) -> RenderMode:
        """Determine the render mode for this request.

        Callers with the toolbar and edit capability get the requested mode,
        else the mode from their previous request, else edit mode. Everybody
        else renders in view mode.
        """
        if show_toolbar and principal.able_to(EDIT_CONTENT):
            mode = (
                _parse_mode(params.get("mode"))
                or _parse_mode(self._session.get(PAGE_MODE_KEY))
                or RenderMode.EDIT
            )
        else:
            mode = RenderMode.VIEW

        self._session.set(PAGE_MODE_KEY, mode.value)
        return mode


def _parse_mode(value: object) -> RenderMode | None:
    if not isinstance(value, str):
        return None
    try:
        return RenderMode(value)
    except ValueError:
        return None
