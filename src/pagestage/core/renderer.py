"""Page rendering into layouts.

The pipeline only depends on the Renderer protocol. LayoutRenderer converts
the page body from markdown and substitutes it into a layout template:

    layouts/
    ├── default.html
    └── error.html

Layouts are ``string.Template`` files. Available placeholders:
``$title``, ``$content``, ``$mode``, ``$path``, ``$content_for_<name>``
for every captured fragment and ``$param_<name>`` for string parameters
other than the dispatch controls (``mode``, ``cms_cache``, ``prepare_with``).
Unknown placeholders are left as-is.
"""

import html
from pathlib import Path
from string import Template
from typing import Protocol

import mistune

from pagestage.core.context import RequestContext
from pagestage.core.responses import RenderedPage
from pagestage.core.types import CONTROL_PARAMS

DEFAULT_LAYOUT = Template(
    """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>$title</title></head>
<body>
$content_for_toolbar
<main>
$content
</main>
</body>
</html>
"""
)


class Renderer(Protocol):
    """Turns a resolved page into HTML."""

    def render(self, context: RequestContext, *, status: int = 200) -> RenderedPage: ...


class LayoutRenderer:
    """Renders markdown page bodies into layout templates."""

    def __init__(self, layouts_dir: Path | None = None) -> None:
        """Initialize renderer.

        Args:
            layouts_dir: Directory of ``<layout>.html`` templates. If None,
                         every page uses the built-in layout.
        """
        self._layouts_dir = layouts_dir
        self._markdown = mistune.create_markdown()

    @property
    def layouts_dir(self) -> Path | None:
        """Directory containing layout templates."""
        return self._layouts_dir

    def render(self, context: RequestContext, *, status: int = 200) -> RenderedPage:
        """Render the context's page with its layout.

        Args:
            context: Request context with a resolved page
            status: HTTP status for the rendered page

        Returns:
            RenderedPage with the final HTML

        Raises:
            ValueError: If the context has no page
            FileNotFoundError: If the page's layout template doesn't exist
        """
        page = context.page
        if page is None:
            raise ValueError(f"No page resolved for '{context.path}'")

        context.capture("main", str(self._markdown(page.body)))
        if context.show_toolbar:
            context.capture("toolbar", _toolbar(context))

        layout = self._load_layout(page.layout)
        values = {
            "title": html.escape(page.title),
            "content": context.fragments.get("main", ""),
            "mode": context.mode.value,
            "path": html.escape(context.path),
        }
        values["content_for_toolbar"] = ""
        for name, fragment in context.fragments.items():
            values[f"content_for_{name}"] = fragment
        for name, value in context.params.items():
            if isinstance(value, str) and name not in CONTROL_PARAMS:
                values[f"param_{name}"] = html.escape(value)

        return RenderedPage(
            html=layout.safe_substitute(values),
            layout=page.layout,
            status=status,
            mode=context.mode,
            cache_eligible=context.cache_eligible,
        )

    def _load_layout(self, name: str) -> Template:
        if self._layouts_dir is None:
            return DEFAULT_LAYOUT
        layout_path = self._layouts_dir / f"{name}.html"
        if not layout_path.exists():
            raise FileNotFoundError(f"Layout not found: {layout_path}")
        return Template(layout_path.read_text(encoding="utf-8"))


def _toolbar(context: RequestContext) -> str:
    return (
        f'<div class="pagestage-toolbar" data-mode="{context.mode.value}" '
        f'data-path="{html.escape(context.path)}"></div>\n'
    )
