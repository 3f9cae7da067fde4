"""Content endpoint.

Adapts HTTP requests to the dispatch pipeline and its results back to
aiohttp responses.
"""

import re
from urllib.parse import quote
from collections.abc import Mapping
from typing import Any

from aiohttp import web

from pagestage.app_keys import admin_host_prefix_key, pipeline_key, session_codec_key, store_key
from pagestage.core.context import DispatchRequest
from pagestage.core.principal import ANONYMOUS, User
from pagestage.core.responses import FileStream, RawError, RedirectResponse, RenderedPage, Response
from pagestage.core.session import USER_KEY, SessionStore
from pagestage.core.store import MemoryContentStore

_NESTED_PARAM = re.compile(r"^(?P<name>\w+)\[(?P<key>\w+)\]$")


def create_content_routes() -> list[web.RouteDef]:
    return [web.get("/{path:.*}", get_content)]


async def get_content(request: web.Request) -> web.Response:
    pipeline = request.app[pipeline_key]
    codec = request.app[session_codec_key]

    session = codec.load(request)
    admin_site, public_url = _site_info(request, request.app[admin_host_prefix_key])

    result = pipeline.dispatch(
        DispatchRequest(
            segments=[s for s in request.match_info["path"].split("/") if s],
            params=parse_params(request.query),
            principal=_current_principal(request.app[store_key], session),
            session=session,
            admin_site=admin_site,
            public_url=public_url,
        )
    )

    response = to_http_response(result)
    codec.save(response, session)
    return response


def parse_params(query: Mapping[str, str]) -> dict[str, Any]:
    """Collect query parameters, nesting ``name[key]`` pairs.

    ``prepare_with[content_type]=Post&prepare_with[method]=by_slug``
    becomes ``{"prepare_with": {"content_type": "Post", "method": "by_slug"}}``.
    """
    params: dict[str, Any] = {}
    for name, value in query.items():
        match = _NESTED_PARAM.match(name)
        if match is None:
            params[name] = value
            continue
        nested = params.setdefault(match["name"], {})
        if isinstance(nested, dict):
            nested[match["key"]] = value
    return params


def to_http_response(result: Response) -> web.Response:
    """Convert a dispatch result into an aiohttp response."""
    match result:
        case RedirectResponse(location=location):
            return web.Response(status=302, headers={"Location": location})
        case FileStream():
            return web.Response(
                body=result.body,
                content_type=result.content_type,
                headers={
                    "Content-Disposition": _content_disposition(result),
                },
            )
        case RenderedPage():
            return web.Response(
                text=result.html,
                status=result.status,
                content_type="text/html",
                headers={"X-Cache": _cache_header(result)},
            )
        case RawError():
            return web.Response(
                text=f"{result.title}\n\n{result.detail}",
                status=result.status,
                content_type="text/plain",
            )
    raise TypeError(f"Unknown dispatch result: {result!r}")


def _content_disposition(stream: FileStream) -> str:
    printable = "".join(c for c in stream.file_name if c.isprintable())
    fallback = printable.replace("\\", "\\\\").replace('"', '\\"')
    return (
        f'{stream.disposition}; filename="{fallback}"; '
        f"filename*=UTF-8''{quote(stream.file_name)}"
    )


def _cache_header(page: RenderedPage) -> str:
    if page.from_cache:
        return "HIT"
    return "MISS" if page.cache_eligible else "BYPASS"


def _current_principal(store: MemoryContentStore, session: SessionStore) -> User:
    user_id = session.get(USER_KEY)
    if not isinstance(user_id, str):
        return ANONYMOUS
    return store.find_user(user_id) or ANONYMOUS


def _site_info(request: web.Request, admin_host_prefix: str) -> tuple[bool, str]:
    host = request.url.host or ""
    if not admin_host_prefix or not host.startswith(admin_host_prefix):
        return False, str(request.url)
    public_url = request.url.with_host(host[len(admin_host_prefix) :])
    return True, str(public_url)
