"""Dispatch failure taxonomy and the tagged dispatch outcome.

Stages raise DispatchError subclasses. The pipeline catches them once and
turns them into an ``Err`` outcome, which is matched exactly once to
decide between the response and error recovery.
"""

from dataclasses import dataclass

from pagestage.core.context import RequestContext
from pagestage.core.responses import Response


class DispatchError(Exception):
    """Base class for conditions that end normal dispatch."""

    status = 500
    error_page = "server_error"
    title = "Server Error"


class NotFound(DispatchError):
    """No page matches the path, or the page is not visible publicly."""

    status = 404
    error_page = "not_found"
    title = "Not Found"


class AccessDenied(DispatchError):
    """The entity exists but the caller may not view it."""

    status = 403
    error_page = "access_denied"
    title = "Access Denied"


class ServerError(DispatchError):
    """Any other failure, including I/O errors while streaming or rendering."""


@dataclass(frozen=True)
class Ok:
    """Dispatch produced a response."""

    response: Response


@dataclass(frozen=True)
class Err:
    """Dispatch failed; context is the state reached before the failure."""

    error: DispatchError
    context: RequestContext


Outcome = Ok | Err
