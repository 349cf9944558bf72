"""Request-scoped context.

The dispatcher stores the ValidatedURL and the template environment on the
aiohttp request before a handler runs. Each request has its own mapping, so
no locking is needed. Entries are write-once.
"""

from typing import Any

import jinja2
from aiohttp import web

from mngr.core.errors import ContextError
from mngr.core.types import ValidatedURL

VALIDATED_KEY = "mngr.validated"
RENDERER_KEY = "mngr.renderer"


def with_validated(request: web.Request, valid: ValidatedURL) -> None:
    _set_once(request, VALIDATED_KEY, valid)


def validated_from(request: web.Request) -> ValidatedURL | None:
    """Return the request's ValidatedURL, or None if validation has not run."""
    return request.get(VALIDATED_KEY)


def require_validated(request: web.Request) -> ValidatedURL:
    """Return the request's ValidatedURL.

    Raises:
        ContextError: If the request was dispatched without validation
    """
    valid = validated_from(request)
    if valid is None:
        raise ContextError(f"{request.path} reached a handler without validation")
    return valid


def with_renderer(request: web.Request, env: jinja2.Environment) -> None:
    _set_once(request, RENDERER_KEY, env)


def renderer_from(request: web.Request) -> jinja2.Environment | None:
    return request.get(RENDERER_KEY)


def require_renderer(request: web.Request) -> jinja2.Environment:
    """Return the request's template environment.

    Raises:
        ContextError: If no environment was attached to the request
    """
    env = renderer_from(request)
    if env is None:
        raise ContextError(f"{request.path} has no template environment")
    return env


def _set_once(request: web.Request, key: str, value: Any) -> None:
    if key in request:
        raise ContextError(f"{key} is already set for {request.path}")
    request[key] = value
