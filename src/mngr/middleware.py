"""Dispatch and access logging.

``Dispatcher`` adapts a mngr Handler to an aiohttp request handler. For every
request it validates the path, fills the request context, runs the handler,
turns a ``Failed`` outcome into a plain-text 500 and writes exactly one
access-log record.
"""

import functools
import logging
import time
from collections.abc import Awaitable, Callable

import jinja2
from aiohttp import web

from mngr.context import with_renderer, with_validated
from mngr.core.errors import ValidationError
from mngr.core.validation import parse_url
from mngr.handler import Failed, Handler, Outcome, Responded, plain_text

ACCESS_LOGGER = "mngr.access"

logger = logging.getLogger(__name__)

WebHandler = Callable[[web.Request], Awaitable[web.StreamResponse]]


class Dispatcher:
    """Wraps Handlers into aiohttp handlers sharing one environment and log."""

    def __init__(
        self,
        env: jinja2.Environment,
        access_log: logging.Logger | None = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            env: Template environment attached to every request
            access_log: Logger receiving one record per request
                        (default: the "mngr.access" logger)
        """
        self._env = env
        self._access_log = access_log or logging.getLogger(ACCESS_LOGGER)

    def __call__(self, handler: Handler, *, validate: bool = True) -> WebHandler:
        """Wrap ``handler``.

        Args:
            handler: mngr Handler to run
            validate: Parse the request path into a ValidatedURL first.
                      Only routes that never address storage turn this off.
        """

        @functools.wraps(handler)
        async def serve(request: web.Request) -> web.StreamResponse:
            start = time.perf_counter()
            error: Exception | None = None
            try:
                outcome = await self._invoke(handler, request, validate=validate)
            except web.HTTPException as e:
                # aiohttp answers these itself, e.g. 413 for an oversized body
                self._log(request, time.perf_counter() - start, e.status, e)
                raise
            except ValidationError as e:
                response: web.StreamResponse = plain_text(f"bad request: {e}\n", status=400)
                error = e
            else:
                if isinstance(outcome, Failed):
                    error = outcome.error
                    response = plain_text(f"{error}\n", status=500)
                else:
                    response = outcome.response
            self._log(request, time.perf_counter() - start, response.status, error)
            return response

        return serve

    async def _invoke(self, handler: Handler, request: web.Request, *, validate: bool) -> Outcome:
        if validate:
            with_validated(request, parse_url(request.path))
        with_renderer(request, self._env)

        try:
            outcome = await handler(request)
        except web.HTTPException:
            raise
        except Exception as e:
            logger.exception(f"Unhandled error in {_name(handler)} for {request.path}")
            return Failed(e)

        if not isinstance(outcome, (Responded, Failed)):
            return Failed(TypeError(f"{_name(handler)} returned {outcome!r} instead of an outcome"))
        return outcome

    def _log(
        self,
        request: web.Request,
        elapsed: float,
        status: int,
        error: Exception | None,
    ) -> None:
        fields = {
            "remote": request.remote,
            "elapsed": elapsed,
            "status": status,
            "method": request.method,
            "path": request.path,
            "error": error,
        }
        try:
            self._access_log.info(
                f"{request.remote} {elapsed:0.3f}s {status} {request.method} {request.path} {error}",
                extra=fields,
            )
        except Exception:
            # Access logging is best-effort and never fails the request
            logger.debug(f"Access log write failed for {request.path}", exc_info=True)


def _name(handler: Handler) -> str:
    return getattr(handler, "__name__", repr(handler))
