"""Handler contract.

A handler is an async callable taking the aiohttp request and returning an
Outcome:

- ``Responded(response)``: the handler built the complete response and the
  dispatcher sends it as is.
- ``Failed(error)``: the handler built nothing; the dispatcher answers with a
  500 carrying the error text.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from aiohttp import web

from mngr.context import require_renderer
from mngr.core.types import Breadcrumb, ValidatedURL, build_breadcrumbs


@dataclass(frozen=True)
class Responded:
    """Handler produced the full response."""

    response: web.StreamResponse

    @property
    def status(self) -> int:
        return self.response.status


@dataclass(frozen=True)
class Failed:
    """Handler produced no response and reports an error."""

    error: Exception


Outcome = Responded | Failed
Handler = Callable[[web.Request], Awaitable[Outcome]]


@dataclass(frozen=True)
class TemplateInfo:
    """Data common to every template, derived from the ValidatedURL."""

    command: str
    dir: str
    value: str
    path: str
    breadcrumbs: list[Breadcrumb] = field(default_factory=list)

    @classmethod
    def from_valid(cls, valid: ValidatedURL) -> TemplateInfo:
        return cls(
            command=valid.command,
            dir=valid.dir,
            value=valid.value,
            path=valid.path,
            breadcrumbs=build_breadcrumbs(valid.dir),
        )

    @property
    def prefix(self) -> str:
        """Directory with a trailing slash, ready to prepend a name to."""
        return f"{self.dir}/" if self.dir else ""


def plain_text(text: str, *, status: int) -> web.Response:
    return web.Response(status=status, text=text, content_type="text/plain")


def redirect(location: str) -> web.Response:
    """Build a 302 response to ``location``."""
    return web.Response(status=302, headers={"Location": location})


def render(request: web.Request, template_name: str, data: dict[str, Any]) -> web.Response:
    """Render a template with the request's environment into a 200 response."""
    template = require_renderer(request).get_template(template_name)
    return web.Response(text=template.render(data), content_type="text/html")
