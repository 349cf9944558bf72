"""aiohttp server for mngr.

Application factory and route registration.
"""

import logging

import aiohttp_jinja2
import jinja2
from aiohttp import web

from mngr.api.folders import create_folders_routes
from mngr.api.pages import create_pages_routes
from mngr.app_keys import config_key, dispatcher_key, store_key
from mngr.config import Config
from mngr.core.storage import PageStore
from mngr.handler import Outcome, Responded, plain_text, redirect
from mngr.logs import setup_logging
from mngr.middleware import Dispatcher


async def index(request: web.Request) -> Outcome:
    """Send the bare root to the data root listing."""
    return Responded(redirect("/list/"))


async def not_found(request: web.Request) -> Outcome:
    """Answer well-formed paths that no route serves for this method."""
    return Responded(plain_text("not found", status=404))


def create_app(config: Config, *, access_log: logging.Logger | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        access_log: Logger for per-request records (default: "mngr.access")

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    store = PageStore(config.data.root)
    env = aiohttp_jinja2.setup(app, loader=jinja2.PackageLoader("mngr", "templates"))
    dispatch = Dispatcher(env, access_log)

    app[config_key] = config
    app[store_key] = store
    app[dispatcher_key] = dispatch

    app.router.add_get("/", dispatch(index, validate=False))
    app.router.add_routes(create_pages_routes(app))
    app.router.add_routes(create_folders_routes(app))

    # Catch-all must be last: malformed paths get a logged 400 from validation
    app.router.add_route("*", "/{tail:.*}", dispatch(not_found))

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    access_log = setup_logging(config.logging)
    app = create_app(config, access_log=access_log)
    web.run_app(app, host=config.server.host, port=config.server.port, access_log=None)
