"""Application keys for type-safe app configuration access."""

from aiohttp import web

from mngr.config import Config
from mngr.core.storage import PageStore
from mngr.middleware import Dispatcher

config_key = web.AppKey("config", Config)
store_key = web.AppKey("store", PageStore)
dispatcher_key = web.AppKey("dispatcher", Dispatcher)
