"""Folder endpoints: listing, folder creation and the new file/folder form."""

import re

from aiohttp import web

from mngr.app_keys import config_key, dispatcher_key, store_key
from mngr.context import require_validated
from mngr.core.errors import StorageError, ValidationError
from mngr.core.storage import PageStore, filter_entries
from mngr.core.types import join_path
from mngr.core.validation import parse_dir
from mngr.handler import (
    Failed,
    Handler,
    Outcome,
    Responded,
    TemplateInfo,
    plain_text,
    redirect,
    render,
)

NEW_KINDS = frozenset({"file", "folder"})


def create_folders_routes(app: web.Application) -> list[web.RouteDef]:
    dispatch = app[dispatcher_key]
    store = app[store_key]
    name_pattern = app[config_key].names.pattern
    list_dir = dispatch(make_list_handler(store))
    folder = dispatch(make_folder_handler(store))
    return [
        web.get("/list", list_dir),
        web.get("/list/{path:.*}", list_dir),
        web.get("/folder/{path:.*}", folder),
        web.post("/folder/{path:.*}", folder),
        web.get("/new/{kind:.*}", dispatch(make_new_handler(name_pattern))),
    ]


def make_list_handler(store: PageStore) -> Handler:
    """List the files and folders of the validated directory."""

    async def list_dir(request: web.Request) -> Outcome:
        valid = require_validated(request)
        try:
            listing = filter_entries(store.list_dir(valid.dir))
        except StorageError as e:
            return Failed(e)
        data = {
            "info": TemplateInfo.from_valid(valid),
            "files": listing.files,
            "folders": listing.folders,
        }
        return Responded(render(request, "list.html", data))

    return list_dir


def make_folder_handler(store: PageStore) -> Handler:
    """Create a folder, then go back to the listing of its parent."""

    async def folder(request: web.Request) -> Outcome:
        valid = require_validated(request)
        try:
            store.new_folder(valid)
        except StorageError as e:
            return Failed(e)
        return Responded(redirect(f"/list/{valid.dir}"))

    return folder


def make_new_handler(name_pattern: re.Pattern[str]) -> Handler:
    """Ask for the name of a new file or folder.

    With a valid ``name`` query parameter the client is sent straight to the
    editor (files) or the folder creation route (folders). Otherwise the form
    is rendered, flagged invalid when a name was given but rejected.
    """

    async def new(request: web.Request) -> Outcome:
        valid = require_validated(request)
        if valid.value not in NEW_KINDS:
            return Responded(plain_text("bad request", status=400))

        name = request.query.get("name", "")
        path = request.query.get("path", "")
        is_valid = True
        if name:
            is_valid = name_pattern.fullmatch(name) is not None
            try:
                target = join_path(parse_dir(path), name)
            except ValidationError:
                is_valid = False
            if is_valid:
                route = "folder" if valid.value == "folder" else "edit"
                return Responded(redirect(f"/{route}/{target}"))

        data = {
            "info": TemplateInfo.from_valid(valid),
            "kind": valid.value,
            "path": path,
            "is_valid": is_valid,
        }
        return Responded(render(request, "new.html", data))

    return new
