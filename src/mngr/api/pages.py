"""Page endpoints: view, edit and save."""

from aiohttp import web

from mngr.app_keys import dispatcher_key, store_key
from mngr.context import require_validated
from mngr.core.errors import StorageError
from mngr.core.storage import PageStore
from mngr.handler import Failed, Handler, Outcome, Responded, TemplateInfo, redirect, render


def create_pages_routes(app: web.Application) -> list[web.RouteDef]:
    dispatch = app[dispatcher_key]
    store = app[store_key]
    return [
        web.get("/view/{path:.*}", dispatch(make_view_handler(store))),
        web.get("/edit/{path:.*}", dispatch(make_edit_handler(store))),
        web.post("/save/{path:.*}", dispatch(make_save_handler(store))),
    ]


def make_view_handler(store: PageStore) -> Handler:
    """Display a page, or send the client to the editor if it does not exist."""

    async def view(request: web.Request) -> Outcome:
        valid = require_validated(request)
        try:
            page = store.load_page(valid)
        except StorageError:
            return Responded(redirect(f"/edit/{valid.path}"))
        return Responded(
            render(request, "view.html", {"info": TemplateInfo.from_valid(valid), "page": page})
        )

    return view


def make_edit_handler(store: PageStore) -> Handler:
    """Show the edit form. A missing page is edited as an empty one."""

    async def edit(request: web.Request) -> Outcome:
        valid = require_validated(request)
        try:
            page = store.load_page(valid)
        except StorageError:
            page = store.new_page(valid)
        return Responded(
            render(request, "edit.html", {"info": TemplateInfo.from_valid(valid), "page": page})
        )

    return edit


def make_save_handler(store: PageStore) -> Handler:
    """Persist the submitted ``body`` form field and redirect to the view."""

    async def save(request: web.Request) -> Outcome:
        valid = require_validated(request)
        form = await request.post()
        body = form.get("body", "")
        if not isinstance(body, str):
            return Failed(ValueError("body must be a text field"))

        page = store.new_page(valid, body.encode("utf-8"))
        try:
            store.save(page)
        except StorageError as e:
            return Failed(e)
        return Responded(redirect(f"/view/{page.path}"))

    return save
