"""Routes serving the htmx browser page and its fragments."""
from __future__ import annotations

from pathlib import Path
from typing import Dict

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from file_browser.api.dependencies import BrowserContext, get_browser_context
from file_browser.api.routes.browser import TRIGGER_HEADER
from file_browser.models import (
    CommandResult,
    CreateFolder,
    ListDirectory,
    Navigate,
    Preview,
    RelocateShowcase,
    RenameShowcase,
    ToggleMoveMode,
)
from file_browser.services.browser_engine import NAVIGATE, PREVIEW, RELOCATE, entry_action
from file_browser.services.path_resolver import encode_token
from file_browser.services.utils.formatting import format_size

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES = Jinja2Templates(directory=str(BASE_DIR / "templates"))
TEMPLATES.env.filters["filesize"] = format_size

# Form endpoint each entry action posts to.
ACTION_URLS: Dict[str, str] = {
    NAVIGATE: "/select_location",
    RELOCATE: "/movefile",
    PREVIEW: "/show",
}

router = APIRouter()


def _with_events(response: Response, result: CommandResult) -> Response:
    if result.events:
        response.headers[TRIGGER_HEADER] = ", ".join(result.events)
    return response


def _fragment(request: Request, name: str, context: dict | None = None) -> HTMLResponse:
    response = TEMPLATES.TemplateResponse(request, name, context or {})
    response.headers["Cache-Control"] = "no-store"
    return response


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, context: BrowserContext = Depends(get_browser_context)) -> HTMLResponse:
    """Render the browser page; the first visit pins the session to the root."""

    await context.snapshot()
    return _fragment(request, "index.html")


@router.get("/dirs", response_class=HTMLResponse)
async def dirs(request: Request, context: BrowserContext = Depends(get_browser_context)) -> HTMLResponse:
    result = await context.run(ListDirectory())
    listing = result.listing
    mode = listing.interaction_mode
    return _fragment(
        request,
        "partials/listing.html",
        {
            "move_mode": listing.move_mode,
            "directories": [(entry, entry_action(entry, mode)) for entry in listing.directories],
            "files": [(entry, entry_action(entry, mode)) for entry in listing.files],
            "action_urls": ACTION_URLS,
        },
    )


@router.get("/search", response_class=HTMLResponse)
async def search(request: Request, context: BrowserContext = Depends(get_browser_context)) -> HTMLResponse:
    state = await context.snapshot()
    return _fragment(request, "partials/search_input.html", {"value": state["current_directory"]})


@router.post("/search")
async def submit_search(
    location: str = Form(...),
    context: BrowserContext = Depends(get_browser_context),
) -> Response:
    """Navigate to a typed location; typed text is plain, unlike listing tokens."""

    result = await context.run(Navigate(encode_token(location)))
    return _with_events(Response(status_code=200), result)


@router.get("/get_create_input", response_class=HTMLResponse)
async def get_create_input(request: Request) -> HTMLResponse:
    return _fragment(request, "partials/create_folder_input.html")


@router.get("/output_dir", response_class=HTMLResponse)
async def output_dir(request: Request) -> HTMLResponse:
    return _fragment(request, "partials/output_dir.html")


@router.get("/get_rename_input", response_class=HTMLResponse)
async def get_rename_input(
    request: Request,
    context: BrowserContext = Depends(get_browser_context),
) -> HTMLResponse:
    state = await context.snapshot()
    return _fragment(request, "partials/rename_input.html", {"value": state["showcase"] or ""})


@router.post("/select_location")
async def select_location(
    destination: str = Form(...),
    context: BrowserContext = Depends(get_browser_context),
) -> Response:
    result = await context.run(Navigate(destination))
    return _with_events(Response(status_code=200), result)


@router.post("/togglemove")
async def toggle_move(context: BrowserContext = Depends(get_browser_context)) -> Response:
    result = await context.run(ToggleMoveMode())
    return _with_events(Response(status_code=200), result)


@router.post("/show", response_class=HTMLResponse)
async def show(
    request: Request,
    destination: str = Form(...),
    context: BrowserContext = Depends(get_browser_context),
) -> HTMLResponse:
    result = await context.run(Preview(destination))
    response = _fragment(request, "partials/preview.html", {"preview": result.preview})
    return _with_events(response, result)


@router.post("/create_folder")
async def create_folder(
    folder_name: str = Form(""),
    context: BrowserContext = Depends(get_browser_context),
) -> Response:
    result = await context.run(CreateFolder(folder_name))
    return _with_events(Response(status_code=200), result)


@router.post("/rename_file")
async def rename_file(
    new_name: str = Form(""),
    context: BrowserContext = Depends(get_browser_context),
) -> Response:
    result = await context.run(RenameShowcase(encode_token(new_name)))
    return _with_events(Response(status_code=200), result)


@router.post("/movefile")
async def move_file(
    destination: str = Form(...),
    context: BrowserContext = Depends(get_browser_context),
) -> Response:
    result = await context.run(RelocateShowcase(destination))
    return _with_events(Response(status_code=200), result)
