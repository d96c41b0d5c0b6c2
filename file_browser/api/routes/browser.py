"""JSON endpoints for the session-scoped browser."""
from fastapi import APIRouter, Depends, Response

from file_browser.api.dependencies import BrowserContext, get_browser_context
from file_browser.models import (
    CommandResult,
    CreateFolder,
    DirectoryEntry,
    InteractionMode,
    ListDirectory,
    Listing,
    Navigate,
    Preview,
    RelocateShowcase,
    RenameShowcase,
    ToggleMoveMode,
)
from file_browser.schemas import (
    CommandResponse,
    EntryActionSchema,
    EntrySchema,
    FolderRequest,
    ListingResponse,
    LocationRequest,
    PreviewResponse,
    SessionStateResponse,
)
from file_browser.services.browser_engine import entry_action
from file_browser.services.utils.formatting import format_size, format_timestamp

router = APIRouter()

TRIGGER_HEADER = "HX-Trigger-After-Settle"


def _entry_schema(entry: DirectoryEntry, mode: InteractionMode) -> EntrySchema:
    action = entry_action(entry, mode)
    return EntrySchema(
        name=entry.display_name,
        path=str(entry.path),
        kind=entry.kind,
        is_parent=entry.is_parent,
        modified=format_timestamp(entry.modified_time) or None,
        size=format_size(entry.size_bytes) or None,
        size_bytes=entry.size_bytes,
        preview_kind=entry.preview_kind,
        action=EntryActionSchema(command=action.command, token=action.token) if action else None,
    )


def listing_response(listing: Listing) -> ListingResponse:
    mode = listing.interaction_mode
    return ListingResponse(
        current_path=str(listing.directory),
        move_mode=listing.move_mode,
        interaction_mode=mode,
        directories=[_entry_schema(entry, mode) for entry in listing.directories],
        files=[_entry_schema(entry, mode) for entry in listing.files],
        # The parent entry is not a real folder.
        directory_count=len(listing.directories) - 1,
        file_count=len(listing.files),
    )


def _acknowledge(result: CommandResult, response: Response) -> CommandResponse:
    if result.events:
        response.headers[TRIGGER_HEADER] = ", ".join(result.events)
    preview = None
    if result.preview is not None:
        preview = PreviewResponse(
            kind=result.preview.kind,
            path=str(result.preview.path),
            served_url=result.preview.served_url,
            size_hint=result.preview.size_hint,
        )
    return CommandResponse(
        success=True,
        message=result.message,
        refresh=result.refresh,
        events=result.events,
        preview=preview,
    )


@router.get("/session", response_model=SessionStateResponse, summary="Current session state")
async def read_session(context: BrowserContext = Depends(get_browser_context)) -> SessionStateResponse:
    return SessionStateResponse(**await context.snapshot())


@router.get("/listing", response_model=ListingResponse, summary="List the current directory")
async def list_directory(context: BrowserContext = Depends(get_browser_context)) -> ListingResponse:
    result = await context.run(ListDirectory())
    return listing_response(result.listing)


@router.post("/navigate", response_model=CommandResponse, summary="Change the current directory")
async def navigate(
    payload: LocationRequest,
    response: Response,
    context: BrowserContext = Depends(get_browser_context),
) -> CommandResponse:
    result = await context.run(Navigate(payload.destination))
    return _acknowledge(result, response)


@router.post("/toggle-move", response_model=CommandResponse, summary="Toggle move mode")
async def toggle_move(
    response: Response,
    context: BrowserContext = Depends(get_browser_context),
) -> CommandResponse:
    result = await context.run(ToggleMoveMode())
    return _acknowledge(result, response)


@router.post("/preview", response_model=CommandResponse, summary="Select a file as the showcase")
async def preview(
    payload: LocationRequest,
    response: Response,
    context: BrowserContext = Depends(get_browser_context),
) -> CommandResponse:
    result = await context.run(Preview(payload.destination))
    return _acknowledge(result, response)


@router.post("/folders", response_model=CommandResponse, summary="Create a folder")
async def create_folder(
    payload: FolderRequest,
    response: Response,
    context: BrowserContext = Depends(get_browser_context),
) -> CommandResponse:
    result = await context.run(CreateFolder(payload.folder_name))
    return _acknowledge(result, response)


@router.post("/rename", response_model=CommandResponse, summary="Rename the showcase file")
async def rename_showcase(
    payload: LocationRequest,
    response: Response,
    context: BrowserContext = Depends(get_browser_context),
) -> CommandResponse:
    result = await context.run(RenameShowcase(payload.destination))
    return _acknowledge(result, response)


@router.post("/move", response_model=CommandResponse, summary="Move the showcase into a folder")
async def relocate_showcase(
    payload: LocationRequest,
    response: Response,
    context: BrowserContext = Depends(get_browser_context),
) -> CommandResponse:
    result = await context.run(RelocateShowcase(payload.destination))
    return _acknowledge(result, response)
