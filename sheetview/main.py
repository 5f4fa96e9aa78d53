"""
FastAPI application exposing a ViewerSession to a display layer.

The app owns a single session. A client uploads workbook bytes, then drives
sheet selection, predicates, scope, case option and paging, reading back
the active page and summary counters after each call.

API Endpoints:
    - GET /health: Health check
    - POST /workbook: Upload and load a workbook
    - GET /stats: Summary counters
    - GET /page: The active page of filtered rows
    - POST /sheet: Select the active sheet
    - PUT /predicates/{slot}: Set predicate 1 or 2
    - DELETE /predicates: Clear both queries
    - PUT /scope: Search the active sheet or all sheets
    - PUT /ignore-case: Set the shared case option
    - POST /page/goto, /page/next, /page/previous: Navigate pages

Example:
    To run the server:
        uvicorn sheetview.main:app --reload

    Or programmatically:
        from sheetview.main import run_server
        run_server()
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Annotated, Any

import uvicorn
from fastapi import FastAPI, File, HTTPException, Path, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from sheetview import __version__
from sheetview.config import get_settings
from sheetview.exceptions.viewer_exceptions import NoWorkbookLoadedError, ViewerError
from sheetview.models.api_models import (
    ErrorResponse,
    GotoPageRequest,
    IgnoreCaseRequest,
    PageResponse,
    PredicateRequest,
    ScopeRequest,
    SelectSheetRequest,
)
from sheetview.models.workbook_models import SessionState, SessionStats
from sheetview.services.viewer_session import ViewerSession
from sheetview.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

viewer_session: ViewerSession | None = None

STATUS_CODES = {
    "PARSE_ERROR": 400,
    "INVALID_MATCH_MODE": 400,
    "UNKNOWN_SHEET": 404,
    "NO_WORKBOOK": 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Configures logging and creates the session on startup, drops it on
    shutdown.

    Args:
        app: The FastAPI application instance.
    """
    global viewer_session
    configure_logging(get_settings().log_level)
    viewer_session = ViewerSession()
    logger.info("Viewer session started", page_size=viewer_session.page_size)
    yield
    viewer_session = None


app = FastAPI(
    title="Spreadsheet Viewer Service",
    description="""
    Browse a workbook as a paginated grid and filter its rows.

    ## Features

    - **Load workbooks**: xlsx, xlsm, xlsb, xls and ods via python-calamine
    - **Two predicates**: contains, exact, startsWith, endsWith, wildcard (`*`)
    - **Scope**: filter the active sheet or every sheet at once
    - **Pagination**: fixed-size pages with clamped navigation
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid workbook or request"},
    404: {"model": ErrorResponse, "description": "Sheet not found"},
    409: {"model": ErrorResponse, "description": "No workbook loaded"},
}


def get_session() -> ViewerSession:
    """
    Get the viewer session instance.

    Returns:
        The global ViewerSession instance.

    Raises:
        HTTPException: If the session is not initialized.
    """
    if viewer_session is None:
        raise HTTPException(
            status_code=503,
            detail="Viewer session is not initialized",
        )
    return viewer_session


def to_http_exception(error: ViewerError) -> HTTPException:
    """
    Convert a ViewerError to an HTTPException with an ErrorResponse body.

    Args:
        error: The ViewerError to convert.

    Returns:
        HTTPException with the mapped status code.
    """
    return HTTPException(
        status_code=STATUS_CODES.get(error.error_code, 500),
        detail=ErrorResponse(
            error_code=error.error_code,
            message=error.message,
            details=error.details,
        ).model_dump(),
    )


def render_page(session: ViewerSession) -> PageResponse:
    """Render the session's active page as text rows."""
    return PageResponse.from_page(
        session.active_page(),
        column_count=session.stats().total_columns,
    )


@app.get(
    "/health",
    tags=["System"],
    summary="Health check",
    response_model=dict,
)
async def health_check() -> dict[str, Any]:
    """
    Check the health status of the service.

    Returns:
        Dictionary containing status and timestamp.
    """
    return {
        "status": "healthy",
        "service": "Spreadsheet Viewer Service",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.post(
    "/workbook",
    tags=["Workbook"],
    summary="Upload and load a workbook",
    response_model=SessionStats,
    responses={
        400: ERROR_RESPONSES[400],
        413: {"model": ErrorResponse, "description": "Upload too large"},
    },
)
async def upload_workbook(
    file: Annotated[UploadFile, File(description="Workbook file to load")],
) -> SessionStats:
    """
    Load an uploaded workbook into the session.

    The previous workbook, filters and page stay in place if the upload
    cannot be decoded.

    Args:
        file: The uploaded workbook.

    Returns:
        SessionStats for the newly loaded workbook.

    Raises:
        HTTPException: If the file is too large or cannot be parsed.
    """
    session = get_session()
    settings = get_settings()

    content = await file.read()
    if len(content) > settings.max_upload_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=ErrorResponse(
                error_code="UPLOAD_TOO_LARGE",
                message=f"Upload exceeds {settings.max_upload_size_mb} MB",
                details={"size": len(content), "limit": settings.max_upload_size_bytes},
            ).model_dump(),
        )

    try:
        session.load_workbook(content, source_name=file.filename)
    except ViewerError as e:
        logger.warning("Workbook upload rejected", source=file.filename, error=e.error_code)
        raise to_http_exception(e) from e

    return session.stats()


@app.get(
    "/stats",
    tags=["View"],
    summary="Summary counters",
    response_model=SessionStats,
)
async def get_stats() -> SessionStats:
    """Return the session's summary counters."""
    return get_session().stats()


@app.get(
    "/page",
    tags=["View"],
    summary="Active page of filtered rows",
    response_model=PageResponse,
    responses={409: ERROR_RESPONSES[409]},
)
async def get_page() -> PageResponse:
    """
    Return the active page rendered as text.

    Raises:
        HTTPException: If no workbook is loaded.
    """
    session = get_session()
    if session.state is SessionState.EMPTY:
        raise to_http_exception(NoWorkbookLoadedError("show a page"))
    return render_page(session)


@app.post(
    "/sheet",
    tags=["View"],
    summary="Select the active sheet",
    response_model=PageResponse,
    responses={404: ERROR_RESPONSES[404]},
)
async def select_sheet(request: SelectSheetRequest) -> PageResponse:
    """
    Switch the active sheet and return its first page.

    Raises:
        HTTPException: If the sheet does not exist.
    """
    session = get_session()
    try:
        session.select_sheet(request.name)
    except ViewerError as e:
        raise to_http_exception(e) from e
    return render_page(session)


@app.put(
    "/predicates/{slot}",
    tags=["Filter"],
    summary="Set a predicate",
    response_model=PageResponse,
    responses={400: ERROR_RESPONSES[400], 409: ERROR_RESPONSES[409]},
)
async def set_predicate(
    slot: Annotated[int, Path(ge=1, le=2, description="Predicate slot (1 or 2)")],
    request: PredicateRequest,
) -> PageResponse:
    """
    Set the mode and query of predicate 1 or 2 and return the first page.

    Raises:
        HTTPException: If no workbook is loaded.
    """
    session = get_session()
    try:
        session.set_predicate(slot, request.mode, request.query, request.case_sensitive)
    except ViewerError as e:
        raise to_http_exception(e) from e
    return await get_page()


@app.delete(
    "/predicates",
    tags=["Filter"],
    summary="Clear both queries",
    response_model=PageResponse,
    responses={409: ERROR_RESPONSES[409]},
)
async def clear_predicates() -> PageResponse:
    """Empty both queries and return the first page of the active sheet."""
    get_session().clear_filters()
    return await get_page()


@app.put(
    "/scope",
    tags=["Filter"],
    summary="Set the search scope",
    response_model=PageResponse,
    responses={409: ERROR_RESPONSES[409]},
)
async def set_scope(request: ScopeRequest) -> PageResponse:
    """Search every sheet or only the active one."""
    get_session().set_scope(request.all_sheets)
    return await get_page()


@app.put(
    "/ignore-case",
    tags=["Filter"],
    summary="Set the shared case option",
    response_model=PageResponse,
    responses={409: ERROR_RESPONSES[409]},
)
async def set_ignore_case(request: IgnoreCaseRequest) -> PageResponse:
    """Compare both predicates case-insensitively or not."""
    get_session().set_ignore_case(request.ignore_case)
    return await get_page()


@app.post(
    "/page/goto",
    tags=["View"],
    summary="Go to a page",
    response_model=PageResponse,
    responses={409: ERROR_RESPONSES[409]},
)
async def goto_page(request: GotoPageRequest) -> PageResponse:
    """Move to a page; out-of-range indices are clamped."""
    get_session().goto_page(request.index)
    return await get_page()


@app.post(
    "/page/next",
    tags=["View"],
    summary="Next page",
    response_model=PageResponse,
    responses={409: ERROR_RESPONSES[409]},
)
async def next_page() -> PageResponse:
    get_session().next_page()
    return await get_page()


@app.post(
    "/page/previous",
    tags=["View"],
    summary="Previous page",
    response_model=PageResponse,
    responses={409: ERROR_RESPONSES[409]},
)
async def previous_page() -> PageResponse:
    get_session().previous_page()
    return await get_page()


def run_server(
    host: str | None = None,
    port: int | None = None,
    reload: bool = False,
) -> None:
    """
    Run the FastAPI server.

    Args:
        host: Host to bind to. Defaults to the configured host.
        port: Port to listen on. Defaults to the configured port.
        reload: Whether to enable auto-reload. Defaults to False.

    Example:
        from sheetview.main import run_server
        run_server(host="127.0.0.1", port=8080)
    """
    settings = get_settings()
    uvicorn.run(
        "sheetview.main:app",
        host=host or settings.server_host,
        port=port or settings.server_port,
        reload=reload,
    )


if __name__ == "__main__":
    run_server()
