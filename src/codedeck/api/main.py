"""Codedeck - FastAPI Application.

This module is the single entry point for the web service.  It defines the
:func:`create_app` factory, the module-level ``app`` built from the global
configuration, all routes, and the ``main()`` CLI function that launches the
uvicorn server.

Architecture
------------
- **Configuration** comes from :mod:`codedeck.core.config` and is stored on
  ``app.state.config``.
- **Deck assets** (templates and font) are loaded once in the lifespan
  handler and shared by every request through a
  :class:`~codedeck.core.deck.DeckBuilder` on ``app.state.builder``.
- **Rendering** is CPU-bound, so the upload route validates the body on the
  event loop and then runs the build in the thread pool.
- **Generated decks** are served straight from the deck directory by
  FastAPI's ``StaticFiles`` at ``/deck``.
- **Errors** from :mod:`codedeck.core.errors` are mapped to 400 (bad
  request body) or 500 (server assets or disk) in one exception handler.

Endpoints
---------
========  ====================  ==========================================
Method    Path                  Purpose
========  ====================  ==========================================
GET       ``/``                 Welcome text
PUT       ``/upload``           Newline-separated words -> deck links
GET       ``/deck/{filename}``  Generated sheet PNGs
GET       ``/source``           Tar archive of the source code
========  ====================  ==========================================

Usage
-----
CLI (installed entry point)::

    codedeck

Direct invocation::

    python -m codedeck.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool

from codedeck import __version__
from codedeck.api.models import DeckResponse, ErrorResponse
from codedeck.api.source_archive import build_source_archive
from codedeck.core.config import CodedeckConfig, config
from codedeck.core.deck import DECK_URL_PATH, DeckBuilder
from codedeck.core.errors import DeckError, ResourceLoadFailure
from codedeck.core.overlay import TextBox
from codedeck.core.resources import DeckResources
from codedeck.core.store import DeckStore
from codedeck.core.words import parse_words

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to this AGPL licensed webpage. Source code is at /source"

# ---------------------------------------------------------------------------
# Application lifecycle - deck asset loading.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load the deck assets on startup.

    On startup:
        Decodes both templates and the font and stores a ready
        :class:`DeckBuilder` on ``app.state.builder``.  If the assets cannot
        be loaded the server still starts; ``app.state.builder`` is ``None``
        and every upload fails with ``ResourceLoadFailure`` until the assets
        are fixed and the process restarted.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    cfg: CodedeckConfig = app.state.config
    app.state.builder = None
    app.state.resource_error = None

    try:
        resources = DeckResources.load(cfg)
    except ResourceLoadFailure as exc:
        logger.error("Deck assets failed to load, uploads will be rejected: %s", exc)
        app.state.resource_error = exc
    else:
        app.state.builder = DeckBuilder(
            resources,
            DeckStore(cfg.decks_dir),
            text_box=TextBox(*cfg.text_box),
            text_color=cfg.text_color,
        )

    yield  # Application runs here.

    logger.info("Codedeck shutting down.")


# ---------------------------------------------------------------------------
# Error mapping.
# ---------------------------------------------------------------------------


async def handle_deck_error(request: Request, exc: DeckError) -> JSONResponse:
    """Convert a :class:`DeckError` into a JSON error response.

    Client errors become 400; resource and write failures become 500.
    """
    if exc.client_error:
        status_code = 400
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    else:
        status_code = 500
        logger.error("%s on %s %s", exc.kind, request.method, request.url.path, exc_info=exc)

    body = ErrorResponse(error=exc.kind, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    """Return the welcome text pointing at the source archive."""
    return WELCOME_TEXT


@router.put(
    "/upload",
    response_model=DeckResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload(request: Request) -> DeckResponse:
    """Generate a deck from a newline-separated word list.

    The request body is plain UTF-8 text with one word per line.  The body
    is validated before any image work starts, so a bad request never
    creates files.

    Returns:
        :class:`DeckResponse` with links to the front and back sheets and
        the grid dimensions.

    Raises:
        InvalidEncoding: (400) body is not UTF-8.
        TooFewWords: (400) fewer than ``min_words`` lines.
        TooManyWords: (400) more than ``max_words`` lines.
        ResourceLoadFailure: (500) templates or font were not loaded.
        EncodeOrWriteFailure: (500) a sheet could not be saved.
    """
    cfg: CodedeckConfig = request.app.state.config
    body = await request.body()
    words = parse_words(
        body,
        min_words=cfg.min_words,
        max_words=cfg.max_words,
        skip_blank_lines=cfg.skip_blank_lines,
    )

    builder: DeckBuilder | None = request.app.state.builder
    if builder is None:
        raise ResourceLoadFailure(f"Deck assets are unavailable: {request.app.state.resource_error}")

    result = await run_in_threadpool(builder.build, words)
    return DeckResponse.from_result(result, cfg.root_url)


@router.get("/source")
async def source(request: Request) -> Response:
    """Return the source tree as an ``application/x-tar`` archive.

    By default only the installed ``codedeck`` package is archived, not the
    surrounding repository (packaging files, tests).  Set
    ``CODEDECK_SOURCE_DIR`` to a checkout to serve all of it.  The archive
    is built on first request and cached for the lifetime of the
    application.

    Raises:
        HTTPException: 404 if the configured source directory is missing.
    """
    archive: bytes | None = getattr(request.app.state, "source_archive", None)
    if archive is None:
        cfg: CodedeckConfig = request.app.state.config
        try:
            archive = await run_in_threadpool(build_source_archive, cfg.source_dir)
        except FileNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        request.app.state.source_archive = archive

    return Response(
        content=archive,
        media_type="application/x-tar",
        headers={"Content-Disposition": 'attachment; filename="source.tar"'},
    )


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(cfg: CodedeckConfig = config) -> FastAPI:
    """Build the FastAPI application for *cfg*.

    Args:
        cfg: Configuration to serve with.  Defaults to the global instance.

    Returns:
        A ready-to-serve application.  Assets are loaded when its lifespan
        starts, not here.
    """
    app = FastAPI(
        title="Codedeck",
        description="Tiled word-card sheets for Tabletop Simulator decks.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "PUT"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DeckError, handle_deck_error)
    app.include_router(router)

    # Generated sheets are plain files; serve them straight from disk.
    cfg.decks_dir.mkdir(parents=True, exist_ok=True)
    app.mount(f"/{DECK_URL_PATH}", StaticFiles(directory=str(cfg.decks_dir)), name="deck")

    return app


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~codedeck.core.config.config`
    (``CODEDECK_SERVER_HOST`` / ``CODEDECK_SERVER_PORT``).  Defaults to
    ``127.0.0.1:3030``.

    This function is registered as the ``codedeck`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "codedeck.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
