"""Quaint placeholder image service — FastAPI application.

This module defines the application factory, the routes and the ``main()``
CLI function that launches the uvicorn server.

Request pipeline
----------------
``GET /{text}.png`` runs a straight-line validation pipeline before any
image work is done:

1. Resolve ``width`` / ``height`` (413 when either exceeds ``max_size``).
2. Resolve ``fg`` and ``bg`` hex colors (400 when malformed).
3. Load the optional background bitmap (500 when present but undecodable).
4. Build an :class:`~quaint.core.generator.ImageGenerator` (400 when the
   font cannot be loaded).
5. Render within ``render_timeout`` (500 on failure, 504 on timeout).
6. Encode and return ``image/png``.

Every request, successful or not, produces one log record carrying the
resolved fields via ``extra=``.  Blocking work (file decode, font loading,
rasterisation, PNG encoding) runs off the event loop; rendering has its
own bounded thread pool so a slow render only holds up its own request.

Endpoints
---------
========  ==================  ==========================================
Method    Path                Purpose
========  ==================  ==========================================
GET       ``/{text}.png``     Render a placeholder PNG
GET       ``/healthz``        Liveness check with version
========  ==================  ==========================================

Usage
-----
CLI (installed entry point)::

    quaint

Direct invocation::

    python -m quaint.api.main
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool

from quaint import __version__
from quaint.api.models import HealthResponse, RenderRequest
from quaint.core.background import load_background
from quaint.core.colors import resolve_color
from quaint.core.config import QuaintConfig, config
from quaint.core.dimensions import resolve_dimensions
from quaint.core.errors import (
    BackgroundDecodeError,
    BadColorError,
    GeneratorConstructionError,
    RenderError,
    TooLargeError,
)
from quaint.core.generator import GeneratorOptions, ImageGenerator, encode_png

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Report the asset configuration and own the render thread pool.

    Missing assets are not fatal here: a missing background is expected in
    many deployments, and a missing font surfaces per request as a 400.

    Renders run on a dedicated pool of ``render_workers`` threads stored on
    ``app.state.render_executor``.  A render that times out keeps its
    thread until it finishes, so enough hung renders exhaust the pool and
    later renders queue until they time out as well.  The rest of the
    request pipeline uses the shared threadpool and is unaffected.
    """
    cfg: QuaintConfig = app.state.config
    if cfg.font_path is None:
        logger.info("No font configured; using Pillow's default font.")
    elif not cfg.font_path.is_file():
        logger.warning("Font file %s does not exist; renders will fail.", cfg.font_path)
    if cfg.background_image is not None and not cfg.background_image.is_file():
        logger.info("Background image %s not found; using flat colors.", cfg.background_image)

    app.state.render_executor = ThreadPoolExecutor(
        max_workers=cfg.render_workers,
        thread_name_prefix="quaint-render",
    )
    try:
        yield
    finally:
        # Do not wait on hung renders at shutdown.
        app.state.render_executor.shutdown(wait=False, cancel_futures=True)


# ---------------------------------------------------------------------------
# Pipeline helpers.
# ---------------------------------------------------------------------------


def _build_generator(req: RenderRequest, cfg: QuaintConfig) -> ImageGenerator:
    options = GeneratorOptions(
        font_path=cfg.font_path,
        margin_ratio=cfg.margin_ratio,
        foreground=req.foreground,
        background=req.background,
        background_image=req.background_image,
    )
    return ImageGenerator(options)


def _render_png(generator: ImageGenerator, req: RenderRequest) -> bytes:
    image = generator.render(req.text, req.width, req.height)
    return encode_png(image)


async def serve_image(
    request: Request,
    text: str,
    width: str | None = None,
    height: str | None = None,
    fg: str | None = None,
    bg: str | None = None,
) -> Response:
    """Render ``text`` as a placeholder PNG.

    Args:
        request: Incoming request; used to reach ``app.state.config``.
        text: Path component before ``.png``.
        width: Requested width.  Malformed values count as absent.
        height: Requested height.  Malformed values count as absent.
        fg: Foreground hex color (default from configuration).
        bg: Background hex color (default from configuration).

    Returns:
        A ``200 image/png`` response.

    Raises:
        HTTPException: 413 for oversized dimensions, 400 for malformed
            colors or an unusable font, 500 for an undecodable background
            or a failed render, 504 when rendering exceeds the deadline.
    """
    cfg: QuaintConfig = request.app.state.config

    # --- Dimensions --------------------------------------------------------
    try:
        dims = resolve_dimensions(
            width,
            height,
            max_size=cfg.max_size,
            default_size=cfg.default_size,
        )
    except TooLargeError as e:
        logger.warning(
            "Requested image too large: %dx%d",
            e.width,
            e.height,
            extra={"width": e.width, "height": e.height, "text": text},
        )
        raise HTTPException(status_code=413, detail="Image too large") from e

    # --- Colors ------------------------------------------------------------
    try:
        foreground = resolve_color(fg, cfg.default_fg)
    except BadColorError as e:
        logger.error("Bad foreground color %r: %s", fg, e, extra={"color": fg, "text": text})
        raise HTTPException(status_code=400, detail="Bad value for foreground color") from e

    try:
        background = resolve_color(bg, cfg.default_bg)
    except BadColorError as e:
        logger.error("Bad background color %r: %s", bg, e, extra={"color": bg, "text": text})
        raise HTTPException(status_code=400, detail="Bad value for background color") from e

    # --- Background bitmap -------------------------------------------------
    try:
        bitmap = await run_in_threadpool(load_background, cfg.background_image)
    except BackgroundDecodeError as e:
        logger.error("%s", e, extra={"path": str(e.path), "text": text})
        raise HTTPException(status_code=500, detail="Could not decode background image") from e

    req = RenderRequest(
        text=text,
        width=dims.width,
        height=dims.height,
        foreground=foreground,
        background=background,
        background_image=bitmap,
    )
    fields = req.log_fields()

    # --- Generator ---------------------------------------------------------
    try:
        generator = await run_in_threadpool(_build_generator, req, cfg)
    except GeneratorConstructionError as e:
        logger.error("%s", e, extra={**fields, "ttf": str(e.font_path)})
        raise HTTPException(status_code=400, detail="Could not create generator") from e

    # --- Render ------------------------------------------------------------
    # On timeout the request returns at once; the worker thread finishes on
    # its own and stays occupied until then.
    loop = asyncio.get_running_loop()
    try:
        png = await asyncio.wait_for(
            loop.run_in_executor(request.app.state.render_executor, _render_png, generator, req),
            timeout=cfg.render_timeout,
        )
    except asyncio.TimeoutError as e:
        logger.error(
            "Rendering %r timed out after %.1fs", text, cfg.render_timeout, extra=fields
        )
        raise HTTPException(status_code=504, detail="Rendering timed out") from e
    except RenderError as e:
        logger.error("Could not render %r: %s", text, e, extra=fields)
        raise HTTPException(status_code=500, detail="Could not render image") from e
    except Exception as e:
        logger.exception("Unexpected failure rendering %r", text, extra=fields)
        raise HTTPException(status_code=500, detail="Could not render image") from e

    logger.info(
        'Served image "%s.png" (%dx%d, fg=%s, bg=%s)',
        text,
        req.width,
        req.height,
        fields["foreground"],
        fields["background"],
        extra=fields,
    )
    return Response(content=png, media_type="image/png")


async def healthz() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(version=__version__)


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(cfg: QuaintConfig | None = None) -> FastAPI:
    """Build the FastAPI application around an explicit configuration.

    Args:
        cfg: Settings for this application instance.  Defaults to the
            global :data:`~quaint.core.config.config`.

    Returns:
        The configured application.
    """
    application = FastAPI(
        title="Quaint",
        description="On-demand placeholder image service.",
        version=__version__,
        lifespan=lifespan,
    )
    application.state.config = cfg if cfg is not None else config

    application.add_api_route("/healthz", healthz, methods=["GET"], response_model=HealthResponse)
    application.add_api_route(
        "/{text}.png",
        serve_image,
        methods=["GET"],
        response_class=Response,
        responses={200: {"content": {"image/png": {}}}},
    )
    return application


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Configure logging and launch the uvicorn ASGI server.

    Host, port and log level come from :data:`~quaint.core.config.config`
    (``QUAINT_SERVER_HOST``, ``QUAINT_SERVER_PORT``, ``QUAINT_LOG_LEVEL``).
    Defaults to ``127.0.0.1:3000``.

    Registered as the ``quaint`` console script in ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting quaint on %s:%d", config.server_host, config.server_port)

    uvicorn.run(
        "quaint.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
