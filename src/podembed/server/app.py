"""FastAPI application exposing the transcript proxy and embed data.

Endpoints:
- ``GET /api/proxy/transcript?u=<url>``: fetch a transcript (WebVTT, SRT
  or podcast namespace JSON) and respond with WebVTT.
- ``GET /api/embed``: embed data for a feed; query parameters are the
  camelCase embed config fields (feedUrl, episodeGuid, showPlaylist, ...).
- ``GET /health``: liveness check.

Upstream failures are reported as HTTP 400 with an ``{"error": {...}}`` body.
"""

import logging
from typing import Annotated, Any

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from podembed import __version__
from podembed.core.config import Config
from podembed.core.errors import FeedFetchError, TranscriptFetchError
from podembed.core.models import EmbedConfig
from podembed.core.transcript import VTT_MEDIA_TYPE
from podembed.services.embed import build_embed_data
from podembed.services.transcript import proxy_transcript

logger = logging.getLogger(__name__)


def _error_response(error: dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": error})


def create_app(config: Config | None = None) -> FastAPI:
    """Create the application.

    Args:
        config: Loaded configuration; defaults are used when omitted.

    Raises:
        ConfigError: If the fetch timeout override is not a number.
    """
    config = config or Config()
    timeout = config.get_fetch_timeout()

    app = FastAPI(
        title="podembed",
        description=(
            "Embeddable podcast player data from RSS feeds, and a transcript "
            "proxy that converts SRT and JSON transcripts to WebVTT."
        ),
        version=__version__,
    )
    app.state.config = config

    @app.get("/health", tags=["System"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get(
        "/api/proxy/transcript",
        tags=["Transcripts"],
        response_class=Response,
        responses={
            200: {"content": {VTT_MEDIA_TYPE: {}}, "description": "WebVTT transcript"},
            400: {"description": "Transcript URL could not be fetched"},
        },
    )
    def transcript(
        u: Annotated[str | None, Query(description="Transcript file URL")] = None,
    ) -> Response:
        try:
            body = proxy_transcript(
                u or "",
                timeout=timeout,
                user_agent=config.fetch.user_agent,
            )
        except TranscriptFetchError as e:
            return _error_response({"message": f"Bad URL Provided. Reason: {e.message}"})

        return Response(content=body, media_type=VTT_MEDIA_TYPE)

    @app.get(
        "/api/embed",
        tags=["Embed"],
        responses={400: {"description": "Feed could not be fetched or parsed"}},
    )
    def embed(request: Request) -> JSONResponse:
        embed_config = EmbedConfig.from_mapping(dict(request.query_params))
        try:
            data = build_embed_data(
                embed_config,
                timeout=timeout,
                user_agent=config.fetch.user_agent,
            )
        except FeedFetchError as e:
            return _error_response({"message": e.message, "url": e.url})

        return JSONResponse(content=data.to_dict())

    return app
