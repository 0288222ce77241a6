"""Main CLI application for podembed."""

import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from podembed.core.config import Config, Verbosity
from podembed.core.errors import PodembedError

app = typer.Typer(
    name="podembed",
    help="Build embeddable podcast player data and convert transcripts to WebVTT.",
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)


class State:
    """Global CLI state."""

    def __init__(self) -> None:
        self.verbosity: Verbosity = Verbosity.NORMAL
        self.config: Config = Config()


state = State()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from podembed import __version__

        console.print(f"podembed version {__version__}")
        raise typer.Exit()


def _configure_logging(verbosity: Verbosity, config: Config) -> None:
    level = verbosity.log_level
    if verbosity is Verbosity.NORMAL:
        level = logging.getLevelName(config.logging.level)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def _fail(error: Exception) -> NoReturn:
    error_console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress all output except results"),
    ] = False,
    error_only: Annotated[
        bool,
        typer.Option("--error-only", help="Show only error messages"),
    ] = False,
    config_path: Annotated[
        str | None,
        typer.Option("--config", help="Path to configuration file"),
    ] = None,
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """podembed - podcast embed data and transcript proxy."""
    if quiet:
        state.verbosity = Verbosity.QUIET
    elif error_only:
        state.verbosity = Verbosity.ERROR
    elif verbose:
        state.verbosity = Verbosity.VERBOSE
    else:
        state.verbosity = Verbosity.NORMAL

    try:
        state.config = Config.load(config_path)
    except PodembedError as e:
        _fail(e)

    _configure_logging(state.verbosity, state.config)


@app.command()
def embed(
    feed_url: Annotated[
        str | None, typer.Argument(help="RSS feed URL of the podcast")
    ] = None,
    episode_guid: Annotated[
        str | None, typer.Option("--episode-guid", "-e", help="Guid of the episode to play")
    ] = None,
    show_playlist: Annotated[
        str | None,
        typer.Option(
            "--show-playlist", "-p", help="Playlist mode: 'true', 'all' or a maximum item count"
        ),
    ] = None,
    playlist_season: Annotated[
        int | None, typer.Option("--season", help="Only include episodes from this season")
    ] = None,
    playlist_category: Annotated[
        str | None, typer.Option("--category", help="Only include episodes in this category")
    ] = None,
    title: Annotated[str | None, typer.Option("--title", help="Override track title")] = None,
    subtitle: Annotated[
        str | None, typer.Option("--subtitle", help="Override track subtitle")
    ] = None,
    audio_url: Annotated[
        str | None, typer.Option("--audio-url", help="Override track audio URL")
    ] = None,
    image_url: Annotated[
        str | None, typer.Option("--image-url", help="Background image URL")
    ] = None,
    ep_image_url: Annotated[
        str | None, typer.Option("--ep-image-url", help="Override track image URL")
    ] = None,
    subscribe_url: Annotated[
        str | None, typer.Option("--subscribe-url", help="Follow URL to use instead of the feed")
    ] = None,
) -> None:
    """Print embed data JSON for a feed and options."""
    from podembed.core.models import EmbedConfig
    from podembed.services.embed import build_embed_data

    embed_config = EmbedConfig.from_mapping(
        {
            "feed_url": feed_url,
            "episode_guid": episode_guid,
            "show_playlist": show_playlist,
            "playlist_season": playlist_season,
            "playlist_category": playlist_category,
            "title": title,
            "subtitle": subtitle,
            "audio_url": audio_url,
            "image_url": image_url,
            "ep_image_url": ep_image_url,
            "subscribe_url": subscribe_url,
        }
    )

    if state.verbosity is Verbosity.VERBOSE and feed_url:
        error_console.print(f"Fetching feed: [bold]{feed_url}[/bold]")

    try:
        data = build_embed_data(
            embed_config,
            timeout=state.config.get_fetch_timeout(),
            user_agent=state.config.fetch.user_agent,
        )
    except PodembedError as e:
        _fail(e)

    typer.echo(json.dumps(data.to_dict(), indent=2))


@app.command()
def transcript(
    url: Annotated[str, typer.Argument(help="Transcript URL (VTT, SRT or JSON)")],
) -> None:
    """Fetch a transcript and print it as WebVTT."""
    from podembed.services.transcript import proxy_transcript

    try:
        body = proxy_transcript(
            url,
            timeout=state.config.get_fetch_timeout(),
            user_agent=state.config.fetch.user_agent,
        )
    except PodembedError as e:
        _fail(e)

    typer.echo(body)


@app.command()
def convert(
    transcript_file: Annotated[Path, typer.Argument(help="Local transcript file")],
    content_type: Annotated[
        str | None,
        typer.Option("--content-type", help="Declared type, e.g. application/srt"),
    ] = None,
) -> None:
    """Convert a local transcript file to WebVTT."""
    from podembed.core.models import TranscriptPayload
    from podembed.core.transcript import convert_to_vtt

    if not transcript_file.exists():
        error_console.print(f"[red]Error:[/red] File not found: {transcript_file}")
        raise typer.Exit(code=1)

    text = transcript_file.read_text(encoding="utf-8", errors="replace")
    typer.echo(convert_to_vtt(TranscriptPayload(text=text, content_type=content_type)))


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Bind port")] = None,
) -> None:
    """Run the HTTP server."""
    import uvicorn

    from podembed.server.app import create_app

    config = state.config
    bind_host = host or config.server.host
    bind_port = port or config.server.port

    try:
        server_app = create_app(config)
    except PodembedError as e:
        _fail(e)

    if state.verbosity is not Verbosity.QUIET:
        console.print(f"Serving on [bold]http://{bind_host}:{bind_port}[/bold]")

    uvicorn.run(server_app, host=bind_host, port=bind_port)


if __name__ == "__main__":
    app()
