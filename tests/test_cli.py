"""Tests for the command line interface."""

import json
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from podembed import __version__
from podembed.cli.main import app
from podembed.core.errors import FeedFetchError, TranscriptFetchError
from podembed.core.models import EmbedConfig, EmbedData, NormalizedAudioItem

runner = CliRunner()


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestEmbedCommand:
    """Tests for the embed command."""

    def test_prints_embed_json(self) -> None:
        data = EmbedData(audio=NormalizedAudioItem(guid="ep2"), follow_urls={"rss": "f.xml"})
        with patch("podembed.services.embed.build_embed_data", return_value=data) as build:
            result = runner.invoke(
                app, ["embed", "f.xml", "--episode-guid", "ep2", "--show-playlist", "3"]
            )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"audio": {"guid": "ep2"}, "followUrls": {"rss": "f.xml"}}
        assert build.call_args.args[0] == EmbedConfig(
            feed_url="f.xml", episode_guid="ep2", show_playlist=3
        )

    def test_config_only(self) -> None:
        result = runner.invoke(app, ["embed", "--title", "Hello", "--audio-url", "a.mp3"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"audio": {"title": "Hello", "url": "a.mp3"}}

    def test_feed_failure(self) -> None:
        error = FeedFetchError("RSS feed returned error status 500", "f.xml")
        with patch("podembed.services.embed.build_embed_data", side_effect=error):
            result = runner.invoke(app, ["embed", "f.xml"])

        assert result.exit_code == 1
        assert "RSS feed returned error status 500" in result.output


class TestTranscriptCommand:
    """Tests for the transcript command."""

    def test_prints_vtt(self) -> None:
        with patch("podembed.services.transcript.proxy_transcript", return_value="WEBVTT"):
            result = runner.invoke(app, ["transcript", "https://x.test/t.srt"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "WEBVTT"

    def test_fetch_failure(self) -> None:
        error = TranscriptFetchError("refused", "https://x.test/t.srt")
        with patch("podembed.services.transcript.proxy_transcript", side_effect=error):
            result = runner.invoke(app, ["transcript", "https://x.test/t.srt"])

        assert result.exit_code == 1
        assert "refused" in result.output


class TestConvertCommand:
    """Tests for the convert command."""

    def test_converts_srt_file(self, tmp_path: Path) -> None:
        srt_file = tmp_path / "captions.srt"
        srt_file.write_text("1\n00:00:01,000 --> 00:00:02,000\nHello\n")

        result = runner.invoke(app, ["convert", str(srt_file)])

        assert result.exit_code == 0
        assert "00:00:01.000 --> 00:00:02.000\nHello" in result.stdout

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["convert", str(tmp_path / "missing.srt")])

        assert result.exit_code == 1
        assert "File not found" in result.output


class TestServeCommand:
    """Tests for the serve command."""

    def test_invalid_timeout_exits_before_serving(self) -> None:
        with patch("uvicorn.run") as run:
            result = runner.invoke(app, ["serve"], env={"PODEMBED_FETCH_TIMEOUT": "soon"})

        assert result.exit_code == 1
        assert "PODEMBED_FETCH_TIMEOUT" in result.output
        run.assert_not_called()
