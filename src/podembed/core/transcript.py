"""Transcript format detection and conversion to WebVTT.

Supported inputs are WebVTT (passed through), SRT and the podcast
namespace JSON transcript format. Conversion never raises: malformed
SRT blocks or JSON segments are skipped, and unrecognized or empty
payloads produce a bare ``WEBVTT`` document.

See https://github.com/Podcastindex-org/podcast-namespace/blob/main/transcripts/transcripts.md
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Callable
from enum import Enum
from typing import Any

from podembed.core.models import Cue, Segment, TranscriptPayload, VttDocument

logger = logging.getLogger(__name__)

VTT_HEADER = "WEBVTT"
VTT_MEDIA_TYPE = "text/vtt"


class TranscriptFormat(Enum):
    """Transcript formats the converter understands."""

    VTT = "vtt"
    SRT = "srt"
    JSON = "json"
    UNKNOWN = "unknown"


CONTENT_TYPE_PATTERNS: tuple[tuple[TranscriptFormat, re.Pattern[str]], ...] = (
    (TranscriptFormat.VTT, re.compile(r"(?:application|text)/vtt", re.IGNORECASE)),
    (TranscriptFormat.SRT, re.compile(r"(?:application|text)/srt", re.IGNORECASE)),
    (TranscriptFormat.JSON, re.compile(r"(?:application|text)/json", re.IGNORECASE)),
)

SRT_TIMING_PATTERN = re.compile(
    r"^\s*(?P<start>\d{1,4}:\d{2}:\d{2}[,.]\d{1,3})"
    r"\s*-->\s*"
    r"(?P<end>\d{1,4}:\d{2}:\d{2}[,.]\d{1,3})"
)


def _strip_bom(text: str) -> str:
    return text[1:] if text.startswith("\ufeff") else text


def detect_format(payload: TranscriptPayload) -> TranscriptFormat:
    """Classify a transcript payload.

    The declared content type is checked first. When it matches none of
    the known types, the content is sniffed: a ``WEBVTT`` prefix means
    WebVTT, a ``-->`` cue separator means SRT, a leading ``{`` means JSON.

    Args:
        payload: Fetched transcript text and its content type.

    Returns:
        The detected format, ``TranscriptFormat.UNKNOWN`` if nothing matched.
    """
    if payload.content_type:
        for transcript_format, pattern in CONTENT_TYPE_PATTERNS:
            if pattern.search(payload.content_type):
                return transcript_format

    text = _strip_bom(payload.text).lstrip()
    if text.startswith(VTT_HEADER):
        return TranscriptFormat.VTT
    if "-->" in text:
        return TranscriptFormat.SRT
    if text.startswith("{"):
        return TranscriptFormat.JSON
    return TranscriptFormat.UNKNOWN


def format_timestamp(seconds: float) -> str:
    """Format seconds as a WebVTT ``HH:MM:SS.mmm`` timestamp."""
    total_ms = max(0, round(seconds * 1000))
    hours, remainder = divmod(total_ms, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, millis = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def parse_timestamp(value: str) -> float:
    """Parse an ``HH:MM:SS,mmm`` (or ``.mmm``) timestamp into seconds."""
    clock, _, fraction = value.strip().replace(",", ".").partition(".")
    hours, minutes, secs = (int(part) for part in clock.split(":"))
    millis = int(fraction.ljust(3, "0")) if fraction else 0
    return hours * 3600 + minutes * 60 + secs + millis / 1000


def render_vtt(document: VttDocument) -> str:
    """Render a document as WebVTT text."""
    if not document.cues:
        return VTT_HEADER

    blocks = []
    for cue in document.cues:
        timing = f"{format_timestamp(cue.start)} --> {format_timestamp(cue.end)}"
        lines = [cue.identifier, timing, cue.body] if cue.identifier else [timing, cue.body]
        blocks.append("\n".join(lines))
    return VTT_HEADER + "\n\n" + "\n\n".join(blocks) + "\n"


def _parse_srt_block(block: str) -> Cue | None:
    lines = block.split("\n")
    identifier = None
    if not SRT_TIMING_PATTERN.match(lines[0]):
        identifier = lines[0].strip()
        lines = lines[1:]
    if not lines:
        return None

    match = SRT_TIMING_PATTERN.match(lines[0])
    body = "\n".join(lines[1:])
    if match is None or not body.strip():
        return None

    return Cue(
        start=parse_timestamp(match.group("start")),
        end=parse_timestamp(match.group("end")),
        body=body,
        identifier=identifier or None,
    )


def parse_srt(text: str) -> VttDocument:
    """Parse SRT text into cues, skipping blocks that cannot be parsed."""
    normalized = _strip_bom(text).replace("\r\n", "\n").replace("\r", "\n")
    cues = []
    for block in re.split(r"\n\s*\n", normalized.strip()):
        if not block.strip():
            continue
        cue = _parse_srt_block(block.strip("\n"))
        if cue is None:
            logger.debug("Skipping malformed SRT block: %r", block[:80])
            continue
        cues.append(cue)
    return VttDocument(cues=tuple(cues))


def convert_srt_to_vtt(text: str) -> str:
    """Convert SRT captions to WebVTT."""
    return render_vtt(parse_srt(text))


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def parse_json_segments(text: str) -> list[Segment]:
    """Parse transcript JSON into segments, skipping invalid entries.

    Args:
        text: JSON document with a ``segments`` list.

    Returns:
        Segments in document order. Empty when the document is not valid
        transcript JSON.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.debug("Transcript JSON could not be decoded: %s", e)
        return []

    raw_segments = data.get("segments") if isinstance(data, dict) else None
    if not isinstance(raw_segments, list):
        return []

    segments = []
    for raw in raw_segments:
        if not isinstance(raw, dict):
            continue
        body = raw.get("body")
        start, end = raw.get("startTime"), raw.get("endTime")
        if not isinstance(body, str) or not _is_number(start) or not _is_number(end):
            logger.debug("Skipping invalid transcript segment: %r", raw)
            continue
        speaker = raw.get("speaker")
        segments.append(
            Segment(
                body=body,
                start_time=float(start),
                end_time=float(end),
                speaker=speaker if isinstance(speaker, str) and speaker.strip() else None,
            )
        )
    return segments


def convert_json_to_vtt(text: str) -> str:
    """Convert podcast namespace transcript JSON to WebVTT.

    Segments are emitted in document order; they are not re-sorted.
    """
    cues = tuple(
        Cue(
            start=segment.start_time,
            end=segment.end_time,
            body=f"<v {segment.speaker}>{segment.body}" if segment.speaker else segment.body,
        )
        for segment in parse_json_segments(text)
    )
    return render_vtt(VttDocument(cues=cues))


def _empty_vtt(text: str) -> str:  # noqa: ARG001
    return VTT_HEADER


CONVERTERS: dict[TranscriptFormat, Callable[[str], str]] = {
    TranscriptFormat.VTT: lambda text: text,
    TranscriptFormat.SRT: convert_srt_to_vtt,
    TranscriptFormat.JSON: convert_json_to_vtt,
    TranscriptFormat.UNKNOWN: _empty_vtt,
}


def convert_to_vtt(payload: TranscriptPayload) -> str:
    """Detect the payload format and convert it to WebVTT text.

    Never raises. Empty results collapse to the bare ``WEBVTT`` header.
    """
    transcript_format = detect_format(payload)
    if transcript_format is TranscriptFormat.UNKNOWN:
        logger.debug("Unrecognized transcript format (content type %r)", payload.content_type)
    return CONVERTERS[transcript_format](payload.text) or VTT_HEADER
