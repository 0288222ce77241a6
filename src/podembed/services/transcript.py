"""Transcript proxy: fetch a transcript URL and convert it to WebVTT."""

from __future__ import annotations

import logging

import httpx

from podembed.core.config import DEFAULT_FETCH_TIMEOUT, DEFAULT_USER_AGENT
from podembed.core.errors import TranscriptFetchError
from podembed.core.models import TranscriptPayload
from podembed.core.transcript import convert_to_vtt

logger = logging.getLogger(__name__)

# Used when the upstream response does not declare a content type.
FALLBACK_CONTENT_TYPE = "text/plain"


def fetch_transcript(
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> TranscriptPayload:
    """Fetch a transcript file.

    Args:
        url: Transcript URL.
        timeout: Request timeout in seconds.
        user_agent: User-Agent header sent upstream.

    Returns:
        The transcript text with its declared content type.

    Raises:
        TranscriptFetchError: If the URL is missing, unreachable or returns
            a non-OK status.
    """
    if not url or not url.strip():
        raise TranscriptFetchError("No transcript URL provided", url)

    url = url.strip()

    try:
        with httpx.Client(
            timeout=timeout, follow_redirects=True, headers={"User-Agent": user_agent}
        ) as client:
            response = client.get(url)
    except httpx.HTTPError as e:
        logger.warning("Failed to fetch transcript %s: %s", url, e)
        raise TranscriptFetchError(str(e) or type(e).__name__, url) from e

    if not response.is_success:
        logger.warning("Transcript %s returned status %s", url, response.status_code)
        raise TranscriptFetchError(
            f'URL provided return status "{response.reason_phrase or response.status_code}"', url
        )

    return TranscriptPayload(
        text=response.text,
        content_type=response.headers.get("Content-Type") or FALLBACK_CONTENT_TYPE,
    )


def proxy_transcript(
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> str:
    """Fetch a transcript and return it as WebVTT text.

    Raises:
        TranscriptFetchError: If the transcript cannot be fetched.
    """
    payload = fetch_transcript(url, timeout=timeout, user_agent=user_agent)
    return convert_to_vtt(payload)
