"""RSS feed fetching and mapping onto raw feed records.

XML parsing is delegated to feedparser; this module only maps the parsed
object onto ``RawFeed``/``RawFeedItem``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import feedparser
import httpx

from podembed.core.config import DEFAULT_FETCH_TIMEOUT, DEFAULT_USER_AGENT
from podembed.core.errors import FeedFetchError
from podembed.core.models import (
    ItunesFeedFields,
    ItunesItemFields,
    Owner,
    RawFeed,
    RawFeedItem,
)

logger = logging.getLogger(__name__)

# feedparser files itunes:category under this scheme
ITUNES_SCHEME = "http://www.itunes.com/"


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _split_tags(
    tags: list[Mapping[str, Any]] | None,
) -> tuple[tuple[str, ...] | None, tuple[str, ...] | None]:
    """Split feedparser tags into (plain categories, itunes categories)."""
    if not tags:
        return None, None

    plain: list[str] = []
    itunes: list[str] = []
    for tag in tags:
        term = tag.get("term")
        if not term:
            continue
        if (tag.get("scheme") or "").startswith(ITUNES_SCHEME):
            itunes.append(str(term))
        else:
            plain.append(str(term))
    return (tuple(plain) if plain else None, tuple(itunes) if itunes else None)


def _image_href(image: Mapping[str, Any] | None) -> str | None:
    if not image:
        return None
    return _text(image.get("href") or image.get("url"))


def _parse_entry(entry: Mapping[str, Any]) -> RawFeedItem:
    enclosure_url = None
    for enclosure in entry.get("enclosures", []):
        enclosure_url = _text(enclosure.get("href") or enclosure.get("url"))
        if enclosure_url:
            break

    categories, itunes_categories = _split_tags(entry.get("tags"))
    itunes = ItunesItemFields(
        subtitle=_text(entry.get("itunes_subtitle") or entry.get("subtitle")),
        image=_image_href(entry.get("image")),
        duration=_text(entry.get("itunes_duration")),
        season=_text(entry.get("itunes_season")),
        categories=itunes_categories,
    )

    return RawFeedItem(
        guid=_text(entry.get("id") or entry.get("guid")),
        link=_text(entry.get("link")),
        title=_text(entry.get("title")),
        enclosure_url=enclosure_url,
        categories=categories,
        itunes=itunes,
    )


def parse_feed_content(content: str | bytes) -> RawFeed:
    """Parse feed XML into a raw feed record.

    Args:
        content: The feed document.

    Returns:
        RawFeed with items in document order.

    Raises:
        ValueError: If the content is not a usable feed.
    """
    parsed = feedparser.parse(content)
    channel = parsed.feed

    if parsed.bozo and not parsed.entries and not channel.get("title"):
        raise ValueError(f"Invalid RSS feed: {parsed.get('bozo_exception')}")

    # A channel <image> block carries title/link children; a bare href is itunes:image.
    image = channel.get("image") or {}
    is_rss_image = "title" in image or "link" in image
    rss_image = _image_href(image) if is_rss_image else None
    itunes_image = None if is_rss_image else _image_href(image)

    publisher = channel.get("publisher_detail") or {}
    owner = Owner(name=_text(publisher.get("name")), email=_text(publisher.get("email")))
    _, itunes_categories = _split_tags(channel.get("tags"))

    return RawFeed(
        title=_text(channel.get("title")),
        link=_text(channel.get("link")),
        image=rss_image,
        itunes=ItunesFeedFields(
            image=itunes_image,
            owner=owner if owner.name or owner.email else None,
            categories=itunes_categories,
        ),
        items=tuple(_parse_entry(entry) for entry in parsed.entries),
    )


def fetch_feed(
    feed_url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> RawFeed:
    """Fetch and parse a podcast RSS feed.

    Args:
        feed_url: URL of the podcast RSS feed.
        timeout: Request timeout in seconds (default: 30.0).
        user_agent: User-Agent header sent upstream.

    Returns:
        The parsed feed.

    Raises:
        FeedFetchError: If the feed is unreachable or cannot be parsed.
    """
    if not feed_url or not feed_url.strip():
        raise FeedFetchError("Feed URL cannot be empty", feed_url)

    feed_url = feed_url.strip()

    try:
        with httpx.Client(
            timeout=timeout, follow_redirects=True, headers={"User-Agent": user_agent}
        ) as client:
            response = client.get(feed_url)
            response.raise_for_status()
            content = response.content

    except httpx.TimeoutException as e:
        logger.warning("Feed request to %s timed out", feed_url)
        raise FeedFetchError(f"RSS feed request timed out after {timeout} seconds", feed_url) from e

    except httpx.HTTPStatusError as e:
        logger.warning("Feed %s returned status %s", feed_url, e.response.status_code)
        raise FeedFetchError(
            f"RSS feed returned error status {e.response.status_code}", feed_url
        ) from e

    except httpx.HTTPError as e:
        logger.warning("Failed to fetch feed %s: %s", feed_url, e)
        raise FeedFetchError(f"Failed to connect to RSS feed: {e}", feed_url) from e

    try:
        return parse_feed_content(content)
    except ValueError as e:
        logger.warning("Failed to parse feed %s: %s", feed_url, e)
        raise FeedFetchError(str(e), feed_url) from e
