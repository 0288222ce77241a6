"""Mapping of raw feed items to normalized audio items."""

from __future__ import annotations

import logging

from podembed.core.models import NormalizedAudioItem, RawFeedItem

logger = logging.getLogger(__name__)


def parse_season(value: str | None) -> int | None:
    """Parse an itunes season string.

    Args:
        value: Season as published in the feed, e.g. ``"2"``.

    Returns:
        The season number, or None when the value is missing or not numeric.
    """
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.debug("Dropping non-numeric season %r", value)
        return None


def extract_audio_item(item: RawFeedItem) -> NormalizedAudioItem:
    """Map one raw feed item to a normalized audio item.

    Never raises; missing source fields simply stay absent.
    """
    itunes = item.itunes
    categories = (
        tuple(category.strip() for category in item.categories)
        if item.categories is not None
        else None
    )

    return NormalizedAudioItem(
        guid=item.guid,
        link=item.link,
        title=item.title,
        url=item.enclosure_url or None,
        subtitle=(itunes.subtitle or None) if itunes else None,
        image_url=(itunes.image or None) if itunes else None,
        duration=(itunes.duration or None) if itunes else None,
        season=parse_season(itunes.season) if itunes and itunes.season else None,
        categories=categories,
    )
