"""Feed item normalization: category merging and the working item list."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from podembed.core.audio import extract_audio_item
from podembed.core.models import NormalizedAudioItem, RawFeed, RawFeedItem


def merge_categories(*sources: Iterable[str] | None) -> tuple[str, ...] | None:
    """Union category sources in order, trimming and dropping duplicates.

    Args:
        *sources: Category sequences in precedence order. ``None`` means the
            source is absent.

    Returns:
        Categories in first-seen order, or None when every source is absent.
        Duplicates are compared case-sensitively after trimming.
    """
    present = [source for source in sources if source is not None]
    if not present:
        return None

    merged: dict[str, None] = {}
    for source in present:
        for category in source:
            merged.setdefault(category.strip(), None)
    return tuple(merged)


def _with_merged_categories(feed: RawFeed, item: RawFeedItem) -> RawFeedItem:
    feed_categories = feed.itunes.categories if feed.itunes else None
    item_itunes_categories = item.itunes.categories if item.itunes else None
    categories = merge_categories(feed_categories, item.categories, item_itunes_categories)
    return replace(item, categories=categories)


def normalize_feed_items(feed: RawFeed) -> list[NormalizedAudioItem]:
    """Build the working item list for a feed, in original feed order.

    Each item's categories become the union of feed-level itunes categories,
    item categories and item-level itunes categories.
    """
    return [extract_audio_item(_with_merged_categories(feed, item)) for item in feed.items]
