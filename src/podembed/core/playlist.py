"""Playlist resolution: filter stages, truncation and single-episode fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from podembed.core.merge import merge_layers
from podembed.core.models import EmbedConfig, NormalizedAudioItem, ShowPlaylist

logger = logging.getLogger(__name__)

Stage = Callable[[list[NormalizedAudioItem], EmbedConfig], list[NormalizedAudioItem]]


def filter_by_season(
    items: list[NormalizedAudioItem], config: EmbedConfig
) -> list[NormalizedAudioItem]:
    """Keep items in ``config.playlist_season``; pass through when unset."""
    if config.playlist_season is None:
        return items
    season = str(config.playlist_season)
    return [item for item in items if item.season is not None and str(item.season) == season]


def filter_by_category(
    items: list[NormalizedAudioItem], config: EmbedConfig
) -> list[NormalizedAudioItem]:
    """Keep items tagged with ``config.playlist_category`` (case-insensitive)."""
    if not config.playlist_category:
        return items
    category = config.playlist_category.lower()
    return [
        item
        for item in items
        if item.categories and category in (c.lower() for c in item.categories)
    ]


def truncate(items: list[NormalizedAudioItem], config: EmbedConfig) -> list[NormalizedAudioItem]:
    """Cap the list to ``config.show_playlist`` items unless it is unbounded."""
    cap = playlist_cap(config.show_playlist)
    return items if cap is None else items[:cap]


def playlist_cap(show_playlist: ShowPlaylist) -> int | None:
    """Return the item cap for a ``show_playlist`` value, None for unbounded."""
    if show_playlist is True or show_playlist == "all":
        return None
    if isinstance(show_playlist, int) and show_playlist > 0:
        return show_playlist
    return 0


PLAYLIST_STAGES: tuple[Stage, ...] = (filter_by_season, filter_by_category, truncate)


def find_episode(
    items: Sequence[NormalizedAudioItem], episode_guid: str | None
) -> NormalizedAudioItem | None:
    """Return the item whose guid matches ``episode_guid``, if any."""
    if not episode_guid:
        return None
    for item in items:
        if item.guid == episode_guid:
            return item
    return None


def decorate(
    item: NormalizedAudioItem, link: str | None = None, image_url: str | None = None
) -> NormalizedAudioItem:
    """Fill in the feed's shared link and artwork where the item has none."""
    return NormalizedAudioItem(
        **merge_layers({"link": link, "image_url": image_url}, item.as_fields())
    )


def resolve_playlist(
    items: Sequence[NormalizedAudioItem],
    config: EmbedConfig,
    link: str | None = None,
    image_url: str | None = None,
) -> list[NormalizedAudioItem]:
    """Select the ordered items to play.

    In playlist mode the stages in ``PLAYLIST_STAGES`` run in order, each
    consuming the previous stage's output. When playlist mode is off or
    the stages leave nothing, a single item is returned: the episode
    matching ``config.episode_guid``, else the first item.

    Args:
        items: Normalized items in feed order.
        config: Embed configuration.
        link: Feed link used for items without their own link.
        image_url: Feed artwork used for items without their own image.

    Returns:
        Decorated items; empty only when ``items`` is empty.
    """
    selected: list[NormalizedAudioItem] = []

    if config.playlist_enabled:
        selected = list(items)
        for stage in PLAYLIST_STAGES:
            selected = stage(selected, config)

    if not selected and items:
        episode = find_episode(items, config.episode_guid)
        if episode is None:
            if config.episode_guid:
                logger.debug("Episode %r not found in feed, using first item", config.episode_guid)
            episode = items[0]
        selected = [episode]

    return [decorate(item, link=link, image_url=image_url) for item in selected]
