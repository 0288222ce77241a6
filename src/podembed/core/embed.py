"""Composition of the canonical embed data record.

The resolved audio track is built from three override layers, lowest
precedence first:

1. Feed defaults: feed artwork (falling back to the itunes image) and the
   feed title as subtitle.
2. The selected episode: the item matching ``episode_guid`` when present,
   otherwise the first playlist item.
3. Explicit config overrides: title, subtitle, audio url and episode image.
"""

from __future__ import annotations

from podembed.core.feed import normalize_feed_items
from podembed.core.merge import merge_layers
from podembed.core.models import EmbedConfig, EmbedData, NormalizedAudioItem, RawFeed
from podembed.core.playlist import decorate, find_episode, resolve_playlist


def _first_present(*values: str | None) -> str | None:
    for value in values:
        if value:
            return value
    return None


def compose_embed_data(config: EmbedConfig, feed: RawFeed | None = None) -> EmbedData:
    """Merge feed data and caller config into one embed data record.

    Args:
        config: Caller configuration.
        feed: Parsed feed, or None when embedding from config alone.

    Returns:
        EmbedData where every field without a source is absent.
    """
    feed = feed or RawFeed()
    itunes_image = feed.itunes.image if feed.itunes else None
    owner = feed.itunes.owner if feed.itunes else None
    item_image = _first_present(itunes_image, feed.image)

    items = normalize_feed_items(feed)
    playlist = resolve_playlist(items, config, link=feed.link, image_url=item_image)

    episode = find_episode(items, config.episode_guid)
    if episode is not None:
        selected: NormalizedAudioItem | None = decorate(
            episode, link=feed.link, image_url=item_image
        )
    else:
        selected = playlist[0] if playlist else None

    audio_fields = merge_layers(
        {"image_url": _first_present(feed.image, itunes_image), "subtitle": feed.title},
        selected.as_fields() if selected else None,
        {
            "title": config.title,
            "subtitle": config.subtitle,
            "url": config.audio_url,
            "image_url": config.ep_image_url,
        },
    )
    audio = NormalizedAudioItem(**audio_fields) if audio_fields else None

    bg_image_url = _first_present(
        config.image_url, feed.image, itunes_image, audio.image_url if audio else None
    )
    share_url = feed.link if config.playlist_enabled else (audio.link if audio else None)
    rss_url = _first_present(config.subscribe_url, config.feed_url)

    return EmbedData(
        bg_image_url=bg_image_url,
        audio=audio,
        playlist=tuple(playlist) if config.playlist_enabled and playlist else None,
        rss_title=feed.title or None,
        share_url=share_url or None,
        owner=owner if owner and owner.to_dict() else None,
        follow_urls={"rss": rss_url} if rss_url else None,
    )
