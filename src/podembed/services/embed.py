"""Embed data service: fetch the configured feed and compose embed data."""

from __future__ import annotations

from podembed.core.config import DEFAULT_FETCH_TIMEOUT, DEFAULT_USER_AGENT
from podembed.core.embed import compose_embed_data
from podembed.core.models import EmbedConfig, EmbedData
from podembed.services.rss import fetch_feed


def build_embed_data(
    config: EmbedConfig,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> EmbedData:
    """Build embed data for a config, fetching ``config.feed_url`` when set.

    Raises:
        FeedFetchError: If the configured feed cannot be fetched or parsed.
    """
    feed = (
        fetch_feed(config.feed_url, timeout=timeout, user_agent=user_agent)
        if config.feed_url
        else None
    )
    return compose_embed_data(config, feed)
