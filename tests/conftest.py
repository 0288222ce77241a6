"""Pytest fixtures for podembed tests."""

import pytest

from podembed.core.models import (
    ItunesFeedFields,
    ItunesItemFields,
    Owner,
    RawFeed,
    RawFeedItem,
)

SAMPLE_RSS = """\
<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">
  <channel>
    <title>Test Podcast</title>
    <link>https://example.com/show</link>
    <description>A test podcast</description>
    <itunes:category text="News"/>
    <item>
      <title>Episode 1</title>
      <link>https://example.com/ep1</link>
      <guid isPermaLink="false">ep1</guid>
      <category>Tech </category>
      <enclosure url="https://example.com/ep1.mp3" type="audio/mpeg" length="1234"/>
      <itunes:duration>01:02:03</itunes:duration>
    </item>
    <item>
      <title>Episode 2</title>
      <link>https://example.com/ep2</link>
      <guid isPermaLink="false">ep2</guid>
      <enclosure url="https://example.com/ep2.mp3" type="audio/mpeg" length="1234"/>
    </item>
  </channel>
</rss>
"""


def make_item(guid: str, **kwargs) -> RawFeedItem:
    """Create a raw feed item with sensible defaults."""
    return RawFeedItem(
        guid=guid,
        title=kwargs.pop("title", f"Episode {guid}"),
        enclosure_url=kwargs.pop("enclosure_url", f"https://example.com/{guid}.mp3"),
        **kwargs,
    )


@pytest.fixture
def sample_rss() -> str:
    """Return a small RSS document."""
    return SAMPLE_RSS


@pytest.fixture
def sample_feed() -> RawFeed:
    """Create a sample feed with three seasoned, categorized episodes."""
    return RawFeed(
        title="Test Podcast",
        link="https://example.com/show",
        image="https://example.com/cover.jpg",
        itunes=ItunesFeedFields(
            image="https://example.com/itunes-cover.jpg",
            owner=Owner(name="Test Owner", email="owner@example.com"),
            categories=("News",),
        ),
        items=(
            make_item(
                "ep1",
                link="https://example.com/ep1",
                categories=("Tech",),
                itunes=ItunesItemFields(season="1", duration="10:00"),
            ),
            make_item(
                "ep2",
                categories=("Science",),
                itunes=ItunesItemFields(
                    season="2",
                    subtitle="Second episode",
                    image="https://example.com/ep2.jpg",
                ),
            ),
            make_item("ep3", itunes=ItunesItemFields(season="2", categories=("Tech",))),
        ),
    )
