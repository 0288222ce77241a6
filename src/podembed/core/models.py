"""Data models for podembed.

All records are immutable value objects built per request. Optional fields
use ``None`` to mean "absent"; the ``to_dict`` serializers drop absent
fields entirely so that no key is ever emitted with a null value.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Literal

# ``False`` disables playlist mode, ``True``/"all" is unbounded, an int caps it.
ShowPlaylist = bool | int | Literal["all"]


def compact(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``mapping`` without keys whose value is absent."""
    return {key: value for key, value in mapping.items() if value is not None}


@dataclass(frozen=True)
class ItunesItemFields:
    """itunes-namespace fields of a single feed item."""

    subtitle: str | None = None
    image: str | None = None
    duration: str | None = None
    season: str | None = None
    categories: tuple[str, ...] | None = None


@dataclass(frozen=True)
class RawFeedItem:
    """One entry from a parsed feed, before normalization."""

    guid: str | None = None
    link: str | None = None
    title: str | None = None
    enclosure_url: str | None = None
    categories: tuple[str, ...] | None = None
    itunes: ItunesItemFields | None = None


@dataclass(frozen=True)
class Owner:
    """Feed owner from the itunes namespace."""

    name: str | None = None
    email: str | None = None

    def to_dict(self) -> dict[str, str]:
        return compact({"name": self.name, "email": self.email})


@dataclass(frozen=True)
class ItunesFeedFields:
    """itunes-namespace fields of a feed channel."""

    image: str | None = None
    owner: Owner | None = None
    categories: tuple[str, ...] | None = None


@dataclass(frozen=True)
class RawFeed:
    """A parsed podcast feed, as produced by the feed service."""

    title: str | None = None
    link: str | None = None
    image: str | None = None
    itunes: ItunesFeedFields | None = None
    items: tuple[RawFeedItem, ...] = ()


@dataclass(frozen=True)
class NormalizedAudioItem:
    """A playable audio track.

    Attributes:
        guid: Item guid from the feed.
        link: Item page, or the feed link when the item has none.
        title: Track title.
        url: Media URL (from the item enclosure).
        subtitle: Track subtitle.
        image_url: Track artwork URL.
        duration: Duration string as published in the feed.
        season: Season number.
        categories: Trimmed, de-duplicated categories in first-seen order.
    """

    guid: str | None = None
    link: str | None = None
    title: str | None = None
    url: str | None = None
    subtitle: str | None = None
    image_url: str | None = None
    duration: str | None = None
    season: int | None = None
    categories: tuple[str, ...] | None = None

    def as_fields(self) -> dict[str, Any]:
        """Return present fields keyed by attribute name."""
        return compact({f.name: getattr(self, f.name) for f in fields(self)})

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON contract consumed by the player."""
        return compact(
            {
                "guid": self.guid,
                "link": self.link,
                "title": self.title,
                "url": self.url,
                "subtitle": self.subtitle,
                "imageUrl": self.image_url,
                "duration": self.duration,
                "season": self.season,
                "categories": list(self.categories) if self.categories is not None else None,
            }
        )


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _parse_show_playlist(value: Any) -> ShowPlaylist:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return value if value > 0 else False
    text = str(value).strip().lower()
    if text in ("", "false", "0", "no", "off"):
        return False
    if text in ("true", "yes", "on"):
        return True
    if text == "all":
        return "all"
    cap = _optional_int(text)
    return cap if cap is not None and cap > 0 else False


@dataclass(frozen=True)
class EmbedConfig:
    """Caller-supplied configuration for an embed."""

    feed_url: str | None = None
    subscribe_url: str | None = None
    image_url: str | None = None
    title: str | None = None
    subtitle: str | None = None
    audio_url: str | None = None
    ep_image_url: str | None = None
    episode_guid: str | None = None
    show_playlist: ShowPlaylist = False
    playlist_season: int | None = None
    playlist_category: str | None = None

    @property
    def playlist_enabled(self) -> bool:
        return bool(self.show_playlist)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EmbedConfig:
        """Build a config from loosely typed values such as query parameters.

        Both camelCase and snake_case keys are accepted. Empty strings are
        treated as absent, and unparseable numbers are dropped.
        """

        def get(camel: str, snake: str) -> Any:
            return data.get(camel, data.get(snake))

        return cls(
            feed_url=_optional_str(get("feedUrl", "feed_url")),
            subscribe_url=_optional_str(get("subscribeUrl", "subscribe_url")),
            image_url=_optional_str(get("imageUrl", "image_url")),
            title=_optional_str(get("title", "title")),
            subtitle=_optional_str(get("subtitle", "subtitle")),
            audio_url=_optional_str(get("audioUrl", "audio_url")),
            ep_image_url=_optional_str(get("epImageUrl", "ep_image_url")),
            episode_guid=_optional_str(get("episodeGuid", "episode_guid")),
            show_playlist=_parse_show_playlist(get("showPlaylist", "show_playlist")),
            playlist_season=_optional_int(get("playlistSeason", "playlist_season")),
            playlist_category=_optional_str(get("playlistCategory", "playlist_category")),
        )


@dataclass(frozen=True)
class EmbedData:
    """Canonical description of what the player should play."""

    bg_image_url: str | None = None
    audio: NormalizedAudioItem | None = None
    playlist: tuple[NormalizedAudioItem, ...] | None = None
    rss_title: str | None = None
    share_url: str | None = None
    owner: Owner | None = None
    follow_urls: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-ready data, omitting every absent field."""
        return compact(
            {
                "bgImageUrl": self.bg_image_url,
                "audio": self.audio.to_dict() if self.audio else None,
                "playlist": [item.to_dict() for item in self.playlist] if self.playlist else None,
                "rssTitle": self.rss_title,
                "shareUrl": self.share_url,
                "owner": (self.owner.to_dict() or None) if self.owner else None,
                "followUrls": dict(self.follow_urls) if self.follow_urls else None,
            }
        )


@dataclass(frozen=True)
class TranscriptPayload:
    """Fetched transcript text with its declared content type."""

    text: str
    content_type: str | None = None


@dataclass(frozen=True)
class Segment:
    """A time-coded transcript segment (podcast namespace JSON)."""

    body: str
    start_time: float  # seconds
    end_time: float  # seconds
    speaker: str | None = None


@dataclass(frozen=True)
class Cue:
    """A single WebVTT cue."""

    start: float  # seconds
    end: float  # seconds
    body: str
    identifier: str | None = None


@dataclass(frozen=True)
class VttDocument:
    """A WebVTT document: the ``WEBVTT`` header followed by cues."""

    cues: tuple[Cue, ...] = field(default_factory=tuple)
