"""Tests for raw feed item extraction."""

from hypothesis import given, strategies as st

from podembed.core.audio import extract_audio_item, parse_season
from podembed.core.models import ItunesItemFields, RawFeedItem


class TestParseSeason:
    """Tests for parse_season."""

    def test_numeric_season(self) -> None:
        assert parse_season("3") == 3

    def test_season_with_whitespace(self) -> None:
        assert parse_season(" 12 ") == 12

    def test_non_numeric_season_is_dropped(self) -> None:
        assert parse_season("Season One") is None

    def test_missing_season(self) -> None:
        assert parse_season(None) is None

    @given(st.integers(min_value=0, max_value=10_000))
    def test_any_integer_string_parses(self, season: int) -> None:
        assert parse_season(str(season)) == season


class TestExtractAudioItem:
    """Tests for extract_audio_item."""

    def test_copies_core_fields(self) -> None:
        item = RawFeedItem(
            guid="ep1",
            link="https://example.com/ep1",
            title="Episode 1",
            enclosure_url="https://example.com/ep1.mp3",
        )

        audio = extract_audio_item(item)

        assert audio.guid == "ep1"
        assert audio.link == "https://example.com/ep1"
        assert audio.title == "Episode 1"
        assert audio.url == "https://example.com/ep1.mp3"

    def test_missing_enclosure_leaves_url_absent(self) -> None:
        audio = extract_audio_item(RawFeedItem(guid="ep1"))

        assert audio.url is None
        assert "url" not in audio.to_dict()

    def test_trims_categories(self) -> None:
        audio = extract_audio_item(RawFeedItem(categories=(" News", "Tech  ")))

        assert audio.categories == ("News", "Tech")

    def test_missing_categories_stay_absent(self) -> None:
        audio = extract_audio_item(RawFeedItem(guid="ep1"))

        assert audio.categories is None
        assert "categories" not in audio.to_dict()

    def test_copies_itunes_fields(self) -> None:
        item = RawFeedItem(
            itunes=ItunesItemFields(
                subtitle="Sub",
                image="https://example.com/ep.jpg",
                duration="01:00:00",
                season="2",
            )
        )

        audio = extract_audio_item(item)

        assert audio.subtitle == "Sub"
        assert audio.image_url == "https://example.com/ep.jpg"
        assert audio.duration == "01:00:00"
        assert audio.season == 2

    def test_malformed_season_is_omitted(self) -> None:
        audio = extract_audio_item(RawFeedItem(itunes=ItunesItemFields(season="two")))

        assert audio.season is None
        assert "season" not in audio.to_dict()

    def test_serializes_camel_case_keys(self) -> None:
        audio = extract_audio_item(
            RawFeedItem(guid="ep1", itunes=ItunesItemFields(image="https://example.com/a.jpg"))
        )

        assert audio.to_dict() == {"guid": "ep1", "imageUrl": "https://example.com/a.jpg"}
