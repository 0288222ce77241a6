"""Tests for playlist resolution."""

from hypothesis import given, strategies as st

from podembed.core.models import EmbedConfig, NormalizedAudioItem
from podembed.core.playlist import (
    filter_by_category,
    filter_by_season,
    find_episode,
    playlist_cap,
    resolve_playlist,
    truncate,
)


def make_items(count: int, season: int | None = None) -> list[NormalizedAudioItem]:
    return [
        NormalizedAudioItem(guid=f"ep{i}", title=f"Episode {i}", season=season)
        for i in range(1, count + 1)
    ]


class TestFilterStages:
    """Tests for the individual playlist stages."""

    def test_season_filter(self) -> None:
        items = make_items(2, season=1) + make_items(3, season=2)

        result = filter_by_season(items, EmbedConfig(playlist_season=2))

        assert len(result) == 3
        assert all(i.season == 2 for i in result)

    def test_season_filter_passes_through_when_unset(self) -> None:
        items = make_items(3)

        assert filter_by_season(items, EmbedConfig()) == items

    def test_season_filter_drops_items_without_season(self) -> None:
        assert filter_by_season(make_items(3), EmbedConfig(playlist_season=1)) == []

    def test_category_filter_is_case_insensitive(self) -> None:
        items = [
            NormalizedAudioItem(guid="a", categories=("News", "Tech")),
            NormalizedAudioItem(guid="b", categories=("Science",)),
            NormalizedAudioItem(guid="c"),
        ]

        result = filter_by_category(items, EmbedConfig(playlist_category="tech"))

        assert [i.guid for i in result] == ["a"]

    def test_category_filter_passes_through_when_unset(self) -> None:
        items = make_items(2)

        assert filter_by_category(items, EmbedConfig()) == items

    def test_truncate_to_cap(self) -> None:
        result = truncate(make_items(5), EmbedConfig(show_playlist=2))

        assert [i.guid for i in result] == ["ep1", "ep2"]

    def test_truncate_all(self) -> None:
        assert len(truncate(make_items(5), EmbedConfig(show_playlist="all"))) == 5

    def test_playlist_cap(self) -> None:
        assert playlist_cap(True) is None
        assert playlist_cap("all") is None
        assert playlist_cap(3) == 3
        assert playlist_cap(False) == 0


class TestFindEpisode:
    """Tests for find_episode."""

    def test_finds_matching_guid(self) -> None:
        assert find_episode(make_items(3), "ep2").guid == "ep2"

    def test_missing_guid(self) -> None:
        assert find_episode(make_items(3), "missing") is None

    def test_no_guid(self) -> None:
        assert find_episode(make_items(3), None) is None


class TestResolvePlaylist:
    """Tests for resolve_playlist."""

    def test_playlist_disabled_selects_configured_episode(self) -> None:
        config = EmbedConfig(show_playlist=False, episode_guid="ep2")

        result = resolve_playlist(make_items(3), config)

        assert [i.guid for i in result] == ["ep2"]

    def test_unmatched_episode_falls_back_to_first_item(self) -> None:
        config = EmbedConfig(show_playlist=False, episode_guid="missing")

        result = resolve_playlist(make_items(3), config)

        assert [i.guid for i in result] == ["ep1"]

    def test_empty_filter_result_falls_back_to_single_item(self) -> None:
        config = EmbedConfig(show_playlist=True, playlist_category="nothing", episode_guid="ep3")

        result = resolve_playlist(make_items(3), config)

        assert [i.guid for i in result] == ["ep3"]

    def test_stages_run_in_order(self) -> None:
        items = [
            NormalizedAudioItem(guid="a", season=1, categories=("Tech",)),
            NormalizedAudioItem(guid="b", season=2, categories=("Tech",)),
            NormalizedAudioItem(guid="c", season=2, categories=("News",)),
            NormalizedAudioItem(guid="d", season=2, categories=("tech",)),
            NormalizedAudioItem(guid="e", season=2, categories=("Tech",)),
        ]
        config = EmbedConfig(show_playlist=2, playlist_season=2, playlist_category="Tech")

        result = resolve_playlist(items, config)

        assert [i.guid for i in result] == ["b", "d"]

    def test_empty_items(self) -> None:
        assert resolve_playlist([], EmbedConfig(show_playlist=True)) == []

    def test_decorates_with_feed_link_and_image(self) -> None:
        items = [
            NormalizedAudioItem(guid="a"),
            NormalizedAudioItem(guid="b", link="https://example.com/b", image_url="b.jpg"),
        ]

        result = resolve_playlist(
            items,
            EmbedConfig(show_playlist="all"),
            link="https://example.com/show",
            image_url="cover.jpg",
        )

        assert (result[0].link, result[0].image_url) == ("https://example.com/show", "cover.jpg")
        assert (result[1].link, result[1].image_url) == ("https://example.com/b", "b.jpg")

    @given(
        count=st.integers(min_value=0, max_value=30),
        cap=st.integers(min_value=1, max_value=30),
    )
    def test_truncation_keeps_first_items_in_order(self, count: int, cap: int) -> None:
        items = make_items(count, season=4)
        config = EmbedConfig(show_playlist=cap, playlist_season=4)

        result = resolve_playlist(items, config)

        expected = items[: min(cap, count)] if count else []
        assert [i.guid for i in result] == [i.guid for i in expected]
