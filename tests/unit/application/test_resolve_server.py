"""Tests for ResolveServerUseCase and HLS selection."""

from __future__ import annotations

from typing import Any

import pytest

from animeav1.application.site import SiteUrls
from animeav1.application.use_cases import ResolveServerUseCase
from animeav1.application.use_cases.resolve_server import select_hls_manifest
from animeav1.domain.exceptions import (
    InvalidReference,
    MalformedPayload,
    NoContentForVariant,
    RecordNotFound,
    StreamNotFound,
)
from animeav1.domain.graph import Pool

_SUB_ID = '{"slug":"one-piece","number":1,"type":"sub"}'
_DUB_ID = '{"slug":"one-piece","number":1,"type":"dub"}'


class TestSelectHlsManifest:
    def test_first_hls_after_other_servers(self) -> None:
        pool = Pool(
            [
                {"server": 2, "url": 3},
                {"server": 4, "url": 5},
                "OTHER",
                "https://other.example/e/1",
                "HLS",
                "https://player.example/play/abc",
            ]
        )
        assert select_hls_manifest(pool, [0, 1]) == "https://player.example/m3u8/abc"

    def test_first_hls_wins(self) -> None:
        pool = Pool(
            [
                {"server": 2, "url": 3},
                {"server": 2, "url": 4},
                "HLS",
                "https://a.example/play/1",
                "https://b.example/play/2",
            ]
        )
        assert select_hls_manifest(pool, [1, 0]) == "https://b.example/m3u8/2"

    def test_only_first_play_segment_rewritten(self) -> None:
        pool = Pool([{"server": 1, "url": 2}, "HLS", "https://x/play/play/1"])
        assert select_hls_manifest(pool, [0]) == "https://x/m3u8/play/1"

    def test_unresolvable_entries_skipped(self) -> None:
        pool = Pool([{"server": 9, "url": 2}, "HLS", "u", "junk"])
        assert select_hls_manifest(pool, [0, 3, True, 42]) is None

    def test_name_match_is_exact(self) -> None:
        pool = Pool([{"server": 1, "url": 2}, "hls", "https://x/play/1"])
        assert select_hls_manifest(pool, [0]) is None


class TestResolveServer:
    @pytest.mark.asyncio()
    async def test_sub_stream(
        self, fake_fetcher: Any, site_urls: SiteUrls, episode_payload: dict[str, Any]
    ) -> None:
        fake_fetcher.route(site_urls.episode_data("one-piece", 1), episode_payload)

        server = await ResolveServerUseCase(fake_fetcher, site_urls).execute(_SUB_ID)

        assert server.server == "HLS"
        assert server.headers == {"Referer": "null"}
        assert len(server.video_sources) == 1
        source = server.video_sources[0]
        assert source.url == "https://player.zilla-networks.com/m3u8/sub456"
        assert source.type == "m3u8"
        assert source.quality == "auto"
        assert source.subtitles == []

    @pytest.mark.asyncio()
    async def test_dub_stream(
        self, fake_fetcher: Any, site_urls: SiteUrls, episode_payload: dict[str, Any]
    ) -> None:
        fake_fetcher.route(site_urls.episode_data("one-piece", 1), episode_payload)

        server = await ResolveServerUseCase(fake_fetcher, site_urls).execute(_DUB_ID)

        assert server.video_sources[0].url == (
            "https://player.zilla-networks.com/m3u8/dub123"
        )

    @pytest.mark.asyncio()
    async def test_missing_dub_category(
        self, fake_fetcher: Any, site_urls: SiteUrls, episode_payload: dict[str, Any]
    ) -> None:
        del episode_payload["nodes"][1]["data"][2]["DUB"]
        fake_fetcher.route(site_urls.episode_data("one-piece", 1), episode_payload)

        with pytest.raises(NoContentForVariant, match="DUB") as exc_info:
            await ResolveServerUseCase(fake_fetcher, site_urls).execute(_DUB_ID)
        assert exc_info.value.category == "DUB"

    @pytest.mark.asyncio()
    async def test_no_hls_server(
        self, fake_fetcher: Any, site_urls: SiteUrls, episode_payload: dict[str, Any]
    ) -> None:
        # SUB only lists Mega.
        episode_payload["nodes"][1]["data"][3] = [4]
        fake_fetcher.route(site_urls.episode_data("one-piece", 1), episode_payload)

        with pytest.raises(StreamNotFound) as exc_info:
            await ResolveServerUseCase(fake_fetcher, site_urls).execute(_SUB_ID)
        assert exc_info.value.variant == "sub"

    @pytest.mark.asyncio()
    async def test_server_list_not_array(
        self, fake_fetcher: Any, site_urls: SiteUrls, episode_payload: dict[str, Any]
    ) -> None:
        episode_payload["nodes"][1]["data"][2]["SUB"] = 5
        fake_fetcher.route(site_urls.episode_data("one-piece", 1), episode_payload)

        with pytest.raises(MalformedPayload):
            await ResolveServerUseCase(fake_fetcher, site_urls).execute(_SUB_ID)

    @pytest.mark.asyncio()
    async def test_page_without_embeds(
        self, fake_fetcher: Any, site_urls: SiteUrls, media_payload: dict[str, Any]
    ) -> None:
        fake_fetcher.route(site_urls.episode_data("one-piece", 1), media_payload)

        with pytest.raises(RecordNotFound):
            await ResolveServerUseCase(fake_fetcher, site_urls).execute(_SUB_ID)

    @pytest.mark.asyncio()
    @pytest.mark.parametrize(
        "episode_id",
        [
            "one-piece",
            '{"slug":"one-piece","type":"sub"}',
            '{"slug":"one-piece","number":NaN,"type":"sub"}',
            "",
        ],
    )
    async def test_invalid_reference(
        self, fake_fetcher: Any, site_urls: SiteUrls, episode_id: str
    ) -> None:
        with pytest.raises(InvalidReference):
            await ResolveServerUseCase(fake_fetcher, site_urls).execute(episode_id)
        assert fake_fetcher.calls == []

    @pytest.mark.asyncio()
    async def test_fractional_episode_url(
        self, fake_fetcher: Any, site_urls: SiteUrls, episode_payload: dict[str, Any]
    ) -> None:
        fake_fetcher.route(site_urls.episode_data("one-piece", 6.5), episode_payload)

        await ResolveServerUseCase(fake_fetcher, site_urls).execute(
            '{"slug":"one-piece","number":6.5,"type":"sub"}'
        )

        assert fake_fetcher.calls == [
            "https://animeav1.test/media/one-piece/6.5/__data.json"
        ]
