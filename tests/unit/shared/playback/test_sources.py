"""
Tests for player backend selection in rehearsal/shared/playback/sources.py
"""

import pytest
from prisma.enums import VideoSourceType

from rehearsal.shared.playback import (
    PlayerBackend,
    VideoSourceDescriptor,
    build_player_config,
    select_backend,
)


class TestSelectBackend:
    @pytest.mark.parametrize(
        "descriptor, expected",
        [
            (
                VideoSourceDescriptor(
                    VideoSourceType.upload, playback_url="https://s/signed.mp4"
                ),
                PlayerBackend.NATIVE,
            ),
            (VideoSourceDescriptor(VideoSourceType.upload), PlayerBackend.UNAVAILABLE),
            (
                VideoSourceDescriptor(VideoSourceType.youtube, external_id="dQw4w9WgXcQ"),
                PlayerBackend.YOUTUBE,
            ),
            (
                VideoSourceDescriptor(VideoSourceType.vimeo, external_id="76979871"),
                PlayerBackend.IFRAME,
            ),
            (
                VideoSourceDescriptor(
                    VideoSourceType.external, external_url="https://cdn/a.mp4"
                ),
                PlayerBackend.NATIVE,
            ),
            (
                VideoSourceDescriptor(
                    VideoSourceType.youtube, external_url="https://youtube.com/x"
                ),
                PlayerBackend.NATIVE,
            ),
            (VideoSourceDescriptor(VideoSourceType.external), PlayerBackend.UNAVAILABLE),
        ],
    )
    def test_backend_for_source(self, descriptor, expected):
        assert select_backend(descriptor) is expected


class TestBuildPlayerConfig:
    def test_native_plays_signed_url(self):
        config = build_player_config(
            VideoSourceDescriptor(VideoSourceType.upload, playback_url="https://s/a.mp4")
        )

        assert config.source_url == "https://s/a.mp4"
        assert config.embed_url is None

    def test_vimeo_embed(self):
        config = build_player_config(
            VideoSourceDescriptor(VideoSourceType.vimeo, external_id="76979871")
        )

        assert config.backend is PlayerBackend.IFRAME
        assert config.embed_url == "https://player.vimeo.com/video/76979871"
        assert config.source_url is None

    def test_poll_intervals_come_from_settings(self):
        config = build_player_config(
            VideoSourceDescriptor(VideoSourceType.youtube, external_id="dQw4w9WgXcQ")
        )

        assert config.poll_playing_seconds == 0.25
        assert config.poll_paused_seconds == 0.5
