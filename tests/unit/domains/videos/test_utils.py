"""
Tests for video URL parsing and display formatting helpers.
"""

import pytest
from prisma.enums import VideoSourceType

from rehearsal.domains.videos.utils import (
    format_duration,
    format_file_size,
    format_timestamp,
    get_video_embed_url,
    is_valid_video_url,
    parse_timestamp,
    parse_video_url,
)


class TestParseVideoUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
        ],
    )
    def test_youtube_forms(self, url: str):
        parsed = parse_video_url(url)

        assert parsed.source_type == VideoSourceType.youtube
        assert parsed.external_id == "dQw4w9WgXcQ"
        assert parsed.embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ"
        assert parsed.thumbnail_url == (
            "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"
        )

    @pytest.mark.parametrize(
        "url", ["https://vimeo.com/76979871", "https://player.vimeo.com/video/76979871"]
    )
    def test_vimeo_forms(self, url: str):
        parsed = parse_video_url(url)

        assert parsed.source_type == VideoSourceType.vimeo
        assert parsed.external_id == "76979871"
        assert parsed.embed_url == "https://player.vimeo.com/video/76979871"
        assert parsed.thumbnail_url is None

    def test_anything_else_is_external(self):
        parsed = parse_video_url("https://cdn.example.com/rehearsal.mp4")

        assert parsed.source_type == VideoSourceType.external
        assert parsed.external_id is None
        assert parsed.embed_url is None

    def test_short_youtube_id_is_not_youtube(self):
        assert (
            parse_video_url("https://youtu.be/short").source_type
            == VideoSourceType.external
        )


class TestEmbedUrl:
    def test_youtube(self):
        assert (
            get_video_embed_url(VideoSourceType.youtube, "dQw4w9WgXcQ", None)
            == "https://www.youtube.com/embed/dQw4w9WgXcQ"
        )

    def test_external_uses_its_url(self):
        url = "https://cdn.example.com/a.mp4"
        assert get_video_embed_url(VideoSourceType.external, None, url) == url

    def test_upload_has_no_embed(self):
        assert get_video_embed_url(VideoSourceType.upload, None, None) is None


class TestIsValidVideoUrl:
    @pytest.mark.parametrize(
        "url", ["https://vimeo.com/1", "http://example.com/clip.mp4"]
    )
    def test_valid(self, url: str):
        assert is_valid_video_url(url) is True

    @pytest.mark.parametrize(
        "url", ["", "not a url", "ftp://example.com/clip.mp4", "https://", "youtube.com"]
    )
    def test_invalid(self, url: str):
        assert is_valid_video_url(url) is False


class TestTimestamps:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "0:00"), (5, "0:05"), (65.9, "1:05"), (3600, "1:00:00"), (3725, "1:02:05")],
    )
    def test_format_timestamp(self, seconds: float, expected: str):
        assert format_timestamp(seconds) == expected

    def test_negative_formats_as_zero(self):
        assert format_timestamp(-3) == "0:00"

    @pytest.mark.parametrize(
        "text, expected", [("1:05", 65.0), ("01:02:05", 3725.0), ("0:07.5", 7.5)]
    )
    def test_parse_timestamp(self, text: str, expected: float):
        assert parse_timestamp(text) == expected

    @pytest.mark.parametrize("text", ["1:2:3:4", "5", ""])
    def test_unrecognized_shape_raises(self, text: str):
        with pytest.raises(ValueError):
            parse_timestamp(text)

    def test_non_numeric_part_raises(self):
        with pytest.raises(ValueError):
            parse_timestamp("ab:cd")


class TestFormatting:
    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 Bytes"),
            (512, "512 Bytes"),
            (1536, "1.5 KB"),
            (500 * 1024 * 1024, "500 MB"),
            (3 * 1024**3, "3 GB"),
        ],
    )
    def test_format_file_size(self, size: int, expected: str):
        assert format_file_size(size) == expected

    @pytest.mark.parametrize(
        "seconds, expected",
        [(42, "42s"), (60, "1m"), (95, "1m 35s"), (3600, "1h"), (5400, "1h 30m")],
    )
    def test_format_duration(self, seconds: float, expected: str):
        assert format_duration(seconds) == expected
