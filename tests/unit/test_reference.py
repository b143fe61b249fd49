"""
Unit tests for decorated video reference parsing.

Parsing is pure: no filesystem, no subprocesses. These tests only
construct strings and inspect the resulting values.
"""

from pathlib import Path

import pytest

from video_frames.core.video.reference import (
    SamplingOptions,
    VideoReference,
    ensure_video_prefix,
    parse_video_reference,
)


class TestFpsOption:
    """Tests for the fps sampling option."""

    @pytest.mark.parametrize("fps", [1, 2, 5, 30, 120])
    def test_valid_rates_are_kept(self, fps):
        """Any positive integer rate comes through unchanged."""
        ref = parse_video_reference(f"video:clip.mp4?fps={fps}")
        assert ref.options.fps == fps

    def test_missing_fps_defaults_to_one(self):
        ref = parse_video_reference("video:clip.mp4")
        assert ref.options.fps == 1

    @pytest.mark.parametrize("value", ["abc", "", "fast", "-"])
    def test_non_numeric_fps_defaults_to_one(self, value):
        """Bad values fall back silently rather than raising."""
        ref = parse_video_reference(f"video:clip.mp4?fps={value}")
        assert ref.options.fps == 1

    def test_leading_integer_is_used(self):
        """'2.5' reads as 2, like a lenient integer parse."""
        ref = parse_video_reference("video:clip.mp4?fps=2.5")
        assert ref.options.fps == 2

    @pytest.mark.parametrize("value", ["0", "-3"])
    def test_non_positive_fps_defaults_to_one(self, value):
        ref = parse_video_reference(f"video:clip.mp4?fps={value}")
        assert ref.options.fps == 1

    def test_first_value_wins(self):
        ref = parse_video_reference("video:clip.mp4?fps=3&fps=7")
        assert ref.options.fps == 3


class TestTimestampsOption:
    """Tests for the timestamps overlay flag."""

    def test_one_enables_overlay(self):
        ref = parse_video_reference("video:clip.mp4?timestamps=1")
        assert ref.options.overlay_timestamps is True

    @pytest.mark.parametrize("value", ["0", "true", "yes", "", "11", "on"])
    def test_anything_else_disables_overlay(self, value):
        """Only the exact string '1' turns overlays on."""
        ref = parse_video_reference(f"video:clip.mp4?timestamps={value}")
        assert ref.options.overlay_timestamps is False

    def test_absent_disables_overlay(self):
        ref = parse_video_reference("video:clip.mp4?fps=2")
        assert ref.options.overlay_timestamps is False


class TestPathParsing:
    """Tests for the path portion and the prefix."""

    def test_prefix_is_stripped(self):
        ref = parse_video_reference("video:tests/Mieszkanie.mp4?fps=1&timestamps=1")
        assert ref.path == Path("tests/Mieszkanie.mp4")

    def test_prefix_is_optional(self):
        ref = parse_video_reference("clips/a.mov?fps=4")
        assert ref.path == Path("clips/a.mov")
        assert ref.options.fps == 4

    def test_combined_options(self):
        ref = parse_video_reference("video:sample.mp4?fps=2&timestamps=1")
        assert ref.options == SamplingOptions(fps=2, overlay_timestamps=True)

    def test_unknown_keys_are_ignored(self):
        ref = parse_video_reference("video:a.mp4?quality=high&fps=3&foo")
        assert ref.options.fps == 3
        assert ref.options.overlay_timestamps is False

    def test_malformed_query_does_not_raise(self):
        ref = parse_video_reference("video:a.mp4?&&=&fps&timestamps")
        assert ref.options == SamplingOptions()

    def test_parsing_does_not_touch_filesystem(self, tmp_path):
        """A path that doesn't exist parses just fine."""
        missing = tmp_path / "nope" / "missing.mp4"
        ref = parse_video_reference(f"video:{missing}")
        assert ref.path == missing


class TestVideoReference:
    """Tests for the VideoReference value object."""

    def test_ensure_prefix_adds_once(self):
        assert ensure_video_prefix("a.mp4") == "video:a.mp4"
        assert ensure_video_prefix("video:a.mp4") == "video:a.mp4"

    def test_decorated_form_parses_back(self):
        original = VideoReference(Path("dir/clip.mp4"), SamplingOptions(fps=3, overlay_timestamps=True))
        assert parse_video_reference(original.decorated) == original

    def test_display_name_is_stem(self):
        ref = parse_video_reference("video:/videos/holiday.final.mp4")
        assert ref.display_name == "holiday.final"

    def test_display_name_falls_back(self):
        ref = parse_video_reference("video:")
        assert ref.display_name == "video"

    def test_sampling_options_reject_zero_fps(self):
        with pytest.raises(ValueError, match="positive"):
            SamplingOptions(fps=0)
