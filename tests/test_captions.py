"""Tests for caption building."""

from __future__ import annotations

from autocut.adapters.analysis import SpeechCaption
from autocut.config import CaptionConfig
from autocut.core.captions import build_captions, caption_statistics, determine_style


class TestDetermineStyle:

    def test_short_text_enlarged(self):
        assert determine_style("短い", CaptionConfig()).font_size == 57

    def test_long_text_shrunk(self):
        assert determine_style("x" * 31, CaptionConfig()).font_size == 40

    def test_medium_text_unchanged(self):
        style = determine_style("x" * 20, CaptionConfig())
        assert style.font_size == 48
        assert style.font_family == "Arial"
        assert style.position == "bottom"


class TestBuildCaptions:

    def test_ids_and_offset(self):
        config = CaptionConfig(display_offset=0.5)
        lines = [
            SpeechCaption(text="one", start=1.0, end=2.0, duration=1.0),
            SpeechCaption(text="two", start=3.0, end=4.5, duration=1.5),
        ]
        captions = build_captions(lines, config)
        assert [c.id for c in captions] == [1, 2]
        assert (captions[1].start, captions[1].end) == (3.5, 5.0)
        assert captions[1].duration == 1.5

    def test_styles_are_independent(self):
        lines = [SpeechCaption(text="a", start=0.0, end=1.0, duration=1.0)] * 2
        captions = build_captions(lines, CaptionConfig())
        captions[0].style.color = "#FF0000"
        assert captions[1].style.color == "#FFFFFF"


class TestCaptionStatistics:

    def test_empty(self):
        assert caption_statistics([])["total_captions"] == 0

    def test_values(self):
        lines = [
            SpeechCaption(text="ab", start=0.0, end=1.0, duration=1.0),
            SpeechCaption(text="abcd", start=1.0, end=4.0, duration=3.0),
        ]
        stats = caption_statistics(build_captions(lines, CaptionConfig()))
        assert stats["total_duration"] == 4.0
        assert stats["avg_duration"] == 2.0
        assert stats["shortest_caption"] == 2
        assert stats["longest_caption"] == 4
