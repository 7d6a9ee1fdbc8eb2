"""Tests for settings validation and overrides."""

from __future__ import annotations

import pytest

from autocut.config import Settings
from autocut.errors import ConfigurationError


class TestValidate:

    def test_defaults_are_valid(self):
        settings = Settings().validate()
        assert settings.auto_cut.silence_min_duration == 0.5
        assert settings.auto_cut.cut_buffer == 0.1
        assert settings.auto_cut.min_clip_duration == 1.0
        assert settings.advanced.any_enabled is False

    @pytest.mark.parametrize("field,value", [
        ("cut_buffer", -0.1),
        ("merge_threshold", -1.0),
        ("min_clip_duration", float("nan")),
        ("min_confidence", 1.5),
        ("min_confidence", "high"),
    ])
    def test_auto_cut_out_of_range(self, field, value):
        settings = Settings()
        setattr(settings.auto_cut, field, value)
        with pytest.raises(ConfigurationError):
            settings.validate()

    @pytest.mark.parametrize("rate", [0, -30, None, float("inf")])
    def test_frame_rate(self, rate):
        settings = Settings()
        settings.export.frame_rate = rate
        with pytest.raises(ConfigurationError, match="frame_rate"):
            settings.validate()

    def test_frame_size(self):
        settings = Settings()
        settings.export.width = 0
        with pytest.raises(ConfigurationError):
            settings.validate()

    def test_inverted_wpm_band(self):
        settings = Settings()
        settings.advanced.speech_rate.min_wpm = 300
        with pytest.raises(ConfigurationError):
            settings.validate()

    @pytest.mark.parametrize("field,value", [
        ("display_offset", "soon"),
        ("min_display_duration", -1.0),
        ("max_chars_per_line", 0),
        ("max_chars_per_line", 12.5),
    ])
    def test_caption_settings(self, field, value):
        settings = Settings()
        setattr(settings.caption, field, value)
        with pytest.raises(ConfigurationError, match="caption"):
            settings.validate()

    def test_font_size_must_be_int(self):
        settings = Settings.from_dict({"caption": {"default_style": {"font_size": "big"}}})
        with pytest.raises(ConfigurationError, match="font_size"):
            settings.validate()

    def test_filler_words_must_be_strings(self):
        settings = Settings.from_dict({"auto_cut": {"filler_words": [1, 2]}})
        with pytest.raises(ConfigurationError, match="filler_words"):
            settings.validate()

    def test_inverted_pause_band(self):
        settings = Settings()
        settings.advanced.pause.max_duration = 0.5
        with pytest.raises(ConfigurationError):
            settings.validate()


class TestFromDict:

    def test_partial_nested_override(self):
        settings = Settings.from_dict({
            "auto_cut": {"min_confidence": 0.75},
            "export": {"frame_rate": 25},
        })
        assert settings.auto_cut.min_confidence == 0.75
        assert settings.auto_cut.cut_buffer == 0.1
        assert settings.export.frame_rate == 25

    def test_none_is_defaults(self):
        assert Settings.from_dict(None) == Settings()

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="auto_cut.typo"):
            Settings.from_dict({"auto_cut": {"typo": 1}})

    def test_scalar_for_group_rejected(self):
        with pytest.raises(ConfigurationError, match="auto_cut"):
            Settings.from_dict({"auto_cut": 5})

    def test_scalar_for_nested_group_rejected(self):
        with pytest.raises(ConfigurationError, match="advanced.pause"):
            Settings.from_dict({"advanced": {"pause": True}})

    def test_non_object_overrides_rejected(self):
        with pytest.raises(ConfigurationError):
            Settings.from_dict(["auto_cut"])

    def test_round_trip_through_dict(self):
        settings = Settings.from_dict({"advanced": {"pause": {"enabled": True}}})
        assert Settings.from_dict(settings.to_dict()) == settings
