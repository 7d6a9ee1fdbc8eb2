"""Configuration dataclasses, environment defaults, and .env loading.

WHY: Every threshold the cut engine uses (silence length, buffers, merge gap,
confidence cut-off, frame rate) has to be easy to find and override. Keeping
them as plain dataclasses with env-backed defaults means the CLI, the HTTP
API and the tests all build settings the same way.

HOW: python-dotenv loads the .env file on import. Module-level constants read
AUTOCUT_* environment variables with the shipped defaults. The dataclasses
group settings per pipeline stage and Settings aggregates them. validate()
is called once at startup and raises ConfigurationError on bad values.

RULES:
- Defaults match the shipped default profile (30 fps, 1920x1080, 0.5 s
  minimum silence, 0.1 s cut buffer, 1.0 s minimum clip)
- Advanced detectors (speech rate, pause, sentiment) are off by default
- Speech recognition runs outside this package; no recogniser paths
  are configured here
- Settings.from_dict() accepts partial overrides (used by the HTTP API)
"""

from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from typing import Any

from dotenv import load_dotenv

from autocut.errors import ConfigurationError

# Load .env from the project root (where the script is run from)
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError("{} must be a number, got {!r}".format(name, raw))


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Environment-backed defaults
# ---------------------------------------------------------------------------

DEFAULT_FRAME_RATE = _env_float("AUTOCUT_FRAME_RATE", 30.0)
DEFAULT_WIDTH = int(_env_float("AUTOCUT_WIDTH", 1920))
DEFAULT_HEIGHT = int(_env_float("AUTOCUT_HEIGHT", 1080))
DEFAULT_MIN_CONFIDENCE = _env_float("AUTOCUT_MIN_CONFIDENCE", 0.5)
DEFAULT_MERGE_THRESHOLD = _env_float("AUTOCUT_MERGE_THRESHOLD", 0.3)
DEFAULT_SCENE_CUTS = _env_bool("AUTOCUT_SCENE_CUTS", True)
DEFAULT_STYLE_DIR = os.getenv("AUTOCUT_STYLE_DIR", "data/styles")

DEFAULT_FILLER_WORDS: list[str] = ["えー", "あー", "えっと", "まあ", "そうですね"]

SUPPORTED_VIDEO_FORMATS: set[str] = {".mp4", ".mov", ".avi", ".mkv"}
"""Source video extensions accepted by the CLI (lowercase, with dot)."""


# ---------------------------------------------------------------------------
# Settings dataclasses
# ---------------------------------------------------------------------------


@dataclass
class AutoCutConfig:
    """Thresholds for turning detector output into cut candidates."""

    silence_min_duration: float = 0.5
    cut_buffer: float = 0.1
    min_clip_duration: float = 1.0
    merge_threshold: float = DEFAULT_MERGE_THRESHOLD
    min_confidence: float = DEFAULT_MIN_CONFIDENCE
    use_scene_changes_for_cuts: bool = DEFAULT_SCENE_CUTS
    scene_change_buffer: float = 0.05
    filler_words: list[str] = field(default_factory=lambda: list(DEFAULT_FILLER_WORDS))


@dataclass
class SpeechRateConfig:
    enabled: bool = False
    min_wpm: float = 150.0
    max_wpm: float = 250.0


@dataclass
class PauseConfig:
    enabled: bool = False
    min_duration: float = 1.0
    max_duration: float = 3.0
    buffer_before: float = 0.2
    buffer_after: float = 0.2


@dataclass
class SentimentConfig:
    enabled: bool = False


@dataclass
class AdvancedDetectionConfig:
    """Experimental transcript-based detectors. All disabled by default."""

    speech_rate: SpeechRateConfig = field(default_factory=SpeechRateConfig)
    pause: PauseConfig = field(default_factory=PauseConfig)
    sentiment: SentimentConfig = field(default_factory=SentimentConfig)

    @property
    def any_enabled(self) -> bool:
        return self.speech_rate.enabled or self.pause.enabled or self.sentiment.enabled


@dataclass
class CaptionStyleDefaults:
    font_size: int = 48
    font_family: str = "Arial"
    color: str = "#FFFFFF"
    stroke_color: str = "#000000"
    stroke_width: int = 3
    position: str = "bottom"
    y_offset: int = 100


@dataclass
class CaptionConfig:
    display_offset: float = 0.0
    min_display_duration: float = 1.0
    max_chars_per_line: int = 20
    default_style: CaptionStyleDefaults = field(default_factory=CaptionStyleDefaults)


@dataclass
class ExportConfig:
    """Sequence settings for the editor interchange artifacts."""

    frame_rate: float = DEFAULT_FRAME_RATE
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    project_name: str = "Auto Edited Project"


@dataclass
class Settings:
    """All settings for one invocation of the engine."""

    auto_cut: AutoCutConfig = field(default_factory=AutoCutConfig)
    advanced: AdvancedDetectionConfig = field(default_factory=AdvancedDetectionConfig)
    caption: CaptionConfig = field(default_factory=CaptionConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    style_dir: str = DEFAULT_STYLE_DIR

    def validate(self) -> Settings:
        """Check every threshold once, before any stage runs.

        Raises:
            ConfigurationError: On the first out-of-range value found.
        """
        ac = self.auto_cut
        for name in ("silence_min_duration", "cut_buffer", "min_clip_duration",
                     "merge_threshold", "scene_change_buffer"):
            value = getattr(ac, name)
            if not _is_finite(value) or value < 0:
                raise ConfigurationError(
                    "auto_cut.{} must be a non-negative number, got {!r}".format(name, value)
                )
        if not _is_finite(ac.min_confidence) or not 0.0 <= ac.min_confidence <= 1.0:
            raise ConfigurationError(
                "auto_cut.min_confidence must be within [0, 1], got {!r}".format(ac.min_confidence)
            )

        rate = self.advanced.speech_rate
        if not (_is_finite(rate.min_wpm) and _is_finite(rate.max_wpm)) or rate.min_wpm >= rate.max_wpm:
            raise ConfigurationError("advanced.speech_rate.min_wpm must be below max_wpm")
        pause = self.advanced.pause
        if not (_is_finite(pause.min_duration) and _is_finite(pause.max_duration)) \
                or pause.min_duration >= pause.max_duration:
            raise ConfigurationError("advanced.pause.min_duration must be below max_duration")
        if any(not _is_finite(b) or b < 0 for b in (pause.buffer_before, pause.buffer_after)):
            raise ConfigurationError("advanced.pause buffers must be non-negative")

        ex = self.export
        if ex.frame_rate is None or not _is_finite(ex.frame_rate) or ex.frame_rate <= 0:
            raise ConfigurationError(
                "export.frame_rate must be a positive number, got {!r}".format(ex.frame_rate)
            )
        if not all(_is_positive_int(v) for v in (ex.width, ex.height)):
            raise ConfigurationError("export.width and export.height must be positive integers")
        if not isinstance(ex.project_name, str):
            raise ConfigurationError("export.project_name must be a string")

        cap = self.caption
        if not _is_finite(cap.display_offset):
            raise ConfigurationError(
                "caption.display_offset must be a number, got {!r}".format(cap.display_offset)
            )
        if not _is_finite(cap.min_display_duration) or cap.min_display_duration < 0:
            raise ConfigurationError("caption.min_display_duration must be a non-negative number")
        if not _is_positive_int(cap.max_chars_per_line):
            raise ConfigurationError("caption.max_chars_per_line must be a positive integer")
        if not _is_positive_int(cap.default_style.font_size):
            raise ConfigurationError("caption.default_style.font_size must be a positive integer")
        if not isinstance(ac.filler_words, list) or not all(isinstance(w, str) for w in ac.filler_words):
            raise ConfigurationError("auto_cut.filler_words must be a list of strings")
        return self

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Settings:
        """Build Settings from a (possibly partial) nested dict of overrides.

        Unknown keys raise ConfigurationError so typos do not pass silently.
        """
        settings = cls()
        if data is not None and not isinstance(data, dict):
            raise ConfigurationError("Settings overrides must be an object")
        if data:
            _apply_overrides(settings, data, "")
        return settings


def _is_finite(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _apply_overrides(target: Any, data: dict[str, Any], prefix: str) -> None:
    known = {f.name for f in fields(target)}
    for key, value in data.items():
        if key not in known:
            raise ConfigurationError("Unknown setting '{}{}'".format(prefix, key))
        current = getattr(target, key)
        if is_dataclass(current):
            if not isinstance(value, dict):
                raise ConfigurationError(
                    "Setting '{}{}' is a group and needs an object, got {!r}".format(prefix, key, value)
                )
            _apply_overrides(current, value, "{}{}.".format(prefix, key))
        else:
            setattr(target, key, value)
