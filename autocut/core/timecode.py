"""Frame and timecode arithmetic shared by every exporter.

WHY: The XML, EDL and subtitle artifacts must agree on where a clip
starts. All of them go through the same floor-based conversions so a
second value never lands on two different frames.

HOW: seconds -> frame is floor(seconds x rate). Timecodes are built with
integer division only. Milliseconds are truncated, not rounded.

RULES:
- frame rate must be finite and positive (ConfigurationError otherwise)
- seconds must be finite and non-negative (ValidationError otherwise)
- HH:MM:SS:FF is non-drop-frame at the nominal integer rate
- SRT uses a comma before milliseconds, WebVTT a dot
"""

from __future__ import annotations

import math

from autocut.errors import ConfigurationError, ValidationError


def validate_frame_rate(frame_rate: float | None) -> float:
    if frame_rate is None or isinstance(frame_rate, bool):
        raise ConfigurationError("Frame rate is required")
    try:
        rate = float(frame_rate)
    except (TypeError, ValueError):
        raise ConfigurationError("Frame rate must be a number, got {!r}".format(frame_rate))
    if not math.isfinite(rate) or rate <= 0:
        raise ConfigurationError("Frame rate must be positive and finite, got {!r}".format(frame_rate))
    return rate


def _check_seconds(seconds: float) -> float:
    if not math.isfinite(seconds):
        raise ValidationError("Timecode must be finite, got {!r}".format(seconds))
    if seconds < 0:
        raise ValidationError("Timecode must be non-negative, got {!r}".format(seconds))
    return seconds


def nominal_rate(frame_rate: float) -> int:
    """Integer frames-per-second used for the FF field (29.97 -> 30)."""
    return max(1, int(round(validate_frame_rate(frame_rate))))


def seconds_to_frames(seconds: float, frame_rate: float) -> int:
    """floor(seconds x frame_rate): 1.5 s at 30 fps is frame 45, 0.99 s is 29."""
    rate = validate_frame_rate(frame_rate)
    return int(math.floor(_check_seconds(seconds) * rate))


def frames_to_timecode(frames: int, frame_rate: float) -> str:
    """Format a frame count as HH:MM:SS:FF."""
    if frames < 0:
        raise ValidationError("Frame count must be non-negative, got {!r}".format(frames))
    fps = nominal_rate(frame_rate)
    hours, rest = divmod(int(frames), fps * 3600)
    minutes, rest = divmod(rest, fps * 60)
    seconds, ff = divmod(rest, fps)
    return "{:02d}:{:02d}:{:02d}:{:02d}".format(hours, minutes, seconds, ff)


def seconds_to_timecode(seconds: float, frame_rate: float) -> str:
    return frames_to_timecode(seconds_to_frames(seconds, frame_rate), frame_rate)


def _clock_parts(seconds: float) -> tuple[int, int, int, int]:
    total_ms = int(math.floor(_check_seconds(seconds) * 1000))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)
    return hours, minutes, secs, millis


def seconds_to_srt_time(seconds: float) -> str:
    """HH:MM:SS,mmm with milliseconds truncated."""
    return "{:02d}:{:02d}:{:02d},{:03d}".format(*_clock_parts(seconds))


def seconds_to_vtt_time(seconds: float) -> str:
    """HH:MM:SS.mmm with milliseconds truncated."""
    return "{:02d}:{:02d}:{:02d}.{:03d}".format(*_clock_parts(seconds))
