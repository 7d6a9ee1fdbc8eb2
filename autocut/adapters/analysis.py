"""Collaborator payload dataclasses: video analysis and speech analysis.

WHY: The video analysis service and the speech recognition service hand us
plain JSON. Typed dataclasses make the contract explicit and let us reject
malformed intervals at the boundary, so the pure stages downstream never
have to.

HOW: Each dataclass maps 1:1 to a JSON object in the collaborator contract.
from_dict() factories parse raw dicts (camelCase keys, as the services emit
them). __post_init__ validates times, so objects built directly in code get
the same checks as parsed ones.

RULES:
- Times must be finite and non-negative; end must not precede start
- Missing optional lists default to empty
- duration on a Silence defaults to end - start when absent
- Any violation raises ValidationError
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from autocut.errors import ValidationError


def check_time(value: Any, what: str) -> float:
    """Return value as float, or raise ValidationError if not a valid time."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("{} must be a number, got {!r}".format(what, value))
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError("{} must be finite, got {!r}".format(what, value))
    if value < 0:
        raise ValidationError("{} must be non-negative, got {!r}".format(what, value))
    return value


def check_interval(start: Any, end: Any, what: str) -> tuple[float, float]:
    start = check_time(start, "{} start".format(what))
    end = check_time(end, "{} end".format(what))
    if end < start:
        raise ValidationError(
            "{} ends before it starts ({:.3f} < {:.3f})".format(what, end, start)
        )
    return start, end


def _require(data: dict, key: str, what: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError):
        raise ValidationError("{} is missing required field '{}'".format(what, key))


@dataclass
class Silence:
    start: float
    end: float
    duration: float

    def __post_init__(self) -> None:
        self.start, self.end = check_interval(self.start, self.end, "silence")
        self.duration = check_time(self.duration, "silence duration")

    @classmethod
    def from_dict(cls, data: dict) -> Silence:
        start = _require(data, "start", "silence")
        end = _require(data, "end", "silence")
        duration = data.get("duration")
        if duration is None:
            duration = check_interval(start, end, "silence")[1] - float(start)
        return cls(start=start, end=end, duration=duration)


@dataclass
class FillerWord:
    word: str
    start: float
    end: float

    def __post_init__(self) -> None:
        self.start, self.end = check_interval(self.start, self.end, "filler word")

    @classmethod
    def from_dict(cls, data: dict) -> FillerWord:
        return cls(
            word=str(_require(data, "word", "filler word")),
            start=_require(data, "start", "filler word"),
            end=_require(data, "end", "filler word"),
        )


@dataclass
class Word:
    word: str
    start: float
    end: float

    def __post_init__(self) -> None:
        self.start, self.end = check_interval(self.start, self.end, "word")

    @classmethod
    def from_dict(cls, data: dict) -> Word:
        return cls(
            word=str(_require(data, "word", "word")),
            start=_require(data, "start", "word"),
            end=_require(data, "end", "word"),
        )


@dataclass
class SpeechSegment:
    text: str
    start: float
    end: float
    words: list[Word] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.start, self.end = check_interval(self.start, self.end, "segment")

    @classmethod
    def from_dict(cls, data: dict) -> SpeechSegment:
        return cls(
            text=str(data.get("text", "")),
            start=_require(data, "start", "segment"),
            end=_require(data, "end", "segment"),
            words=[Word.from_dict(w) for w in data.get("words") or []],
        )


@dataclass
class SpeechCaption:
    """A caption line as delivered by the speech recognition service."""

    text: str
    start: float
    end: float
    duration: float

    def __post_init__(self) -> None:
        self.start, self.end = check_interval(self.start, self.end, "caption")
        self.duration = check_time(self.duration, "caption duration")

    @classmethod
    def from_dict(cls, data: dict) -> SpeechCaption:
        start = _require(data, "start", "caption")
        end = _require(data, "end", "caption")
        duration = data.get("duration")
        if duration is None:
            duration = check_interval(start, end, "caption")[1] - float(start)
        return cls(text=str(data.get("text", "")), start=start, end=end, duration=duration)


@dataclass
class VideoAnalysis:
    """Output of the video analysis service for one source file."""

    duration: float
    silences: list[Silence] = field(default_factory=list)
    scene_changes: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.duration = check_time(self.duration, "video duration")
        self.scene_changes = [
            check_time(t, "scene change timestamp") for t in self.scene_changes
        ]

    @classmethod
    def from_dict(cls, data: dict) -> VideoAnalysis:
        return cls(
            duration=_require(data, "duration", "video analysis"),
            silences=[Silence.from_dict(s) for s in data.get("silences") or []],
            scene_changes=list(data.get("sceneChanges") or data.get("scene_changes") or []),
        )


@dataclass
class SpeechAnalysis:
    """Output of the speech recognition service for one source file."""

    captions: list[SpeechCaption] = field(default_factory=list)
    filler_words: list[FillerWord] = field(default_factory=list)
    segments: list[SpeechSegment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> SpeechAnalysis:
        fillers = data.get("fillerWords") or data.get("filler_words") or []
        return cls(
            captions=[SpeechCaption.from_dict(c) for c in data.get("captions") or []],
            filler_words=[FillerWord.from_dict(f) for f in fillers],
            segments=[SpeechSegment.from_dict(s) for s in data.get("segments") or []],
        )
