"""Intermediate representation dataclasses for the cut engine.

WHY: Silence detection, transcription and scene detection each report
their findings in a different shape. The merge, complement and export
stages need one uniform, well-typed form so they can enforce the timeline
invariants without caring which detector produced an interval.

HOW: A closed CutType enum tags every CutCandidate, and each variant
carries its own small metadata dataclass instead of ad hoc dict fields.
KeepClip and CutCandidate are frozen: stages return new objects
(dataclasses.replace) rather than mutating their input.

RULES:
- All times are float seconds on the source timeline
- end >= start always; duration is derived, never stored separately
- is_marker=True means annotate only, never cut
- Candidate and keep-clip lists are sorted by start between stages
- Caption and LearnedStyle are produced upstream and read-only here
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Any, Union

from autocut.config import ExportConfig


class CutType(str, Enum):
    """Which detector proposed a cut."""

    SILENCE = "silence"
    FILLER = "filler"
    SCENE_CHANGE = "scene_change"
    SPEECH_RATE = "speech_rate"
    PAUSE = "pause"
    SENTIMENT = "sentiment"


# ---------------------------------------------------------------------------
# Per-variant metadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SilenceInfo:
    length: float


@dataclass(frozen=True)
class FillerInfo:
    word: str


@dataclass(frozen=True)
class SceneChangeInfo:
    timestamp: float


@dataclass(frozen=True)
class SpeechRateInfo:
    wpm: float
    word_count: int


@dataclass(frozen=True)
class PauseInfo:
    gap: float
    prev_word: str
    next_word: str


@dataclass(frozen=True)
class SentimentInfo:
    label: str
    score: int


CandidateMetadata = Union[
    SilenceInfo, FillerInfo, SceneChangeInfo, SpeechRateInfo, PauseInfo, SentimentInfo
]


@dataclass(frozen=True)
class CutCandidate:
    """A proposed interval to remove, or a marker to annotate.

    RULES:
    - confidence is within [0, 1]
    - merge may extend end, raise confidence and extend reason; nothing
      else ever changes after generation
    - markers are zero-width scene-change notes that never cut
    """

    start: float
    end: float
    type: CutType
    reason: str
    confidence: float
    is_marker: bool = False
    metadata: CandidateMetadata | None = None

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "duration": self.duration,
            "type": self.type.value,
            "reason": self.reason,
            "confidence": self.confidence,
            "is_marker": self.is_marker,
            "metadata": asdict(self.metadata) if self.metadata is not None else {},
        }


@dataclass(frozen=True)
class KeepClip:
    """A retained span of the source timeline."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> dict[str, float]:
        return {"start": self.start, "end": self.end, "duration": self.duration}


# ---------------------------------------------------------------------------
# Captions
# ---------------------------------------------------------------------------


@dataclass
class CaptionStyle:
    """Flat caption style record.

    Defaults are the shipped caption profile; the burn-in renderer and the
    editor export both read from it.
    """

    font_size: int = 48
    font_family: str = "Arial"
    color: str = "#FFFFFF"
    stroke_color: str = "#000000"
    stroke_width: int = 3
    position: str = "bottom"  # "top", "middle" or "bottom"
    y_offset: int = 100
    animation: str | None = None
    animation_duration: float = 0.3


@dataclass
class Caption:
    id: int
    text: str
    start: float
    end: float
    duration: float
    style: CaptionStyle = field(default_factory=CaptionStyle)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Learned style
# ---------------------------------------------------------------------------


@dataclass
class CutPattern:
    """Cut cadence statistics learned from reference videos."""

    avg_cut_interval: float | None = None
    scene_change_correlation: float | None = None
    total_scene_changes: int = 0
    interval_stats: dict[str, float] = field(default_factory=dict)
    histogram: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class LearnedStyle:
    cut_pattern: CutPattern | None = None
    timing_pattern: dict[str, Any] = field(default_factory=dict)
    sample_count: int = 0
    created_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class CutStatistics:
    total_duration: float
    total_cuts: int
    total_keep_clips: int
    total_cut_duration: float
    total_keep_duration: float
    reduction_rate: str
    final_duration: float
    cut_types: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CutResult:
    """Everything the detection pipeline hands to the exporter."""

    cut_candidates: list[CutCandidate]
    keep_clips: list[KeepClip]
    stats: CutStatistics

    @property
    def actual_cuts(self) -> list[CutCandidate]:
        return [c for c in self.cut_candidates if not c.is_marker]


@dataclass
class EditProject:
    """The complete input every formatter receives.

    RULES:
    - source_path is the original video path; output stems derive from it
    - captions come from the transcription pipeline, already numbered
    - export holds frame rate and frame size for the sequence
    """

    source_path: str
    cut_result: CutResult
    captions: list[Caption]
    export: ExportConfig = field(default_factory=ExportConfig)

    @property
    def source_name(self) -> str:
        return PurePath(self.source_path).name

    @property
    def stem(self) -> str:
        return PurePath(self.source_path).stem
