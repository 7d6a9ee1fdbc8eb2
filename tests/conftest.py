"""Shared test fixtures for the autocut test suite.

WHY: Most test modules need the same small, hand-checked edit: a
100-second video with two cuts, a scene-change marker and a few captions.
Centralizing it here keeps every expected number in one place.

HOW: Plain factories for candidates, plus fixtures for analyses, settings
and a fully built EditProject whose keep clips and statistics are written
out by hand rather than computed.

RULES:
- Times are chosen to be exact in binary floating point where tests
  compare boundaries (0.25, 0.5, 1.5, ...).
- Keep clips for the sample project: (0,10), (15,50), (52,100).
"""

from __future__ import annotations

from typing import Any, Dict

import pytest

from autocut.adapters.analysis import SpeechAnalysis, VideoAnalysis
from autocut.config import ExportConfig, Settings
from autocut.core.ir import (
    Caption,
    CaptionStyle,
    CutCandidate,
    CutResult,
    CutStatistics,
    CutType,
    EditProject,
    KeepClip,
    SceneChangeInfo,
    SilenceInfo,
)


def make_cut(start, end, confidence=0.8, type=CutType.SILENCE, reason="Silence"):
    return CutCandidate(start=start, end=end, type=type, reason=reason, confidence=confidence)


def make_marker(at, confidence=0.6):
    return CutCandidate(
        start=at,
        end=at,
        type=CutType.SCENE_CHANGE,
        reason="Scene change",
        confidence=confidence,
        is_marker=True,
        metadata=SceneChangeInfo(timestamp=at),
    )


# ---------------------------------------------------------------------------
# Collaborator payloads
# ---------------------------------------------------------------------------

VIDEO_ANALYSIS: Dict[str, Any] = {
    "duration": 100.0,
    "silences": [
        {"start": 10.0, "end": 15.0, "duration": 5.0},
        {"start": 50.0, "end": 52.0, "duration": 2.0},
        {"start": 70.0, "end": 70.25, "duration": 0.25},
    ],
    "sceneChanges": [30.0],
}

SPEECH_ANALYSIS: Dict[str, Any] = {
    "captions": [
        {"text": "こんにちは", "start": 0.0, "end": 2.0, "duration": 2.0},
        {"text": "今日は自動カットの話をします", "start": 2.5, "end": 6.0, "duration": 3.5},
    ],
    "fillerWords": [],
    "segments": [],
}


@pytest.fixture
def video_analysis_dict():
    return dict(VIDEO_ANALYSIS)


@pytest.fixture
def speech_analysis_dict():
    return dict(SPEECH_ANALYSIS)


@pytest.fixture
def video_analysis():
    return VideoAnalysis.from_dict(VIDEO_ANALYSIS)


@pytest.fixture
def speech_analysis():
    return SpeechAnalysis.from_dict(SPEECH_ANALYSIS)


@pytest.fixture
def settings():
    """Default settings with scene changes as markers, so cuts stay predictable."""
    s = Settings()
    s.auto_cut.use_scene_changes_for_cuts = False
    return s.validate()


# ---------------------------------------------------------------------------
# Hand-built edit project
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_project():
    """A 100 s edit at 30 fps: cuts (10,15) and (50,52), marker at 30."""
    candidates = [
        CutCandidate(
            start=10.0, end=15.0, type=CutType.SILENCE, reason="Silence",
            confidence=0.95, metadata=SilenceInfo(length=5.0),
        ),
        make_marker(30.0),
        CutCandidate(
            start=50.0, end=52.0, type=CutType.SILENCE, reason="Silence",
            confidence=0.95, metadata=SilenceInfo(length=2.0),
        ),
    ]
    keep_clips = [KeepClip(0.0, 10.0), KeepClip(15.0, 50.0), KeepClip(52.0, 100.0)]
    stats = CutStatistics(
        total_duration=100.0,
        total_cuts=2,
        total_keep_clips=3,
        total_cut_duration=7.0,
        total_keep_duration=93.0,
        reduction_rate="7.00%",
        final_duration=93.0,
        cut_types={"silence": 2, "filler": 0, "scene_change": 0,
                   "speech_rate": 0, "pause": 0, "sentiment": 0},
    )
    captions = [
        Caption(id=1, text="こんにちは", start=0.0, end=2.0, duration=2.0,
                style=CaptionStyle(font_size=57)),
        Caption(id=2, text="Hello, world", start=2.5, end=6.0, duration=3.5),
    ]
    return EditProject(
        source_path="/media/interview.mp4",
        cut_result=CutResult(cut_candidates=candidates, keep_clips=keep_clips, stats=stats),
        captions=captions,
        export=ExportConfig(frame_rate=30.0, width=1920, height=1080),
    )
