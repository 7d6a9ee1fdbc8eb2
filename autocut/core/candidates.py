"""Cut candidate generation from detector output.

WHY: Silences, filler words and scene changes arrive as three unrelated
lists. The merge stage needs them as one list of CutCandidate objects with
a type tag, a confidence score and a marker flag, sorted by start.

HOW: One small builder per detector output, each applying the fixed
confidence rule for its type. Advanced transcript detectors (core.speech)
are appended when any of them is enabled. The combined list is sorted by
start (stable, so ties keep detector order).

RULES:
- Silence needs duration >= silence_min_duration; confidence is a step
  function of its length (0.3 / 0.6 / 0.8 / 0.95)
- Filler spans are widened by cut_buffer on both sides, confidence 0.7
- Scene changes are zero-width markers unless use_scene_changes_for_cuts,
  then a real cut of width 2 x scene_change_buffer, confidence 0.6
- Starts are clamped at 0 and ends at the video duration; a candidate
  starting at or after the end of the video is dropped
- Pure function of inputs and settings
"""

from __future__ import annotations

import logging
from dataclasses import replace

from autocut.adapters.analysis import SpeechAnalysis, VideoAnalysis
from autocut.config import Settings
from autocut.core.ir import (
    CutCandidate,
    CutType,
    FillerInfo,
    SceneChangeInfo,
    SilenceInfo,
)
from autocut.core.speech import analyze_all

logger = logging.getLogger(__name__)

FILLER_CONFIDENCE = 0.7
SCENE_CHANGE_CONFIDENCE = 0.6


def silence_confidence(duration: float) -> float:
    """Longer silences are safer to cut."""
    if duration < 0.5:
        return 0.3
    if duration < 1.0:
        return 0.6
    if duration < 2.0:
        return 0.8
    return 0.95


def _clamp(candidate: CutCandidate, total_duration: float) -> CutCandidate | None:
    if candidate.start > total_duration:
        return None
    if candidate.start == total_duration and not candidate.is_marker:
        return None
    if candidate.end > total_duration:
        return replace(candidate, end=total_duration)
    return candidate


def silence_candidates(video: VideoAnalysis, settings: Settings) -> list[CutCandidate]:
    min_duration = settings.auto_cut.silence_min_duration
    return [
        CutCandidate(
            start=s.start,
            end=s.end,
            type=CutType.SILENCE,
            reason="Silence",
            confidence=silence_confidence(s.duration),
            metadata=SilenceInfo(length=s.duration),
        )
        for s in video.silences
        if s.duration >= min_duration
    ]


def filler_candidates(speech: SpeechAnalysis, settings: Settings) -> list[CutCandidate]:
    buffer = settings.auto_cut.cut_buffer
    return [
        CutCandidate(
            start=max(0.0, f.start - buffer),
            end=f.end + buffer,
            type=CutType.FILLER,
            reason="Filler word: {}".format(f.word),
            confidence=FILLER_CONFIDENCE,
            metadata=FillerInfo(word=f.word),
        )
        for f in speech.filler_words
    ]


def scene_change_candidates(video: VideoAnalysis, settings: Settings) -> list[CutCandidate]:
    as_cut = settings.auto_cut.use_scene_changes_for_cuts
    buffer = settings.auto_cut.scene_change_buffer
    candidates = []
    for timestamp in video.scene_changes:
        if as_cut:
            start, end = max(0.0, timestamp - buffer), timestamp + buffer
        else:
            start, end = timestamp, timestamp
        candidates.append(CutCandidate(
            start=start,
            end=end,
            type=CutType.SCENE_CHANGE,
            reason="Scene change",
            confidence=SCENE_CHANGE_CONFIDENCE,
            is_marker=not as_cut,
            metadata=SceneChangeInfo(timestamp=timestamp),
        ))
    return candidates


def generate_candidates(
    video: VideoAnalysis,
    speech: SpeechAnalysis,
    settings: Settings,
) -> list[CutCandidate]:
    """Convert all detector output into one sorted candidate list.

    Args:
        video: Silences, scene changes and total duration.
        speech: Filler-word spans and transcript segments.
        settings: Validated settings.

    Returns:
        Candidates sorted by start ascending.
    """
    raw = (
        silence_candidates(video, settings)
        + filler_candidates(speech, settings)
        + scene_change_candidates(video, settings)
    )
    logger.info("Detected %d basic cut candidates", len(raw))

    if settings.advanced.any_enabled:
        raw.extend(analyze_all(speech, settings).candidates)

    candidates = []
    for candidate in raw:
        clamped = _clamp(candidate, video.duration)
        if clamped is not None:
            candidates.append(clamped)
    return sorted(candidates, key=lambda c: c.start)
