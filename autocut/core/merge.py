"""Interval merging and confidence filtering.

WHY: Independent detectors overlap: a filler word sits inside a silence, a
scene cut lands on a pause. Cutting each separately would leave slivers of
footage between them. Merging fuses near-adjacent cuts into one span;
filtering then drops spans the detectors were unsure about.

HOW: merge_candidates() sorts internally, then folds left to right with a
single accumulator. Markers are a short-circuit variant: they are emitted
as they are and never start or join an accumulator, so the accumulator can
carry on past them. filter_candidates() is a plain predicate filter.

RULES:
- Two non-markers fuse iff next.start - current.end <= merge_threshold
  (a positive gap tolerance, not just overlap; the boundary merges)
- A fused candidate keeps the first one's type and metadata, takes the
  max end and max confidence, and joins reasons with " + "
- Output is sorted by start; merging merged output changes nothing
- Markers are never merged and never filtered by confidence
"""

from __future__ import annotations

import logging
from dataclasses import replace

from autocut.core.ir import CutCandidate
from autocut.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MERGE_THRESHOLD = 0.3
DEFAULT_MIN_CONFIDENCE = 0.5


def _fuse(current: CutCandidate, following: CutCandidate) -> CutCandidate:
    return replace(
        current,
        end=max(current.end, following.end),
        confidence=max(current.confidence, following.confidence),
        reason="{} + {}".format(current.reason, following.reason),
    )


def merge_candidates(
    candidates: list[CutCandidate],
    merge_threshold: float = DEFAULT_MERGE_THRESHOLD,
) -> list[CutCandidate]:
    """Fuse overlapping or near-adjacent non-marker candidates.

    Args:
        candidates: Candidates in any order; sorted by start here.
        merge_threshold: Largest gap (seconds) that still fuses two cuts.

    Returns:
        A new list sorted by start.

    Raises:
        ConfigurationError: If merge_threshold is negative.
    """
    if merge_threshold < 0:
        raise ConfigurationError(
            "merge_threshold must be non-negative, got {!r}".format(merge_threshold)
        )

    merged: list[CutCandidate] = []
    current: CutCandidate | None = None
    for candidate in sorted(candidates, key=lambda c: c.start):
        if candidate.is_marker:
            merged.append(candidate)
        elif current is None:
            current = candidate
        elif candidate.start - current.end <= merge_threshold:
            current = _fuse(current, candidate)
        else:
            merged.append(current)
            current = candidate
    if current is not None:
        merged.append(current)

    return sorted(merged, key=lambda c: c.start)


def filter_candidates(
    candidates: list[CutCandidate],
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> list[CutCandidate]:
    """Drop non-marker candidates below min_confidence."""
    return [c for c in candidates if c.is_marker or c.confidence >= min_confidence]
