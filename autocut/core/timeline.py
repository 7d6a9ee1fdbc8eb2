"""Keep-clip timeline and cut statistics.

WHY: The editor needs the footage to keep, not the footage to drop. The
keep timeline is the complement of the actual cuts over [0, duration].

HOW: Walk a cursor from 0 over the non-marker cuts in start order. Every
gap before a cut is a keep span; spans shorter than min_clip_duration are
dropped rather than handed to a neighbour. Statistics are read-only sums
over the final candidates and clips.

RULES:
- Markers never take part in the complement
- No actual cuts => one clip [0, duration], whatever min_clip_duration is
- Keep clips are sorted, non-overlapping, and never overlap a cut
- keep + cuts + dropped fragments == total duration
- reduction_rate is "<pct>%" with two decimals; "0.00%" for empty video
"""

from __future__ import annotations

from autocut.core.ir import CutCandidate, CutStatistics, CutType, KeepClip


def _complement(
    candidates: list[CutCandidate],
    total_duration: float,
) -> list[tuple[float, float]]:
    """All complement spans, before the minimum-length rule."""
    spans = []
    cursor = 0.0
    for cut in sorted((c for c in candidates if not c.is_marker), key=lambda c: c.start):
        if cut.start > cursor:
            spans.append((cursor, cut.start))
        cursor = max(cursor, cut.end)
    if cursor < total_duration:
        spans.append((cursor, total_duration))
    return spans


def build_keep_clips(
    candidates: list[CutCandidate],
    total_duration: float,
    min_clip_duration: float,
) -> list[KeepClip]:
    """Compute the keep timeline from the candidates that actually cut.

    Args:
        candidates: Filtered candidates (markers are ignored).
        total_duration: Length of the source video in seconds.
        min_clip_duration: Shorter keep spans are dropped.

    Returns:
        Keep clips sorted by start.
    """
    if not any(not c.is_marker for c in candidates):
        return [KeepClip(start=0.0, end=total_duration)]
    return [
        KeepClip(start=start, end=end)
        for start, end in _complement(candidates, total_duration)
        if end - start >= min_clip_duration
    ]


def dropped_fragments(
    candidates: list[CutCandidate],
    total_duration: float,
    min_clip_duration: float,
) -> list[KeepClip]:
    """The complement spans build_keep_clips() discarded as too short."""
    if not any(not c.is_marker for c in candidates):
        return []
    return [
        KeepClip(start=start, end=end)
        for start, end in _complement(candidates, total_duration)
        if end - start < min_clip_duration
    ]


def compute_statistics(
    candidates: list[CutCandidate],
    keep_clips: list[KeepClip],
    total_duration: float,
) -> CutStatistics:
    actual_cuts = [c for c in candidates if not c.is_marker]
    total_cut = sum(c.duration for c in actual_cuts)
    total_keep = sum(k.duration for k in keep_clips)

    rate = (total_cut / total_duration) * 100 if total_duration > 0 else 0.0

    cut_types = {t.value: 0 for t in CutType}
    for cut in actual_cuts:
        cut_types[cut.type.value] += 1

    return CutStatistics(
        total_duration=total_duration,
        total_cuts=len(actual_cuts),
        total_keep_clips=len(keep_clips),
        total_cut_duration=total_cut,
        total_keep_duration=total_keep,
        reduction_rate="{:.2f}%".format(rate),
        final_duration=total_keep,
        cut_types=cut_types,
    )
