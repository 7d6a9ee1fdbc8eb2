"""Cut detection pipeline: generate, merge, filter, style, complement.

WHY: The CLI and the HTTP API both need the same ordered sequence of
stages. Keeping it in one function means there is exactly one place that
decides the stage order.

HOW: Each stage is a pure function from core; this module only chains
them and logs one line per stage.

RULES:
- Stage order is fixed: generate -> merge -> filter -> style ->
  complement -> statistics
- Settings are validated before the first stage runs
- Any ValidationError aborts the whole run; nothing is partially returned
"""

from __future__ import annotations

import logging

from autocut.adapters.analysis import SpeechAnalysis, VideoAnalysis
from autocut.config import Settings
from autocut.core.candidates import generate_candidates
from autocut.core.captions import build_captions, caption_statistics
from autocut.core.ir import CutResult, EditProject, LearnedStyle
from autocut.core.merge import filter_candidates, merge_candidates
from autocut.core.style import apply_cut_style
from autocut.core.timeline import build_keep_clips, compute_statistics, dropped_fragments

logger = logging.getLogger(__name__)


def detect_cuts(
    video: VideoAnalysis,
    speech: SpeechAnalysis,
    settings: Settings | None = None,
    learned_style: LearnedStyle | None = None,
) -> CutResult:
    """Run every detection stage and return the edit timeline.

    Args:
        video: Video analysis for the source file.
        speech: Speech analysis for the source file.
        settings: Engine settings; defaults are used when None.
        learned_style: Optional style profile for confidence re-weighting.

    Returns:
        CutResult with sorted candidates, keep clips, and statistics.
    """
    settings = (settings or Settings()).validate()
    ac = settings.auto_cut

    candidates = generate_candidates(video, speech, settings)
    logger.info("Generated %d cut candidates", len(candidates))

    merged = merge_candidates(candidates, ac.merge_threshold)
    logger.info("Merged into %d candidates", len(merged))

    filtered = filter_candidates(merged, ac.min_confidence)
    logger.info("%d candidates at or above confidence %.2f", len(filtered), ac.min_confidence)

    styled = apply_cut_style(filtered, learned_style)

    keep_clips = build_keep_clips(styled, video.duration, ac.min_clip_duration)
    logger.info("Keeping %d clips", len(keep_clips))
    for fragment in dropped_fragments(styled, video.duration, ac.min_clip_duration):
        logger.info(
            "Dropped %.2fs fragment %.2f-%.2f (shorter than %.2fs)",
            fragment.duration, fragment.start, fragment.end, ac.min_clip_duration,
        )

    stats = compute_statistics(styled, keep_clips, video.duration)
    logger.info("Cut detection done: %s shorter", stats.reduction_rate)

    return CutResult(cut_candidates=styled, keep_clips=keep_clips, stats=stats)


def build_edit_project(
    source_path: str,
    video: VideoAnalysis,
    speech: SpeechAnalysis,
    settings: Settings | None = None,
    learned_style: LearnedStyle | None = None,
) -> EditProject:
    """Detect cuts and build captions for one source video.

    This is what the CLI and the HTTP API hand to the exporters.
    """
    settings = (settings or Settings()).validate()
    cut_result = detect_cuts(video, speech, settings, learned_style)
    captions = build_captions(speech.captions, settings.caption, learned_style)
    caption_stats = caption_statistics(captions)
    logger.info(
        "%d captions, %.2fs on screen in total",
        caption_stats["total_captions"], caption_stats["total_duration"],
    )
    return EditProject(
        source_path=source_path,
        cut_result=cut_result,
        captions=captions,
        export=settings.export,
    )
