"""Caption building from speech recognition caption lines.

WHY: The transcription pipeline delivers bare caption lines. The exporter
needs numbered captions with a full style record attached.

HOW: Each line gets a 1-based id, an optional display offset and a copy
of the default style, with the font size nudged by text length.

RULES:
- ids are 1-based and follow input order
- start/end shift by display_offset; duration is carried over unchanged
- text shorter than 10 chars: font_size x 1.2; longer than 30: x 0.85
  (floored to an int)
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from autocut.adapters.analysis import SpeechCaption
from autocut.config import CaptionConfig
from autocut.core.ir import Caption, CaptionStyle, LearnedStyle

logger = logging.getLogger(__name__)


def determine_style(text: str, config: CaptionConfig) -> CaptionStyle:
    style = CaptionStyle(**asdict(config.default_style))
    if len(text) < 10:
        style.font_size = int(style.font_size * 1.2)
    elif len(text) > 30:
        style.font_size = int(style.font_size * 0.85)
    return style


def build_captions(
    lines: list[SpeechCaption],
    config: CaptionConfig,
    learned_style: LearnedStyle | None = None,
) -> list[Caption]:
    # TODO: apply learned_style.timing_pattern once the style learner records caption timing
    offset = config.display_offset
    captions = [
        Caption(
            id=index,
            text=line.text,
            start=line.start + offset,
            end=line.end + offset,
            duration=line.duration,
            style=determine_style(line.text, config),
        )
        for index, line in enumerate(lines, start=1)
    ]
    logger.info("Built %d captions", len(captions))
    return captions


def caption_statistics(captions: list[Caption]) -> dict[str, Any]:
    if not captions:
        return {
            "total_captions": 0,
            "total_duration": 0.0,
            "avg_duration": 0.0,
            "avg_text_length": 0.0,
            "shortest_caption": 0,
            "longest_caption": 0,
        }
    total = sum(c.duration for c in captions)
    lengths = [len(c.text) for c in captions]
    return {
        "total_captions": len(captions),
        "total_duration": total,
        "avg_duration": total / len(captions),
        "avg_text_length": sum(lengths) / len(lengths),
        "shortest_caption": min(lengths),
        "longest_caption": max(lengths),
    }
