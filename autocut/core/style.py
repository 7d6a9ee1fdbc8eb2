"""Learned style: loading, saving, and confidence adjustment.

WHY: A style profile learned from reference videos can say how strongly
scene changes line up with cuts in the target channel's editing. The cut
engine uses that one number to re-weight scene-change candidates.

HOW: Styles are JSON files under a style directory, named <name>.json.
load_style() parses one into a LearnedStyle; apply_cut_style() multiplies
scene-change confidence by cut_pattern.scene_change_correlation.

RULES:
- No style (or no correlation) means no adjustment, never an error
- A missing style file is logged at INFO and yields None
- Adjusted confidence is clamped to [0, 1]
- Only SCENE_CHANGE candidates are touched
- avg_cut_interval is carried but not yet used for cadence matching
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Any

from autocut.core.ir import CutCandidate, CutPattern, CutType, LearnedStyle
from autocut.errors import ValidationError

logger = logging.getLogger(__name__)


def _number(value: Any, name: str) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Learned style {} must be a number, got {!r}".format(name, value))
    if not math.isfinite(number):
        raise ValidationError("Learned style {} must be finite, got {!r}".format(name, value))
    return number


def _object(value: Any, name: str) -> dict[str, Any]:
    if not value:
        return {}
    if not isinstance(value, dict):
        raise ValidationError("Learned style {} must be a JSON object".format(name))
    return value


def style_from_dict(data: dict[str, Any]) -> LearnedStyle:
    """Parse a learned style JSON object (camelCase, as the learner writes it).

    Raises:
        ValidationError: If a field has the wrong JSON type or a bad value.
    """
    if not isinstance(data, dict):
        raise ValidationError("Learned style must be a JSON object")

    raw_pattern = _object(data.get("cutPattern") or data.get("cut_pattern"), "cutPattern")
    pattern = None
    if raw_pattern:
        correlation = _number(
            raw_pattern.get("sceneChangeCorrelation", raw_pattern.get("scene_change_correlation")),
            "sceneChangeCorrelation",
        )
        if correlation is not None and correlation < 0:
            raise ValidationError(
                "sceneChangeCorrelation must be non-negative, got {!r}".format(correlation)
            )
        histogram = raw_pattern.get("histogram") or []
        if not isinstance(histogram, list):
            raise ValidationError("Learned style histogram must be a JSON array")
        pattern = CutPattern(
            avg_cut_interval=_number(
                raw_pattern.get("avgCutInterval", raw_pattern.get("avg_cut_interval")),
                "avgCutInterval",
            ),
            scene_change_correlation=correlation,
            total_scene_changes=int(_number(raw_pattern.get("totalSceneChanges", 0),
                                            "totalSceneChanges") or 0),
            interval_stats=dict(_object(raw_pattern.get("cutIntervalStats"), "cutIntervalStats")),
            histogram=list(histogram),
        )

    timing = data.get("timingPattern") or data.get("timing_pattern")
    return LearnedStyle(
        cut_pattern=pattern,
        timing_pattern=dict(_object(timing, "timingPattern")),
        sample_count=int(_number(data.get("sampleCount", data.get("sample_count", 0)),
                                 "sampleCount") or 0),
        created_at=data.get("createdAt", data.get("created_at")),
    )


def style_to_dict(style: LearnedStyle) -> dict[str, Any]:
    out: dict[str, Any] = {
        "timingPattern": style.timing_pattern,
        "sampleCount": style.sample_count,
        "createdAt": style.created_at,
    }
    if style.cut_pattern is not None:
        p = style.cut_pattern
        out["cutPattern"] = {
            "avgCutInterval": p.avg_cut_interval,
            "sceneChangeCorrelation": p.scene_change_correlation,
            "totalSceneChanges": p.total_scene_changes,
            "cutIntervalStats": p.interval_stats,
            "histogram": p.histogram,
        }
    return out


def load_style_file(path: Path) -> LearnedStyle | None:
    if not path.is_file():
        logger.info("No learned style at %s; using default cut behaviour", path)
        return None
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError("Learned style {} is not valid JSON: {}".format(path, e)) from e
    logger.info("Loaded learned style from %s", path)
    return style_from_dict(data)


def load_style(name: str, style_dir: str | Path) -> LearnedStyle | None:
    return load_style_file(Path(style_dir) / "{}.json".format(name))


def save_style(style: LearnedStyle, name: str, style_dir: str | Path) -> Path:
    directory = Path(style_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "{}.json".format(name)
    path.write_text(json.dumps(style_to_dict(style), indent=2, ensure_ascii=False),
                    encoding="utf-8")
    logger.info("Saved learned style to %s", path)
    return path


def apply_cut_style(
    candidates: list[CutCandidate],
    learned_style: LearnedStyle | None,
) -> list[CutCandidate]:
    """Re-weight scene-change confidence by the learned correlation."""
    if learned_style is None or learned_style.cut_pattern is None:
        return list(candidates)
    factor = learned_style.cut_pattern.scene_change_correlation
    if factor is None:
        return list(candidates)

    adjusted = []
    for candidate in candidates:
        if candidate.type is CutType.SCENE_CHANGE:
            confidence = min(1.0, max(0.0, candidate.confidence * factor))
            candidate = replace(candidate, confidence=confidence)
        adjusted.append(candidate)
    return adjusted
