"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: The analysis payloads are accepted as loose dicts and handed to the
adapters, which own the interval validation (so the CLI and the API
reject exactly the same input). Everything the engine returns is typed.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- OutputFormat values match keys in autocut.formatters.FORMATTERS exactly
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class OutputFormat(str, Enum):
    """Available output format identifiers.

    RULES:
    - Values match keys in autocut.formatters.FORMATTERS exactly
    """

    premiere_xml = "premiere_xml"
    edl = "edl"
    srt = "srt"
    vtt = "vtt"
    project_json = "project_json"
    csv_report = "csv_report"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class EditRequest(BaseModel):
    """Everything needed to detect cuts and render artifacts for one video.

    RULES:
    - video_analysis is required; speech_analysis defaults to empty
    - settings is a partial, nested override of the engine defaults
    - output_formats defaults to the CLI's default set
    """

    source_filename: str = Field(
        description="Source video filename; output names derive from its stem.",
    )
    video_analysis: Dict[str, Any] = Field(
        description="Video analysis: duration, silences, sceneChanges.",
    )
    speech_analysis: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Speech analysis: captions, fillerWords, segments.",
    )
    learned_style: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Learned style profile (cutPattern, timingPattern, ...).",
    )
    settings: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Nested overrides, e.g. {'auto_cut': {'min_confidence': 0.6}}.",
    )
    output_formats: Optional[List[OutputFormat]] = Field(
        default=None,
        description="Artifacts to render. Defaults to premiere_xml, edl, srt, project_json, csv_report.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "source_filename": "interview.mp4",
                "video_analysis": {
                    "duration": 10.0,
                    "silences": [{"start": 2.0, "end": 3.0, "duration": 1.0}],
                    "sceneChanges": [5.0],
                },
                "speech_analysis": {
                    "captions": [{"text": "こんにちは", "start": 0.0, "end": 1.5, "duration": 1.5}],
                    "fillerWords": [{"word": "えー", "start": 4.0, "end": 4.4}],
                },
                "settings": {"export": {"frame_rate": 30}},
                "output_formats": ["premiere_xml", "srt"],
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class CandidateInfo(BaseModel):
    start: float = Field(description="Start of the interval in seconds.")
    end: float = Field(description="End of the interval in seconds.")
    duration: float = Field(description="end - start, in seconds.")
    type: str = Field(description="Detector that proposed the cut.")
    reason: str = Field(description="Human-readable reason; merged reasons joined by ' + '.")
    confidence: float = Field(description="Confidence within [0, 1].")
    is_marker: bool = Field(description="True for annotate-only scene-change markers.")
    metadata: Dict[str, Any] = Field(description="Detector-specific details.")


class ClipInfo(BaseModel):
    start: float = Field(description="Start of the kept span in seconds.")
    end: float = Field(description="End of the kept span in seconds.")
    duration: float = Field(description="end - start, in seconds.")


class StatisticsInfo(BaseModel):
    total_duration: float = Field(description="Source duration in seconds.")
    total_cuts: int = Field(description="Number of actual (non-marker) cuts.")
    total_keep_clips: int = Field(description="Number of keep clips.")
    total_cut_duration: float = Field(description="Seconds removed by cuts.")
    total_keep_duration: float = Field(description="Seconds kept.")
    reduction_rate: str = Field(description="Share of the source removed, e.g. '12.50%'.")
    final_duration: float = Field(description="Duration of the edited result in seconds.")
    cut_types: Dict[str, int] = Field(description="Actual cut count per detector type.")


class CaptionInfo(BaseModel):
    id: int = Field(description="1-based caption number.")
    text: str = Field(description="Caption text.")
    start: float = Field(description="Display start in seconds.")
    end: float = Field(description="Display end in seconds.")
    duration: float = Field(description="Display duration in seconds.")
    style: Dict[str, Any] = Field(description="Caption style record.")


class ArtifactInfo(BaseModel):
    """One rendered artifact, returned inline."""

    format: str = Field(description="Formatter key that produced this artifact.")
    filename: str = Field(description="Suggested filename ({stem}{suffix}).")
    media_type: str = Field(description="MIME type of the content.")
    content: str = Field(description="The artifact content as text.")


class EditResponse(BaseModel):
    """Result of one cut detection and export run."""

    cut_candidates: List[CandidateInfo] = Field(description="Filtered, merged cut candidates and markers.")
    keep_clips: List[ClipInfo] = Field(description="Retained spans of the source timeline.")
    stats: StatisticsInfo = Field(description="Summary statistics for the edit.")
    captions: List[CaptionInfo] = Field(description="Numbered, styled captions.")
    artifacts: List[ArtifactInfo] = Field(description="Rendered export artifacts.")


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '_project.xml').")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
