"""FastAPI application exposing the cut engine over HTTP.

WHY: Upstream services (video analysis, speech recognition) and editing
front-ends run as separate processes. They need to hand over their JSON
and get the edit timeline plus the export artifacts back without touching
the local filesystem.

HOW: POST /edits runs the same build_edit_project() + render_all() path
as the CLI, synchronously, and returns the result with every artifact
inline. GET /formats lists the formatter registry; GET /health is a
liveness check.

RULES:
- ValidationError and ConfigurationError map to HTTP 422
- Nothing is written to disk by the API
- Unsupported source extensions are rejected with HTTP 400
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import List

from fastapi import FastAPI, HTTPException

from autocut import __version__
from autocut.adapters.analysis import SpeechAnalysis, VideoAnalysis
from autocut.config import SUPPORTED_VIDEO_FORMATS, Settings
from autocut.core.detector import build_edit_project
from autocut.core.style import style_from_dict
from autocut.errors import ConfigurationError, ValidationError
from autocut.formatters import FORMATTERS
from autocut.formatters.export import render_all
from autocut.server.models import (
    ArtifactInfo,
    EditRequest,
    EditResponse,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="autocut API",
    description=(
        "REST API for automatic cut detection. Submit video and speech "
        "analyses, receive the edit timeline (keep clips, cut candidates, "
        "statistics, captions) and rendered artifacts (Premiere Pro XML, "
        "EDL, SRT/WebVTT, project snapshot JSON, CSV report)."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


def _validate_source_filename(filename: str) -> None:
    """Raise HTTPException if the source extension is not supported."""
    ext = PurePath(filename).suffix.lower()
    if ext not in SUPPORTED_VIDEO_FORMATS:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(SUPPORTED_VIDEO_FORMATS))
            ),
        )


# ---------------------------------------------------------------------------
# Endpoints: Edits
# ---------------------------------------------------------------------------


@app.post(
    "/edits",
    response_model=EditResponse,
    tags=["edits"],
    summary="Detect cuts and render export artifacts",
    description=(
        "Runs candidate generation, merging, confidence filtering, optional "
        "style adjustment, keep-clip computation and statistics, then renders "
        "the requested artifacts. Artifacts are returned inline; nothing is "
        "stored on the server."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported source file type"},
        422: {"model": ErrorResponse, "description": "Invalid analysis, style or settings"},
    },
)
def create_edit(request: EditRequest) -> EditResponse:
    _validate_source_filename(request.source_filename)

    try:
        settings = Settings.from_dict(request.settings).validate()
        video = VideoAnalysis.from_dict(request.video_analysis)
        speech = SpeechAnalysis.from_dict(request.speech_analysis or {})
        learned_style = (
            style_from_dict(request.learned_style) if request.learned_style else None
        )
        project = build_edit_project(
            request.source_filename, video, speech, settings, learned_style
        )
        formats = (
            [f.value for f in request.output_formats] if request.output_formats else None
        )
        rendered = render_all(project, formats)
    except (ValidationError, ConfigurationError) as exc:
        logger.info("Rejected edit request for %s: %s", request.source_filename, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    artifacts = []
    for key, output in rendered:
        content = output.content
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        artifacts.append(ArtifactInfo(
            format=key,
            filename="{}{}".format(project.stem, output.suffix),
            media_type=output.media_type,
            content=content,
        ))

    result = project.cut_result
    return EditResponse(
        cut_candidates=[c.to_dict() for c in result.cut_candidates],
        keep_clips=[k.to_dict() for k in result.keep_clips],
        stats=result.stats.to_dict(),
        captions=[c.to_dict() for c in project.captions],
        artifacts=artifacts,
    )


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
    description=(
        "Returns all supported output formats with their identifiers, "
        "human-readable names, and file suffixes."
    ),
)
def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the autocut-api console script."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
