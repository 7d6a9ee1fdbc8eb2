"""Project snapshot JSON formatter.

WHY: The XML and EDL lose the reasoning behind each cut. The snapshot keeps
everything the detector decided (candidates with reasons and confidence,
keep clips, statistics, captions) so a later session or another tool can
reload and review the edit.

HOW: Builds a plain dict from the IR's to_dict() helpers, validates it
with jsonschema against the bundled project_snapshot.schema.json, and
serialises it with two-space indentation.

RULES:
- Snapshot layout: {version, project, edits, captions}
- created_at is an ISO 8601 UTC timestamp
- Validate before returning; a schema failure raises ValidationError
- Output suffix: "_project.json"
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import jsonschema

from autocut import __version__
from autocut.core.ir import EditProject
from autocut.errors import ValidationError
from autocut.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "project_snapshot.schema.json"

_CACHED_SCHEMA: dict[str, Any] | None = None


def _get_schema() -> dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_snapshot(project: EditProject) -> dict[str, Any]:
    result = project.cut_result
    return {
        "version": __version__,
        "project": {
            "name": project.export.project_name,
            "source_video": project.source_path,
            "created_at": _utc_now(),
            "export": {
                "frame_rate": project.export.frame_rate,
                "width": project.export.width,
                "height": project.export.height,
            },
        },
        "edits": {
            "keep_clips": [clip.to_dict() for clip in result.keep_clips],
            "cut_candidates": [c.to_dict() for c in result.cut_candidates],
            "stats": result.stats.to_dict(),
        },
        "captions": [c.to_dict() for c in project.captions],
    }


class ProjectJSONFormatter(BaseFormatter):
    suffix = "_project.json"

    @property
    def name(self) -> str:
        return "Project Snapshot JSON"

    def format(self, project: EditProject) -> list[FormatterOutput]:
        """Serialise the whole edit for later review.

        Raises:
            ValidationError: If the snapshot does not match the schema.
        """
        snapshot = build_snapshot(project)
        try:
            jsonschema.validate(instance=snapshot, schema=_get_schema())
        except jsonschema.ValidationError as exc:
            raise ValidationError("Project snapshot is invalid: {}".format(exc.message)) from exc

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=json.dumps(snapshot, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
