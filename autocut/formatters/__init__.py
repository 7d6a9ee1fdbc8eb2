"""Output formatter registry.

WHY: The CLI and the HTTP API need a single lookup to find the right
formatter by name. Adding a format means creating the class, importing it
here and adding one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["edl"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API requests)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from autocut.formatters.csv_report import CSVReportFormatter
from autocut.formatters.edl import EDLFormatter
from autocut.formatters.premiere_xml import PremiereXMLFormatter
from autocut.formatters.project_json import ProjectJSONFormatter
from autocut.formatters.subtitles import SRTFormatter, WebVTTFormatter

if TYPE_CHECKING:
    from autocut.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "premiere_xml": PremiereXMLFormatter,
    "edl": EDLFormatter,
    "srt": SRTFormatter,
    "vtt": WebVTTFormatter,
    "project_json": ProjectJSONFormatter,
    "csv_report": CSVReportFormatter,
}

DEFAULT_FORMATS: list[str] = ["premiere_xml", "edl", "srt", "project_json", "csv_report"]
