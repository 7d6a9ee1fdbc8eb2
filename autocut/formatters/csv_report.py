"""Flat CSV report of cuts, keep clips and captions.

WHY: Producers review an edit in a spreadsheet, not an NLE.

RULES:
- Header: Type,Start,End,Duration,Text/Reason
- Rows in order: every actual cut (markers excluded), every keep clip,
  every caption
- Seconds are written with two decimals
- Output suffix: "_report.csv"
"""

from __future__ import annotations

import csv
import io

from autocut.core.ir import EditProject
from autocut.formatters.base import BaseFormatter, FormatterOutput

HEADER = ["Type", "Start", "End", "Duration", "Text/Reason"]


def _seconds(value: float) -> str:
    return "{:.2f}".format(value)


class CSVReportFormatter(BaseFormatter):
    suffix = "_report.csv"

    @property
    def name(self) -> str:
        return "CSV Report"

    def format(self, project: EditProject) -> list[FormatterOutput]:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(HEADER)

        for cut in project.cut_result.actual_cuts:
            writer.writerow(["Cut", _seconds(cut.start), _seconds(cut.end),
                             _seconds(cut.duration), cut.reason])
        for clip in project.cut_result.keep_clips:
            writer.writerow(["Keep", _seconds(clip.start), _seconds(clip.end),
                             _seconds(clip.duration), "Kept Clip"])
        for caption in project.captions:
            writer.writerow(["Caption", _seconds(caption.start), _seconds(caption.end),
                             _seconds(caption.duration), caption.text])

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=buffer.getvalue(),
                media_type="text/csv",
            )
        ]
