"""CMX3600-style edit decision list formatter.

WHY: Not every finishing tool reads xmeml, but almost all of them read a
plain EDL. The keep clips map one-to-one onto cut events.

HOW: One video cut event per keep clip. Source in/out are the clip's
source timecodes; record in/out accumulate from 00:00:00:00 so the events
butt together on the record side.

RULES:
- Header: "TITLE: <project name>" then "FCM: NON-DROP FRAME", blank line
- Event numbers are three digits, starting at 001
- Reel name is the source stem, upper-cased, limited to 8 characters
- Every event is followed by a "* FROM CLIP NAME:" comment line
- Output suffix: "_edl.edl"
"""

from __future__ import annotations

import re

from autocut.core.ir import EditProject
from autocut.core.timecode import frames_to_timecode, seconds_to_frames, validate_frame_rate
from autocut.formatters.base import BaseFormatter, FormatterOutput

REEL_LENGTH = 8
_REEL_UNSAFE = re.compile(r"[^A-Z0-9_]")


def reel_name(stem: str) -> str:
    reel = _REEL_UNSAFE.sub("_", stem.upper())[:REEL_LENGTH]
    return reel or "AX"


class EDLFormatter(BaseFormatter):
    """Formatter that produces a single-track video EDL."""

    suffix = "_edl.edl"

    @property
    def name(self) -> str:
        return "CMX3600 EDL"

    def format(self, project: EditProject) -> list[FormatterOutput]:
        rate = validate_frame_rate(project.export.frame_rate)
        reel = reel_name(project.stem)

        lines = [
            "TITLE: {}".format(project.export.project_name),
            "FCM: NON-DROP FRAME",
            "",
        ]
        record = 0
        for number, clip in enumerate(project.cut_result.keep_clips, start=1):
            src_in = seconds_to_frames(clip.start, rate)
            src_out = seconds_to_frames(clip.end, rate)
            rec_in = record
            record += src_out - src_in
            lines.append("{:03d}  {:<8} V     C        {} {} {} {}".format(
                number,
                reel,
                frames_to_timecode(src_in, rate),
                frames_to_timecode(src_out, rate),
                frames_to_timecode(rec_in, rate),
                frames_to_timecode(record, rate),
            ))
            lines.append("* FROM CLIP NAME: {}".format(project.source_name))
            lines.append("")

        return [
            FormatterOutput(
                suffix=self.suffix,
                content="\n".join(lines),
                media_type="text/plain",
            )
        ]
