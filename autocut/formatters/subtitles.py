"""SRT and WebVTT caption formatters.

WHY: The Premiere graphic clips only help editors working in Premiere.
Sidecar subtitle files let the same captions travel to players, review
tools and other editors.

HOW: Both formats share one cue loop; they differ only in the header and
the millisecond separator.

RULES:
- Cues are numbered 1..n in caption order (SRT) / caption id (VTT)
- Timestamps truncate to the millisecond, never round
- A caption list with no entries yields an empty SRT / header-only VTT
"""

from __future__ import annotations

from typing import Callable

from autocut.core.ir import Caption, EditProject
from autocut.core.timecode import seconds_to_srt_time, seconds_to_vtt_time
from autocut.formatters.base import BaseFormatter, FormatterOutput


def _cues(captions: list[Caption], clock: Callable[[float], str], numbered: bool) -> list[str]:
    blocks = []
    for index, caption in enumerate(captions, start=1):
        lines = []
        if numbered:
            lines.append(str(index))
        else:
            lines.append("caption-{}".format(caption.id))
        lines.append("{} --> {}".format(clock(caption.start), clock(caption.end)))
        lines.append(caption.text)
        blocks.append("\n".join(lines) + "\n")
    return blocks


class SRTFormatter(BaseFormatter):
    suffix = "_captions.srt"

    @property
    def name(self) -> str:
        return "SRT Captions"

    def format(self, project: EditProject) -> list[FormatterOutput]:
        content = "\n".join(_cues(project.captions, seconds_to_srt_time, numbered=True))
        return [
            FormatterOutput(
                suffix=self.suffix,
                content=content,
                media_type="application/x-subrip",
            )
        ]


class WebVTTFormatter(BaseFormatter):
    suffix = "_captions.vtt"

    @property
    def name(self) -> str:
        return "WebVTT Captions"

    def format(self, project: EditProject) -> list[FormatterOutput]:
        blocks = ["WEBVTT\n"] + _cues(project.captions, seconds_to_vtt_time, numbered=False)
        return [
            FormatterOutput(
                suffix=self.suffix,
                content="\n".join(blocks),
                media_type="text/vtt",
            )
        ]
