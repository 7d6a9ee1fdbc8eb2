"""Premiere Pro XML (xmeml v5) sequence formatter.

WHY: Editors finish the rough cut by hand. Premiere Pro imports Final Cut
Pro 7 style xmeml, so the keep clips become a ready-made sequence with the
captions already laid out as Essential Graphics clips on a second track.

HOW: lxml builds the document top-down: sequence -> media -> video/audio.
Video track 1 holds one clipitem per keep clip, placed back to back on the
record timeline. Video track 2 holds one GraphicAndType clipitem per
caption, its source times mapped through the keep clips onto the record
timeline so it stays over the footage it belongs to. The audio track
mirrors track 1. Every clip carries four link records (video, stereo audio
pair, caption graphic) so Premiere Pro groups them on import.

RULES:
- Every in/out/start/end/duration value is a frame count, floor(s x fps)
- Record start/end accumulate in frames; clip n+1 starts where clip n ends
- Clip labels alternate Rose / Cerulean so adjacent clips are told apart
- A caption spanning a cut is shortened by the cut; a caption that lies
  wholly inside a cut is left out of the sequence
- Text XML 1.0 cannot carry (control characters) raises ValidationError
- clipindex and groupindex of a clip's links both equal its 1-based index
- Caption payloads are encoded before any XML is returned; oversize text
  raises ValidationError
- Output suffix: "_project.xml"
"""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from autocut.core.ir import Caption, EditProject, KeepClip
from autocut.core.timecode import nominal_rate, seconds_to_frames, validate_frame_rate
from autocut.errors import ValidationError
from autocut.formatters.base import BaseFormatter, FormatterOutput
from autocut.formatters.caption_payload import caption_payload_base64

logger = logging.getLogger(__name__)

XMEML_VERSION = "5"
CLIP_LABELS = ("Rose", "Cerulean")
STEREO_CHANNELS = 2

# Effect parameter values copied from a Premiere Pro export; the editor
# rejects the graphic if they are missing.
_TRANSFORM_VALUE = "-91445760000000000,false,0,0,0,0,0,0"
_POSITION_VALUE = "-91445760000000000,0.5:0.95569800000000005,0,0,0,0,0,0,5,4,0,0,0,0"


def _text(parent: etree._Element, tag: str, value: object) -> etree._Element:
    element = etree.SubElement(parent, tag)
    try:
        element.text = str(value)
    except ValueError as e:
        # lxml refuses control characters that XML 1.0 cannot represent
        raise ValidationError("Cannot write {!r} into <{}>: {}".format(value, tag, e)) from e
    return element


def _record_frame(frame: int, spans: list[tuple[int, int]]) -> int:
    """Map a source frame onto the record timeline of the packed keep clips."""
    return sum(min(max(frame - start, 0), end - start) for start, end in spans)


def _bool(value: bool) -> str:
    return "TRUE" if value else "FALSE"


class _Frames:
    """Seconds-to-frames helper bound to one sequence rate."""

    def __init__(self, frame_rate: float):
        self.rate = validate_frame_rate(frame_rate)
        self.timebase = nominal_rate(self.rate)
        self.ntsc = self.timebase != self.rate

    def __call__(self, seconds: float) -> int:
        return seconds_to_frames(seconds, self.rate)

    def rate_element(self, parent: etree._Element) -> etree._Element:
        rate = etree.SubElement(parent, "rate")
        _text(rate, "timebase", self.timebase)
        _text(rate, "ntsc", _bool(self.ntsc))
        return rate


def _sample_characteristics(parent: etree._Element, frames: _Frames, width: int, height: int) -> None:
    characteristics = etree.SubElement(parent, "samplecharacteristics")
    frames.rate_element(characteristics)
    _text(characteristics, "width", width)
    _text(characteristics, "height", height)
    _text(characteristics, "anamorphic", "FALSE")
    _text(characteristics, "pixelaspectratio", "square")
    _text(characteristics, "fielddominance", "none")


def _links(parent: etree._Element, clip_id: str, index: int) -> None:
    for mediatype, trackindex in (("video", 1), ("audio", 1), ("audio", 2), ("text", 3)):
        link = etree.SubElement(parent, "link")
        _text(link, "linkclipref", clip_id)
        _text(link, "mediatype", mediatype)
        _text(link, "trackindex", trackindex)
        _text(link, "clipindex", index)
        _text(link, "groupindex", index)


def _file_element(
    parent: etree._Element,
    project: EditProject,
    frames: _Frames,
    total_frames: int,
    first: bool,
) -> None:
    """Source file reference; the full definition is written only once."""
    file_el = etree.SubElement(parent, "file", id=project.stem)
    if not first:
        return
    _text(file_el, "name", project.source_name)
    _text(file_el, "pathurl", Path(project.source_path).resolve().as_uri())
    frames.rate_element(file_el)
    _text(file_el, "duration", total_frames)
    media = etree.SubElement(file_el, "media")
    video = etree.SubElement(media, "video")
    _sample_characteristics(video, frames, project.export.width, project.export.height)
    audio = etree.SubElement(media, "audio")
    _text(audio, "channelcount", STEREO_CHANNELS)


class PremiereXMLFormatter(BaseFormatter):
    """Formatter that produces an importable Premiere Pro sequence.

    RULES:
    - Captions are validated (payload size) before the document is built
    - An empty keep-clip list still yields a valid, empty sequence
    """

    suffix = "_project.xml"

    @property
    def name(self) -> str:
        return "Premiere Pro XML"

    def format(self, project: EditProject) -> list[FormatterOutput]:
        frames = _Frames(project.export.frame_rate)
        payloads = [caption_payload_base64(c.text) for c in project.captions]

        keep_clips = project.cut_result.keep_clips
        total_frames = frames(project.cut_result.stats.total_duration)
        sequence_frames = sum(frames(c.end) - frames(c.start) for c in keep_clips)

        root = etree.Element("xmeml", version=XMEML_VERSION)
        sequence = etree.SubElement(root, "sequence", id="video")
        _text(sequence, "duration", sequence_frames)
        _text(sequence, "name", project.stem)
        frames.rate_element(sequence)

        media = etree.SubElement(sequence, "media")
        video = etree.SubElement(media, "video")
        fmt = etree.SubElement(video, "format")
        _sample_characteristics(fmt, frames, project.export.width, project.export.height)

        self._video_track(video, project, keep_clips, frames, total_frames)
        self._caption_track(video, project.captions, payloads, keep_clips, frames)

        audio = etree.SubElement(media, "audio")
        _text(audio, "channelcount", STEREO_CHANNELS)
        self._audio_track(audio, project, keep_clips, frames)

        content = etree.tostring(
            root, pretty_print=True, xml_declaration=True, encoding="UTF-8",
            doctype="<!DOCTYPE xmeml>",
        ).decode("utf-8")
        logger.info(
            "Built xmeml sequence: %d clips, %d captions, %d frames",
            len(keep_clips), len(project.captions), sequence_frames,
        )

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=content,
                media_type="application/xml",
            )
        ]

    def _video_track(
        self,
        video: etree._Element,
        project: EditProject,
        keep_clips: list[KeepClip],
        frames: _Frames,
        total_frames: int,
    ) -> None:
        track = etree.SubElement(video, "track")
        record = 0
        for i, clip in enumerate(keep_clips):
            index = i + 1
            clip_id = "clipitem-{}".format(index)
            in_frame = frames(clip.start)
            out_frame = frames(clip.end)
            length = out_frame - in_frame

            item = etree.SubElement(track, "clipitem", id=clip_id)
            labels = etree.SubElement(item, "labels")
            _text(labels, "label2", CLIP_LABELS[i % len(CLIP_LABELS)])
            _text(item, "name", "{} - Clip {}".format(project.stem, index))
            _text(item, "enabled", "TRUE")
            _text(item, "duration", total_frames)
            frames.rate_element(item)
            _text(item, "in", in_frame)
            _text(item, "out", out_frame)
            _text(item, "start", record)
            _text(item, "end", record + length)
            _file_element(item, project, frames, total_frames, first=i == 0)
            _links(item, clip_id, index)
            record += length

    def _caption_track(
        self,
        video: etree._Element,
        captions: list[Caption],
        payloads: list[str],
        keep_clips: list[KeepClip],
        frames: _Frames,
    ) -> None:
        spans = [(frames(c.start), frames(c.end)) for c in keep_clips]
        track = etree.SubElement(video, "track")
        index = 0
        for caption, payload in zip(captions, payloads):
            start = _record_frame(frames(caption.start), spans)
            end = _record_frame(frames(caption.end), spans)
            if end <= start:
                logger.info("Caption %d lies entirely inside a cut; not placed", caption.id)
                continue
            index += 1
            clip_id = "caption-{}".format(caption.id)

            item = etree.SubElement(track, "clipitem", id=clip_id)
            _text(item, "name", caption.text)
            _text(item, "duration", end - start)
            frames.rate_element(item)
            _text(item, "start", start)
            _text(item, "end", end)
            _text(item, "in", 0)
            _text(item, "out", end - start)
            _text(item, "enabled", "TRUE")
            _text(item, "anamorphic", "FALSE")
            _text(item, "alphatype", "black")
            _text(item, "masterclipid", clip_id)

            file_el = etree.SubElement(item, "file", id="caption-file-{}".format(caption.id))
            _text(file_el, "name", "Graphic")
            _text(file_el, "mediaSource", "GraphicAndType")
            frames.rate_element(file_el)
            timecode = etree.SubElement(file_el, "timecode")
            _text(timecode, "string", "00:00:00:00")
            _text(timecode, "displayformat", "NDF")
            file_media = etree.SubElement(file_el, "media")
            etree.SubElement(file_media, "video")

            effect_filter = etree.SubElement(item, "filter")
            effect = etree.SubElement(effect_filter, "effect")
            _text(effect, "name", caption.text)
            _text(effect, "effectid", "GraphicAndType")
            _text(effect, "effectcategory", "graphic")
            _text(effect, "effecttype", "filter")
            _text(effect, "mediatype", "video")

            source_text = etree.SubElement(effect, "parameter", authoringApp="PremierePro")
            _text(source_text, "parameterid", 1)
            _text(source_text, "name", "Source Text")
            _text(source_text, "hash", caption.id)
            _text(source_text, "value", payload)

            transform = etree.SubElement(effect, "parameter", authoringApp="PremierePro")
            _text(transform, "parameterid", 2)
            _text(transform, "name", "Transform")
            _text(transform, "IsTimeVarying", "false")
            _text(transform, "ParameterControlType", 11)
            _text(transform, "LowerBound", "false")
            _text(transform, "UpperBound", "false")
            _text(transform, "value", _TRANSFORM_VALUE)

            position = etree.SubElement(effect, "parameter", authoringApp="PremierePro")
            _text(position, "parameterid", 3)
            _text(position, "name", "Position")
            _text(position, "value", _POSITION_VALUE)

            sourcetrack = etree.SubElement(item, "sourcetrack")
            _text(sourcetrack, "mediatype", "video")
            _links(item, clip_id, index)

    def _audio_track(
        self,
        audio: etree._Element,
        project: EditProject,
        keep_clips: list[KeepClip],
        frames: _Frames,
    ) -> None:
        track = etree.SubElement(audio, "track")
        record = 0
        for i, clip in enumerate(keep_clips):
            index = i + 1
            in_frame = frames(clip.start)
            out_frame = frames(clip.end)
            length = out_frame - in_frame

            item = etree.SubElement(track, "clipitem", id="audio-clipitem-{}".format(index))
            _text(item, "name", "{} - Clip {}".format(project.stem, index))
            _text(item, "enabled", "TRUE")
            frames.rate_element(item)
            _text(item, "in", in_frame)
            _text(item, "out", out_frame)
            _text(item, "start", record)
            _text(item, "end", record + length)
            etree.SubElement(item, "file", id=project.stem)
            sourcetrack = etree.SubElement(item, "sourcetrack")
            _text(sourcetrack, "mediatype", "audio")
            _text(sourcetrack, "trackindex", 1)
            _links(item, "clipitem-{}".format(index), index)
            record += length
