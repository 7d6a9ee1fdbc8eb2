"""Unit tests for all formatter modules.

WHY: Each formatter turns the same EditProject into a file some other tool
has to accept. A wrong frame count, a missing link record or a malformed
cue line is only discovered when an editor fails to import the file.

HOW: Every formatter runs against the hand-built sample_project fixture
(cuts (10,15) and (50,52) at 30 fps, marker at 30 s, two captions).
"""

from __future__ import annotations

import base64
import csv
import io
import json
from dataclasses import replace

import pytest
from lxml import etree

from autocut.core.ir import Caption
from autocut.errors import ConfigurationError, ValidationError
from autocut.formatters import DEFAULT_FORMATS, FORMATTERS
from autocut.formatters.caption_payload import CAPTION_HEADER
from autocut.formatters.csv_report import CSVReportFormatter
from autocut.formatters.edl import EDLFormatter, reel_name
from autocut.formatters.premiere_xml import PremiereXMLFormatter
from autocut.formatters.project_json import ProjectJSONFormatter
from autocut.formatters.subtitles import SRTFormatter, WebVTTFormatter


def _single(formatter, project):
    outputs = formatter.format(project)
    assert len(outputs) == 1
    return outputs[0]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:

    def test_all_keys_registered(self):
        assert set(FORMATTERS) == {
            "premiere_xml", "edl", "srt", "vtt", "project_json", "csv_report",
        }

    def test_defaults_are_registered(self):
        assert set(DEFAULT_FORMATS) <= set(FORMATTERS)

    @pytest.mark.parametrize("key", sorted(FORMATTERS))
    def test_suffix_matches_output(self, key, sample_project):
        formatter = FORMATTERS[key]()
        output = _single(formatter, sample_project)
        assert output.suffix == formatter.suffix
        assert output.suffix.startswith("_")


# ---------------------------------------------------------------------------
# Premiere Pro XML
# ---------------------------------------------------------------------------


class TestPremiereXMLFormatter:

    @pytest.fixture
    def root(self, sample_project):
        output = _single(PremiereXMLFormatter(), sample_project)
        return etree.fromstring(output.content.encode("utf-8"))

    def test_root_element(self, root):
        assert root.tag == "xmeml"
        assert root.get("version") == "5"

    def test_sequence_name_and_duration(self, root):
        sequence = root.find("sequence")
        assert sequence.findtext("name") == "interview"
        # 93 seconds kept at 30 fps
        assert sequence.findtext("duration") == "2790"
        assert sequence.findtext("rate/timebase") == "30"

    def test_keep_clips_in_frames(self, root):
        items = root.findall("sequence/media/video/track[1]/clipitem")
        assert [(i.findtext("in"), i.findtext("out")) for i in items] == [
            ("0", "300"), ("450", "1500"), ("1560", "3000"),
        ]

    def test_record_positions_accumulate(self, root):
        items = root.findall("sequence/media/video/track[1]/clipitem")
        assert [(i.findtext("start"), i.findtext("end")) for i in items] == [
            ("0", "300"), ("300", "1350"), ("1350", "2790"),
        ]

    def test_labels_alternate(self, root):
        items = root.findall("sequence/media/video/track[1]/clipitem")
        assert [i.findtext("labels/label2") for i in items] == ["Rose", "Cerulean", "Rose"]

    def test_links_are_consistent(self, root):
        items = root.findall("sequence/media/video/track[1]/clipitem")
        for index, item in enumerate(items, start=1):
            links = item.findall("link")
            assert len(links) == 4
            assert [l.findtext("mediatype") for l in links] == ["video", "audio", "audio", "text"]
            assert {l.findtext("clipindex") for l in links} == {str(index)}
            assert {l.findtext("groupindex") for l in links} == {str(index)}

    def test_caption_track(self, root):
        items = root.findall("sequence/media/video/track[2]/clipitem")
        assert [i.get("id") for i in items] == ["caption-1", "caption-2"]
        first = items[0]
        assert first.findtext("start") == "0"
        assert first.findtext("end") == "60"
        assert first.findtext("filter/effect/effectid") == "GraphicAndType"

    def test_caption_payload_embedded(self, root):
        item = root.find("sequence/media/video/track[2]/clipitem")
        params = item.findall("filter/effect/parameter")
        assert [p.findtext("name") for p in params] == ["Source Text", "Transform", "Position"]
        raw = base64.b64decode(params[0].findtext("value"))
        assert len(raw) == 668
        assert raw[:240] == CAPTION_HEADER

    def test_audio_track_mirrors_video(self, root):
        video = root.findall("sequence/media/video/track[1]/clipitem")
        audio = root.findall("sequence/media/audio/track/clipitem")
        assert [(a.findtext("in"), a.findtext("out")) for a in audio] == [
            (v.findtext("in"), v.findtext("out")) for v in video
        ]

    def test_oversize_caption_rejected(self, sample_project):
        sample_project.captions.append(
            Caption(id=3, text="あ" * 101, start=7.0, end=9.0, duration=2.0)
        )
        with pytest.raises(ValidationError):
            PremiereXMLFormatter().format(sample_project)

    def test_control_characters_rejected(self, sample_project):
        sample_project.captions[0].text = "a\x0bb"
        with pytest.raises(ValidationError, match="name"):
            PremiereXMLFormatter().format(sample_project)

    def test_caption_after_cut_follows_footage(self, sample_project):
        # 20-22 s sits in the second keep clip, which starts at record frame 300
        sample_project.captions = [
            Caption(id=1, text="after", start=20.0, end=22.0, duration=2.0),
        ]
        output = _single(PremiereXMLFormatter(), sample_project)
        item = etree.fromstring(output.content.encode("utf-8")).find(
            "sequence/media/video/track[2]/clipitem"
        )
        assert (item.findtext("start"), item.findtext("end")) == ("450", "510")

    def test_caption_spanning_cut_is_shortened(self, sample_project):
        sample_project.captions = [
            Caption(id=1, text="across", start=9.0, end=16.0, duration=7.0),
        ]
        output = _single(PremiereXMLFormatter(), sample_project)
        item = etree.fromstring(output.content.encode("utf-8")).find(
            "sequence/media/video/track[2]/clipitem"
        )
        assert (item.findtext("start"), item.findtext("end")) == ("270", "330")

    def test_caption_inside_cut_omitted(self, sample_project):
        sample_project.captions.append(
            Caption(id=3, text="cut away", start=11.0, end=13.0, duration=2.0)
        )
        output = _single(PremiereXMLFormatter(), sample_project)
        root = etree.fromstring(output.content.encode("utf-8"))
        items = root.findall("sequence/media/video/track[2]/clipitem")
        assert [i.get("id") for i in items] == ["caption-1", "caption-2"]

    def test_bad_frame_rate_rejected(self, sample_project):
        sample_project.export = replace(sample_project.export, frame_rate=0)
        with pytest.raises(ConfigurationError):
            PremiereXMLFormatter().format(sample_project)

    def test_ntsc_flag(self, sample_project):
        sample_project.export = replace(sample_project.export, frame_rate=29.97)
        output = _single(PremiereXMLFormatter(), sample_project)
        root = etree.fromstring(output.content.encode("utf-8"))
        assert root.findtext("sequence/rate/timebase") == "30"
        assert root.findtext("sequence/rate/ntsc") == "TRUE"


# ---------------------------------------------------------------------------
# EDL
# ---------------------------------------------------------------------------


class TestEDLFormatter:

    def test_header(self, sample_project):
        lines = _single(EDLFormatter(), sample_project).content.split("\n")
        assert lines[0] == "TITLE: Auto Edited Project"
        assert lines[1] == "FCM: NON-DROP FRAME"
        assert lines[2] == ""

    def test_events(self, sample_project):
        content = _single(EDLFormatter(), sample_project).content
        events = [line for line in content.split("\n") if line[:3].isdigit()]
        assert events == [
            "001  INTERVIE V     C        00:00:00:00 00:00:10:00 00:00:00:00 00:00:10:00",
            "002  INTERVIE V     C        00:00:15:00 00:00:50:00 00:00:10:00 00:00:45:00",
            "003  INTERVIE V     C        00:00:52:00 00:01:40:00 00:00:45:00 00:01:33:00",
        ]

    def test_clip_name_comments(self, sample_project):
        content = _single(EDLFormatter(), sample_project).content
        assert content.count("* FROM CLIP NAME: interview.mp4") == 3

    def test_reel_name(self):
        assert reel_name("my clip-01") == "MY_CLIP_"
        assert reel_name("") == "AX"


# ---------------------------------------------------------------------------
# Subtitles
# ---------------------------------------------------------------------------


class TestSRTFormatter:

    def test_cues(self, sample_project):
        content = _single(SRTFormatter(), sample_project).content
        assert content == (
            "1\n00:00:00,000 --> 00:00:02,000\nこんにちは\n"
            "\n"
            "2\n00:00:02,500 --> 00:00:06,000\nHello, world\n"
        )

    def test_no_captions(self, sample_project):
        sample_project.captions = []
        assert _single(SRTFormatter(), sample_project).content == ""

    def test_negative_time_rejected(self, sample_project):
        sample_project.captions[0].start = -1.0
        with pytest.raises(ValidationError):
            SRTFormatter().format(sample_project)


class TestWebVTTFormatter:

    def test_header_and_cues(self, sample_project):
        content = _single(WebVTTFormatter(), sample_project).content
        assert content.startswith("WEBVTT\n\n")
        assert "caption-2\n00:00:02.500 --> 00:00:06.000\nHello, world\n" in content


# ---------------------------------------------------------------------------
# Project snapshot JSON
# ---------------------------------------------------------------------------


class TestProjectJSONFormatter:

    def test_layout(self, sample_project):
        data = json.loads(_single(ProjectJSONFormatter(), sample_project).content)
        assert set(data) == {"version", "project", "edits", "captions"}
        assert data["project"]["source_video"] == "/media/interview.mp4"
        assert data["project"]["export"]["frame_rate"] == 30.0
        assert len(data["edits"]["keep_clips"]) == 3
        assert data["edits"]["stats"]["reduction_rate"] == "7.00%"

    def test_candidates_keep_metadata(self, sample_project):
        data = json.loads(_single(ProjectJSONFormatter(), sample_project).content)
        first, marker = data["edits"]["cut_candidates"][:2]
        assert first["type"] == "silence"
        assert first["metadata"] == {"length": 5.0}
        assert marker["is_marker"] is True

    def test_timestamp_is_utc(self, sample_project):
        data = json.loads(_single(ProjectJSONFormatter(), sample_project).content)
        assert data["project"]["created_at"].endswith("+00:00")

    def test_schema_violation_raises(self, sample_project):
        sample_project.captions[0].start = -1.0
        with pytest.raises(ValidationError):
            ProjectJSONFormatter().format(sample_project)


# ---------------------------------------------------------------------------
# CSV report
# ---------------------------------------------------------------------------


class TestCSVReportFormatter:

    def test_rows(self, sample_project):
        content = _single(CSVReportFormatter(), sample_project).content
        rows = list(csv.reader(io.StringIO(content)))
        assert rows[0] == ["Type", "Start", "End", "Duration", "Text/Reason"]
        assert [r[0] for r in rows[1:]] == ["Cut", "Cut", "Keep", "Keep", "Keep", "Caption", "Caption"]
        assert rows[1] == ["Cut", "10.00", "15.00", "5.00", "Silence"]
        assert rows[3] == ["Keep", "0.00", "10.00", "10.00", "Kept Clip"]
        assert rows[-1] == ["Caption", "2.50", "6.00", "3.50", "Hello, world"]
