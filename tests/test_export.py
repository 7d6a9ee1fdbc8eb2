"""Tests for rendering and writing export artifacts."""

from __future__ import annotations

import pytest

from autocut.core.ir import Caption
from autocut.errors import ConfigurationError, ValidationError
from autocut.formatters import DEFAULT_FORMATS
from autocut.formatters.export import export_all, render_all, resolve_formats


class TestResolveFormats:

    def test_none_means_defaults(self):
        assert resolve_formats(None) == DEFAULT_FORMATS

    def test_order_kept_and_repeats_dropped(self):
        assert resolve_formats(["srt", " edl", "srt"]) == ["srt", "edl"]

    def test_unknown_format_rejected(self):
        with pytest.raises(ConfigurationError, match="Unknown format 'mp4'"):
            resolve_formats(["srt", "mp4"])

    def test_empty_selection_rejected(self):
        with pytest.raises(ConfigurationError):
            resolve_formats(["", " "])


class TestExportAll:

    def test_writes_stem_plus_suffix(self, sample_project, tmp_path):
        saved = export_all(sample_project, tmp_path, ["premiere_xml", "edl", "srt"])
        assert [p.name for p in saved] == [
            "interview_project.xml", "interview_edl.edl", "interview_captions.srt",
        ]
        for path in saved:
            assert path.read_text(encoding="utf-8")

    def test_all_formats(self, sample_project, tmp_path):
        saved = export_all(
            sample_project, tmp_path,
            ["premiere_xml", "edl", "srt", "vtt", "project_json", "csv_report"],
        )
        assert len(saved) == 6
        assert not list(tmp_path.glob("*.tmp"))

    def test_overwrites_existing(self, sample_project, tmp_path):
        target = tmp_path / "interview_edl.edl"
        target.write_text("old", encoding="utf-8")
        export_all(sample_project, tmp_path, ["edl"])
        assert target.read_text(encoding="utf-8").startswith("TITLE:")

    def test_nothing_written_on_validation_error(self, sample_project, tmp_path):
        sample_project.captions.append(
            Caption(id=3, text="あ" * 200, start=7.0, end=9.0, duration=2.0)
        )
        with pytest.raises(ValidationError):
            # edl renders fine and comes first; it must still not be written
            export_all(sample_project, tmp_path, ["edl", "premiere_xml"])
        assert list(tmp_path.iterdir()) == []

    def test_nothing_written_on_control_characters(self, sample_project, tmp_path):
        sample_project.captions[1].text = "Hello\x0bworld"
        with pytest.raises(ValidationError):
            export_all(sample_project, tmp_path)
        assert list(tmp_path.iterdir()) == []

    def test_default_run_writes_five_artifacts(self, sample_project, tmp_path):
        saved = export_all(sample_project, tmp_path)
        assert sorted(p.name for p in saved) == [
            "interview_captions.srt", "interview_edl.edl", "interview_project.json",
            "interview_project.xml", "interview_report.csv",
        ]

    def test_missing_output_dir(self, sample_project, tmp_path):
        with pytest.raises(FileNotFoundError):
            export_all(sample_project, tmp_path / "missing", ["edl"])

    def test_render_all_returns_keys(self, sample_project):
        rendered = render_all(sample_project, ["vtt", "csv_report"])
        assert [key for key, _ in rendered] == ["vtt", "csv_report"]
