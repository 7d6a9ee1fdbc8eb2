"""Command-line interface for autocut.

WHY: Editors and scripts need a one-shot way to turn precomputed video and
speech analyses into an importable rough cut. The CLI wires the whole
pipeline together (load analyses, detect cuts, build captions, export)
behind a single command.

HOW: argparse accepts the source video, the analysis JSON files, an
optional learned style, threshold overrides and output selection. The
pipeline runs synchronously. Status messages go to stderr; artifacts are
written next to the source video (or to --output-dir).

RULES:
- Positional argument: source video path (must exist, supported extension)
- --analysis is required unless --demo is given
- --demo replaces missing analyses with the canned demo analyses
- --style NAME loads <style-dir>/NAME.json; --style-file loads a path
- --formats: comma-separated formatter keys (default: DEFAULT_FORMATS)
- Output naming: {stem}{suffix}
- Status output goes to stderr (not stdout)
- Errors print "Error: ..." to stderr and exit with status 1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from autocut.adapters.analysis import SpeechAnalysis, VideoAnalysis
from autocut.adapters.demo import demo_speech_analysis, demo_video_analysis
from autocut.config import DEFAULT_STYLE_DIR, SUPPORTED_VIDEO_FORMATS, Settings
from autocut.core.detector import build_edit_project
from autocut.core.ir import LearnedStyle
from autocut.core.style import load_style, load_style_file
from autocut.errors import AutocutError
from autocut.formatters import DEFAULT_FORMATS, FORMATTERS
from autocut.formatters.export import export_all


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _load_json(path: str, what: str) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise AutocutError("{} is not valid JSON ({}): {}".format(what, path, e))


def _build_settings(args: argparse.Namespace) -> Settings:
    """Apply command-line overrides on top of the environment defaults."""
    settings = Settings()
    if args.style_dir:
        settings.style_dir = args.style_dir

    ac = settings.auto_cut
    if args.min_confidence is not None:
        ac.min_confidence = args.min_confidence
    if args.merge_threshold is not None:
        ac.merge_threshold = args.merge_threshold
    if args.min_clip_duration is not None:
        ac.min_clip_duration = args.min_clip_duration
    if args.scene_cuts is not None:
        ac.use_scene_changes_for_cuts = args.scene_cuts

    ex = settings.export
    if args.frame_rate is not None:
        ex.frame_rate = args.frame_rate
    if args.width is not None:
        ex.width = args.width
    if args.height is not None:
        ex.height = args.height
    return settings.validate()


def _load_learned_style(args: argparse.Namespace, settings: Settings) -> Optional[LearnedStyle]:
    if args.style_file:
        style = load_style_file(Path(args.style_file))
    elif args.style:
        style = load_style(args.style, settings.style_dir)
    else:
        return None
    if style is None:
        _status("  Learned style not found; continuing without style adjustment")
    return style


def _run_pipeline(args: argparse.Namespace) -> List[Path]:
    """Execute load -> detect -> export for one source video.

    RULES:
    - Validate the source path and output directory before loading anything
    - Nothing is written unless every selected formatter succeeds
    """
    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    ext = input_path.suffix.lower()
    if ext not in SUPPORTED_VIDEO_FORMATS:
        _fail("Unsupported file type '{}'. Supported formats: {}".format(
            ext, ", ".join(sorted(SUPPORTED_VIDEO_FORMATS))
        ))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    if not args.analysis and not args.demo:
        _fail("--analysis is required unless --demo is given")

    format_keys = None
    if args.formats:
        format_keys = [f.strip() for f in args.formats.split(",")]

    settings = _build_settings(args)

    _status("Loading analyses...")
    if args.analysis:
        video = VideoAnalysis.from_dict(_load_json(args.analysis, "Video analysis"))
    else:
        video = demo_video_analysis()
        _status("  Video analysis: demo")
    if args.speech:
        speech = SpeechAnalysis.from_dict(_load_json(args.speech, "Speech analysis"))
    elif args.demo:
        speech = demo_speech_analysis(settings.caption)
        _status("  Speech analysis: demo")
    else:
        speech = SpeechAnalysis()
        _status("  No speech analysis given; filler words and captions skipped")
    _status("  Duration {:.2f}s, {} silences, {} scene changes, {} captions".format(
        video.duration, len(video.silences), len(video.scene_changes), len(speech.captions)
    ))

    learned_style = _load_learned_style(args, settings)

    _status("Detecting cuts...")
    project = build_edit_project(str(input_path), video, speech, settings, learned_style)
    stats = project.cut_result.stats
    _status("  {} cuts, {} keep clips, {} shorter ({:.2f}s -> {:.2f}s)".format(
        stats.total_cuts, stats.total_keep_clips, stats.reduction_rate,
        stats.total_duration, stats.final_duration,
    ))

    _status("Exporting...")
    saved = export_all(project, output_dir, format_keys)

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved), output_dir))
    for path in saved:
        _status("  {}".format(path.name))
    return saved


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable. Tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="autocut",
        description="Detect silences, filler words and scene changes and export "
                    "an edited timeline (Premiere Pro XML, EDL, subtitles, etc.).",
    )

    parser.add_argument(
        "input_file",
        help="Path to the source video file.",
    )
    parser.add_argument(
        "--analysis",
        default=None,
        help="Video analysis JSON (duration, silences, sceneChanges).",
    )
    parser.add_argument(
        "--speech",
        default=None,
        help="Speech analysis JSON (captions, fillerWords, segments).",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use the built-in demo analyses for anything not given explicitly.",
    )

    style = parser.add_mutually_exclusive_group()
    style.add_argument(
        "--style",
        default=None,
        help="Name of a learned style in the style directory.",
    )
    style.add_argument(
        "--style-file",
        default=None,
        help="Path to a learned style JSON file.",
    )
    parser.add_argument(
        "--style-dir",
        default=None,
        help="Directory holding learned styles (default: {}).".format(DEFAULT_STYLE_DIR),
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: {}.".format(
                 ", ".join(sorted(FORMATTERS.keys())), ",".join(DEFAULT_FORMATS)
             ),
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument("--frame-rate", type=float, default=None,
                        help="Sequence frame rate (default: from environment or 30).")
    parser.add_argument("--width", type=int, default=None, help="Sequence width in pixels.")
    parser.add_argument("--height", type=int, default=None, help="Sequence height in pixels.")
    parser.add_argument("--min-confidence", type=float, default=None,
                        help="Drop candidates below this confidence (0-1).")
    parser.add_argument("--merge-threshold", type=float, default=None,
                        help="Merge candidates separated by less than this many seconds.")
    parser.add_argument("--min-clip-duration", type=float, default=None,
                        help="Drop keep clips shorter than this many seconds.")
    parser.add_argument(
        "--scene-cuts",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Treat scene changes as cuts instead of markers.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every pipeline stage to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        _run_pipeline(args)
    except (AutocutError, OSError) as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
