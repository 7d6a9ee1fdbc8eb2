"""Render and write export artifacts for one edit project.

WHY: A failed caption payload or a bad frame rate must never leave half an
export on disk. Rendering is cheap, so every selected formatter runs in
memory first and files are only written once all of them have succeeded.

HOW: resolve_formats() checks the requested keys against FORMATTERS.
render_all() runs each formatter and collects its outputs. export_all()
renders, then writes each output as ``{stem}{suffix}`` into the output
directory through a temporary file and os.replace().

RULES:
- Unknown format keys raise ConfigurationError before anything runs
- Any ValidationError from a formatter aborts before the first write
- Existing files with the same name are replaced
- OSError from writing propagates to the caller unchanged
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from autocut.core.ir import EditProject
from autocut.errors import ConfigurationError
from autocut.formatters import DEFAULT_FORMATS, FORMATTERS
from autocut.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def resolve_formats(formats: Iterable[str] | None) -> list[str]:
    """Validate requested formatter keys, preserving order, dropping repeats."""
    if formats is None:
        return list(DEFAULT_FORMATS)
    keys: list[str] = []
    for key in formats:
        key = key.strip()
        if not key:
            continue
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise ConfigurationError(
                "Unknown format '{}'. Available formats: {}".format(key, available)
            )
        if key not in keys:
            keys.append(key)
    if not keys:
        raise ConfigurationError("At least one output format is required")
    return keys


def render_all(
    project: EditProject,
    formats: Iterable[str] | None = None,
) -> list[tuple[str, FormatterOutput]]:
    """Run every selected formatter in memory.

    Returns:
        (format key, output) pairs in the order the formats were given.

    Raises:
        ConfigurationError: Unknown format key or unusable export settings.
        ValidationError: Content that cannot be serialised faithfully.
    """
    rendered: list[tuple[str, FormatterOutput]] = []
    for key in resolve_formats(formats):
        formatter = FORMATTERS[key]()
        logger.info("Rendering %s", formatter.name)
        for output in formatter.format(project):
            rendered.append((key, output))
    return rendered


def _write_output(output: FormatterOutput, path: Path) -> None:
    tmp_path = path.with_name(path.name + ".tmp")
    if isinstance(output.content, bytes):
        tmp_path.write_bytes(output.content)
    else:
        tmp_path.write_text(output.content, encoding="utf-8")
    os.replace(tmp_path, path)


def export_all(
    project: EditProject,
    output_dir: str | Path,
    formats: Iterable[str] | None = None,
) -> list[Path]:
    """Render the selected artifacts and write them next to each other.

    Args:
        project: The edit to export.
        output_dir: Existing directory that receives the files.
        formats: FORMATTERS keys; None means DEFAULT_FORMATS.

    Returns:
        Paths of the written files, in render order.
    """
    rendered = render_all(project, formats)

    out = Path(output_dir)
    if not out.is_dir():
        raise FileNotFoundError("Output directory does not exist: {}".format(out))

    saved: list[Path] = []
    for _key, output in rendered:
        path = out / "{}{}".format(project.stem, output.suffix)
        _write_output(output, path)
        logger.info("Saved %s", path)
        saved.append(path)
    return saved
