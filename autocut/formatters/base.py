"""Abstract base formatter and output container.

WHY: Every export artifact consumes the same EditProject but produces
different file content. This base class enforces a consistent interface
so the CLI and the HTTP API can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content (string or bytes) and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; every current formatter returns one item
- ``suffix`` starts with an underscore, e.g. ``"_project.xml"``
- ``format()`` validates everything and raises before returning; it
  never writes files
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from autocut.core.ir import EditProject


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"_edl.edl"`` → ``"interview_edl.edl"``.
        content: The file content as a string or bytes.
        media_type: MIME type for the content, e.g. ``"application/xml"``.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all export formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Set suffix, implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    suffix: str = ""
    """File suffix every output of this formatter carries, e.g. ``"_edl.edl"``."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Premiere Pro XML'."""

    @abstractmethod
    def format(self, project: EditProject) -> list[FormatterOutput]:
        """Convert the edit project into one or more output files.

        Args:
            project: Keep clips, cut candidates, statistics, captions and
                     export settings for one source video.

        Returns:
            List of FormatterOutput objects.

        Raises:
            ValidationError: If the project cannot be serialised faithfully.
            ConfigurationError: If export settings are unusable.
        """
