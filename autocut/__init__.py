"""autocut — automatic cut detection and editor export for talking-head video.

WHY: Trimming silences, filler words and dead air by hand is slow. Upstream
services already know where those are; this package turns their findings
into one consistent edit timeline and writes it out in formats a
non-linear editor can import.

HOW: Three-stage pipeline — adapt (collaborator JSON into typed inputs),
detect (candidates, merge, filter, style, keep timeline, statistics),
format (pluggable exporters). Each stage is independently testable.

RULES:
- Detection stages are pure functions; only the exporters write files
- Adding a new artifact = one new formatter module, no core changes
- The IR in core.ir is the stable contract between detection and export
"""

__version__ = "0.1.0"
