"""Core detection stages and intermediate representation.

WHY: The core package is the part of the engine that enforces the
timeline invariants: sorted candidates, non-overlapping keep clips,
markers that never cut, floor-based frame math.

HOW: ir.py defines the data structures, candidates.py and speech.py build
candidates, merge.py fuses and filters them, style.py re-weights them,
timeline.py derives keep clips and statistics, detector.py chains the
stages. captions.py and timecode.py serve the exporters.

RULES:
- Field names in ir.py are mirrored by the snapshot schema; rename both together
- No stage here touches the file system except style load/save
"""
