"""Adapters from collaborator payloads to the engine's typed inputs.

WHY: Video analysis, speech recognition and style learning all run outside
this package and hand over JSON. Adapters validate that JSON once at the
boundary so the pure stages can trust their input.

RULES:
- Adapters do no file I/O of their own; callers load the JSON
- Invalid intervals raise ValidationError
"""

from autocut.adapters.analysis import SpeechAnalysis, VideoAnalysis
from autocut.adapters.demo import demo_speech_analysis, demo_video_analysis

__all__ = ["SpeechAnalysis", "VideoAnalysis", "demo_speech_analysis", "demo_video_analysis"]
