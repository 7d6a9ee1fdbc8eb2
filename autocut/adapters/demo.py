"""Offline demo speech analysis.

WHY: Without network access to a speech recognition service the rest of
the pipeline (cut detection, XML export) still has to be demonstrable.
The demo adapter returns a fixed transcript with plausible timings.

HOW: Seven canned segments over 24 seconds plus a matching video
analysis (three silences, two scene changes). Word timings are spread
evenly over each segment's characters, and segments are split into
caption lines at punctuation so no line exceeds max_chars_per_line.

RULES:
- Deterministic: same output every call
- No filler words are reported in demo mode
- Segments shorter than min_display_duration produce no caption
"""

from __future__ import annotations

import re

from autocut.adapters.analysis import (
    Silence,
    SpeechAnalysis,
    SpeechCaption,
    SpeechSegment,
    VideoAnalysis,
    Word,
)
from autocut.config import CaptionConfig

DEMO_DURATION = 24.0

_DEMO_SEGMENTS = [
    ("こんにちは。これはデモ用のサンプル音声認識結果です。", 0.0, 3.5),
    ("実際の動画の音声認識は音声認識サービスを使用して行われます。", 3.5, 7.2),
    ("現在はネットワークの問題でサービスに接続できないため、", 7.2, 10.5),
    ("このサンプルデータを使用しています。", 10.5, 13.0),
    ("自動カット機能とテロップ生成機能の動作確認ができます。", 13.0, 16.8),
    ("Premiere ProにインポートできるXMLファイルが生成されます。", 16.8, 20.5),
    ("無音部分の検出やシーン変化の検出も正常に動作しています。", 20.5, 24.0),
]

_LINE_BREAKS = re.compile(r"([。、！？\n])")


def split_text_into_lines(text: str, max_chars: int) -> list[str]:
    """Split at Japanese punctuation, then hard-wrap anything still too long."""
    lines: list[str] = []
    current = ""
    for piece in _LINE_BREAKS.split(text):
        if len(current + piece) <= max_chars:
            current += piece
        else:
            if current:
                lines.append(current)
            current = piece
    if current:
        lines.append(current)

    wrapped = []
    for line in lines:
        if len(line) <= max_chars:
            wrapped.append(line)
        else:
            wrapped.extend(line[i:i + max_chars] for i in range(0, len(line), max_chars))
    return wrapped


def _segment_words(text: str, start: float, end: float) -> list[Word]:
    chars = list(text)
    step = (end - start) / len(chars)
    return [
        Word(word=ch, start=start + i * step, end=start + (i + 1) * step)
        for i, ch in enumerate(chars)
    ]


def _captions_for(segment: SpeechSegment, config: CaptionConfig) -> list[SpeechCaption]:
    text = segment.text.strip()
    duration = segment.end - segment.start
    if duration < config.min_display_duration:
        return []
    if len(text) <= config.max_chars_per_line:
        return [SpeechCaption(text=text, start=segment.start, end=segment.end, duration=duration)]

    per_char = duration / len(text)
    captions = []
    cursor = segment.start
    for line in split_text_into_lines(text, config.max_chars_per_line):
        line_duration = len(line) * per_char
        captions.append(SpeechCaption(
            text=line, start=cursor, end=cursor + line_duration, duration=line_duration,
        ))
        cursor += line_duration
    return captions


def demo_speech_analysis(config: CaptionConfig | None = None) -> SpeechAnalysis:
    config = config or CaptionConfig()
    segments = [
        SpeechSegment(text=text, start=start, end=end, words=_segment_words(text, start, end))
        for text, start, end in _DEMO_SEGMENTS
    ]
    captions = [c for segment in segments for c in _captions_for(segment, config)]
    return SpeechAnalysis(captions=captions, filler_words=[], segments=segments)


def demo_video_analysis() -> VideoAnalysis:
    """Silences at the segment joins and two scene changes, over DEMO_DURATION."""
    silences = [
        Silence(start=6.4, end=7.3, duration=0.9),
        Silence(start=12.6, end=13.2, duration=0.6),
        Silence(start=20.1, end=20.6, duration=0.5),
    ]
    return VideoAnalysis(duration=DEMO_DURATION, silences=silences, scene_changes=[10.5, 16.8])
