"""Transcript-based anomaly detectors: speech rate, pauses, monotone delivery.

WHY: Silence and filler detection miss stretches that are technically
speech but still worth trimming: rushed or dragging passages, awkward gaps
between words, and flat filler-heavy delivery. These detectors work on the
word timings the speech recognition service already returns.

HOW: Three independent functions, each gated by its own enabled flag in
AdvancedDetectionConfig and each returning CutCandidate objects.
analyze_all() runs them and reports per-detector counts.

RULES:
- All three are experimental and off by default
- Confidence caps: speech rate 0.9, pause 0.9, sentiment 0.7
- Segments with no words or zero length are skipped by the rate check
- Pause gaps are measured across segment boundaries
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from autocut.adapters.analysis import SpeechAnalysis, Word
from autocut.config import Settings
from autocut.core.ir import (
    CutCandidate,
    CutType,
    PauseInfo,
    SentimentInfo,
    SpeechRateInfo,
)

logger = logging.getLogger(__name__)

_EMOTIONAL_MARKS = re.compile(r"[!！?？]")


@dataclass
class AdvancedAnalysis:
    candidates: list[CutCandidate] = field(default_factory=list)
    speech_rate: int = 0
    pauses: int = 0
    sentiment: int = 0

    @property
    def total(self) -> int:
        return len(self.candidates)


def speech_rate_confidence(wpm: float, min_wpm: float, max_wpm: float) -> float:
    normal_range = max_wpm - min_wpm
    deviation = min_wpm - wpm if wpm < min_wpm else wpm - max_wpm
    return min(0.9, 0.5 + (deviation / normal_range) * 0.4)


def pause_confidence(gap: float, min_duration: float, max_duration: float) -> float:
    normalized = (gap - min_duration) / (max_duration - min_duration)
    return min(0.9, 0.5 + normalized * 0.4)


def analyze_speech_rate(speech: SpeechAnalysis, settings: Settings) -> list[CutCandidate]:
    cfg = settings.advanced.speech_rate
    if not cfg.enabled:
        return []

    candidates = []
    for segment in speech.segments:
        duration = segment.end - segment.start
        if not segment.words or duration <= 0:
            continue
        wpm = len(segment.words) / duration * 60
        if cfg.min_wpm <= wpm <= cfg.max_wpm:
            continue
        candidates.append(CutCandidate(
            start=segment.start,
            end=segment.end,
            type=CutType.SPEECH_RATE,
            reason="Speech rate anomaly: {} WPM".format(round(wpm)),
            confidence=speech_rate_confidence(wpm, cfg.min_wpm, cfg.max_wpm),
            metadata=SpeechRateInfo(wpm=wpm, word_count=len(segment.words)),
        ))
    return candidates


def detect_pauses(speech: SpeechAnalysis, settings: Settings) -> list[CutCandidate]:
    cfg = settings.advanced.pause
    if not cfg.enabled:
        return []

    words: list[Word] = [w for segment in speech.segments for w in segment.words]
    candidates = []
    for prev_word, word in zip(words, words[1:]):
        gap = word.start - prev_word.end
        if not cfg.min_duration <= gap <= cfg.max_duration:
            continue
        candidates.append(CutCandidate(
            start=max(0.0, prev_word.end - cfg.buffer_before),
            end=word.start + cfg.buffer_after,
            type=CutType.PAUSE,
            reason="Unnatural pause: {:.2f}s".format(gap),
            confidence=pause_confidence(gap, cfg.min_duration, cfg.max_duration),
            metadata=PauseInfo(gap=gap, prev_word=prev_word.word, next_word=word.word),
        ))
    return candidates


def estimate_sentiment(text: str, filler_words: list[str]) -> tuple[bool, int, float]:
    """Rough text-only delivery estimate.

    Returns:
        (monotone, emotional_score, confidence)
    """
    emotional = len(_EMOTIONAL_MARKS.findall(text))
    filler_count = sum(text.count(filler) for filler in filler_words if filler)
    filler_ratio = filler_count / max(1.0, len(text) / 10)

    monotone = emotional == 0 and filler_ratio > 0.3
    confidence = min(0.7, filler_ratio) if monotone else 0.3
    return monotone, emotional, confidence


def analyze_sentiment(speech: SpeechAnalysis, settings: Settings) -> list[CutCandidate]:
    if not settings.advanced.sentiment.enabled:
        return []

    candidates = []
    for segment in speech.segments:
        monotone, score, confidence = estimate_sentiment(
            segment.text, settings.auto_cut.filler_words
        )
        if not monotone:
            continue
        candidates.append(CutCandidate(
            start=segment.start,
            end=segment.end,
            type=CutType.SENTIMENT,
            reason="Monotone delivery",
            confidence=confidence,
            metadata=SentimentInfo(label="monotone", score=score),
        ))
    return candidates


def analyze_all(speech: SpeechAnalysis, settings: Settings) -> AdvancedAnalysis:
    rate = analyze_speech_rate(speech, settings)
    pauses = detect_pauses(speech, settings)
    sentiment = analyze_sentiment(speech, settings)

    result = AdvancedAnalysis(
        candidates=rate + pauses + sentiment,
        speech_rate=len(rate),
        pauses=len(pauses),
        sentiment=len(sentiment),
    )
    logger.info(
        "Advanced analysis: %d speech-rate, %d pause, %d monotone candidates",
        result.speech_rate, result.pauses, result.sentiment,
    )
    return result
