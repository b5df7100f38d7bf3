# textintel/risk.py
"""Hate-speech and crime-relatedness checks.

Both run against the raw text regardless of the detected language, since
short posts routinely mix scripts.
"""
from typing import List

from . import lexicons
from .schemas import HateSpeechResult

DETECTION_THRESHOLD = 0.3
CONFIDENCE_SCALE = 3


def detect_hate_speech(text: str) -> HateSpeechResult:
    """Counts hate keywords and aggressive phrases; any hit marks the text as detected."""
    lower_text = text.lower()
    total_words = len(text.split()) or 1
    hits = 0
    categories: List[str] = []

    for tag, keywords in lexicons.HATE_KEYWORD_CLASSES.values():
        for keyword in sorted(keywords):
            if keyword in lower_text:
                hits += 1
                if tag and tag not in categories:
                    categories.append(tag)

    for pattern in lexicons.AGGRESSIVE_PATTERNS:
        if pattern.search(text):
            hits += 1
            if "aggressive" not in categories:
                categories.append("aggressive")

    confidence = min(hits / total_words * CONFIDENCE_SCALE, 1.0)
    # a single literal hit is enough, however long the post
    detected = confidence > DETECTION_THRESHOLD or hits > 0
    return HateSpeechResult(detected=detected, confidence=confidence, categories=categories)


def is_crime_related(text: str) -> bool:
    """True if any crime keyword, in any supported script, occurs in the text."""
    lower_text = text.lower()
    return any(keyword in lower_text for keyword in lexicons.CRIME_KEYWORDS)
