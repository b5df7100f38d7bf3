# textintel/guardrails.py
"""Input validation and language identification, run before any scoring."""
from typing import Any, Optional

from langdetect import DetectorFactory, LangDetectException, detect
from langdetect.detector_factory import init_factory

from .config import get_cfg
from .schemas import Language

# langdetect samples n-grams at random; a fixed seed keeps detection repeatable.
DetectorFactory.seed = 0

# langdetect ISO 639-1 code -> supported language
_LANGDETECT_CODES = {
    "en": Language.ENGLISH,
    "ta": Language.TAMIL,
    "hi": Language.HINDI,
    "te": Language.TELUGU,
}


class InvalidPostError(ValueError):
    """Raised when a post cannot be analyzed at all (empty, non-string, too long)."""


def validate_text(text: Any) -> str:
    """Rejects empty, non-string or oversized content."""
    if not isinstance(text, str) or not text.strip():
        raise InvalidPostError("Invalid post: content is required and must be a non-empty string")
    max_chars = int(get_cfg()["guardrails"]["max_chars"])
    if len(text) > max_chars:
        raise InvalidPostError(f"Input too long (>{max_chars} chars).")
    return text


def validate_post(post: Any) -> str:
    """Returns the post's content once it is known to be analyzable."""
    if post is None:
        raise InvalidPostError("Invalid post: no post given")
    return validate_text(getattr(post, "content", None))


def load_language_profiles():
    """Loads langdetect's n-gram profiles up front so worker threads never race on it."""
    init_factory()


def detect_language(text: str) -> Language:
    """Guesses the dominant language; anything unsupported or undetermined is English."""
    try:
        code = detect(text)
    except LangDetectException:
        return Language.ENGLISH
    return _LANGDETECT_CODES.get(code, Language.ENGLISH)


def resolve_language(text: str, hint: Optional[str] = None) -> Language:
    """Uses a caller hint when given (unsupported codes mean English), otherwise detects."""
    if hint and hint.strip():
        try:
            return Language(hint.strip().lower())
        except ValueError:
            return Language.ENGLISH
    return detect_language(text)


def language_name(code: str) -> str:
    """Display name of a supported language code, or "Unknown"."""
    try:
        return Language(code).display_name
    except ValueError:
        return "Unknown"
