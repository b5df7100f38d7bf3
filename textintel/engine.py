# textintel/engine.py
"""The text intelligence engine: language, sentiment, risk and threat level for a post."""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from . import guardrails, lexicons, risk
from .config import get_cfg
from .guardrails import InvalidPostError
from .models import NEUTRAL_SENTIMENT, IntentClassifier, SentimentScorer
from .schemas import (
    AnalysisResult,
    HateSpeechResult,
    IntentResult,
    Language,
    SentimentLabel,
    SentimentResult,
    SocialMediaPost,
    ThreatLevel,
)

logger = logging.getLogger(__name__)

MAX_KEYWORDS = 10
CRITICAL_HATE_CONFIDENCE = 0.7
HIGH_SENTIMENT_CONFIDENCE = 0.7


class EngineInitializationError(RuntimeError):
    """Lexicons or models could not be loaded; the engine must not serve requests."""


def calculate_threat_level(sentiment: SentimentResult, hate_speech: HateSpeechResult, crime_related: bool) -> ThreatLevel:
    """Maps the risk signals to a threat level; the first matching rule wins."""
    negative =sentiment.label == SentimentLabel.NEGATIVE
    if hate_speech.detected and hate_speech.confidence > CRITICAL_HATE_CONFIDENCE:
        return ThreatLevel.CRITICAL
    if hate_speech.detected or (crime_related and negative and sentiment.confidence > HIGH_SENTIMENT_CONFIDENCE):
        return ThreatLevel.HIGH
    if crime_related and negative:
        return ThreatLevel.MEDIUM
    return ThreatLevel.LOW


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """First-seen content words, English stopwords removed for every language."""
    keywords: List[str] = []
    seen = set()
    for word in lexicons.WORD_RE.findall(text.lower()):
        if len(word) <= 2 or word in lexicons.STOPWORDS or word in seen:
            continue
        seen.add(word)
        keywords.append(word)
        if len(keywords) >= limit:
            break
    return keywords


def safe_default_result(text: str) -> AnalysisResult:
    """Valid-looking but uninformative result used when analysis fails."""
    return AnalysisResult(
        text=text,
        language=Language.ENGLISH,
        sentiment=NEUTRAL_SENTIMENT,
        hate_speech=HateSpeechResult(detected=False, confidence=0.0, categories=[]),
        keywords=[],
        crime_related=False,
        threat_level=ThreatLevel.LOW,
    )


class TextIntelligenceEngine:
    """Analyzes social media posts in English, Tamil, Hindi and Telugu.

    Lexicons and models are loaded once by `initialize()` and only read
    afterwards, so one instance can serve any number of threads.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._initialized = False
        self._sentiment: Optional[SentimentScorer] = None
        self._intent: Optional[IntentClassifier] = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self):
        """Loads language profiles, builds the scorers and trains the intent classifier. Idempotent."""
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            try:
                guardrails.load_language_profiles()
                sentiment = SentimentScorer.build()
                intent = IntentClassifier()
                intent.train()
            except Exception as e:
                logger.error("NLP engine failed to initialize: %s", e)
                raise EngineInitializationError(f"NLP engine failed to initialize: {e}") from e
            self._sentiment = sentiment
            self._intent = intent
            self._initialized = True
            logger.info("NLP engine initialized (intent models: %s)",
                        ", ".join(sorted(lang.value for lang in intent.languages)))

    def analyze(self, post: SocialMediaPost) -> AnalysisResult:
        """Analyzes one post. Invalid input raises InvalidPostError; any other failure
        degrades to `safe_default_result`."""
        text = guardrails.validate_post(post)
        self.initialize()
        try:
            return self._analyze(text, post.language)
        except Exception:
            logger.exception("Error in NLP analysis for post %s", getattr(post, "id", None))
            return safe_default_result(text)

    def analyze_text(self, text: str, language: Optional[str] = None) -> AnalysisResult:
        guardrails.validate_text(text)
        return self.analyze(SocialMediaPost(content=text, language=language))

    def batch_analyze(self, posts: Iterable[Union[SocialMediaPost, Mapping[str, Any]]],
                      max_workers: Optional[int] = None) -> List[AnalysisResult]:
        """Analyzes posts concurrently, returning results in input order.

        Posts may also be raw mappings (e.g. decoded JSON); an item that does
        not validate as a post gets the safe default like any other bad item.
        """
        posts = list(posts)
        self.initialize()
        if not posts:
            return []
        workers = int(max_workers or get_cfg()["engine"]["batch_workers"])
        if workers < 1:
            raise ValueError("max_workers must be at least 1")
        with ThreadPoolExecutor(max_workers=min(workers, len(posts))) as executor:
            return list(executor.map(self._analyze_isolated, posts))

    def classify_intent(self, text: str, language: Optional[str] = None) -> IntentResult:
        """Example-based intent for Tamil, Hindi and Telugu; English answers from its lexicon."""
        guardrails.validate_text(text)
        self.initialize()
        resolved = guardrails.resolve_language(text, language)
        result = self._intent.predict(text, resolved)
        if result is None:
            sentiment = self._sentiment.score(text, resolved)
            result = IntentResult(
                language=resolved,
                label=sentiment.label,
                confidence=sentiment.confidence,
                source="lexicon",
            )
        return result

    def _analyze_isolated(self, item: Union[SocialMediaPost, Mapping[str, Any], None]) -> AnalysisResult:
        if isinstance(item, Mapping):
            post_id, content = item.get("id"), item.get("content")
        else:
            post_id, content = getattr(item, "id", None), getattr(item, "content", None)
        try:
            post = SocialMediaPost.model_validate(item) if isinstance(item, Mapping) else item
            return self.analyze(post)
        except (InvalidPostError, ValidationError) as e:
            logger.warning("Invalid post %s in batch: %s", post_id, e)
            return safe_default_result(content if isinstance(content, str) else "")

    def _analyze(self, text: str, language_hint: Optional[str]) -> AnalysisResult:
        language = guardrails.resolve_language(text, language_hint)
        sentiment = self._sentiment.score(text, language)
        hate_speech = risk.detect_hate_speech(text)
        crime_related = risk.is_crime_related(text)
        return AnalysisResult(
            text=text,
            language=language,
            sentiment=sentiment,
            hate_speech=hate_speech,
            keywords=extract_keywords(text),
            crime_related=crime_related,
            threat_level=calculate_threat_level(sentiment, hate_speech, crime_related),
        )


# Singleton instance
engine = TextIntelligenceEngine()
