# textintel/models.py
"""Sentiment scoring strategies and the example-based intent classifier.

Each language resolves to an ordered chain of strategies. A strategy either
scores the text or declines (returns None) so the next one is tried; the
discount and confidence cap it carries are applied on top of the raw score.
"""
import string
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Sequence

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from vaderSentiment.vaderSentiment import BOOSTER_DICT, SentimentIntensityAnalyzer, SentiText

from . import lexicons
from .schemas import IntentResult, Language, SentimentLabel, SentimentResult

POSITIVE_THRESHOLD = 0.1
NEGATIVE_THRESHOLD = -0.1
CROSS_LANGUAGE_DISCOUNT = 0.7
CROSS_LANGUAGE_CONFIDENCE_CAP = 0.4

NEUTRAL_SENTIMENT = SentimentResult(score=0.0, comparative=0.0, label=SentimentLabel.NEUTRAL, confidence=0.5)

# Danda marks and curly quotes are not in string.punctuation.
_TOKEN_PUNCTUATION = string.punctuation + "।॥“”‘’"


def label_for(comparative: float) -> SentimentLabel:
    """Same thresholds for every language."""
    if comparative > POSITIVE_THRESHOLD:
        return SentimentLabel.POSITIVE
    if comparative < NEGATIVE_THRESHOLD:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


@dataclass(frozen=True)
class RawScore:
    score: float
    comparative: float
    confidence: float


def build_english_analyzer() -> SentimentIntensityAnalyzer:
    """VADER with the civic-safety overrides folded into its lexicon."""
    analyzer = SentimentIntensityAnalyzer()
    analyzer.lexicon.update(lexicons.ENGLISH_DOMAIN_OVERRIDES)
    return analyzer


class EnglishLexiconScorer:
    """Sums VADER's per-token valences (negation, boosters and caps included).

    VADER's own compound score is normalized into [-1, 1]; the raw sum is kept
    here so the comparative score can be thresholded like the word tables.
    """

    def __init__(self, analyzer: SentimentIntensityAnalyzer):
        self.analyzer = analyzer

    def describe_emojis(self, text: str) -> str:
        """Replaces each emoji with its description, spaced off from neighbouring words."""
        out = []
        prev_space = True
        for ch in text:
            description = self.analyzer.emojis.get(ch)
            if description is None:
                out.append(ch)
                prev_space = ch == " "
                continue
            if not prev_space:
                out.append(" ")
            out.append(description)
            prev_space = False
        return "".join(out).strip()

    def __call__(self, text: str) -> RawScore:
        sentitext = SentiText(self.describe_emojis(text))
        words = sentitext.words_and_emoticons
        sentiments = []
        for i, item in enumerate(words):
            # modifiers carry no valence of their own
            if item.lower() in BOOSTER_DICT:
                sentiments.append(0)
                continue
            if i < len(words) - 1 and item.lower() == "kind" and words[i + 1].lower() == "of":
                sentiments.append(0)
                continue
            sentiments = self.analyzer.sentiment_valence(0, sentitext, item, i, sentiments)

        score = float(sum(sentiments))
        comparative = score / len(words) if words else 0.0
        confidence = min(abs(comparative) * 10 + 0.5, 1.0)
        return RawScore(score, comparative, confidence)


class WordTableScorer:
    """Whitespace tokens looked up in a fixed word -> score table."""

    def __init__(self, table: Mapping[str, int]):
        self.table = table

    def __call__(self, text: str) -> Optional[RawScore]:
        tokens = text.split()
        if not tokens:
            return None
        total = 0
        matched = 0
        for token in tokens:
            value = self.table.get(token.strip(_TOKEN_PUNCTUATION).lower())
            if value is not None:
                total += value
                matched += 1
        if matched == 0:
            return None
        return RawScore(
            score=float(total),
            comparative=total / len(tokens),
            confidence=min(matched / len(tokens) + 0.4, 1.0),
        )


@dataclass(frozen=True)
class ScoringStrategy:
    name: str
    scorer: Callable[[str], Optional[RawScore]]
    discount: float = 1.0
    confidence_cap: float = 1.0

    def apply(self, text: str) -> Optional[SentimentResult]:
        raw = self.scorer(text)
        if raw is None:
            return None
        comparative = raw.comparative * self.discount
        return SentimentResult(
            score=raw.score * self.discount,
            comparative=comparative,
            label=label_for(comparative),
            confidence=min(raw.confidence * self.discount, self.confidence_cap),
        )


class SentimentScorer:
    """Dispatches a text to its language's strategy chain."""

    def __init__(self, chains: Mapping[Language, Sequence[ScoringStrategy]]):
        missing = set(Language) - set(chains)
        if missing:
            raise ValueError(f"no sentiment strategies for: {sorted(m.value for m in missing)}")
        self._chains = MappingProxyType({lang: tuple(chain) for lang, chain in chains.items()})

    @classmethod
    def build(cls, analyzer: Optional[SentimentIntensityAnalyzer] = None) -> "SentimentScorer":
        english = EnglishLexiconScorer(analyzer or build_english_analyzer())
        chains: Dict[Language, Sequence[ScoringStrategy]] = {
            Language.ENGLISH: (ScoringStrategy("english-lexicon", english),),
        }
        cross_language = ScoringStrategy(
            "cross-language",
            english,
            discount=CROSS_LANGUAGE_DISCOUNT,
            confidence_cap=CROSS_LANGUAGE_CONFIDENCE_CAP,
        )
        for language, table in lexicons.SENTIMENT_TABLES.items():
            chains[language] = (
                ScoringStrategy(f"{language.value}-word-table", WordTableScorer(table)),
                cross_language,
            )
        return cls(chains)

    def chain(self, language: Language) -> Sequence[ScoringStrategy]:
        return self._chains[language]

    def score(self, text: str, language: Language) -> SentimentResult:
        for strategy in self._chains[language]:
            result = strategy.apply(text)
            if result is not None:
                return result
        return NEUTRAL_SENTIMENT


class IntentClassifier:
    """Per-language TF-IDF + logistic regression trained on a handful of example posts."""

    def __init__(self, examples: Mapping[Language, Sequence[tuple]] = lexicons.INTENT_EXAMPLES):
        self._examples = examples
        self._pipelines: Dict[Language, Pipeline] = {}

    def train(self):
        pipelines = {}
        for language, docs in self._examples.items():
            texts = [text for text, _ in docs]
            labels = [label for _, label in docs]
            pipeline = Pipeline([
                # character n-grams cope with agglutinative suffixes
                ("tfidf", TfidfVectorizer(analyzer="char_wb", ngram_range=(1, 3))),
                ("clf", LogisticRegression(C=10.0, max_iter=1000)),
            ])
            pipeline.fit(texts, labels)
            pipelines[language] = pipeline
        self._pipelines = pipelines

    @property
    def languages(self):
        return frozenset(self._pipelines)

    def predict(self, text: str, language: Language) -> Optional[IntentResult]:
        pipeline = self._pipelines.get(language)
        if pipeline is None:
            return None
        probs = pipeline.predict_proba([text])[0]
        best = int(np.argmax(probs))
        return IntentResult(
            language=language,
            label=SentimentLabel(str(pipeline.classes_[best])),
            confidence=float(probs[best]),
            source="classifier",
        )
