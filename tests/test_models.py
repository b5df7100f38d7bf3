"""
Unit tests for the sentiment strategies and the intent classifier
"""

import pytest

from textintel import lexicons
from textintel.models import (
    CROSS_LANGUAGE_CONFIDENCE_CAP,
    CROSS_LANGUAGE_DISCOUNT,
    NEUTRAL_SENTIMENT,
    EnglishLexiconScorer,
    IntentClassifier,
    ScoringStrategy,
    SentimentScorer,
    WordTableScorer,
    build_english_analyzer,
    label_for,
)
from textintel.schemas import Language, SentimentLabel


@pytest.fixture(scope="module")
def analyzer():
    return build_english_analyzer()


@pytest.fixture(scope="module")
def scorer(analyzer):
    return SentimentScorer.build(analyzer)


@pytest.fixture(scope="module")
def intent_classifier():
    classifier = IntentClassifier()
    classifier.train()
    return classifier


@pytest.mark.parametrize("comparative, expected", [
    (0.15, SentimentLabel.POSITIVE),
    (-0.2, SentimentLabel.NEGATIVE),
    (0.05, SentimentLabel.NEUTRAL),
    (0.1, SentimentLabel.NEUTRAL),
    (-0.1, SentimentLabel.NEUTRAL),
    (0.0, SentimentLabel.NEUTRAL),
    (2.5, SentimentLabel.POSITIVE),
])
def test_label_thresholds(comparative, expected):
    assert label_for(comparative) == expected


def test_domain_overrides_are_in_the_english_lexicon(analyzer):
    assert analyzer.lexicon["police"] == 1.0
    assert analyzer.lexicon["rescue"] == 3.0
    assert analyzer.lexicon["murder"] == -4.0


def test_english_scorer_polarity(analyzer):
    english = EnglishLexiconScorer(analyzer)
    assert english("Police rescue team did a great job").score > 0
    assert english("Theft and robbery again, terrible").score < 0


def test_english_scorer_handles_negation(analyzer):
    english = EnglishLexiconScorer(analyzer)
    assert english("The response was good").score > 0
    assert english("The response was not good").score < 0


def test_english_scorer_reads_emojis(analyzer):
    english = EnglishLexiconScorer(analyzer)
    assert english.describe_emojis("great job😊") == "great job smiling face with smiling eyes"
    assert english("😊").score > 0
    assert english("😢").score < 0
    assert english("Marina beach 😊").comparative > 0


def test_english_scorer_comparative_and_confidence(analyzer):
    english = EnglishLexiconScorer(analyzer)
    raw = english("police police")
    assert raw.score == pytest.approx(2.0)
    assert raw.comparative == pytest.approx(1.0)
    assert raw.confidence == 1.0

    neutral = english("bus 21 at 10 45")
    assert neutral.score == 0
    assert neutral.confidence == pytest.approx(0.5)


def test_word_table_scorer():
    table_scorer = WordTableScorer(lexicons.TAMIL_SENTIMENT_WORDS)
    raw = table_scorer("இன்று நல்ல அருமை நாள்")
    assert raw.score == 5
    assert raw.comparative == pytest.approx(5 / 4)
    assert raw.confidence == pytest.approx(min(2 / 4 + 0.4, 1.0))


def test_word_table_scorer_strips_punctuation():
    table_scorer = WordTableScorer(lexicons.HINDI_SENTIMENT_WORDS)
    raw = table_scorer("बहुत बुरा।")
    assert raw.score == -2
    assert raw.comparative == pytest.approx(-1.0)


def test_word_table_scorer_declines_without_matches():
    assert WordTableScorer(lexicons.TELUGU_SENTIMENT_WORDS)("hello world") is None


def test_tamil_without_matches_falls_back_to_english(scorer, analyzer):
    text = "சென்னை good"
    english = EnglishLexiconScorer(analyzer)(text)
    result = scorer.score(text, Language.TAMIL)

    assert result.score == pytest.approx(english.score * CROSS_LANGUAGE_DISCOUNT)
    assert result.comparative == pytest.approx(english.comparative * CROSS_LANGUAGE_DISCOUNT)
    assert result.confidence <= CROSS_LANGUAGE_CONFIDENCE_CAP
    assert result.confidence == pytest.approx(min(english.confidence * CROSS_LANGUAGE_DISCOUNT, 0.4))
    assert result.label == SentimentLabel.POSITIVE


def test_pure_tamil_without_matches_is_low_confidence_neutral(scorer):
    result = scorer.score("சென்னை மாநகரம் இன்று", Language.TAMIL)
    assert result.score == 0
    assert result.label == SentimentLabel.NEUTRAL
    assert 0 < result.confidence <= CROSS_LANGUAGE_CONFIDENCE_CAP


def test_native_table_wins_over_fallback(scorer):
    result = scorer.score("பாதுகாப்பு ஆபத்து மோசம்", Language.TAMIL)
    assert result.score == -5
    assert result.label == SentimentLabel.NEGATIVE
    assert result.confidence == pytest.approx(min(2 / 3 + 0.4, 1.0))


def test_every_language_has_a_chain(scorer):
    for language in Language:
        assert scorer.chain(language)
    assert [s.name for s in scorer.chain(Language.TELUGU)] == ["te-word-table", "cross-language"]


def test_missing_language_chain_is_rejected(analyzer):
    english = ScoringStrategy("english-lexicon", EnglishLexiconScorer(analyzer))
    with pytest.raises(ValueError, match="ta"):
        SentimentScorer({Language.ENGLISH: (english,), Language.HINDI: (english,), Language.TELUGU: (english,)})


def test_exhausted_chain_returns_neutral():
    declining = ScoringStrategy("never", lambda text: None)
    scorer = SentimentScorer({language: (declining,) for language in Language})
    assert scorer.score("anything", Language.HINDI) == NEUTRAL_SENTIMENT


def test_intent_classifier_covers_indic_languages(intent_classifier):
    assert intent_classifier.languages == {Language.TAMIL, Language.HINDI, Language.TELUGU}
    assert intent_classifier.predict("Police were helpful", Language.ENGLISH) is None


def test_intent_classifier_recognizes_training_examples(intent_classifier):
    result = intent_classifier.predict("ரொம்ப மோசமான சம்பவம்", Language.TAMIL)
    assert result.label == SentimentLabel.NEGATIVE
    assert result.source == "classifier"
    assert 0 < result.confidence <= 1


def test_intent_classifier_is_deterministic(intent_classifier):
    text = "चोरी हो गई"
    first = intent_classifier.predict(text, Language.HINDI)
    second = intent_classifier.predict(text, Language.HINDI)
    assert first == second
    assert first.label in set(SentimentLabel)
