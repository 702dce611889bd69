"""
Tests for the lexicon sentiment scorer.

Covers:
- Proportions, label thresholds and confidence
- Zero-evidence behaviour (0.5 / 0.5 / 0.0, neutral)
- Whole-word, case-insensitive matching
- Lexicon injection and loading from JSON

Usage:
    pytest tests/test_sentiment.py -v
"""

import json

import pytest

from feedback_insights.softskills.sentiment import (
    SENTIMENT_LEXICON,
    SentimentScorer,
    build_score,
    mean_score,
    round_half_up,
    score_sentiment,
)
from feedback_insights.softskills.skill_models import SentimentLabel
from feedback_insights.softskills.taxonomy import TaxonomyError


class TestSentimentScorer:

    def setup_method(self):
        self.scorer = SentimentScorer()

    def test_zero_hits_default(self):
        """No lexicon hits -> 0.5 / 0.5 / ~0, labelled neutral."""
        score = self.scorer.score("El candidato asistió a la sesión del martes")
        assert score.positive == 0.5
        assert score.negative == 0.5
        assert score.neutral == pytest.approx(0.0)
        assert score.overall == SentimentLabel.NEUTRAL
        assert score.confidence == 0.5

    def test_empty_text_is_zero_evidence(self):
        score = self.scorer.score("")
        assert (score.positive, score.negative, score.neutral) == (0.5, 0.5, 0.0)

    def test_only_positive(self):
        score = self.scorer.score("Es excelente y muy capaz")
        assert score.positive == 1.0
        assert score.negative == 0.0
        assert score.neutral == 0.5
        assert score.overall == SentimentLabel.POSITIVE
        assert score.confidence == 1.0

    def test_only_negative(self):
        score = self.scorer.score("Tiene un problema, es débil en esto")
        assert score.negative == 1.0
        assert score.overall == SentimentLabel.NEGATIVE

    def test_balanced_is_neutral(self):
        score = self.scorer.score("bueno pero tiene un problema")
        assert score.positive == 0.5
        assert score.negative == 0.5
        assert score.neutral == 0.5
        assert score.overall == SentimentLabel.NEUTRAL

    def test_two_thirds_positive(self):
        """P=2, N=1 -> 0.67 / 0.33, above the 0.6 threshold."""
        score = self.scorer.score("good, great and one issue")
        assert score.positive == 0.67
        assert score.negative == 0.33
        assert score.neutral == 0.5
        assert score.overall == SentimentLabel.POSITIVE
        assert score.confidence == 0.67

    def test_repeated_words_counted(self):
        score = self.scorer.score("mal, mal, pero bien")
        assert score.positive == 0.33
        assert score.negative == 0.67
        assert score.overall == SentimentLabel.NEGATIVE

    def test_whole_word_only(self):
        """'malo' is not 'mal', 'problemas' is not 'problema'."""
        score = self.scorer.score("malo con problemas")
        assert (score.positive, score.negative) == (0.5, 0.5)

    def test_case_insensitive(self):
        assert self.scorer.score("EXCELENTE").overall == SentimentLabel.POSITIVE

    def test_multi_word_phrase(self):
        score = self.scorer.score("He needs improvement on delivery")
        assert score.negative == 1.0

    def test_confidence_is_max_component(self):
        for text in ["excelente", "problema", "bien y mal", "nada"]:
            s = self.scorer.score(text)
            assert s.confidence == max(s.positive, s.negative, s.neutral)


class TestLexiconInjection:

    def test_custom_lexicon(self):
        scorer = SentimentScorer({"positive": ["sol"], "negative": ["lluvia"]})
        score = scorer.score("sol y lluvia y lluvia")
        assert score.positive == 0.33
        assert score.negative == 0.67

    def test_custom_lexicon_ignores_default_words(self):
        scorer = SentimentScorer({"positive": ["sol"], "negative": ["lluvia"]})
        score = scorer.score("excelente")
        assert (score.positive, score.negative) == (0.5, 0.5)

    def test_missing_polarity_rejected(self):
        with pytest.raises(TaxonomyError):
            SentimentScorer({"positive": ["sol"]})

    def test_empty_word_rejected(self):
        with pytest.raises(TaxonomyError):
            SentimentScorer({"positive": [""], "negative": ["x"]})

    def test_from_file(self, tmp_path):
        path = tmp_path / "lexicon.json"
        path.write_text(json.dumps({"positive": ["genial"], "negative": ["flojo"]}), encoding="utf-8")
        scorer = SentimentScorer.from_file(path)
        assert scorer.score("genial").overall == SentimentLabel.POSITIVE
        assert scorer.score("flojo").overall == SentimentLabel.NEGATIVE

    def test_default_lexicon_is_bilingual(self):
        assert "excelente" in SENTIMENT_LEXICON["positive"]
        assert "excellent" in SENTIMENT_LEXICON["positive"]
        assert "problema" in SENTIMENT_LEXICON["negative"]
        assert "weak" in SENTIMENT_LEXICON["negative"]


class TestScoreHelpers:

    def test_round_half_up(self):
        assert round_half_up(0.125) == 0.13
        assert round_half_up(1 / 3) == 0.33
        assert round_half_up(2 / 3) == 0.67

    def test_label_uses_unrounded_values(self):
        """0.6004 is above 0.6 even though it displays as 0.6."""
        score = build_score(0.6004, 0.3996, 0.5)
        assert score.positive == 0.6
        assert score.overall == SentimentLabel.POSITIVE

    def test_mean_score(self):
        scorer = SentimentScorer()
        scores = [scorer.score("excelente"), scorer.score("problema"), scorer.score("nada")]
        mean = mean_score(scores)
        assert mean.positive == 0.5
        assert mean.negative == 0.5
        assert mean.neutral == 0.33
        assert mean.overall == SentimentLabel.NEUTRAL
        assert mean.confidence == 0.5

    def test_mean_score_empty_raises(self):
        with pytest.raises(ValueError):
            mean_score([])

    def test_module_level_score_sentiment(self):
        assert score_sentiment("muy inteligente").overall == SentimentLabel.POSITIVE
