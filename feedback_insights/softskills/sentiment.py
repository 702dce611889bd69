"""
Lexicon Sentiment Scorer
=========================

Deterministic polarity scoring for mentor feedback (Spanish + English).
Counts whole-word, case-insensitive hits against a positive and a
negative lexicon and turns the counts into proportions.

Zero-evidence behaviour: a span with no lexicon hits scores
positive=0.5, negative=0.5, neutral=0.0 and is labelled neutral.
Do not change it to neutral=1.0: merged issue sentiment depends on it.

Usage:
    scorer = SentimentScorer()
    score = scorer.score("Muy capaz pero tiene un problema de actitud")
"""

import math
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Pattern, Union

from .skill_models import SentimentLabel, SentimentScore
from .taxonomy import TaxonomyError, read_json_file

logger = logging.getLogger(__name__)


SENTIMENT_LEXICON: Dict[str, List[str]] = {
    "positive": [
        "excelente", "bueno", "mejora", "progreso", "avanza", "good", "great",
        "excellent", "improving", "potential", "smart", "capable", "strong",
        "capaz", "inteligente", "talentoso", "prometedor", "bien", "positivo",
    ],
    "negative": [
        "problema", "difícil", "lucha", "falla", "débil", "mal", "poor", "weak",
        "struggles", "fails", "difficult", "issue", "challenge", "deficient",
        "lacking", "needs improvement", "problemático", "negativo", "preocupante",
    ],
}

# A proportion strictly above this wins the label
LABEL_THRESHOLD = 0.6


def round_half_up(value: float, digits: int = 2) -> float:
    """Round like a dashboard does: 0.125 -> 0.13, not banker's 0.12."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def label_for(positive: float, negative: float) -> SentimentLabel:
    if positive > LABEL_THRESHOLD:
        return SentimentLabel.POSITIVE
    if negative > LABEL_THRESHOLD:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


def build_score(
    positive: float, negative: float, neutral: float, rounded: bool = True
) -> SentimentScore:
    """Apply the label/confidence rule (and 2-decimal rounding) to raw proportions."""
    overall = label_for(positive, negative)
    confidence = max(positive, negative, neutral)
    if rounded:
        positive, negative, neutral, confidence = (
            round_half_up(v) for v in (positive, negative, neutral, confidence)
        )
    return SentimentScore(
        positive=positive,
        negative=negative,
        neutral=neutral,
        overall=overall,
        confidence=confidence,
    )


def mean_score(scores: Iterable[SentimentScore]) -> SentimentScore:
    """Per-component arithmetic mean, relabelled with the same rule."""
    scores = list(scores)
    if not scores:
        raise ValueError("mean_score() needs at least one score")
    n = len(scores)
    return build_score(
        sum(s.positive for s in scores) / n,
        sum(s.negative for s in scores) / n,
        sum(s.neutral for s in scores) / n,
    )


def _compile_words(words: Iterable[str]) -> List[Pattern]:
    return [
        re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)
        for word in words
    ]


class SentimentScorer:
    """
    Bilingual lexicon-based polarity scorer.

    The lexicon is injected (defaults to SENTIMENT_LEXICON) so tests and
    operators can swap word lists without touching module state.
    """

    def __init__(self, lexicon: Optional[Dict[str, List[str]]] = None):
        lexicon = SENTIMENT_LEXICON if lexicon is None else lexicon
        for polarity in ("positive", "negative"):
            words = lexicon.get(polarity)
            if not isinstance(words, list) or not all(isinstance(w, str) and w for w in words):
                raise TaxonomyError(f"Lexicon needs a list of words under '{polarity}'")

        self.lexicon = {
            "positive": list(lexicon["positive"]),
            "negative": list(lexicon["negative"]),
        }
        self._positive = _compile_words(self.lexicon["positive"])
        self._negative = _compile_words(self.lexicon["negative"])

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SentimentScorer":
        """Load a lexicon JSON file: {"positive": [...], "negative": [...]}."""
        lexicon = read_json_file(path)
        logger.info(
            f"Loading sentiment lexicon from {path}: "
            f"{len(lexicon.get('positive') or [])} positive, "
            f"{len(lexicon.get('negative') or [])} negative"
        )
        return cls(lexicon)

    @staticmethod
    def _count(patterns: List[Pattern], text: str) -> int:
        return sum(len(p.findall(text)) for p in patterns)

    def score(self, text: str) -> SentimentScore:
        """Score an arbitrary text span."""
        text = text or ""
        positive_hits = self._count(self._positive, text)
        negative_hits = self._count(self._negative, text)
        total = positive_hits + negative_hits

        if total == 0:
            return SentimentScore(
                positive=0.5,
                negative=0.5,
                neutral=0.0,
                overall=SentimentLabel.NEUTRAL,
                confidence=0.5,
            )

        positive = positive_hits / total
        negative = negative_hits / total
        neutral = 1 - (positive + negative) / 2
        return build_score(positive, negative, neutral)


_default_scorer: Optional[SentimentScorer] = None


def score_sentiment(text: str) -> SentimentScore:
    """Score text with the built-in lexicon."""
    global _default_scorer
    if _default_scorer is None:
        _default_scorer = SentimentScorer()
    return _default_scorer.score(text)
