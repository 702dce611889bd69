"""
Monthly Soft-Skill Aggregator
==============================

Aggregates issue seeds from one calendar month of mentor comments into a
single PeriodReport: ranked issues, top issues, average sentiment and
insight sentences.

Per-skill sentiment merge:
    "pairwise" (default): existing = (existing + new) / 2 per component.
        The most recent mention carries half the weight.
    "mean": count-weighted running mean over all mentions.

Usage:
    aggregator = MonthlyAggregator()
    report = aggregator.analyze_period(comments, month=4, year=2024)
"""

import logging
import time
from typing import Dict, Iterable, List, Optional

from ..config import AnalyzerConfig
from .insights import InsightGenerator
from .issue_extractor import IssueExtractor
from .sentiment import SentimentScorer, build_score, mean_score
from .skill_models import (
    Comment,
    IssueInstance,
    PeriodReport,
    SentimentLabel,
    SentimentScore,
)
from .taxonomy import TaxonomyRegistry, load_recommendations

logger = logging.getLogger(__name__)

MONTH_NAMES_ES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]

EMPTY_PERIOD_INSIGHT = "no hay suficientes comentarios para analizar este mes"

MERGE_STRATEGIES = ("pairwise", "mean")


def validate_month(month: int) -> None:
    if not isinstance(month, int) or isinstance(month, bool) or not 0 <= month <= 11:
        raise ValueError(f"month must be an integer in 0-11, got {month!r}")


def period_label(month: int, year: int) -> str:
    validate_month(month)
    return f"{MONTH_NAMES_ES[month]} {year}"


def empty_sentiment() -> SentimentScore:
    """Average sentiment of a period with no comments."""
    return SentimentScore(
        positive=0.0,
        negative=0.0,
        neutral=1.0,
        overall=SentimentLabel.NEUTRAL,
        confidence=0.0,
    )


def rank_issues(issues: Iterable[IssueInstance]) -> List[IssueInstance]:
    """Mentions descending, skill key ascending on ties."""
    return sorted(issues, key=lambda i: (-i.mentions, i.skill_key))


class MonthlyAggregator:
    """Pure per-call aggregation: (comments, month, year) -> PeriodReport."""

    def __init__(
        self,
        extractor: Optional[IssueExtractor] = None,
        scorer: Optional[SentimentScorer] = None,
        insight_generator: Optional[InsightGenerator] = None,
        top_n: int = 3,
        sentiment_merge: str = "pairwise",
    ):
        if sentiment_merge not in MERGE_STRATEGIES:
            raise ValueError(
                f"sentiment_merge must be one of {MERGE_STRATEGIES}, got {sentiment_merge!r}"
            )
        if top_n < 1:
            raise ValueError("top_n must be at least 1")

        self.extractor = extractor or IssueExtractor(scorer=scorer)
        self.scorer = scorer or self.extractor.scorer
        self.insight_generator = insight_generator or InsightGenerator(self.extractor.taxonomy)
        self.top_n = top_n
        self.sentiment_merge = sentiment_merge

    @classmethod
    def from_config(cls, config: Optional[AnalyzerConfig] = None) -> "MonthlyAggregator":
        """Wire taxonomy, lexicon and recommendation data from AnalyzerConfig."""
        config = config or AnalyzerConfig()

        if config.taxonomy_path:
            taxonomy = TaxonomyRegistry.from_file(config.taxonomy_path)
            recommendations = load_recommendations(config.taxonomy_path)
        else:
            taxonomy = TaxonomyRegistry()
            recommendations = load_recommendations()

        if config.lexicon_path:
            scorer = SentimentScorer.from_file(config.lexicon_path)
        else:
            scorer = SentimentScorer()

        extractor = IssueExtractor(taxonomy, scorer, context_window=config.context_window)
        return cls(
            extractor=extractor,
            scorer=scorer,
            insight_generator=InsightGenerator(taxonomy, recommendations),
            top_n=config.top_n,
            sentiment_merge=config.sentiment_merge,
        )

    @staticmethod
    def filter_period(comments: Iterable[Comment], month: int, year: int) -> List[Comment]:
        """Comments whose timestamp falls in month (0-11) of year."""
        return [
            c for c in comments
            if c.timestamp.year == year and c.timestamp.month - 1 == month
        ]

    def merge_sentiment(
        self, existing: SentimentScore, new: SentimentScore, previous_mentions: int
    ) -> SentimentScore:
        if self.sentiment_merge == "mean":
            weight = previous_mentions / (previous_mentions + 1)
            positive = existing.positive * weight + new.positive / (previous_mentions + 1)
            negative = existing.negative * weight + new.negative / (previous_mentions + 1)
            neutral = existing.neutral * weight + new.neutral / (previous_mentions + 1)
        else:
            positive = (existing.positive + new.positive) / 2
            negative = (existing.negative + new.negative) / 2
            neutral = (existing.neutral + new.neutral) / 2
        return build_score(positive, negative, neutral, rounded=False)

    def merge_issues(self, comments: Iterable[Comment]) -> Dict[str, IssueInstance]:
        """Run the extractor over each comment and merge seeds by skill key."""
        merged: Dict[str, IssueInstance] = {}

        for comment in comments:
            for seed in self.extractor.extract(comment.text):
                existing = merged.get(seed.skill_key)
                if existing is None:
                    merged[seed.skill_key] = seed
                    continue

                existing.sentiment = self.merge_sentiment(
                    existing.sentiment, seed.sentiment, existing.mentions
                )
                existing.mentions += 1
                existing.examples.extend(seed.examples)

        return merged

    def analyze_period(self, comments: Iterable[Comment], month: int, year: int) -> PeriodReport:
        """Analyze the comments of one calendar month."""
        label = period_label(month, year)
        period_comments = self.filter_period(comments, month, year)

        if not period_comments:
            logger.info(f"No comments for {label}, returning empty report")
            return PeriodReport(
                period=label,
                month=month,
                year=year,
                total_comments=0,
                ranked_issues=[],
                top_insights=[],
                average_sentiment=empty_sentiment(),
                insights=[EMPTY_PERIOD_INSIGHT],
            )

        started = time.monotonic()

        ranked = rank_issues(self.merge_issues(period_comments).values())
        top = ranked[:self.top_n]
        average = mean_score(self.scorer.score(c.text) for c in period_comments)
        insights = self.insight_generator.generate(top, len(period_comments))

        logger.info(
            f"Analyzed {len(period_comments)} comments for {label}: "
            f"{len(ranked)} issues, top={[i.skill_key for i in top]}, "
            f"sentiment={average.overall.value}",
            extra={"period": label, "duration": round(time.monotonic() - started, 4)},
        )

        return PeriodReport(
            period=label,
            month=month,
            year=year,
            total_comments=len(period_comments),
            ranked_issues=ranked,
            top_insights=top,
            average_sentiment=average,
            insights=insights,
        )


_default_aggregator: Optional[MonthlyAggregator] = None


def analyze_period(comments: Iterable[Comment], month: int, year: int) -> PeriodReport:
    """Analyze one month with the built-in taxonomy, lexicon and tables."""
    global _default_aggregator
    if _default_aggregator is None:
        _default_aggregator = MonthlyAggregator()
    return _default_aggregator.analyze_period(comments, month, year)
