"""
Soft-Skill Feedback Intelligence Engine
========================================

Deterministic extraction of soft-skill problems and sentiment from
mentor comments about mentees. No ML required.

Modules:
    skill_models       — Data models (Comment, SentimentScore, IssueInstance, PeriodReport)
    taxonomy           — Data-driven skill taxonomy + keyword patterns
    sentiment          — Bilingual lexicon sentiment scorer
    issue_extractor    — Per-comment issue extraction (first keyword per skill wins)
    monthly_aggregator — Per-month merge, ranking and average sentiment
    insights           — Prioritized insight sentences
    trends             — Multi-month analysis and trend classification
    comment_store      — In-memory and PostgreSQL mentor comment stores
"""

from .skill_models import (
    Comment,
    IssueInstance,
    PeriodReport,
    SentimentLabel,
    SentimentScore,
    Severity,
    SkillCategory,
    SkillDefinition,
    TrendSummary,
)
from .taxonomy import TaxonomyRegistry, TaxonomyError, DEFAULT_TAXONOMY
from .sentiment import SentimentScorer, SENTIMENT_LEXICON, score_sentiment
from .issue_extractor import IssueExtractor, extract_issues
from .insights import InsightGenerator
from .monthly_aggregator import MonthlyAggregator, analyze_period
from .trends import analyze_recent_months, analyze_trends, overall_top_issues
