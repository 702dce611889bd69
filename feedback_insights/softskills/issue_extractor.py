"""
Soft-Skill Issue Extractor (Deterministic)
===========================================

Scans one mentor comment against the taxonomy and returns one issue seed
per matched skill. No LLM, no ML — fast, explainable, reproducible.

Rules:
    - Skills are visited in taxonomy order, keywords in declaration order.
    - The first keyword that matches wins; the skill's remaining keywords
      are not scanned (max one seed per skill per comment).
    - The example snippet spans up to `context_window` characters before
      the match and after the matched keyword.
    - Sentiment is scored on the snippet only, not the whole comment.

Usage:
    extractor = IssueExtractor()
    issues = extractor.extract("Es muy pasivo y bastante inseguro")
"""

import logging
from typing import List, Optional, Tuple

from .sentiment import SentimentScorer
from .skill_models import IssueInstance, SkillDefinition
from .taxonomy import TaxonomyRegistry

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_WINDOW = 50


class IssueExtractor:
    """Per-comment keyword scanner producing IssueInstance seeds."""

    def __init__(
        self,
        taxonomy: Optional[TaxonomyRegistry] = None,
        scorer: Optional[SentimentScorer] = None,
        context_window: int = DEFAULT_CONTEXT_WINDOW,
    ):
        if context_window < 0:
            raise ValueError("context_window cannot be negative")
        self.taxonomy = taxonomy or TaxonomyRegistry()
        self.scorer = scorer or SentimentScorer()
        self.context_window = context_window

    def find_first_match(self, skill: SkillDefinition, text: str) -> Optional[Tuple[str, int, int]]:
        """Return (keyword, start, end) of the skill's first matching keyword."""
        for keyword, pattern in self.taxonomy.patterns_for(skill.skill_key):
            match = pattern.search(text)
            if match:
                return keyword, match.start(), match.end()
        return None

    def context_snippet(self, text: str, start: int, end: int) -> str:
        lo = max(0, start - self.context_window)
        hi = min(len(text), end + self.context_window)
        return text[lo:hi].strip()

    def extract(self, text: str) -> List[IssueInstance]:
        """Extract issue seeds (mentions=1) from one comment, in taxonomy order."""
        if not text:
            return []

        issues: List[IssueInstance] = []
        for skill in self.taxonomy:
            hit = self.find_first_match(skill, text)
            if hit is None:
                continue

            keyword, start, end = hit
            snippet = self.context_snippet(text, start, end)
            issues.append(IssueInstance(
                skill_key=skill.skill_key,
                category=skill.category,
                severity=skill.severity,
                mentions=1,
                examples=[snippet],
                sentiment=self.scorer.score(snippet),
            ))
            logger.debug(f"Matched '{keyword}' -> {skill.skill_key}")

        return issues


_default_extractor: Optional[IssueExtractor] = None


def extract_issues(text: str) -> List[IssueInstance]:
    """Extract issues with the built-in taxonomy and lexicon."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = IssueExtractor()
    return _default_extractor.extract(text)
