"""
Multi-Month Trend Analysis
===========================

Runs the monthly aggregator over the most recent N calendar months and
compares them. Reports are always ordered most recent first.

A skill is "improving" when its mentions drop below 80% of the previous
month, "worsening" above 120%, otherwise "stable".
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from .monthly_aggregator import MonthlyAggregator
from .skill_models import Comment, PeriodReport, TrendSummary

logger = logging.getLogger(__name__)

IMPROVING_RATIO = 0.8
WORSENING_RATIO = 1.2


def recent_months(count: int, now: Optional[datetime] = None) -> List[Tuple[int, int]]:
    """(month 0-11, year) pairs for the last `count` months, current first."""
    if count < 1:
        raise ValueError("count must be at least 1")
    now = now or datetime.now()
    month, year = now.month - 1, now.year
    periods = []
    for _ in range(count):
        periods.append((month, year))
        month -= 1
        if month < 0:
            month, year = 11, year - 1
    return periods


def analyze_recent_months(
    comments: Iterable[Comment],
    months: int = 6,
    now: Optional[datetime] = None,
    aggregator: Optional[MonthlyAggregator] = None,
) -> List[PeriodReport]:
    aggregator = aggregator or MonthlyAggregator()
    comments = list(comments)
    return [
        aggregator.analyze_period(comments, month, year)
        for month, year in recent_months(months, now)
    ]


def analyze_trends(reports: List[PeriodReport]) -> TrendSummary:
    """Compare the two most recent reports (reports[0] vs reports[1])."""
    if len(reports) < 2:
        return TrendSummary()

    current = {i.skill_key: i.mentions for i in reports[0].ranked_issues}
    previous = {i.skill_key: i.mentions for i in reports[1].ranked_issues}

    summary = TrendSummary()
    for skill in list(current) + [s for s in previous if s not in current]:
        now_mentions = current.get(skill, 0)
        before = previous.get(skill, 0)
        if now_mentions < before * IMPROVING_RATIO:
            summary.improving.append(skill)
        elif now_mentions > before * WORSENING_RATIO:
            summary.worsening.append(skill)
        else:
            summary.stable.append(skill)

    logger.debug(
        f"Trends {reports[1].period} -> {reports[0].period}: "
        f"{len(summary.improving)} improving, {len(summary.worsening)} worsening"
    )
    return summary


def overall_top_issues(reports: Iterable[PeriodReport], limit: int = 3) -> List[Dict[str, object]]:
    """Total mentions per skill across reports, top `limit` (ties by skill key)."""
    totals: Dict[str, int] = {}
    for report in reports:
        for issue in report.ranked_issues:
            totals[issue.skill_key] = totals.get(issue.skill_key, 0) + issue.mentions

    ranked = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
    return [
        {"skill": skill, "total_mentions": mentions}
        for skill, mentions in ranked[:limit]
    ]
