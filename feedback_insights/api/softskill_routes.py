"""
Soft-Skill Analytics API Routes
================================

GET  /api/analytics/soft-skills?month=&year= — period report (default: current month).
POST /api/analytics/soft-skills              — store a mentor comment, analyze it immediately.
PUT  /api/analytics/soft-skills              — last N months, trends and overall top 3.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..config import AnalyzerConfig
from ..softskills.comment_store import InMemoryCommentStore, PostgresCommentStore, new_comment
from ..softskills.monthly_aggregator import MonthlyAggregator
from ..softskills.trends import analyze_recent_months, analyze_trends, overall_top_issues
from .models import (
    AnalysisMetadata,
    CommentAnalysis,
    CommentModel,
    CommentRequest,
    CommentResponse,
    IssueModel,
    OverallIssueModel,
    PeriodAnalysisResponse,
    PeriodReportModel,
    SentimentModel,
    TrendsModel,
    TrendsRequest,
    TrendsResponse,
    TrendsSummaryModel,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics/soft-skills", tags=["Soft Skills"])

# Wired by configure() at startup; lazily defaulted otherwise
_store = None
_aggregator: Optional[MonthlyAggregator] = None


def configure(store=None, aggregator: Optional[MonthlyAggregator] = None, config: Optional[AnalyzerConfig] = None):
    """Set the comment store and aggregator used by the routes."""
    global _store, _aggregator
    config = config or AnalyzerConfig()

    if store is None:
        if config.comment_source == "database":
            from . import db
            store = PostgresCommentStore(db.get_connection)
        else:
            store = InMemoryCommentStore()

    _store = store
    _aggregator = aggregator or MonthlyAggregator.from_config(config)
    logger.info(f"Soft-skill routes configured: store={type(store).__name__}")


def get_store():
    if _store is None:
        configure()
    return _store


def get_aggregator() -> MonthlyAggregator:
    if _aggregator is None:
        configure()
    return _aggregator


@router.get("", response_model=PeriodAnalysisResponse)
async def get_period_analysis(
    month: Optional[int] = Query(None, ge=0, le=11, description="Month 0-11 (default: current)"),
    year: Optional[int] = Query(None, ge=2000, le=2100, description="Year (default: current)"),
):
    """Soft-skill analysis of one calendar month of mentor comments."""
    now = datetime.now(timezone.utc)
    month = now.month - 1 if month is None else month
    year = now.year if year is None else year

    try:
        report = get_aggregator().analyze_period(get_store().list_comments(), month, year)
    except Exception as e:
        logger.error(f"Soft-skill analysis failed for {month}/{year}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return PeriodAnalysisResponse(
        analysis=PeriodReportModel.from_report(report),
        metadata=AnalysisMetadata(month=month, year=year, analyzed_at=now),
    )


@router.post("", response_model=CommentResponse)
async def create_comment(request: CommentRequest):
    """Store a mentor comment and return its immediate analysis."""
    try:
        comment = new_comment(
            request.comment,
            session_id=request.session_id,
            mentor_id=request.mentor_id,
            mentee_identifier=request.mentee_identifier,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        get_store().add(comment)
        aggregator = get_aggregator()
        sentiment = aggregator.scorer.score(comment.text)
        issues = aggregator.extractor.extract(comment.text)
    except Exception as e:
        logger.error(f"Saving mentor comment failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if issues:
        message = f"Comentario guardado. Se detectaron {len(issues)} áreas de mejora."
    else:
        message = "Comentario guardado exitosamente."

    return CommentResponse(
        comment=CommentModel.from_comment(comment),
        analysis=CommentAnalysis(
            sentiment=SentimentModel.from_score(sentiment),
            detected_issues=[IssueModel.from_issue(i) for i in issues],
            issues_count=len(issues),
        ),
        message=message,
    )


@router.put("", response_model=TrendsResponse)
async def get_trends(request: Optional[TrendsRequest] = None):
    """Analyses of the last N months (most recent first), plus trends."""
    request = request or TrendsRequest()
    try:
        comments = get_store().list_comments()
        reports = analyze_recent_months(
            comments,
            months=request.months,
            now=datetime.now(timezone.utc),
            aggregator=get_aggregator(),
        )
    except Exception as e:
        logger.error(f"Soft-skill trend analysis failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return TrendsResponse(
        analyses=[PeriodReportModel.from_report(r) for r in reports],
        trends=TrendsModel.from_summary(analyze_trends(reports)),
        summary=TrendsSummaryModel(
            total_comments=len(comments),
            months_analyzed=request.months,
            overall_top3=[OverallIssueModel(**item) for item in overall_top_issues(reports)],
        ),
    )
