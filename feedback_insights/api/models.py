"""
Feedback Insights API Models
============================

Pydantic models for API request/response serialization.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from ..softskills.skill_models import (
    Comment,
    IssueInstance,
    PeriodReport,
    SentimentScore,
    TrendSummary,
)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    comment_source: str
    database: str


class SentimentModel(BaseModel):
    positive: float
    negative: float
    neutral: float
    overall: str
    confidence: float

    @classmethod
    def from_score(cls, score: SentimentScore) -> "SentimentModel":
        return cls(**score.to_dict())


class IssueModel(BaseModel):
    skill: str
    category: str
    severity: str
    mentions: int
    examples: List[str]
    sentiment: SentimentModel

    @classmethod
    def from_issue(cls, issue: IssueInstance) -> "IssueModel":
        return cls(
            skill=issue.skill_key,
            category=issue.category.value,
            severity=issue.severity.value,
            mentions=issue.mentions,
            examples=list(issue.examples),
            sentiment=SentimentModel.from_score(issue.sentiment),
        )


class PeriodReportModel(BaseModel):
    period: str
    month: int
    year: int
    total_comments: int
    ranked_issues: List[IssueModel]
    top_insights: List[IssueModel]
    average_sentiment: SentimentModel
    insights: List[str]

    @classmethod
    def from_report(cls, report: PeriodReport) -> "PeriodReportModel":
        return cls(
            period=report.period,
            month=report.month,
            year=report.year,
            total_comments=report.total_comments,
            ranked_issues=[IssueModel.from_issue(i) for i in report.ranked_issues],
            top_insights=[IssueModel.from_issue(i) for i in report.top_insights],
            average_sentiment=SentimentModel.from_score(report.average_sentiment),
            insights=list(report.insights),
        )


class AnalysisMetadata(BaseModel):
    month: int
    year: int
    analyzed_at: datetime


class PeriodAnalysisResponse(BaseModel):
    success: bool = True
    analysis: PeriodReportModel
    metadata: AnalysisMetadata


class CommentRequest(BaseModel):
    session_id: str = ""
    mentor_id: str = ""
    mentee_identifier: str = ""
    comment: str = ""


class CommentModel(BaseModel):
    id: str
    session_id: str
    mentor_id: str
    mentee_identifier: str
    text: str
    timestamp: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentModel":
        return cls(
            id=comment.id,
            session_id=comment.session_id,
            mentor_id=comment.mentor_id,
            mentee_identifier=comment.mentee_identifier,
            text=comment.text,
            timestamp=comment.timestamp,
        )


class CommentAnalysis(BaseModel):
    sentiment: SentimentModel
    detected_issues: List[IssueModel]
    issues_count: int


class CommentResponse(BaseModel):
    success: bool = True
    comment: CommentModel
    analysis: CommentAnalysis
    message: str


class TrendsRequest(BaseModel):
    months: int = Field(6, ge=1, le=24, description="Months to analyze, most recent first")


class TrendsModel(BaseModel):
    improving: List[str]
    worsening: List[str]
    stable: List[str]

    @classmethod
    def from_summary(cls, summary: TrendSummary) -> "TrendsModel":
        return cls(**summary.to_dict())


class OverallIssueModel(BaseModel):
    skill: str
    total_mentions: int


class TrendsSummaryModel(BaseModel):
    total_comments: int
    months_analyzed: int
    overall_top3: List[OverallIssueModel]


class TrendsResponse(BaseModel):
    success: bool = True
    analyses: List[PeriodReportModel]
    trends: TrendsModel
    summary: TrendsSummaryModel
