"""
Soft-Skill Analysis Data Models
================================

Structured inputs and outputs of the soft-skill analysis pipeline.
Comments come from the mentor feedback store; everything else is
computed fresh per analysis call.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class SkillCategory(str, Enum):
    """Soft-skill categories used to group taxonomy entries."""
    COMMUNICATION = "communication"
    LEADERSHIP = "leadership"
    TEAMWORK = "teamwork"
    TIME_MANAGEMENT = "time-management"
    ADAPTABILITY = "adaptability"
    PROBLEM_SOLVING = "problem-solving"
    EMOTIONAL_INTELLIGENCE = "emotional-intelligence"
    OTHER = "other"


class Severity(str, Enum):
    """Static per-skill urgency, never altered per comment."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SentimentLabel(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Comment:
    """A single mentor comment about a mentee."""
    id: str
    session_id: str
    mentor_id: str
    mentee_identifier: str
    text: str
    timestamp: datetime

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Comment":
        """
        Build a Comment from a JSON-style record.

        Accepts both snake_case keys and the camelCase keys used by the
        web frontend (sessionId, mentorId, menteeEmail, comment, createdAt).
        """
        timestamp = data.get("timestamp", data.get("createdAt"))
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        if not isinstance(timestamp, datetime):
            raise ValueError(f"Comment {data.get('id')!r} has no valid timestamp")

        return cls(
            id=str(data.get("id", "")),
            session_id=str(data.get("session_id", data.get("sessionId", "")) or ""),
            mentor_id=str(data.get("mentor_id", data.get("mentorId", "")) or ""),
            mentee_identifier=str(
                data.get("mentee_identifier", data.get("menteeEmail", "")) or ""
            ),
            text=data.get("text", data.get("comment", "")) or "",
            timestamp=timestamp,
        )


@dataclass(frozen=True)
class SentimentScore:
    """Lexicon-derived polarity proportions for one text span."""
    positive: float
    negative: float
    neutral: float
    overall: SentimentLabel
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "positive": self.positive,
            "negative": self.negative,
            "neutral": self.neutral,
            "overall": self.overall.value,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class SkillDefinition:
    """One taxonomy entry. Static configuration, not derived at runtime."""
    skill_key: str
    category: SkillCategory
    severity: Severity
    keywords: List[str]
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.skill_key


@dataclass
class IssueInstance:
    """
    A soft-skill issue detected in one or more comments.

    category and severity are copied from the SkillDefinition and never
    overridden. mentions always equals len(examples).
    """
    skill_key: str
    category: SkillCategory
    severity: Severity
    mentions: int
    examples: List[str]
    sentiment: SentimentScore

    def to_dict(self) -> Dict[str, Any]:
        return {
            "skill": self.skill_key,
            "category": self.category.value,
            "severity": self.severity.value,
            "mentions": self.mentions,
            "examples": list(self.examples),
            "sentiment": self.sentiment.to_dict(),
        }


@dataclass
class PeriodReport:
    """Aggregate analysis of one calendar month of comments."""
    period: str                          # e.g. "mayo 2024"
    month: int                           # 0-11
    year: int
    total_comments: int
    ranked_issues: List[IssueInstance]
    top_insights: List[IssueInstance]    # first N of ranked_issues
    average_sentiment: SentimentScore
    insights: List[str] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.ranked_issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "month": self.month,
            "year": self.year,
            "total_comments": self.total_comments,
            "ranked_issues": [i.to_dict() for i in self.ranked_issues],
            "top_insights": [i.to_dict() for i in self.top_insights],
            "average_sentiment": self.average_sentiment.to_dict(),
            "insights": list(self.insights),
        }


@dataclass
class TrendSummary:
    """Month-over-month movement of skill mentions."""
    improving: List[str] = field(default_factory=list)
    worsening: List[str] = field(default_factory=list)
    stable: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "improving": list(self.improving),
            "worsening": list(self.worsening),
            "stable": list(self.stable),
        }
