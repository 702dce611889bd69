"""
Tests for the insight sentence generator.

Usage:
    pytest tests/test_insights.py -v
"""

from feedback_insights.softskills.insights import NO_ISSUES_INSIGHT, InsightGenerator
from feedback_insights.softskills.skill_models import (
    IssueInstance,
    SentimentLabel,
    SentimentScore,
    Severity,
    SkillCategory,
)
from feedback_insights.softskills.taxonomy import DEFAULT_RECOMMENDATION


def make_issue(
    skill_key: str,
    category: SkillCategory = SkillCategory.COMMUNICATION,
    severity: Severity = Severity.HIGH,
    mentions: int = 1,
) -> IssueInstance:
    """Helper to create an IssueInstance with neutral sentiment."""
    return IssueInstance(
        skill_key=skill_key,
        category=category,
        severity=severity,
        mentions=mentions,
        examples=[f"example {i}" for i in range(mentions)],
        sentiment=SentimentScore(0.5, 0.5, 0.0, SentimentLabel.NEUTRAL, 0.5),
    )


class TestHeadline:

    def setup_method(self):
        self.generator = InsightGenerator()

    def test_no_issues(self):
        assert self.generator.generate([], 5) == [NO_ISSUES_INSIGHT]

    def test_headline_fields(self):
        issue = make_issue("communication", mentions=2)
        headline = self.generator.generate([issue], 3)[0]
        assert headline == (
            "Problema principal: Comunicación (communication) aparece en 67% "
            "de los comentarios (2 menciones). Categoría: communication. Severidad: high."
        )

    def test_percentage_rounds_half_up(self):
        """1 of 8 comments = 12.5% -> 13%."""
        issue = make_issue("confidence", SkillCategory.EMOTIONAL_INTELLIGENCE, Severity.MEDIUM)
        headline = self.generator.generate([issue], 8)[0]
        assert "aparece en 13% de los comentarios (1 menciones)" in headline

    def test_unknown_skill_uses_bare_key(self):
        issue = make_issue("punctuality", SkillCategory.OTHER, Severity.LOW)
        headline = self.generator.generate([issue], 1)[0]
        assert "Problema principal: punctuality aparece en 100%" in headline


class TestCategoriesAndUrgency:

    def setup_method(self):
        self.generator = InsightGenerator()

    def test_categories_deduplicated_in_order(self):
        issues = [
            make_issue("communication", mentions=3),
            make_issue("confidence", SkillCategory.EMOTIONAL_INTELLIGENCE, Severity.MEDIUM, 2),
            make_issue("english", mentions=1),
        ]
        insights = self.generator.generate(issues, 6)
        assert insights[1] == (
            "Categorías afectadas: communication, emotional-intelligence. "
            "Se recomienda crear talleres específicos para estas áreas."
        )

    def test_no_urgency_without_high_severity(self):
        issues = [
            make_issue("confidence", SkillCategory.EMOTIONAL_INTELLIGENCE, Severity.MEDIUM, 2),
            make_issue("teamwork", SkillCategory.TEAMWORK, Severity.MEDIUM, 1),
        ]
        insights = self.generator.generate(issues, 4)
        assert len(insights) == 3
        assert not any("urgente" in line for line in insights)

    def test_urgency_names_only_high_severity(self):
        issues = [
            make_issue("communication", mentions=2),
            make_issue("confidence", SkillCategory.EMOTIONAL_INTELLIGENCE, Severity.MEDIUM, 1),
            make_issue("proactivity", SkillCategory.PROBLEM_SOLVING, Severity.HIGH, 1),
        ]
        insights = self.generator.generate(issues, 3)
        assert len(insights) == 4
        assert insights[2] == (
            "Atención urgente: 2 de los 3 problemas principales son de severidad alta. "
            "Requieren intervención inmediata: Comunicación (communication), "
            "Proactividad (proactivity)."
        )


class TestRecommendations:

    def test_recommendation_per_top_issue(self):
        issues = [
            make_issue("communication", mentions=2),
            make_issue("teamwork", SkillCategory.TEAMWORK, Severity.MEDIUM, 1),
        ]
        last = InsightGenerator().generate(issues, 3)[-1]
        assert last == (
            "Recomendación: crear contenido sobre: "
            "Curso de Comunicación Efectiva, Taller de Colaboración."
        )

    def test_unknown_skill_gets_default_recommendation(self):
        generator = InsightGenerator()
        assert generator.recommend("punctuality") == DEFAULT_RECOMMENDATION
        assert DEFAULT_RECOMMENDATION == "Coaching Individual"

    def test_injected_recommendations(self):
        generator = InsightGenerator(recommendations={"communication": "Toastmasters"})
        last = generator.generate([make_issue("communication")], 1)[-1]
        assert last == "Recomendación: crear contenido sobre: Toastmasters."

    def test_custom_default_recommendation(self):
        generator = InsightGenerator(recommendations={}, default_recommendation="Mentoría 1:1")
        assert generator.recommend("communication") == "Mentoría 1:1"
