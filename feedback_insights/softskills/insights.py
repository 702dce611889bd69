"""
Insight Generator
==================

Turns the top-ranked soft-skill issues of a period into short,
prioritized sentences for the CEO dashboard cards.

Insight order:
    1. Headline for the #1 issue (share of comments, category, severity)
    2. Categories affected by the top issues
    3. Urgency alert, only if a top issue has HIGH severity
    4. Content recommendation per top issue
"""

import math
from typing import Dict, List, Optional

from .skill_models import IssueInstance, Severity
from .taxonomy import CONTENT_RECOMMENDATIONS, DEFAULT_RECOMMENDATION, TaxonomyRegistry

NO_ISSUES_INSIGHT = "No se detectaron problemas significativos de soft skills este mes"


class InsightGenerator:
    """Builds insight strings from top issues. Pure, stateless per call."""

    def __init__(
        self,
        taxonomy: Optional[TaxonomyRegistry] = None,
        recommendations: Optional[Dict[str, str]] = None,
        default_recommendation: str = DEFAULT_RECOMMENDATION,
    ):
        self.taxonomy = taxonomy or TaxonomyRegistry()
        self.recommendations = (
            CONTENT_RECOMMENDATIONS if recommendations is None else recommendations
        )
        self.default_recommendation = default_recommendation

    def skill_name(self, skill_key: str) -> str:
        """'Comunicación (communication)', or the bare key without a display name."""
        skill = self.taxonomy.get(skill_key)
        if skill is None or not skill.display_name:
            return skill_key
        return f"{skill.display_name} ({skill_key})"

    def recommend(self, skill_key: str) -> str:
        return self.recommendations.get(skill_key, self.default_recommendation)

    def generate(self, top_issues: List[IssueInstance], total_comments: int) -> List[str]:
        if not top_issues:
            return [NO_ISSUES_INSIGHT]

        insights: List[str] = []

        top = top_issues[0]
        share = top.mentions / total_comments * 100 if total_comments > 0 else 0.0
        insights.append(
            f"Problema principal: {self.skill_name(top.skill_key)} aparece en "
            f"{math.floor(share + 0.5)}% de los comentarios ({top.mentions} menciones). "
            f"Categoría: {top.category.value}. Severidad: {top.severity.value}."
        )

        categories: List[str] = []
        for issue in top_issues:
            if issue.category.value not in categories:
                categories.append(issue.category.value)
        insights.append(
            f"Categorías afectadas: {', '.join(categories)}. "
            f"Se recomienda crear talleres específicos para estas áreas."
        )

        urgent = [i for i in top_issues if i.severity == Severity.HIGH]
        if urgent:
            insights.append(
                f"Atención urgente: {len(urgent)} de los {len(top_issues)} problemas principales "
                f"son de severidad alta. Requieren intervención inmediata: "
                f"{', '.join(self.skill_name(i.skill_key) for i in urgent)}."
            )

        insights.append(
            f"Recomendación: crear contenido sobre: "
            f"{', '.join(self.recommend(i.skill_key) for i in top_issues)}."
        )

        return insights
