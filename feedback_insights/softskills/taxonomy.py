"""
Soft-Skill Taxonomy Registry
=============================

Data-driven catalog of soft-skill problems detected in mentor feedback.
Adding a skill or a keyword is a data edit: either in DEFAULT_TAXONOMY
below or in a JSON file passed to TaxonomyRegistry.from_file().

Keywords are matched as case-insensitive SUBSTRINGS of the comment, not
as token-bounded words, so inflected forms ("desorganizada",
"procrastinaba") are still caught. False positives from substring
matches are accepted in exchange for that coverage.

Usage:
    registry = TaxonomyRegistry()
    registry.lookup("inseguro").skill_key   # "confidence"

    registry = TaxonomyRegistry.from_file("config/taxonomy.json")
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Pattern, Tuple, Union

from .skill_models import Severity, SkillCategory, SkillDefinition

logger = logging.getLogger(__name__)


class TaxonomyError(ValueError):
    """Raised when taxonomy or lexicon data is malformed."""


# =============================================================================
# DEFAULT TAXONOMY — mentor feedback, Spanish + English
# =============================================================================
# Iteration order matters: extracted issues come out in this order.

DEFAULT_TAXONOMY: Dict[str, Dict[str, Any]] = {
    "communication": {
        "category": "communication",
        "severity": "high",
        "display_name": "Comunicación",
        "keywords": [
            "no comunica", "mala comunicación", "no explica bien", "confuso al hablar",
            "no escucha", "interrumpe", "no pregunta", "falta claridad", "no articula",
            "comunicación deficiente", "no se expresa", "poor communication", "unclear",
            "doesn't listen", "vague", "impreciso", "no entiende", "malinterpreta",
            "comunicación",
        ],
    },
    "confidence": {
        "category": "emotional-intelligence",
        "severity": "medium",
        "display_name": "Confianza y Autoestima",
        "keywords": [
            "inseguro", "falta confianza", "dudoso", "insecurity", "no confía en sí",
            "baja autoestima", "miedo a preguntar", "tímido", "nervioso", "ansioso",
            "no se atreve", "temeroso", "lacks confidence", "self-doubt", "afraid",
        ],
    },
    "proactivity": {
        "category": "problem-solving",
        "severity": "high",
        "display_name": "Proactividad",
        "keywords": [
            "pasivo", "espera que le digan", "no toma iniciativa", "reactivo",
            "falta proactividad", "no propone", "no innova", "conformista",
            "lacks initiative", "passive", "waits for instructions", "no busca soluciones",
        ],
    },
    "time_management": {
        "category": "time-management",
        "severity": "high",
        "display_name": "Gestión del Tiempo",
        "keywords": [
            "desorganizado", "llega tarde", "no cumple plazos", "mal manejo del tiempo",
            "procrastina", "no prioriza", "caótico", "desorden", "unpunctual",
            "misses deadlines", "poor time management", "disorganized", "no planifica",
        ],
    },
    "teamwork": {
        "category": "teamwork",
        "severity": "medium",
        "display_name": "Trabajo en Equipo",
        "keywords": [
            "no trabaja en equipo", "individualista", "no colabora", "aislado",
            "conflictivo", "no comparte", "egoísta", "no coopera", "poor teamwork",
            "doesn't collaborate", "works alone", "antisocial", "difícil de trabajar",
        ],
    },
    "adaptability": {
        "category": "adaptability",
        "severity": "medium",
        "display_name": "Adaptabilidad",
        "keywords": [
            "rígido", "no se adapta", "resistente al cambio", "inflexible",
            "no aprende", "cerrado", "stuck in ways", "not adaptable", "stubborn",
            "no acepta feedback", "defensivo", "mente cerrada", "no flexible",
        ],
    },
    "english": {
        "category": "communication",
        "severity": "high",
        "display_name": "Inglés Técnico",
        "keywords": [
            "inglés básico", "no habla inglés", "pobre inglés", "poor english",
            "language barrier", "no entiende inglés", "inglés limitado",
            "struggles with english", "needs english improvement", "barrera idiomática",
        ],
    },
    "technical_communication": {
        "category": "communication",
        "severity": "high",
        "display_name": "Comunicación Técnica",
        "keywords": [
            "no explica técnicamente", "no justifica decisiones", "falta fundamento",
            "no articula soluciones técnicas", "can't explain architecture",
            "poor technical explanation", "no defiende su código", "no argumenta",
        ],
    },
    "growth_mindset": {
        "category": "emotional-intelligence",
        "severity": "medium",
        "display_name": "Mentalidad de Crecimiento",
        "keywords": [
            "fixed mindset", "no busca aprender", "conformista con conocimiento",
            "no estudia", "estancado", "no se actualiza", "doesn't learn",
            "not curious", "no investiga", "falta curiosidad", "no lee documentación",
        ],
    },
    "interview_skills": {
        "category": "communication",
        "severity": "high",
        "display_name": "Habilidades de Entrevista",
        "keywords": [
            "nervioso en entrevistas", "no sabe venderse", "poor interview skills",
            "no destaca logros", "no cuenta historias STAR", "vago en respuestas",
            "no prepara entrevistas", "undersells himself", "doesn't sell achievements",
        ],
    },
}

# Skill -> recommended training content, used by the insight generator.
# Skills absent from this table fall back to DEFAULT_RECOMMENDATION.
CONTENT_RECOMMENDATIONS: Dict[str, str] = {
    "communication": "Curso de Comunicación Efectiva",
    "confidence": "Workshop de Confianza Profesional",
    "proactivity": "Taller de Iniciativa y Liderazgo",
    "time_management": "Programa de Productividad",
    "teamwork": "Taller de Colaboración",
    "adaptability": "Curso de Agilidad Mental",
    "english": "English for Tech Professionals",
    "technical_communication": "Arquitectura y Explicación Técnica",
    "growth_mindset": "Mentalidad de Aprendizaje Continuo",
    "interview_skills": "Mock Interviews y STAR Method",
}

DEFAULT_RECOMMENDATION = "Coaching Individual"


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    """json object_pairs_hook: a skill key may only be declared once."""
    result: Dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise TaxonomyError(f"Duplicate key '{key}' in taxonomy data")
        result[key] = value
    return result


def read_json_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a taxonomy/lexicon JSON file, rejecting duplicate keys."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f, object_pairs_hook=_reject_duplicate_keys)
    except FileNotFoundError:
        raise TaxonomyError(f"Taxonomy file not found: {path}")
    except json.JSONDecodeError as e:
        raise TaxonomyError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise TaxonomyError(f"{path} must contain a JSON object")
    return data


def build_skill_definition(skill_key: str, entry: Dict[str, Any]) -> SkillDefinition:
    """Validate one raw taxonomy entry and turn it into a SkillDefinition."""
    if not isinstance(entry, dict):
        raise TaxonomyError(f"Skill '{skill_key}' must be an object")

    try:
        category = SkillCategory(entry.get("category", "other"))
    except ValueError:
        raise TaxonomyError(
            f"Skill '{skill_key}' has unknown category {entry.get('category')!r}"
        )
    try:
        severity = Severity(entry.get("severity", "medium"))
    except ValueError:
        raise TaxonomyError(
            f"Skill '{skill_key}' has unknown severity {entry.get('severity')!r}"
        )

    keywords = entry.get("keywords")
    if not isinstance(keywords, list) or not keywords:
        raise TaxonomyError(f"Skill '{skill_key}' needs a non-empty keywords list")
    if not all(isinstance(kw, str) and kw.strip() for kw in keywords):
        raise TaxonomyError(f"Skill '{skill_key}' has an empty or non-string keyword")

    return SkillDefinition(
        skill_key=skill_key,
        category=category,
        severity=severity,
        keywords=list(keywords),
        display_name=entry.get("display_name"),
    )


class TaxonomyRegistry:
    """
    Ordered catalog of SkillDefinitions with precompiled keyword patterns.

    Each keyword is compiled once into a case-insensitive literal pattern,
    kept in declaration order so callers can stop at the first match.
    """

    def __init__(self, taxonomy: Optional[Dict[str, Dict[str, Any]]] = None):
        raw = DEFAULT_TAXONOMY if taxonomy is None else taxonomy
        if not raw:
            raise TaxonomyError("Taxonomy must declare at least one skill")

        self._skills: Dict[str, SkillDefinition] = {}
        self._patterns: Dict[str, List[Tuple[str, Pattern]]] = {}
        self._keyword_index: Dict[str, SkillDefinition] = {}

        for skill_key, entry in raw.items():
            skill = build_skill_definition(skill_key, entry)
            self._skills[skill_key] = skill
            self._patterns[skill_key] = [
                (kw, re.compile(re.escape(kw), re.IGNORECASE))
                for kw in skill.keywords
            ]
            for kw in skill.keywords:
                # First declaring skill owns the keyword for lookup purposes
                self._keyword_index.setdefault(kw.lower(), skill)

        logger.debug(
            f"Taxonomy loaded: {len(self._skills)} skills, "
            f"{len(self._keyword_index)} keywords"
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TaxonomyRegistry":
        """
        Load a taxonomy from JSON.

        Expected shape:
            {"skills": {"<skill_key>": {"category": ..., "severity": ...,
                                        "keywords": [...], "display_name": ...}}}
        """
        data = read_json_file(path)
        skills = data.get("skills")
        if not isinstance(skills, dict):
            raise TaxonomyError(f"{path} must contain a 'skills' object")
        logger.info(f"Loading taxonomy from {path} ({len(skills)} skills)")
        return cls(skills)

    def __len__(self) -> int:
        return len(self._skills)

    def __iter__(self) -> Iterator[SkillDefinition]:
        return iter(self._skills.values())

    def __contains__(self, skill_key: str) -> bool:
        return skill_key in self._skills

    @property
    def skill_keys(self) -> List[str]:
        return list(self._skills)

    def get(self, skill_key: str) -> Optional[SkillDefinition]:
        return self._skills.get(skill_key)

    def lookup(self, keyword: str) -> Optional[SkillDefinition]:
        """Return the skill owning this exact keyword (case-insensitive)."""
        if not keyword:
            return None
        return self._keyword_index.get(keyword.strip().lower())

    def patterns_for(self, skill_key: str) -> List[Tuple[str, Pattern]]:
        """Compiled (keyword, pattern) pairs for a skill, in keyword order."""
        return self._patterns[skill_key]


def load_recommendations(path: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    """
    Skill -> recommended content table.

    Reads the optional 'recommendations' object of a taxonomy file; without
    a path (or when the file has none) returns the built-in table.
    """
    if path is None:
        return dict(CONTENT_RECOMMENDATIONS)

    data = read_json_file(path)
    recommendations = data.get("recommendations")
    if recommendations is None:
        return dict(CONTENT_RECOMMENDATIONS)
    if not isinstance(recommendations, dict) or not all(
        isinstance(v, str) for v in recommendations.values()
    ):
        raise TaxonomyError(f"'recommendations' in {path} must map skill keys to strings")
    return dict(recommendations)
