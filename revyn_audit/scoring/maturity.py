"""
Maturity Bands - Revyn Audit Platform
revyn_audit/scoring/maturity.py

Maps an overall score to a maturity band and its canned recommendations,
and assembles the ScoreReport shown on the results page.
"""

from typing import Iterable, List, Optional

from revyn_audit.models.audit import Answer, ScoreReport
from revyn_audit.models.enumerations import MaturityLevel
from revyn_audit.scoring.audit_scorer import score_categories, score_overall
from revyn_audit.scoring.catalog import Catalog

ADVANCED_THRESHOLD = 80
DEVELOPING_THRESHOLD = 60

_RECOMMENDATIONS = {
    MaturityLevel.ADVANCED: (
        "Excellent marketing maturity! Focus on optimization and innovation.",
        "Consider advanced AI and automation tools to scale further.",
        "Share best practices with industry peers and thought leadership.",
    ),
    MaturityLevel.DEVELOPING: (
        "Good foundation with room for improvement in key areas.",
        "Prioritize data analytics and measurement capabilities.",
        "Invest in marketing automation and personalization.",
    ),
    MaturityLevel.FOUNDATIONAL: (
        "Significant opportunities for marketing transformation.",
        "Start with foundational elements: strategy, analytics, and processes.",
        "Consider partnering with marketing experts or agencies.",
    ),
}


def maturity_level(score: int) -> MaturityLevel:
    if score >= ADVANCED_THRESHOLD:
        return MaturityLevel.ADVANCED
    if score >= DEVELOPING_THRESHOLD:
        return MaturityLevel.DEVELOPING
    return MaturityLevel.FOUNDATIONAL


def recommendations(score: int) -> List[str]:
    return list(_RECOMMENDATIONS[maturity_level(score)])


def build_score_report(catalog: Catalog, answers: Iterable[Answer], overall_score: Optional[int] = None) -> ScoreReport:
    """
    Score an answer set and attach its band and recommendations.

    Pass overall_score to reuse a stored submission score instead of
    recomputing it.
    """
    answers = list(answers)
    if overall_score is None:
        overall_score = score_overall(catalog, answers)
    return ScoreReport(
        overall_score=overall_score,
        maturity_level=maturity_level(overall_score),
        categories=score_categories(catalog, answers),
        recommendations=recommendations(overall_score),
    )
