# revyn_audit/scoring/audit_scorer.py
"""
Audit Scorer
------------
Turns answers into percentages.

Per question:
    scale            points = value (0-10, finite)      max 10
    multiple-choice  points = len(options) - index      max 4
    text             not scored

Category and overall scores:
    percentage = round_half_up(100 × Σ points / Σ max)   clamped to [0, 100]

The overall score is one flat ratio over every scorable answer, not an
average of category percentages. Nothing here logs or raises: bad values
score zero and unknown question ids are skipped.
"""
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from revyn_audit.models.audit import Answer, CategoryScore, ChoiceAnswer, Question, ScaleAnswer
from revyn_audit.models.enumerations import QuestionType
from revyn_audit.scoring.catalog import Catalog
from revyn_audit.scoring.utils import finite_number, to_percentage

SCALE_MAX = Decimal("10")
CHOICE_MAX = Decimal("4")

_ZERO = Decimal("0")

Score = Tuple[Decimal, Decimal]


def score(question: Question, answer: Answer) -> Optional[Score]:
    """
    Score one answer against its question.

    Returns (points, max_points), or None for text questions. An answer
    for a different question id, or of the wrong kind, scores zero.
    """
    if question.type == QuestionType.TEXT:
        return None

    if question.type == QuestionType.SCALE:
        if answer.question_id != question.id or not isinstance(answer, ScaleAnswer):
            return _ZERO, SCALE_MAX
        value = finite_number(answer.value)
        if value is None or value < 0 or value > SCALE_MAX:
            return _ZERO, SCALE_MAX
        return value, SCALE_MAX

    # multiple-choice: options are ranked best first
    if answer.question_id != question.id or not isinstance(answer, ChoiceAnswer):
        return _ZERO, CHOICE_MAX
    if answer.value not in question.options:
        return _ZERO, CHOICE_MAX
    points = len(question.options) - question.options.index(answer.value)
    return Decimal(points), CHOICE_MAX


def _accumulate(pairs: Iterable[Tuple[Question, Answer]]) -> Score:
    points = _ZERO
    max_points = _ZERO
    for question, answer in pairs:
        result = score(question, answer)
        if result is None:
            continue
        points += result[0]
        max_points += result[1]
    return points, max_points


def score_category(category: str, catalog: Catalog, answers: Iterable[Answer]) -> CategoryScore:
    """
    Percentage for one category.

    Answers are selected by their stored category label. Answers whose
    question id does not belong to the category are skipped.
    """
    questions = {q.id: q for q in catalog.in_category(category)}
    pairs = (
        (questions[a.question_id], a)
        for a in answers
        if a.category == category and a.question_id in questions
    )
    points, max_points = _accumulate(pairs)
    return CategoryScore(
        category=category,
        percentage=to_percentage(points, max_points),
        questions_count=len(questions),
    )


def score_overall(catalog: Catalog, answers: Iterable[Answer]) -> int:
    """Overall percentage across every scorable answer. 0 when nothing is scorable."""
    pairs = (
        (catalog.get(a.question_id), a)
        for a in answers
        if a.question_id in catalog
    )
    points, max_points = _accumulate(pairs)
    return to_percentage(points, max_points)


def score_categories(catalog: Catalog, answers: Iterable[Answer]) -> List[CategoryScore]:
    """One CategoryScore per catalog category, in catalog order."""
    answers = list(answers)
    return [score_category(c, catalog, answers) for c in catalog.categories]
