# tests/test_property_based.py
"""
Property-Based Tests - audit scorer

Hypothesis tests with max_examples=500 over random answer sets drawn from
the real catalog: bounds, determinism, order independence and the
relationship between category and overall scores.
"""

from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from revyn_audit.models.audit import ChoiceAnswer, ScaleAnswer, TextAnswer
from revyn_audit.models.enumerations import QuestionType
from revyn_audit.scoring.audit_scorer import score, score_categories, score_category, score_overall
from revyn_audit.scoring.catalog import AUDIT_CATALOG

CATALOG = AUDIT_CATALOG
QUESTIONS = list(CATALOG)
CATEGORIES = list(CATALOG.categories)

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

scale_value_st = st.floats(min_value=0.0, max_value=10.0, allow_nan=False, allow_infinity=False)
any_float_st = st.floats(allow_nan=True, allow_infinity=True)


@st.composite
def valid_answer_st(draw, question):
    """A well-formed answer for the given catalog question."""
    cat = question.category.value
    if question.type == QuestionType.SCALE:
        return ScaleAnswer(question_id=question.id, category=cat, value=draw(scale_value_st))
    if question.type == QuestionType.MULTIPLE_CHOICE:
        return ChoiceAnswer(question_id=question.id, category=cat, value=draw(st.sampled_from(question.options)))
    return TextAnswer(question_id=question.id, category=cat, value=draw(st.text(max_size=20)))


@st.composite
def answer_set_st(draw):
    """Answers to a random subset of catalog questions, one per question."""
    picked = draw(st.lists(st.sampled_from(QUESTIONS), unique_by=lambda q: q.id, max_size=len(QUESTIONS)))
    return [draw(valid_answer_st(q)) for q in picked]


@st.composite
def noisy_answer_st(draw):
    """Answers with arbitrary ids, labels, kinds and values."""
    qid = draw(st.integers(min_value=-5, max_value=120))
    cat = draw(st.sampled_from(CATEGORIES + ["Sales", ""]))
    kind = draw(st.sampled_from(["scale", "choice", "text"]))
    if kind == "scale":
        return ScaleAnswer(question_id=qid, category=cat, value=draw(any_float_st))
    value = draw(st.one_of(st.text(max_size=15), st.sampled_from(["Yes, comprehensive strategy", "Daily", "No SEO"])))
    if kind == "choice":
        return ChoiceAnswer(question_id=qid, category=cat, value=value)
    return TextAnswer(question_id=qid, category=cat, value=value)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

@given(answers=st.lists(noisy_answer_st(), max_size=40))
@settings(max_examples=500)
def test_overall_always_in_bounds(answers):
    """Arbitrary input never raises and stays within [0, 100]."""
    result = score_overall(CATALOG, answers)
    assert isinstance(result, int)
    assert 0 <= result <= 100


@given(answers=st.lists(noisy_answer_st(), max_size=40))
@settings(max_examples=500)
def test_categories_always_in_bounds(answers):
    for result in score_categories(CATALOG, answers):
        assert 0 <= result.percentage <= 100


@given(answers=answer_set_st())
@settings(max_examples=500)
def test_order_independent(answers):
    assert score_overall(CATALOG, answers) == score_overall(CATALOG, list(reversed(answers)))


@given(answers=answer_set_st())
@settings(max_examples=500)
def test_deterministic(answers):
    assert score_overall(CATALOG, answers) == score_overall(CATALOG, answers)
    assert score_categories(CATALOG, answers) == score_categories(CATALOG, answers)


@given(answers=answer_set_st())
@settings(max_examples=500)
def test_overall_between_min_and_max_category(answers):
    """A flat ratio lies between its parts' ratios for the answered categories."""
    answered = {a.category for a in answers
                if CATALOG.get(a.question_id).type != QuestionType.TEXT}
    if not answered:
        assert score_overall(CATALOG, answers) == 0
        return
    parts = [score_category(c, CATALOG, answers).percentage for c in answered]
    overall = score_overall(CATALOG, answers)
    # each side rounds independently, so allow one point of slack
    assert min(parts) - 1 <= overall <= max(parts) + 1


@given(question=st.sampled_from(QUESTIONS), data=st.data())
@settings(max_examples=500)
def test_valid_points_within_max(question, data):
    """For the 4-option catalog, valid answers never exceed max points."""
    result = score(question, data.draw(valid_answer_st(question)))
    if question.type == QuestionType.TEXT:
        assert result is None
    else:
        points, max_points = result
        assert Decimal("0") <= points <= max_points


@given(answers=answer_set_st(), extra=st.integers(min_value=81, max_value=10_000))
@settings(max_examples=500)
def test_unknown_ids_do_not_change_overall(answers, extra):
    noise = ScaleAnswer(question_id=extra, category=CATEGORIES[0], value=0)
    assert score_overall(CATALOG, answers + [noise]) == score_overall(CATALOG, answers)


@given(answers=answer_set_st(), text_value=st.text(max_size=30))
@settings(max_examples=500)
def test_text_answers_do_not_change_scores(answers, text_value):
    text_answers = [
        TextAnswer(question_id=q.id, category=q.category.value, value=text_value)
        for q in QUESTIONS if q.type == QuestionType.TEXT
    ]
    scored = [a for a in answers if CATALOG.get(a.question_id).type != QuestionType.TEXT]
    assert score_overall(CATALOG, scored + text_answers) == score_overall(CATALOG, scored)
