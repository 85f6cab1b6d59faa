import pytest

from learning_assistant.catalog.levels import Difficulty
from learning_assistant.services import scoring_service
from learning_assistant.services.scoring_service import (
    calculate_score_percentage,
    grade_answers,
    identify_knowledge_gaps,
    skill_tier_for_score,
    summarize_results,
)


QUESTIONS = [
    {"id": "q1", "correctAnswer": "a", "topics": ["syntax", "variables"]},
    {"id": "q2", "correctAnswer": "b", "topics": ["syntax"]},
    {"id": "q3", "correctAnswer": "c", "topics": ["functions"]},
    {"id": "q4", "correctAnswer": "d", "topics": ["functions", "syntax"]},
]


@pytest.mark.parametrize(
    "correct,total,expected",
    [(0, 5, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (5, 8, 63), (3, 8, 38), (5, 5, 100), (0, 0, 0)],
)
def test_calculate_score_percentage(correct, total, expected):
    assert calculate_score_percentage(correct, total) == expected


def test_half_values_round_up():
    # 1/200 = 0.5 % -> 1 ; 1/40 = 2.5 % -> 3
    assert calculate_score_percentage(1, 200) == 1
    assert calculate_score_percentage(1, 40) == 3


@pytest.mark.parametrize(
    "score,tier",
    [
        (0, Difficulty.BEGINNER),
        (39, Difficulty.BEGINNER),
        (39.9, Difficulty.BEGINNER),
        (40, Difficulty.INTERMEDIATE),
        (74, Difficulty.INTERMEDIATE),
        (75, Difficulty.ADVANCED),
        (100, Difficulty.ADVANCED),
    ],
)
def test_skill_tier_thresholds(score, tier):
    assert skill_tier_for_score(score) == tier


def test_unanswered_question_counts_as_incorrect():
    graded = grade_answers(QUESTIONS[:2], {"q1": "a"})
    assert [answer.is_correct for answer in graded] == [True, False]
    assert graded[1].selected_option is None


def test_knowledge_gaps_ranked_by_missed_count():
    graded = grade_answers(QUESTIONS, {"q1": "x", "q2": "b", "q3": "x", "q4": "x"})
    gaps = identify_knowledge_gaps(graded)

    assert [gap.topic for gap in gaps] == ["syntax", "functions", "variables"]
    syntax, functions, variables = gaps
    assert syntax.missed == 2
    assert syntax.question_ids == ["q1", "q4"]
    # 1 bonne réponse sur 3 questions taguées 'syntax'
    assert syntax.confidence == 33
    assert functions.missed == 2 and functions.confidence == 0
    assert variables.to_dict() == {"topic": "variables", "missed": 1, "confidence": 0, "questionIds": ["q1"]}


def test_ties_keep_first_appearance_order():
    graded = grade_answers(QUESTIONS[2:3] + QUESTIONS[:1], {})
    assert [gap.topic for gap in identify_knowledge_gaps(graded)] == ["functions", "syntax", "variables"]


def test_perfect_quiz_has_no_gaps():
    graded = grade_answers(QUESTIONS, {"q1": "a", "q2": "b", "q3": "c", "q4": "d"})
    assert identify_knowledge_gaps(graded) == []
    assert summarize_results(graded) == {"total": 4, "correct": 4, "incorrect": 0, "score": 100}


def test_round_half_up():
    assert scoring_service.round_half_up(2.5) == 3
    assert scoring_service.round_half_up(2.49) == 2
