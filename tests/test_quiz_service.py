import random

import pytest

from learning_assistant.catalog.levels import Difficulty
from learning_assistant.services import quiz_service


def test_generate_quiz_shape():
    quiz = quiz_service.generate_quiz("python", Difficulty.BEGINNER, 5, rng=random.Random(1))

    assert quiz["id"].startswith("python-beginner-")
    assert quiz["title"] == "Python Fundamentals Assessment"
    assert quiz["topic"] == "python"
    assert quiz["difficulty"] == "beginner"
    assert len(quiz["questions"]) == 5
    assert all(q["difficulty"] == "beginner" for q in quiz["questions"])
    assert quiz["estimatedTime"] == 5


def test_seeded_shuffle_is_reproducible():
    first = quiz_service.generate_quiz("javascript", Difficulty.BEGINNER, 3, rng=random.Random(42))
    second = quiz_service.generate_quiz("javascript", Difficulty.BEGINNER, 3, rng=random.Random(42))
    assert [q["id"] for q in first["questions"]] == [q["id"] for q in second["questions"]]


@pytest.mark.parametrize(
    "difficulty,title,minutes",
    [
        (Difficulty.INTERMEDIATE, "Intermediate Javascript Skills Assessment", 6),
        (Difficulty.ADVANCED, "Advanced Javascript Concepts Assessment", 10),
    ],
)
def test_titles_and_estimated_time(difficulty, title, minutes):
    quiz = quiz_service.generate_quiz("javascript", difficulty, 4, rng=random.Random(0))
    assert quiz["title"] == title
    assert len(quiz["questions"]) == 4
    # ceil(4 * 1.5) = 6 ; ceil(4 * 2.5) = 10
    assert quiz["estimatedTime"] == minutes


def test_advanced_quiz_is_completed_with_easier_questions():
    quiz = quiz_service.generate_quiz("python", Difficulty.ADVANCED, 5, rng=random.Random(3))
    assert len(quiz["questions"]) == 5
    assert {q["difficulty"] for q in quiz["questions"]} <= {"beginner", "intermediate", "advanced"}


def test_evaluate_quiz_returns_assessment_result():
    result = quiz_service.evaluate_quiz(
        quiz_id="python-beginner-1",
        title="Python Fundamentals Assessment",
        topic=" Python ",
        question_ids=["py-b-1", "py-b-2"],
        answers={"py-b-1": "age = 25", "py-b-2": "// This is a comment"},
        user_id="7",
    )

    assert result["topic"] == "python"
    assert result["score"] == 50
    assert result["skillLevel"] == "intermediate"
    assert result["correctAnswers"] == 1 and result["totalQuestions"] == 2
    assert result["knowledgeGaps"][0]["topic"] == "syntax"
    assert result["knowledgeGaps"][0]["questionIds"] == ["py-b-2"]


def test_evaluate_quiz_counts_skipped_questions_as_incorrect():
    quiz = quiz_service.generate_quiz("python", Difficulty.BEGINNER, 5, rng=random.Random(1))
    first = quiz["questions"][0]

    result = quiz_service.evaluate_quiz(
        quiz_id=quiz["id"],
        title=quiz["title"],
        topic="python",
        question_ids=[q["id"] for q in quiz["questions"]],
        answers={first["id"]: first["correctAnswer"]},
        user_id="guest-user",
    )

    assert result["score"] == 20
    assert result["correctAnswers"] == 1
    assert result["totalQuestions"] == 5
    assert [a["selectedOption"] for a in result["answers"][1:]] == [None] * 4


def test_evaluate_quiz_rejects_unknown_question():
    with pytest.raises(KeyError):
        quiz_service.evaluate_quiz(
            quiz_id="q", title=None, topic="python", question_ids=["nope"], answers={"nope": "a"}, user_id="1"
        )


def test_evaluate_quiz_rejects_answers_outside_the_quiz():
    with pytest.raises(ValueError):
        quiz_service.evaluate_quiz(
            quiz_id="q",
            title=None,
            topic="python",
            question_ids=["py-b-1"],
            answers={"py-b-1": "age = 25", "py-b-2": "# comment"},
            user_id="1",
        )


def test_ai_quiz_is_normalized(monkeypatch):
    payload = {
        "questions": [
            {
                "question": "What does len([1, 2]) return?",
                "options": ["1", "2", "3", "Error"],
                "correctAnswerIndex": 1,
                "explanation": "Two items.",
                "topics": ["lists"],
            },
            {"question": "broken", "options": ["a"], "correctAnswerIndex": 0},
            {"question": "Out of range", "options": ["a", "b"], "correctAnswerIndex": 5},
        ]
    }
    monkeypatch.setattr(quiz_service, "generate_json_with_gpt", lambda prompt: payload)

    quiz = quiz_service.generate_ai_quiz("python", Difficulty.BEGINNER, 5)

    assert quiz is not None
    assert len(quiz["questions"]) == 1
    question = quiz["questions"][0]
    assert question["correctAnswer"] == "2"
    assert question["difficulty"] == "beginner"
    assert question["topics"] == ["lists"]


def test_ai_quiz_returns_none_without_llm(monkeypatch):
    monkeypatch.setattr(quiz_service, "generate_json_with_gpt", lambda prompt: None)
    assert quiz_service.generate_ai_quiz("python", Difficulty.BEGINNER, 3) is None
