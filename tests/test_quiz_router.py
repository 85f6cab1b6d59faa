import pytest
from fastapi import HTTPException

from learning_assistant.api.endpoints import chat_router, quiz_router, rag_router
from learning_assistant.schemas.quiz.quiz_schema import (
    ExplainRequest,
    QuizEvaluationRequest,
    QuizRequest,
    RagRequest,
)
from learning_assistant.services import quiz_service, rag_service
from tests.utils import create_user


@pytest.mark.parametrize(
    "payload,detail",
    [
        ({"difficulty": "beginner"}, "Topic is required"),
        ({"topic": "  ", "difficulty": "beginner"}, "Topic is required"),
        ({"topic": "python"}, "Difficulty is required"),
        ({"topic": "python", "difficulty": "expert"}, "Invalid difficulty"),
    ],
)
def test_generate_quiz_validation(payload, detail):
    with pytest.raises(HTTPException) as exc:
        quiz_router.generate_quiz(QuizRequest(**payload))

    assert exc.value.status_code == 400
    assert exc.value.detail == detail


def test_generate_quiz_normalizes_input():
    quiz = quiz_router.generate_quiz(QuizRequest(topic=" JavaScript ", difficulty="Intermediate", count=3))

    assert quiz["topic"] == "javascript"
    assert quiz["difficulty"] == "intermediate"
    assert len(quiz["questions"]) == 3


@pytest.mark.parametrize("count,expected", [(0, 1), (None, 5), (500, 8)])
def test_generate_quiz_clamps_count(count, expected):
    # 8 questions débutant en Python : la limite haute est bornée par le catalogue
    quiz = quiz_router.generate_quiz(QuizRequest(topic="python", difficulty="beginner", count=count))
    assert len(quiz["questions"]) == expected


def test_generate_quiz_internal_error(monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(quiz_service, "generate_quiz", broken)

    with pytest.raises(HTTPException) as exc:
        quiz_router.generate_quiz(QuizRequest(topic="python", difficulty="beginner"))

    assert exc.value.status_code == 500
    assert exc.value.detail == "Failed to generate quiz"


def test_ai_quiz_unavailable(monkeypatch):
    monkeypatch.setattr(quiz_service, "generate_json_with_gpt", lambda prompt: None)

    with pytest.raises(HTTPException) as exc:
        quiz_router.generate_ai_quiz(QuizRequest(topic="python", difficulty="beginner"))

    assert exc.value.status_code == 502


def test_evaluate_quiz_for_guest_and_user(db_session):
    request = QuizEvaluationRequest(
        quizId="python-beginner-1",
        quizTitle="Python Fundamentals Assessment",
        topic="python",
        questionIds=["py-b-1"],
        answers={"py-b-1": "age = 25"},
    )

    guest = quiz_router.evaluate_quiz(request, current_user=None)
    assert guest["userId"] == "guest-user"
    assert guest["score"] == 100

    user = create_user(db_session)
    result = quiz_router.evaluate_quiz(request, current_user=user)
    assert result["userId"] == str(user.id)


def test_evaluate_quiz_scores_over_every_question():
    request = QuizEvaluationRequest(
        quizId="python-beginner-1",
        topic="python",
        questionIds=["py-b-1", "py-b-2", "py-b-3", "py-b-4", "py-b-5"],
        answers={"py-b-1": "age = 25"},
    )

    result = quiz_router.evaluate_quiz(request, current_user=None)

    assert result["score"] == 20
    assert result["totalQuestions"] == 5


def test_evaluate_quiz_errors():
    with pytest.raises(HTTPException) as exc:
        quiz_router.evaluate_quiz(QuizEvaluationRequest(quizId="q", topic="python", questionIds=[]), current_user=None)
    assert exc.value.detail == "Question ids are required"

    with pytest.raises(HTTPException) as exc:
        quiz_router.evaluate_quiz(
            QuizEvaluationRequest(quizId="q", topic="python", questionIds=["zz-1"], answers={"zz-1": "a"}),
            current_user=None,
        )
    assert exc.value.status_code == 400
    assert exc.value.detail == "unknown_question"

    with pytest.raises(HTTPException) as exc:
        quiz_router.evaluate_quiz(
            QuizEvaluationRequest(quizId="q", topic="python", questionIds=["py-b-1"], answers={"py-b-2": "x"}),
            current_user=None,
        )
    assert exc.value.detail == "answer_not_in_quiz"


def test_rag_requires_question():
    with pytest.raises(HTTPException) as exc:
        rag_router.ask(RagRequest(question="   "))
    assert exc.value.status_code == 400
    assert exc.value.detail == "Question is required"


def test_rag_defaults_to_python():
    response = rag_router.ask(RagRequest(question="How do I define a function?", topic=None))
    assert response["sources"][0]["url"].startswith("https://docs.python.org")


def test_rag_internal_error(monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(rag_service, "answer_question", broken)

    with pytest.raises(HTTPException) as exc:
        rag_router.ask(RagRequest(question="What is a list?"))

    assert exc.value.status_code == 500
    assert exc.value.detail == "Failed to generate response"


def test_explain_validation(monkeypatch):
    monkeypatch.setattr(rag_service, "generate_text_with_gpt", lambda prompt: None)

    with pytest.raises(HTTPException) as exc:
        chat_router.explain(ExplainRequest(concept=""))
    assert exc.value.detail == "Concept is required"

    with pytest.raises(HTTPException) as exc:
        chat_router.explain(ExplainRequest(concept="closures", currentLevel="wizard"))
    assert exc.value.detail == "Invalid difficulty"

    explained = chat_router.explain(ExplainRequest(concept="closures", topic="javascript"))
    assert explained["source"] == "retrieval"
    assert explained["sources"][0]["title"].startswith("JavaScript")
