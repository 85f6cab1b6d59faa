import pytest
from fastapi import HTTPException

from learning_assistant.api.endpoints import achievement_router, assessment_router
from learning_assistant.crud import achievement_crud, assessment_crud
from learning_assistant.db.initial_data import seed_assessments
from learning_assistant.gamification import achievement_rules
from learning_assistant.models.assessment.assessment_model import Assessment
from learning_assistant.models.assessment.response_model import Response
from learning_assistant.schemas.assessment.assessment_schema import AssessmentSubmission
from learning_assistant.services import assessment_service
from learning_assistant.services.assessment_service import AssessmentService
from tests.utils import correct_answers, create_user, seeded_assessment


def test_seed_is_idempotent(db_session):
    assert seed_assessments(db_session) == 6
    assert seed_assessments(db_session) == 0

    slugs = {a.slug for a in db_session.query(Assessment).all()}
    assert "python-beginner" in slugs and "javascript-advanced" in slugs

    python_beginner = assessment_crud.get_assessment_by_slug(db_session, "python-beginner")
    assert python_beginner.title == "Python Fundamentals Assessment"
    assert [q.slug for q in python_beginner.questions][:2] == ["py-b-1", "py-b-2"]
    assert [q.position for q in python_beginner.questions] == list(range(len(python_beginner.questions)))


def test_list_and_read_assessments(db_session):
    assessment = seeded_assessment(db_session)

    listed = assessment_router.list_assessments(db=db_session)
    assert len(listed) == 6

    detail = assessment_router.read_assessment(assessment.id, db=db_session)
    assert detail.id == assessment.id

    with pytest.raises(HTTPException) as exc:
        assessment_router.read_assessment(9999, db=db_session)
    assert exc.value.status_code == 404


def test_submit_persists_responses_and_progress(db_session):
    user = create_user(db_session)
    assessment = seeded_assessment(db_session)

    result = AssessmentService(db_session, user).submit(assessment.id, {"py-b-1": "age = 25"})

    total = len(assessment.questions)
    assert result["totalQuestions"] == total
    assert result["correctAnswers"] == 1
    # 1/8 = 12.5 -> 13
    assert result["score"] == 13
    assert result["skillLevel"] == "beginner"
    assert result["quizId"] == str(assessment.id)
    assert result["topic"] == "python"
    assert result["userId"] == str(user.id)

    responses = db_session.query(Response).filter(Response.user_id == user.id).all()
    assert len(responses) == total
    assert sum(1 for r in responses if r.answered_option is None) == total - 1

    progress = assessment_crud.get_progress(db_session, user.id, assessment.id)
    assert progress.completed is True
    assert progress.progress == 100
    assert progress.score == 13

    types = [a.achievement_type for a in achievement_crud.list_achievements(db_session, user.id)]
    assert types == [achievement_rules.FIRST_ASSESSMENT]


def test_resubmission_updates_single_progress_row(db_session):
    user = create_user(db_session)
    assessment = seeded_assessment(db_session)
    service = AssessmentService(db_session, user)

    service.submit(assessment.id, {"py-b-1": "wrong"})
    service.submit(assessment.id, correct_answers(assessment))

    assert assessment_crud.count_completed(db_session, user.id) == 1
    assert assessment_crud.get_progress(db_session, user.id, assessment.id).score == 100

    achievements = achievement_crud.list_achievements(db_session, user.id)
    types = [a.achievement_type for a in achievements]
    assert types.count(achievement_rules.FIRST_ASSESSMENT) == 1
    assert types.count(achievement_rules.PERFECT_SCORE) == 1
    perfect = next(a for a in achievements if a.achievement_type == achievement_rules.PERFECT_SCORE)
    assert perfect.achievement_data["label"] == "Perfect Score"
    assert perfect.achievement_data["score"] == 100


def test_each_perfect_attempt_is_logged(db_session):
    user = create_user(db_session)
    assessment = seeded_assessment(db_session)
    service = AssessmentService(db_session, user)

    service.submit(assessment.id, correct_answers(assessment))
    service.submit(assessment.id, correct_answers(assessment))

    types = [a.achievement_type for a in achievement_router.list_my_achievements(db=db_session, current_user=user)]
    assert types.count(achievement_rules.PERFECT_SCORE) == 2
    assert types.count(achievement_rules.FIRST_ASSESSMENT) == 1


def test_submit_rejects_unknown_question(db_session):
    user = create_user(db_session)
    assessment = seeded_assessment(db_session)

    with pytest.raises(HTTPException) as exc:
        assessment_router.submit_assessment(
            assessment.id,
            AssessmentSubmission(answers={"js-b-1": "x"}),
            db=db_session,
            current_user=user,
        )

    assert exc.value.status_code == 400
    assert db_session.query(Response).count() == 0


def test_submit_unknown_assessment(db_session):
    user = create_user(db_session)

    with pytest.raises(HTTPException) as exc:
        AssessmentService(db_session, user).submit(4242, {})

    assert exc.value.status_code == 404
    assert exc.value.detail == "assessment_not_found"


def test_achievement_failure_does_not_break_submission(monkeypatch, db_session):
    user = create_user(db_session)
    assessment = seeded_assessment(db_session)

    def failing_award(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(achievement_rules, "award", failing_award)

    result = AssessmentService(db_session, user).submit(assessment.id, correct_answers(assessment))

    assert result["score"] == 100
    assert assessment_crud.count_completed(db_session, user.id) == 1
    assert achievement_crud.list_achievements(db_session, user.id) == []


def test_results_use_latest_attempt_and_fallback_analysis(monkeypatch, db_session):
    monkeypatch.setattr(assessment_service, "generate_text_with_gpt", lambda prompt: None)
    user = create_user(db_session)
    assessment = seeded_assessment(db_session)
    service = AssessmentService(db_session, user)

    service.submit(assessment.id, correct_answers(assessment))
    service.submit(assessment.id, {"py-b-2": "// This is a comment"})

    results = assessment_router.read_assessment_results(assessment.id, db=db_session, current_user=user)

    assert results["stats"]["correct"] == 0
    assert results["stats"]["total"] == len(assessment.questions)
    assert results["stats"]["score"] == 0
    assert results["analysis"] == assessment_service.GAP_ANALYSIS_FALLBACK
    assert results["knowledgeGaps"]
    assert results["completedAt"] is not None


def test_results_analysis_from_llm(monkeypatch, db_session):
    prompts = []

    def fake_generate(prompt):
        prompts.append(prompt)
        return "Revise comments."

    monkeypatch.setattr(assessment_service, "generate_text_with_gpt", fake_generate)
    user = create_user(db_session)
    assessment = seeded_assessment(db_session)
    AssessmentService(db_session, user).submit(assessment.id, {"py-b-2": "// This is a comment"})

    results = AssessmentService(db_session, user).results(assessment.id)

    assert results["analysis"] == "Revise comments."
    assert "Which of the following is a valid comment in Python?" in prompts[0]


def test_results_without_responses(db_session):
    user = create_user(db_session)
    assessment = seeded_assessment(db_session)

    with pytest.raises(HTTPException) as exc:
        AssessmentService(db_session, user).results(assessment.id)

    assert exc.value.status_code == 404
    assert exc.value.detail == "no_responses"
