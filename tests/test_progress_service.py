from datetime import date, timedelta

import pytest

from learning_assistant.api.endpoints import progress_router
from learning_assistant.crud import achievement_crud, learning_plan_crud
from learning_assistant.gamification import achievement_rules
from learning_assistant.services.assessment_service import AssessmentService
from learning_assistant.services.progress_service import ProgressService, calculate_streak
from tests.utils import correct_answers, create_user, seeded_assessment

TODAY = date(2024, 5, 20)


@pytest.mark.parametrize(
    "days,expected",
    [
        ([], 0),
        ([TODAY], 1),
        ([TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2)], 3),
        # Rien aujourd'hui : la série part d'hier
        ([TODAY - timedelta(days=1), TODAY - timedelta(days=2)], 2),
        ([TODAY - timedelta(days=2), TODAY - timedelta(days=3)], 0),
        ([TODAY, TODAY - timedelta(days=2)], 1),
    ],
)
def test_calculate_streak(days, expected):
    assert calculate_streak(days, today=TODAY) == expected


def test_dashboard_for_new_user(db_session):
    user = create_user(db_session)

    dashboard = ProgressService(db_session, user.id).get_dashboard()

    assert dashboard["stats"]["assessmentsCompleted"] == 0
    assert dashboard["stats"]["averageScore"] == 0
    assert dashboard["stats"]["learningStreak"] == 0
    assert dashboard["recentAssessments"] == []
    assert dashboard["skills"] == []
    assert [a["id"] for a in dashboard["achievements"]] == [
        "first-assessment",
        "learning-streak",
        "resource-master",
        "perfect-score",
    ]
    assert not any(a["unlocked"] for a in dashboard["achievements"])


def test_dashboard_aggregates_assessments(db_session):
    user = create_user(db_session)
    python = seeded_assessment(db_session, "python-beginner")
    javascript = seeded_assessment(db_session, "javascript-beginner")

    service = AssessmentService(db_session, user)
    service.submit(python.id, correct_answers(python))
    js_answers = correct_answers(javascript)
    # 2 bonnes réponses sur 5
    kept = dict(list(js_answers.items())[:2])
    service.submit(javascript.id, kept)

    dashboard = progress_router.read_dashboard(db=db_session, current_user=user)
    stats = dashboard["stats"]

    assert stats["assessmentsTaken"] == 2
    assert stats["assessmentsCompleted"] == 2
    assert stats["averageScore"] == 70
    assert stats["totalQuestions"] == len(python.questions) + len(javascript.questions)
    assert stats["correctAnswers"] == len(python.questions) + 2
    assert stats["learningStreak"] == 1

    assert [skill["name"] for skill in dashboard["skills"]] == ["Python", "Javascript"]
    assert [skill["proficiency"] for skill in dashboard["skills"]] == [100, 40]

    recent = {entry["id"]: entry for entry in dashboard["recentAssessments"]}
    assert recent[python.id]["knowledgeGaps"] == []
    assert recent[javascript.id]["knowledgeGaps"]

    achievements = {a["id"]: a for a in dashboard["achievements"]}
    assert achievements["first-assessment"]["unlocked"] is True
    assert achievements["first-assessment"]["unlockedAt"] is not None
    assert achievements["perfect-score"]["unlocked"] is True
    assert achievements["learning-streak"]["progress"] == 1
    assert achievements["learning-streak"]["unlocked"] is False


def _completed_plan(resource_count, minutes=30):
    return {
        "title": "Python Learning Plan",
        "topics": [
            {
                "name": "Python Basics",
                "resources": [
                    {"id": f"r-{i}", "estimatedTime": minutes, "completed": True}
                    for i in range(resource_count)
                ],
            }
        ],
    }


def test_dashboard_counts_plan_resources_and_awards_resource_master(db_session):
    user = create_user(db_session)
    learning_plan_crud.create_plan(db_session, user.id, "python", _completed_plan(15))
    learning_plan_crud.create_plan(db_session, user.id, "python", {"plan": _completed_plan(5, minutes=10)})

    dashboard = ProgressService(db_session, user.id).get_dashboard()

    assert dashboard["stats"]["plansCreated"] == 2
    assert dashboard["stats"]["resourcesCompleted"] == 20
    assert dashboard["stats"]["totalResources"] == 20
    assert dashboard["stats"]["studyTimeMinutes"] == 15 * 30 + 5 * 10
    # Les plans créés aujourd'hui comptent comme activité
    assert dashboard["stats"]["learningStreak"] == 1

    assert achievement_crud.has_achievement(db_session, user.id, achievement_rules.RESOURCE_MASTER)
    master = next(a for a in dashboard["achievements"] if a["id"] == "resource-master")
    assert master["unlocked"] is True
    assert master["progress"] == 20

    # Deuxième lecture : pas de doublon dans le journal
    ProgressService(db_session, user.id).get_dashboard()
    types = [a.achievement_type for a in achievement_crud.list_achievements(db_session, user.id)]
    assert types.count(achievement_rules.RESOURCE_MASTER) == 1


def test_threshold_achievements_awarded_once(db_session):
    user = create_user(db_session)
    metrics = {"learningStreak": 7, "resourcesCompleted": 3}

    assert achievement_rules.award_threshold_achievements(db_session, user.id, metrics) == [
        achievement_rules.LEARNING_STREAK
    ]
    assert achievement_rules.award_threshold_achievements(db_session, user.id, metrics) == []

    streak = achievement_crud.get_first_of_type(db_session, user.id, achievement_rules.LEARNING_STREAK)
    assert streak.achievement_data == {"label": "7-Day Learning Streak", "learningStreak": 7}


def test_achievement_progress_is_capped():
    entries = achievement_rules.achievement_progress({"learningStreak": 12}, {})
    streak = next(e for e in entries if e["id"] == "learning-streak")
    assert streak["progress"] == 7
    assert streak["maxProgress"] == 7
    assert streak["unlocked"] is True
    assert streak["unlockedAt"] is None
