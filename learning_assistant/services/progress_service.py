import logging
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from learning_assistant.catalog.levels import format_topic_name
from learning_assistant.crud import achievement_crud, assessment_crud, learning_plan_crud
from learning_assistant.gamification import achievement_rules
from learning_assistant.models.assessment.response_model import Response
from learning_assistant.models.learning.learning_plan_model import LearningPlan
from learning_assistant.models.progress.user_progress_model import UserProgress
from learning_assistant.services import plan_service, scoring_service

logger = logging.getLogger(__name__)

RECENT_ASSESSMENTS_LIMIT = 5


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite renvoie des datetimes naïfs : on les considère en UTC.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def calculate_streak(activity_days: Iterable[date], today: Optional[date] = None) -> int:
    """
    Nombre de jours d'activité consécutifs, comptés depuis aujourd'hui
    (ou depuis hier s'il n'y a encore rien aujourd'hui).
    """
    day_set = set(activity_days)
    if not day_set:
        return 0

    today = today or datetime.now(timezone.utc).date()
    if today in day_set:
        current_day = today
    elif (today - timedelta(days=1)) in day_set:
        current_day = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while current_day in day_set:
        streak += 1
        current_day -= timedelta(days=1)
    return streak


class ProgressService:
    """Agrège les réponses, évaluations et plans d'un utilisateur pour le tableau de bord."""

    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    def _activity_days(self, responses: List[Response], plans: List[LearningPlan]) -> set[date]:
        days: set[date] = set()
        for response in responses:
            created = _as_utc(response.created_at)
            if created:
                days.add(created.date())
        for plan in plans:
            for stamp in (plan.created_at, plan.updated_at):
                stamp = _as_utc(stamp)
                if stamp:
                    days.add(stamp.date())
        return days

    def _gap_topics_by_assessment(self, responses: List[Response]) -> Dict[int, List[str]]:
        """Lacunes de la dernière tentative de chaque évaluation."""
        latest: Dict[int, Dict[int, Response]] = defaultdict(dict)
        for response in responses:
            latest[response.assessment_id][response.question_id] = response

        gaps: Dict[int, List[str]] = {}
        for assessment_id, by_question in latest.items():
            attempt = list(by_question.values())
            graded = scoring_service.grade_answers(
                [
                    {
                        "id": r.question.slug,
                        "correctAnswer": r.question.correct_answer,
                        "topics": r.question.topics or [],
                    }
                    for r in attempt
                ],
                {r.question.slug: r.answered_option for r in attempt},
            )
            gaps[assessment_id] = [gap.topic for gap in scoring_service.identify_knowledge_gaps(graded)]
        return gaps

    def _recent_assessments(self, completed: List[UserProgress], gaps: Dict[int, List[str]]) -> List[Dict[str, Any]]:
        recent = sorted(
            completed,
            key=lambda entry: (_as_utc(entry.updated_at) or datetime.min.replace(tzinfo=timezone.utc), entry.id),
            reverse=True,
        )[:RECENT_ASSESSMENTS_LIMIT]
        return [
            {
                "id": entry.assessment_id,
                "title": entry.assessment.title if entry.assessment else f"Assessment {entry.assessment_id}",
                "score": entry.score,
                "completedAt": _as_utc(entry.updated_at),
                "knowledgeGaps": gaps.get(entry.assessment_id, []),
            }
            for entry in recent
        ]

    def _skills(self, completed: List[UserProgress]) -> List[Dict[str, Any]]:
        by_subject: Dict[str, List[UserProgress]] = defaultdict(list)
        for entry in completed:
            if entry.assessment is not None:
                by_subject[entry.assessment.subject].append(entry)

        skills = []
        for subject, entries in by_subject.items():
            skills.append(
                {
                    "name": format_topic_name(subject),
                    "proficiency": scoring_service.round_half_up(sum(e.score for e in entries) / len(entries)),
                    "lastPracticed": max((_as_utc(e.updated_at) for e in entries if e.updated_at), default=None),
                }
            )
        return sorted(skills, key=lambda skill: skill["proficiency"], reverse=True)

    def get_dashboard(self) -> Dict[str, Any]:
        responses = assessment_crud.get_user_responses(self.db, self.user_id)
        progress_entries = assessment_crud.list_user_progress(self.db, self.user_id)
        plans = learning_plan_crud.list_plans(self.db, self.user_id)

        completed = [entry for entry in progress_entries if entry.completed]
        taken_ids = {entry.assessment_id for entry in progress_entries} | {r.assessment_id for r in responses}

        resource_totals = {"total": 0, "completed": 0, "minutes": 0}
        for plan in plans:
            for key, value in plan_service.plan_resource_stats(plan.plan_data or {}).items():
                resource_totals[key] += value

        stats = {
            "assessmentsTaken": len(taken_ids),
            "assessmentsCompleted": len(completed),
            "averageScore": (
                scoring_service.round_half_up(sum(e.score for e in completed) / len(completed)) if completed else 0
            ),
            "totalQuestions": len(responses),
            "correctAnswers": sum(1 for r in responses if r.is_correct),
            "plansCreated": len(plans),
            "resourcesCompleted": resource_totals["completed"],
            "totalResources": resource_totals["total"],
            "studyTimeMinutes": resource_totals["minutes"],
            "learningStreak": calculate_streak(self._activity_days(responses, plans)),
        }

        metrics = dict(stats)
        metrics["perfectScores"] = sum(1 for e in completed if e.score == 100)
        achievement_rules.award_threshold_achievements(self.db, self.user_id, metrics)

        unlocked_at: Dict[str, Any] = {}
        for achievement in achievement_crud.list_achievements(self.db, self.user_id):
            unlocked_at.setdefault(achievement.achievement_type, _as_utc(achievement.created_at))

        logger.info("Tableau de bord calculé pour l'utilisateur %s: %s", self.user_id, stats)

        return {
            "stats": stats,
            "recentAssessments": self._recent_assessments(completed, self._gap_topics_by_assessment(responses)),
            "skills": self._skills(completed),
            "achievements": achievement_rules.achievement_progress(metrics, unlocked_at),
        }
