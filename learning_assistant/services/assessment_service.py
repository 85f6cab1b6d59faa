import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from learning_assistant.core.openai_service import generate_text_with_gpt
from learning_assistant.core.prompt_manager import get_prompt
from learning_assistant.crud import achievement_crud, assessment_crud
from learning_assistant.gamification import achievement_rules
from learning_assistant.models.assessment.assessment_model import Assessment, Question
from learning_assistant.models.assessment.response_model import Response
from learning_assistant.models.user.user_model import User
from learning_assistant.services import scoring_service

logger = logging.getLogger(__name__)

GAP_ANALYSIS_FALLBACK = "Unable to generate knowledge gap analysis at this time."


def _question_payload(question: Question) -> Dict[str, Any]:
    """Forme 'catalogue' d'une question stockée, pour la correction."""
    return {
        "id": question.slug,
        "correctAnswer": question.correct_answer,
        "topics": list(question.topics or []),
        "explanation": question.explanation,
    }


class AssessmentService:
    """Correction, persistance et relecture des évaluations d'un utilisateur."""

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user

    def _get_assessment(self, assessment_id: int) -> Assessment:
        assessment = assessment_crud.get_assessment(self.db, assessment_id)
        if not assessment:
            raise HTTPException(status_code=404, detail="assessment_not_found")
        return assessment

    def submit(self, assessment_id: int, answers: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        """
        Corrige une tentative, l'enregistre puis attribue les succès.

        ``answers`` est indexé par slug de question. Les questions sans réponse
        comptent comme fausses.
        """
        assessment = self._get_assessment(assessment_id)
        questions = list(assessment.questions)
        unknown = set(answers) - {question.slug for question in questions}
        if unknown:
            raise HTTPException(status_code=400, detail="unknown_question")

        graded = scoring_service.grade_answers([_question_payload(q) for q in questions], answers)
        summary = scoring_service.summarize_results(graded)
        gaps = scoring_service.identify_knowledge_gaps(graded)

        responses = [
            Response(
                user_id=self.user.id,
                question_id=question.id,
                assessment_id=assessment.id,
                answered_option=answer.selected_option,
                is_correct=answer.is_correct,
            )
            for question, answer in zip(questions, graded)
        ]
        assessment_crud.add_responses(self.db, responses)
        assessment_crud.upsert_progress(self.db, self.user.id, assessment.id, score=summary["score"])
        self.db.commit()
        logger.info(
            "Évaluation %s soumise par l'utilisateur %s: score=%s (%s/%s)",
            assessment.id, self.user.id, summary["score"], summary["correct"], summary["total"],
        )

        self._award_submission_achievements(assessment, summary["score"])

        return {
            "userId": str(self.user.id),
            "quizId": str(assessment.id),
            "quizTitle": assessment.title,
            "topic": assessment.subject,
            "score": summary["score"],
            "correctAnswers": summary["correct"],
            "totalQuestions": summary["total"],
            "skillLevel": scoring_service.skill_tier_for_score(summary["score"]).value,
            "knowledgeGaps": [gap.to_dict() for gap in gaps],
            "answers": [answer.to_dict() for answer in graded],
            "completedAt": datetime.now(timezone.utc).isoformat(),
        }

    def _award_submission_achievements(self, assessment: Assessment, score: int) -> None:
        # Best-effort : la soumission est déjà enregistrée.
        try:
            completed = assessment_crud.count_completed(self.db, self.user.id)
            if completed == 1 and not achievement_crud.has_achievement(
                self.db, self.user.id, achievement_rules.FIRST_ASSESSMENT
            ):
                achievement_rules.award(
                    self.db, self.user.id, achievement_rules.FIRST_ASSESSMENT, {"assessment_id": assessment.id}
                )
            if score == 100:
                achievement_rules.award(
                    self.db,
                    self.user.id,
                    achievement_rules.PERFECT_SCORE,
                    {"assessment_id": assessment.id, "score": score},
                )
        except Exception:
            self.db.rollback()
            logger.exception("Attribution des succès échouée pour l'utilisateur %s", self.user.id)

    def _latest_attempt(self, assessment_id: int) -> List[Response]:
        """Les réponses de la dernière tentative (la plus récente pour chaque question)."""
        latest: Dict[int, Response] = {}
        for response in assessment_crud.get_user_responses(self.db, self.user.id, assessment_id):
            latest[response.question_id] = response
        return list(latest.values())

    def results(self, assessment_id: int) -> Dict[str, Any]:
        assessment = self._get_assessment(assessment_id)
        responses = self._latest_attempt(assessment.id)
        if not responses:
            raise HTTPException(status_code=404, detail="no_responses")

        questions_by_id = {question.id: question for question in assessment.questions}
        answered = [r for r in responses if r.question_id in questions_by_id]
        graded = scoring_service.grade_answers(
            [_question_payload(questions_by_id[r.question_id]) for r in answered],
            {questions_by_id[r.question_id].slug: r.answered_option for r in answered},
        )
        summary = scoring_service.summarize_results(graded)
        gaps = scoring_service.identify_knowledge_gaps(graded)

        return {
            "assessmentId": assessment.id,
            "title": assessment.title,
            "stats": summary,
            "knowledgeGaps": [gap.to_dict() for gap in gaps],
            "analysis": self._gap_analysis(assessment, answered, questions_by_id),
            "completedAt": max(r.created_at for r in responses),
        }

    def _gap_analysis(self, assessment: Assessment, responses: List[Response], questions_by_id: Dict[int, Question]) -> str:
        lines = []
        for response in responses:
            question = questions_by_id[response.question_id]
            lines.append(
                f"- Q: {question.question}\n  Answer: {response.answered_option or '(none)'}\n"
                f"  Correct: {question.correct_answer}\n  Result: {'correct' if response.is_correct else 'incorrect'}"
            )
        prompt = get_prompt("gap_analysis", topic=assessment.subject, responses="\n".join(lines))
        analysis = generate_text_with_gpt(prompt)
        if not analysis:
            logger.warning("Analyse des lacunes indisponible pour l'évaluation %s.", assessment.id)
            return GAP_ANALYSIS_FALLBACK
        return analysis
