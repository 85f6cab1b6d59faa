import logging

from sqlalchemy.orm import Session

from learning_assistant.catalog import quiz_bank
from learning_assistant.catalog.levels import DIFFICULTY_ORDER
from learning_assistant.models.assessment.assessment_model import Assessment, Question
from learning_assistant.services.quiz_service import quiz_description, quiz_title

logger = logging.getLogger(__name__)


def assessment_slug(topic: str, difficulty) -> str:
    return f"{topic}-{difficulty.value}"


def seed_assessments(db: Session) -> int:
    """
    Crée une évaluation par (sujet, niveau) depuis la banque de questions.

    Idempotent : les évaluations déjà présentes (même slug) ne sont pas touchées.
    Retourne le nombre d'évaluations créées.
    """
    existing = {slug for (slug,) in db.query(Assessment.slug).all()}
    created = 0

    for topic in quiz_bank.available_topics():
        questions = quiz_bank.get_topic_questions(topic)
        for difficulty in DIFFICULTY_ORDER:
            slug = assessment_slug(topic, difficulty)
            if slug in existing:
                continue

            level_questions = [q for q in questions if q["difficulty"] == difficulty.value]
            if not level_questions:
                continue

            assessment = Assessment(
                slug=slug,
                title=quiz_title(topic, difficulty),
                description=quiz_description(topic, difficulty),
                subject=topic,
                difficulty=difficulty,
            )
            assessment.questions = [
                Question(
                    slug=q["id"],
                    question=q["question"],
                    options=list(q["options"]),
                    correct_answer=q["correctAnswer"],
                    explanation=q.get("explanation"),
                    difficulty=difficulty,
                    topics=list(q.get("topics") or []),
                    position=position,
                )
                for position, q in enumerate(level_questions)
            ]
            db.add(assessment)
            created += 1

    if created:
        db.commit()
        logger.info("✅ %s évaluation(s) créée(s) depuis la banque de questions.", created)
    else:
        logger.info("Évaluations déjà présentes, aucun ajout.")
    return created
