"""Génération de quiz depuis la banque statique (et, en option, via le LLM)."""

from __future__ import annotations

import logging
import math
import random
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from learning_assistant.catalog import quiz_bank
from learning_assistant.catalog.levels import Difficulty, normalize_topic
from learning_assistant.core.openai_service import generate_json_with_gpt
from learning_assistant.core.prompt_manager import get_prompt
from learning_assistant.services import scoring_service

logger = logging.getLogger(__name__)

MINUTES_PER_QUESTION = {
    Difficulty.BEGINNER: 1.0,
    Difficulty.INTERMEDIATE: 1.5,
    Difficulty.ADVANCED: 2.5,
}

MAX_QUESTION_COUNT = 20


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def _topic_label(topic: str) -> str:
    return topic[:1].upper() + topic[1:]


def quiz_title(topic: str, difficulty: Difficulty) -> str:
    name = _topic_label(topic)
    return {
        Difficulty.BEGINNER: f"{name} Fundamentals Assessment",
        Difficulty.INTERMEDIATE: f"Intermediate {name} Skills Assessment",
        Difficulty.ADVANCED: f"Advanced {name} Concepts Assessment",
    }[difficulty]


def quiz_description(topic: str, difficulty: Difficulty) -> str:
    name = _topic_label(topic)
    return {
        Difficulty.BEGINNER: f"Test your basic knowledge of {name} fundamentals including syntax, variables, and simple operations.",
        Difficulty.INTERMEDIATE: f"Challenge your understanding of {name} with questions covering functions, data structures, and more complex concepts.",
        Difficulty.ADVANCED: f"Demonstrate your expertise in advanced {name} topics including optimization, design patterns, and language-specific features.",
    }[difficulty]


def estimated_time(question_count: int, difficulty: Difficulty) -> int:
    return math.ceil(question_count * MINUTES_PER_QUESTION[difficulty])


def generate_quiz(
    topic: str,
    difficulty: Difficulty,
    count: int = 5,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Construit un quiz à partir de la banque de questions.

    Args:
        topic: Sujet demandé (un sujet inconnu utilise les questions Python).
        difficulty: Niveau visé.
        count: Nombre maximum de questions.
        rng: Générateur aléatoire; passer un ``random.Random(seed)`` rend le tirage reproductible.

    Returns:
        Le quiz au format de l'API.
    """
    rng = rng or random.Random()
    candidates = quiz_bank.candidate_questions(topic, difficulty, count)
    rng.shuffle(candidates)
    selected = candidates[:count]

    logger.info(
        "Quiz généré: sujet=%s niveau=%s questions=%s/%s",
        topic, difficulty.value, len(selected), len(candidates),
    )

    return {
        "id": f"{topic}-{difficulty.value}-{_timestamp_ms()}",
        "title": quiz_title(topic, difficulty),
        "description": quiz_description(topic, difficulty),
        "questions": selected,
        "topic": topic,
        "difficulty": difficulty.value,
        "estimatedTime": estimated_time(len(selected), difficulty),
    }


def evaluate_quiz(
    *,
    quiz_id: str,
    title: str | None,
    topic: str,
    question_ids: Sequence[str],
    answers: Mapping[str, Optional[str]],
    user_id: str,
) -> Dict[str, Any]:
    """
    Corrige un quiz du catalogue et renvoie un ``AssessmentResult``
    réutilisable tel quel par l'assembleur de plans.

    Toutes les questions de ``question_ids`` sont notées; ``answers`` ne sert
    qu'à retrouver l'option choisie, une question sautée compte comme fausse.

    Raises:
        KeyError: id absent de la banque de questions.
        ValueError: réponse à une question qui ne fait pas partie du quiz.
    """
    ordered_ids = list(dict.fromkeys(question_ids))
    extra = set(answers) - set(ordered_ids)
    if extra:
        raise ValueError(f"answers_outside_quiz: {sorted(extra)}")

    questions: List[Dict[str, Any]] = []
    for question_id in ordered_ids:
        question = quiz_bank.get_question(question_id)
        if question is None:
            raise KeyError(question_id)
        questions.append(question)

    graded = scoring_service.grade_answers(questions, answers)
    summary = scoring_service.summarize_results(graded)
    gaps = scoring_service.identify_knowledge_gaps(graded)

    return {
        "userId": user_id,
        "quizId": quiz_id,
        "quizTitle": title or "",
        "topic": normalize_topic(topic),
        "score": summary["score"],
        "correctAnswers": summary["correct"],
        "totalQuestions": summary["total"],
        "skillLevel": scoring_service.skill_tier_for_score(summary["score"]).value,
        "knowledgeGaps": [gap.to_dict() for gap in gaps],
        "answers": [answer.to_dict() for answer in graded],
        "completedAt": datetime.now(timezone.utc).isoformat(),
    }


def _normalize_ai_question(raw: Mapping[str, Any], index: int, topic: str, difficulty: Difficulty) -> Optional[Dict[str, Any]]:
    options = raw.get("options")
    if not isinstance(options, list) or len(options) < 2:
        return None
    options = [str(option) for option in options]

    correct = raw.get("correctAnswer")
    if correct is None:
        correct_index = raw.get("correctAnswerIndex")
        if not isinstance(correct_index, int) or not 0 <= correct_index < len(options):
            return None
        correct = options[correct_index]
    if correct not in options:
        return None

    question_text = str(raw.get("question") or "").strip()
    if not question_text:
        return None

    topics = raw.get("topics")
    if not isinstance(topics, list) or not topics:
        topics = [topic]

    return {
        "id": f"ai-{topic}-{difficulty.value[0]}-{index + 1}",
        "question": question_text,
        "options": options,
        "correctAnswer": correct,
        "explanation": str(raw.get("explanation") or ""),
        "difficulty": difficulty.value,
        "topics": [str(t) for t in topics],
    }


def generate_ai_quiz(topic: str, difficulty: Difficulty, count: int = 5) -> Optional[Dict[str, Any]]:
    """Demande un quiz au LLM. Retourne None si la réponse est inexploitable."""
    prompt = get_prompt("quiz_generation", ensure_json=True, topic=topic, difficulty=difficulty.value, count=count)
    payload = generate_json_with_gpt(prompt)
    if not payload or not isinstance(payload.get("questions"), list):
        logger.warning("Quiz IA inexploitable pour le sujet '%s'.", topic)
        return None

    questions = []
    for index, raw in enumerate(payload["questions"]):
        if not isinstance(raw, Mapping):
            continue
        normalized = _normalize_ai_question(raw, index, topic, difficulty)
        if normalized is not None:
            questions.append(normalized)

    if not questions:
        logger.warning("Aucune question IA valide pour le sujet '%s'.", topic)
        return None

    questions = questions[:count]
    return {
        "id": f"{topic}-{difficulty.value}-ai-{_timestamp_ms()}",
        "title": quiz_title(topic, difficulty),
        "description": quiz_description(topic, difficulty),
        "questions": questions,
        "topic": topic,
        "difficulty": difficulty.value,
        "estimatedTime": estimated_time(len(questions), difficulty),
    }
