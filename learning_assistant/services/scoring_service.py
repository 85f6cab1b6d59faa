"""Score, palier de compétence et heuristique des lacunes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from learning_assistant.catalog.levels import Difficulty

BEGINNER_THRESHOLD = 40
ADVANCED_THRESHOLD = 75


def round_half_up(value: float) -> int:
    """Arrondi 'commercial' (0.5 -> 1), pour des valeurs positives."""
    return int(math.floor(value + 0.5))


def calculate_score_percentage(correct: int, total: int) -> int:
    """Pourcentage entier de bonnes réponses. ``total == 0`` donne 0."""
    if total <= 0:
        return 0
    # Arithmétique entière : évite les erreurs de flottant sur les x.5
    return (correct * 200 + total) // (2 * total)


def skill_tier_for_score(score: float) -> Difficulty:
    if score < BEGINNER_THRESHOLD:
        return Difficulty.BEGINNER
    if score < ADVANCED_THRESHOLD:
        return Difficulty.INTERMEDIATE
    return Difficulty.ADVANCED


@dataclass
class GradedAnswer:
    question_id: str
    selected_option: Optional[str]
    correct_option: str
    is_correct: bool
    topics: List[str] = field(default_factory=list)
    explanation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questionId": self.question_id,
            "selectedOption": self.selected_option,
            "correctAnswer": self.correct_option,
            "isCorrect": self.is_correct,
            "topics": list(self.topics),
            "explanation": self.explanation,
        }


@dataclass
class KnowledgeGap:
    topic: str
    missed: int
    confidence: int
    question_ids: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic": self.topic,
            "missed": self.missed,
            "confidence": self.confidence,
            "questionIds": list(self.question_ids),
        }


def grade_answers(questions: Sequence[Mapping[str, Any]], answers: Mapping[str, Optional[str]]) -> List[GradedAnswer]:
    """
    Corrige un lot de réponses.

    ``questions`` suit la forme du catalogue (``id``, ``correctAnswer``,
    ``topics``) et ``answers`` associe un id de question à l'option choisie.
    Une question sans réponse compte comme fausse.
    """
    graded: List[GradedAnswer] = []
    for question in questions:
        question_id = str(question["id"])
        selected = answers.get(question_id)
        correct_option = question["correctAnswer"]
        graded.append(
            GradedAnswer(
                question_id=question_id,
                selected_option=selected,
                correct_option=correct_option,
                is_correct=selected is not None and selected == correct_option,
                topics=list(question.get("topics") or []),
                explanation=question.get("explanation"),
            )
        )
    return graded


def identify_knowledge_gaps(graded: Iterable[GradedAnswer]) -> List[KnowledgeGap]:
    """
    Regroupe les questions manquées par sous-thème et les classe par nombre
    d'erreurs décroissant (à égalité, ordre de première apparition).
    """
    stats: Dict[str, Dict[str, Any]] = {}
    for answer in graded:
        for topic in answer.topics:
            entry = stats.setdefault(topic, {"total": 0, "correct": 0, "missed": []})
            entry["total"] += 1
            if answer.is_correct:
                entry["correct"] += 1
            elif answer.question_id not in entry["missed"]:
                entry["missed"].append(answer.question_id)

    gaps = [
        KnowledgeGap(
            topic=topic,
            missed=len(entry["missed"]),
            confidence=calculate_score_percentage(entry["correct"], entry["total"]),
            question_ids=entry["missed"],
        )
        for topic, entry in stats.items()
        if entry["missed"]
    ]
    # sorted() est stable : l'ordre d'insertion départage les ex-aequo.
    return sorted(gaps, key=lambda gap: gap.missed, reverse=True)


def summarize_results(graded: Sequence[GradedAnswer]) -> Dict[str, int]:
    total = len(graded)
    correct = sum(1 for answer in graded if answer.is_correct)
    return {
        "total": total,
        "correct": correct,
        "incorrect": total - correct,
        "score": calculate_score_percentage(correct, total),
    }
