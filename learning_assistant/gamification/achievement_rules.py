"""
Règles des succès affichés sur le tableau de bord.

Le journal ``achievements`` stocke des événements (``achievement_type`` en
snake_case); le catalogue ci-dessous décrit leur présentation (id en
kebab-case, titre, seuil) et la statistique du tableau de bord qui mesure la
progression vers ce seuil.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from learning_assistant.crud import achievement_crud

logger = logging.getLogger(__name__)

FIRST_ASSESSMENT = "first_assessment"
PERFECT_SCORE = "perfect_score"
LEARNING_STREAK = "learning_streak"
RESOURCE_MASTER = "resource_master"


@dataclass(frozen=True)
class AchievementRule:
    slug: str
    achievement_type: str
    title: str
    description: str
    # Libellé stocké dans achievement_data au moment de l'attribution
    label: str
    target: int
    # Clé de DashboardStats (ou "perfectScores") mesurant la progression
    metric: str


ACHIEVEMENT_RULES: List[AchievementRule] = [
    AchievementRule(
        slug="first-assessment",
        achievement_type=FIRST_ASSESSMENT,
        title="First Steps",
        description="Complete your first assessment",
        label="First Assessment Completed",
        target=1,
        metric="assessmentsCompleted",
    ),
    AchievementRule(
        slug="learning-streak",
        achievement_type=LEARNING_STREAK,
        title="Consistent Learner",
        description="Study for 7 days in a row",
        label="7-Day Learning Streak",
        target=7,
        metric="learningStreak",
    ),
    AchievementRule(
        slug="resource-master",
        achievement_type=RESOURCE_MASTER,
        title="Resource Master",
        description="Complete 20 learning resources",
        label="20 Resources Completed",
        target=20,
        metric="resourcesCompleted",
    ),
    AchievementRule(
        slug="perfect-score",
        achievement_type=PERFECT_SCORE,
        title="Perfect Score",
        description="Get 100% on any assessment",
        label="Perfect Score",
        target=1,
        metric="perfectScores",
    ),
]

RULES_BY_TYPE: Dict[str, AchievementRule] = {rule.achievement_type: rule for rule in ACHIEVEMENT_RULES}

# Succès attribués quand une statistique franchit son seuil (les autres le sont à la soumission)
THRESHOLD_TYPES = (LEARNING_STREAK, RESOURCE_MASTER)


def rule_for(achievement_type: str) -> AchievementRule:
    return RULES_BY_TYPE[achievement_type]


def award(db: Session, user_id: int, achievement_type: str, extra: Optional[Mapping[str, object]] = None):
    """Enregistre un succès avec son libellé. Les erreurs sont laissées à l'appelant."""
    rule = rule_for(achievement_type)
    data = {"label": rule.label}
    if extra:
        data.update(extra)
    return achievement_crud.record_achievement(db, user_id, achievement_type, data)


def award_threshold_achievements(db: Session, user_id: int, metrics: Mapping[str, int]) -> List[str]:
    """
    Attribue ``learning_streak`` / ``resource_master`` la première fois que le
    seuil est atteint. Best-effort : un échec est journalisé puis ignoré.
    """
    awarded: List[str] = []
    for achievement_type in THRESHOLD_TYPES:
        rule = rule_for(achievement_type)
        value = int(metrics.get(rule.metric, 0))
        if value < rule.target:
            continue
        try:
            if achievement_crud.has_achievement(db, user_id, achievement_type):
                continue
            award(db, user_id, achievement_type, {rule.metric: value})
            awarded.append(achievement_type)
        except Exception:
            db.rollback()
            logger.exception("Attribution du succès '%s' échouée pour l'utilisateur %s", achievement_type, user_id)
    return awarded


def achievement_progress(metrics: Mapping[str, int], unlocked_at: Mapping[str, object]) -> List[Dict[str, object]]:
    """Catalogue des succès avec la progression de l'utilisateur."""
    entries = []
    for rule in ACHIEVEMENT_RULES:
        value = int(metrics.get(rule.metric, 0))
        unlocked_when = unlocked_at.get(rule.achievement_type)
        entries.append(
            {
                "id": rule.slug,
                "title": rule.title,
                "description": rule.description,
                "progress": min(value, rule.target),
                "maxProgress": rule.target,
                "unlocked": unlocked_when is not None or value >= rule.target,
                "unlockedAt": unlocked_when,
            }
        )
    return entries
