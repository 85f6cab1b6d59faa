"""Assemblage des plans d'apprentissage (catalogue statique + LLM en option)."""

from __future__ import annotations

import copy
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping

from learning_assistant.catalog import learning_resources, plan_templates
from learning_assistant.catalog.levels import Difficulty, format_topic_name, normalize_topic
from learning_assistant.core.openai_service import generate_text_with_gpt
from learning_assistant.core.prompt_manager import get_prompt
from learning_assistant.services.scoring_service import (
    calculate_score_percentage,
    round_half_up,
    skill_tier_for_score,
)

logger = logging.getLogger(__name__)

BEGINNER_KEYWORDS = ("beginner", "start", "new to")
ADVANCED_KEYWORDS = ("advanced", "expert")


class PlanUpdateError(ValueError):
    """Levée quand une modification de plan vise une ressource inexistante."""


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def filter_resources_for_tier(resources: Iterable[Mapping[str, Any]], tier: Difficulty) -> List[Dict[str, Any]]:
    """beginner: débutant seul; intermediate: débutant + intermédiaire; advanced: tout."""
    return [
        dict(resource)
        for resource in resources
        if Difficulty(resource["difficulty"]).rank <= tier.rank
    ]


def resources_per_topic(tier: Difficulty) -> int:
    return 5 if tier == Difficulty.ADVANCED else 3


def _collect_categories(knowledge_gaps: Iterable[Mapping[str, Any]], topic: str) -> List[str]:
    categories: List[str] = []
    for gap in knowledge_gaps:
        for question_id in gap.get("questionIds") or []:
            for category in learning_resources.categories_for_question(str(question_id)):
                if category not in categories:
                    categories.append(category)

    if len(categories) < 2:
        for category in learning_resources.default_categories_for(topic):
            if category not in categories:
                categories.append(category)
    return categories


def _build_topic_entries(categories: Iterable[str], tier: Difficulty) -> List[Dict[str, Any]]:
    limit = resources_per_topic(tier)
    entries = []
    for category in categories:
        resources = filter_resources_for_tier(learning_resources.get_category_resources(category), tier)[:limit]
        entries.append(
            {
                "name": format_topic_name(category),
                "resources": resources,
                "completed": False,
                "progress": 0,
            }
        )
    return entries


def _estimated_total_time(topics: Iterable[Mapping[str, Any]]) -> int:
    return sum(
        int(resource.get("estimatedTime") or 0)
        for topic in topics
        for resource in topic.get("resources", [])
    )


def assemble_plan_from_assessment(result: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Construit un plan à partir d'un résultat d'évaluation.

    Les catégories de ressources viennent des questions manquées; le palier
    (donc le filtrage des ressources) vient du score.
    """
    user_id = str(result.get("userId") or "guest-user")
    raw_topic = str(result.get("topic") or "")
    topic = normalize_topic(raw_topic)
    tier = skill_tier_for_score(float(result.get("score") or 0))

    categories = _collect_categories(result.get("knowledgeGaps") or [], topic)
    topics = _build_topic_entries(categories, tier)
    now = _now_iso()

    logger.info(
        "Plan assemblé pour l'utilisateur %s: sujet=%s palier=%s catégories=%s",
        user_id, topic, tier.value, categories,
    )

    return {
        "id": f"lp-{user_id}-{int(time.time() * 1000)}",
        "title": f"{format_topic_name(raw_topic.strip())} Learning Plan",
        "description": f"Personalized learning plan based on your {result.get('quizTitle') or 'Assessment'} performance.",
        "topic": topic,
        "skillLevel": tier.value,
        "topics": topics,
        "estimatedTotalTime": _estimated_total_time(topics),
        "progress": 0,
        "createdAt": now,
        "updatedAt": now,
        "assessmentId": result.get("quizId"),
        "userId": user_id,
    }


def plan_from_question(question: str) -> Dict[str, Any]:
    """Parcours prédéfini choisi par mots-clés dans la question de l'utilisateur."""
    lowered = question.lower()
    key = plan_templates.select_template_key(question)
    template = plan_templates.get_template(key)

    title = template["title"]
    if any(keyword in lowered for keyword in BEGINNER_KEYWORDS):
        title = f"Beginner's Guide to {title}"
    elif any(keyword in lowered for keyword in ADVANCED_KEYWORDS):
        title = f"Advanced {title}"

    return {
        "title": title,
        "description": f'Learning plan for: "{question}"\n\n{template["description"]}',
        "topic": key,
        "steps": template["steps"],
        "additionalResources": template["additionalResources"],
    }


def _static_study_plan(topic: str, tier: Difficulty) -> Dict[str, Any]:
    key = plan_templates.select_template_key(topic)
    template = plan_templates.get_template(key)
    categories = learning_resources.categories_for_subject(topic)
    return {
        "title": f"{format_topic_name(topic)} Learning Plan",
        "description": template["description"],
        "steps": template["steps"],
        "topics": _build_topic_entries(categories, tier),
        "additionalResources": template["additionalResources"],
    }


def build_study_plan(topic: str, current_level: str, goals: str | None) -> Dict[str, Any]:
    """
    Prépare le ``plan_data`` d'un plan créé par l'utilisateur.

    Le texte vient du LLM quand il est disponible; sinon le plan est assemblé
    depuis le catalogue au palier demandé.
    """
    normalized_topic = normalize_topic(topic)
    tier = Difficulty.parse(current_level)

    prompt = get_prompt("study_plan", topic=normalized_topic, current_level=tier.value, goals=goals)
    generated = generate_text_with_gpt(prompt)
    static_plan = _static_study_plan(normalized_topic, tier)

    if generated:
        plan: Dict[str, Any] = {"text": generated, "topics": static_plan["topics"]}
        source = "ai"
    else:
        logger.info("Plan statique utilisé pour '%s' (LLM indisponible).", normalized_topic)
        plan = static_plan
        source = "catalog"

    plan["topic"] = normalized_topic
    plan["progress"] = 0
    plan["estimatedTotalTime"] = _estimated_total_time(plan["topics"])

    return {
        "plan": plan,
        "currentLevel": tier.value,
        "goals": goals,
        "generatedAt": _now_iso(),
        "source": source,
    }


def _plan_body(plan_data: Mapping[str, Any]) -> Mapping[str, Any]:
    """``plan_data`` stocke soit le plan directement, soit ``{"plan": ...}``."""
    inner = plan_data.get("plan")
    return inner if isinstance(inner, Mapping) else plan_data


def recompute_progress(plan: Dict[str, Any]) -> Dict[str, Any]:
    """Met à jour la progression des thèmes puis celle du plan (moyenne des thèmes)."""
    topics = plan.get("topics") or []
    for topic in topics:
        resources = topic.get("resources") or []
        done = sum(1 for resource in resources if resource.get("completed"))
        topic["progress"] = calculate_score_percentage(done, len(resources))
        topic["completed"] = bool(resources) and done == len(resources)

    if topics:
        plan["progress"] = round_half_up(sum(topic["progress"] for topic in topics) / len(topics))
    else:
        plan["progress"] = 0
    return plan


def toggle_resource(plan_data: Mapping[str, Any], topic_index: int, resource_id: str) -> Dict[str, Any]:
    """
    Bascule l'état 'terminé' d'une ressource et renvoie un nouveau ``plan_data``.

    Une copie est renvoyée : la colonne JSON doit être réassignée pour que
    SQLAlchemy détecte la modification.
    """
    updated = copy.deepcopy(dict(plan_data))
    plan = _plan_body(updated)
    topics = plan.get("topics") or []

    if not 0 <= topic_index < len(topics):
        raise PlanUpdateError("topic_not_found")

    for resource in topics[topic_index].get("resources") or []:
        if str(resource.get("id") or resource.get("url")) == resource_id:
            resource["completed"] = not resource.get("completed", False)
            break
    else:
        raise PlanUpdateError("resource_not_found")

    recompute_progress(plan)
    plan["updatedAt"] = _now_iso()
    return updated


def plan_resource_stats(plan_data: Mapping[str, Any]) -> Dict[str, int]:
    """Compte les ressources (et minutes) terminées d'un plan stocké."""
    plan = _plan_body(plan_data)
    total = completed = minutes = 0
    for topic in plan.get("topics") or []:
        for resource in topic.get("resources") or []:
            total += 1
            if resource.get("completed"):
                completed += 1
                minutes += int(resource.get("estimatedTime") or 0)
    return {"total": total, "completed": completed, "minutes": minutes}
