"""
Chat de recherche : sélection de documents par mots-clés et réponse
construite par gabarit selon le type de question.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Sequence

from learning_assistant.catalog import knowledge_base
from learning_assistant.catalog.knowledge_base import KnowledgeDocument
from learning_assistant.catalog.levels import Difficulty, normalize_topic
from learning_assistant.core.openai_service import generate_text_with_gpt
from learning_assistant.core.prompt_manager import get_prompt

logger = logging.getLogger(__name__)

MAX_DOCUMENTS = 3
SNIPPET_LENGTH = 150
SENTENCE_SPLIT_RE = re.compile(r"\.\s+")


def score_document(document: KnowledgeDocument, question: str, topic: str) -> float:
    """Score de pertinence d'un document pour une question déjà en minuscules."""
    score = 0.0
    if topic in document.keywords:
        score += 3

    for keyword in document.keywords:
        if keyword in question:
            score += 2 if len(keyword) > 5 else 1

    content = document.content.lower()
    for word in question.split():
        if len(word) > 3 and word in content:
            score += 0.5
    return score


def retrieve_documents(question: str, topic: str) -> List[KnowledgeDocument]:
    lowered = question.lower()
    scored = [(doc, score_document(doc, lowered, topic)) for doc in knowledge_base.get_documents(topic)]
    relevant = [item for item in scored if item[1] > 0]
    relevant.sort(key=lambda item: item[1], reverse=True)
    return [doc for doc, _ in relevant[:MAX_DOCUMENTS]]


def _snippet(content: str) -> str:
    return content[:SNIPPET_LENGTH] + ("..." if len(content) > SNIPPET_LENGTH else "")


def _first_sentence(content: str) -> str:
    # Sans point, la phrase est vide.
    end = content.find(".")
    return content[:end] if end >= 0 else ""


def _best_sentence(content: str, question: str) -> str:
    words = [word for word in question.split() if len(word) > 3]
    sentences = SENTENCE_SPLIT_RE.split(content)
    best, best_matches = sentences[0], 0
    for sentence in sentences:
        lowered = sentence.lower()
        matches = sum(1 for word in words if word in lowered)
        if matches > best_matches:
            best, best_matches = sentence, matches
    return best


def compose_answer(question: str, topic: str, documents: Sequence[KnowledgeDocument]) -> str:
    """Réponse 'à gabarit' : le premier document, complété par le second selon le type de question."""
    lowered = question.lower()
    primary = documents[0].content
    secondary = documents[1].content if len(documents) > 1 else None

    if "what is" in lowered or "definition" in lowered or lowered.startswith("define"):
        answer = f"{primary} "
        if secondary is not None:
            answer += f"Additionally, you should know that {_first_sentence(secondary)}"
    elif any(marker in lowered for marker in ("how to", "how do", "example", "code for")):
        answer = f"{primary} "
        if secondary is not None:
            answer += f"For more advanced usage: {secondary}"
    elif any(marker in lowered for marker in ("compare", "difference", "versus", "vs")):
        answer = f"When considering differences: {primary} "
        if secondary is not None:
            answer += f"In contrast, {secondary}"
    elif "best practice" in lowered or "when should" in lowered:
        answer = f"Best practices for {topic}: {primary} "
        if secondary is not None:
            answer += f"Additionally, consider that {secondary}"
    elif "why" in lowered or "reason" in lowered:
        answer = f"The reason is: {primary} "
        if secondary is not None:
            answer += f"Furthermore, {secondary}"
    elif len(lowered) < 15 or not lowered.endswith("?"):
        answer = f"{primary} "
        if secondary is not None:
            answer += f"\n\nAdditional information: {secondary}"
    else:
        answer = f"{primary} "
        if secondary is not None:
            answer += f"{_best_sentence(secondary, lowered)}."
    return answer


def answer_question(question: str, topic: str | None = "python") -> Dict[str, Any]:
    """
    Répond à une question à partir de la base de connaissances du sujet.

    Returns:
        ``{"answer": str, "sources": [{"title", "url", "snippet"}]}``
    """
    topic = normalize_topic(topic) or knowledge_base.DEFAULT_TOPIC
    documents = retrieve_documents(question, topic)

    if not documents:
        intro = knowledge_base.get_introduction(topic)
        logger.info("RAG: aucun document pertinent pour '%s' (sujet %s).", question, topic)
        return {
            "answer": (
                "I don't have specific information about that query, but here's some "
                f"general information about {topic}: {intro.content}"
            ),
            "sources": [{"title": intro.title, "url": intro.url, "snippet": intro.content[:SNIPPET_LENGTH] + "..."}],
        }

    return {
        "answer": compose_answer(question, topic, documents),
        "sources": [{"title": doc.title, "url": doc.url, "snippet": _snippet(doc.content)} for doc in documents],
    }


def explain_concept(concept: str, current_level: str | None = None, topic: str | None = None) -> Dict[str, Any]:
    """Explication par le LLM; à défaut, la réponse du chat de recherche."""
    level = Difficulty.parse(current_level).value if current_level else Difficulty.BEGINNER.value
    prompt = get_prompt("explanation", concept=concept, current_level=level)
    explanation = generate_text_with_gpt(prompt)
    if explanation:
        return {"explanation": explanation, "sources": [], "source": "ai"}

    logger.info("Explication de repli (recherche) pour '%s'.", concept)
    fallback = answer_question(concept, topic or knowledge_base.DEFAULT_TOPIC)
    return {"explanation": fallback["answer"], "sources": fallback["sources"], "source": "retrieval"}
