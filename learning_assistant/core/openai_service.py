import logging
import json
from openai import OpenAI
from learning_assistant.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI learning assistant that helps students understand programming "
    "concepts, identify knowledge gaps and plan their studies."
)

# Initialize the OpenAI client
openai_client = None
if settings.OPENAI_API_KEY:
    try:
        openai_client = OpenAI(api_key=settings.OPENAI_API_KEY)
        logger.info("✅ Client OpenAI configuré avec succès.")
    except Exception as e:
        logger.error(f"❌ Erreur lors de la configuration du client OpenAI: {e}")
else:
    logger.warning("OPENAI_API_KEY absente: les fonctionnalités IA utiliseront les contenus statiques.")


def generate_json_with_gpt(prompt: str, model: str | None = None) -> dict | None:
    """
    Génère une réponse structurée en JSON avec un modèle OpenAI.

    Args:
        prompt: Le prompt détaillé pour la génération.
        model: Le modèle OpenAI à utiliser (par défaut ``settings.OPENAI_MODEL``).

    Returns:
        Un dictionnaire Python, ou None en cas d'erreur.
    """
    if not openai_client:
        logger.error("Le client OpenAI n'est pas initialisé. Impossible de continuer.")
        return None

    model = model or settings.OPENAI_MODEL
    logger.info(f"Début de la génération JSON avec le modèle OpenAI: {model}")
    response_text = None
    try:
        response = openai_client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": DEFAULT_SYSTEM_PROMPT + " You only answer with valid JSON."},
                {"role": "user", "content": prompt}
            ],
            response_format={"type": "json_object"},
            temperature=settings.OPENAI_TEMPERATURE,
        )

        response_text = response.choices[0].message.content
        logger.info("Réponse brute de l'API OpenAI reçue.")

        return json.loads(response_text)

    except json.JSONDecodeError as e:
        logger.error(f"Erreur de parsing JSON de la réponse OpenAI: {e}\nRéponse reçue:\n{response_text}")
        return None
    except Exception as e:
        logger.error(f"Une erreur inattendue est survenue lors de l'appel à l'API OpenAI: {e}", exc_info=True)
        return None


def generate_text_with_gpt(prompt: str, system: str | None = None, model: str | None = None) -> str | None:
    """Génère une réponse texte libre. Retourne None si l'API est indisponible."""
    if not openai_client:
        logger.error("Le client OpenAI n'est pas initialisé. Impossible de continuer.")
        return None

    model = model or settings.OPENAI_MODEL
    try:
        response = openai_client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system or DEFAULT_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=settings.OPENAI_TEMPERATURE,
        )
    except Exception as e:
        logger.error(f"Une erreur inattendue est survenue lors de l'appel à l'API OpenAI: {e}", exc_info=True)
        return None

    content = response.choices[0].message.content
    if not content or not content.strip():
        logger.warning("Réponse OpenAI vide pour le modèle %s.", model)
        return None
    return content.strip()
