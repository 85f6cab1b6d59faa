# Fichier : learning_assistant/core/prompt_manager.py

import os
import re
from functools import lru_cache
from typing import Any, Dict

# --- Emplacement des prompts .md ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PROMPTS_DIR = os.path.join(BASE_DIR, 'prompts')

GLOBAL_DEFAULTS: Dict[str, Any] = {
    "current_level": "beginner",
    "goals": "build a solid understanding of the fundamentals",
    "count": 5,
}

# --- Regex pour {{ var }} et {{ var|default(...) }} ---
PLACEHOLDER_RE = re.compile(r"{{\s*([a-zA-Z_][\w\.]*)\s*(?:\|default\(([^)]*)\))?\s*}}")

def _coerce_literal(s: str) -> Any:
    """Transforme 'true'/'false'/nombre/'null' en littéraux Python; sinon string sans guillemets."""
    t = s.strip()
    if t.lower() in ("true", "false"):
        return t.lower() == "true"
    if t.lower() == "null":
        return None
    try:
        if "." in t:
            return float(t)
        return int(t)
    except ValueError:
        pass
    if (t.startswith("'") and t.endswith("'")) or (t.startswith('"') and t.endswith('"')):
        return t[1:-1]
    return t

def _lookup(context: Dict[str, Any], dotted: str) -> Any:
    cur: Any = context
    for part in dotted.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        elif hasattr(cur, part):
            cur = getattr(cur, part)
        else:
            return None
    return cur

def _render_template(template: str, context: Dict[str, Any]) -> str:
    def repl(m: re.Match):
        val = _lookup(context, m.group(1))
        default_raw = m.group(2)

        if val is None and default_raw is not None:
            val = _coerce_literal(default_raw)

        if isinstance(val, bool):
            return "true" if val else "false"
        if val is None:
            return ""
        return str(val)

    return PLACEHOLDER_RE.sub(repl, template)

JSON_GUARDRAIL = (
    "\n\n[OUTPUT CONSTRAINT]\n"
    "- Answer STRICTLY with a single valid JSON object.\n"
    "- No backticks, no text outside the JSON."
)

@lru_cache(maxsize=32)
def get_prompt_template(name: str) -> str:
    """Charge un modèle de prompt depuis un fichier .md."""
    full_path = os.path.join(PROMPTS_DIR, f"{name}.md")
    with open(full_path, 'r', encoding='utf-8') as f:
        return f.read()

def get_prompt(name: str, ensure_json: bool = False, **kwargs) -> str:
    """
    Récupère un template et injecte variables + défauts.
    - Supporte {{ var }} et {{ var|default(...) }}.
    - ensure_json ajoute une garde 'JSON only'.
    """
    context = dict(GLOBAL_DEFAULTS)
    context.update({k: v for k, v in kwargs.items() if v is not None})

    rendered = _render_template(get_prompt_template(name), context)
    if ensure_json:
        rendered = rendered + JSON_GUARDRAIL
    return rendered
