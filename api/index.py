"""Point d'entrée Vercel : expose l'application FastAPI sous le nom ``app``."""

from __future__ import annotations

import sys
from pathlib import Path

# Vercel exécute ce fichier depuis api/ : la racine du dépôt doit être importable.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from learning_assistant.main import app  # noqa: E402,F401
