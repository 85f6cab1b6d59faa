# Fichier: learning_assistant/db/base_class.py
from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    """
    Classe de base pour tous les modèles SQLAlchemy.
    Elle sert aussi à créer les tables au démarrage.
    """
