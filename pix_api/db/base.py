"""Déclare l'ensemble des modèles SQLAlchemy pour la création des tables."""

from pix_api.db.base_class import Base

from pix_api.models.user_model import User
from pix_api.models.answer_model import Answer

__all__ = (
    "Base",
    "User",
    "Answer",
)
