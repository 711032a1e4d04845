# Fichier: pix_api/schemas/user_schema.py
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from pix_api.models.user_model import User
from pix_api.schemas.jsonapi_schema import document


# --- Schéma pour la Création d'Utilisateur ---
# La validation métier (CGU, format de l'email, robustesse du mot de passe)
# est faite par user_crud pour renvoyer une erreur par attribut.
class UserCreateAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="first-name")
    last_name: str = Field(alias="last-name")
    email: str
    password: str
    cgu: bool = False


class UserCreateData(BaseModel):
    type: Optional[str] = "users"
    attributes: UserCreateAttributes


class UserCreateDocument(BaseModel):
    data: UserCreateData


# --- Sérialisation ---
# Note : le mot de passe n'est jamais sérialisé.
def serialize_user(user: User) -> dict[str, Any]:
    return document({
        "type": "users",
        "id": str(user.id),
        "attributes": {
            "first-name": user.first_name,
            "last-name": user.last_name,
            "email": user.email,
            "cgu": user.cgu,
        },
    })
