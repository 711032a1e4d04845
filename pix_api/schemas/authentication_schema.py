# Fichier: pix_api/schemas/authentication_schema.py

from typing import Any, Optional

from pydantic import BaseModel


class AuthenticationAttributes(BaseModel):
    email: str
    password: str


class AuthenticationData(BaseModel):
    type: Optional[str] = "authentications"
    attributes: AuthenticationAttributes


class AuthenticationDocument(BaseModel):
    data: AuthenticationData


def serialize_authentication(user_id: int, token: str) -> dict[str, Any]:
    # Le mot de passe est renvoyé vide pour que le client efface le champ
    return {
        "data": {
            "type": "authentications",
            "id": str(user_id),
            "attributes": {
                "user-id": user_id,
                "token": token,
                "password": "",
            },
        }
    }
