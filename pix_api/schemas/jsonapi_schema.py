# Fichier: pix_api/schemas/jsonapi_schema.py
"""Briques communes aux documents JSON:API (requêtes et réponses)."""

from typing import Any, Optional, Union

from pydantic import BaseModel, field_validator


class ResourceIdentifier(BaseModel):
    type: Optional[str] = None
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Union[str, int]) -> str:
        # Certains clients envoient des identifiants numériques
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ToOneRelationship(BaseModel):
    data: ResourceIdentifier


def resource_identifier(resource_type: str, resource_id: Any) -> dict[str, Any]:
    return {"type": resource_type, "id": resource_id}


def to_one(resource_type: str, resource_id: Any) -> dict[str, Any]:
    if resource_id is None:
        return {"data": None}
    return {"data": resource_identifier(resource_type, resource_id)}


def to_many(resource_type: str, resource_ids: list[Any]) -> dict[str, Any]:
    return {"data": [resource_identifier(resource_type, rid) for rid in resource_ids]}


def document(data: Any) -> dict[str, Any]:
    return {"data": data}
