# Fichier: pix_api/schemas/answer_schema.py

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from pix_api.models.answer_model import Answer
from pix_api.schemas.jsonapi_schema import ToOneRelationship, document, to_one


# --- Schémas d'entrée (POST /api/answers) ---
class AnswerAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    value: str
    elapsed_time: Optional[int] = Field(default=None, alias="elapsed-time")
    timeout: Optional[int] = None


class AnswerRelationships(BaseModel):
    assessment: ToOneRelationship
    challenge: ToOneRelationship


class AnswerData(BaseModel):
    type: Optional[str] = "answers"
    # Ignoré à la création: l'identifiant est attribué par la base
    id: Any = None
    attributes: AnswerAttributes
    relationships: AnswerRelationships


class AnswerDocument(BaseModel):
    data: AnswerData

    @property
    def assessment_id(self) -> str:
        return self.data.relationships.assessment.data.id

    @property
    def challenge_id(self) -> str:
        return self.data.relationships.challenge.data.id


# --- Sérialisation de la réponse ---
def serialize_answer_resource(answer: Answer) -> dict[str, Any]:
    return {
        "type": "answers",
        "id": answer.id,
        "attributes": {
            "value": answer.value,
            "result": answer.result,
            "result-details": answer.result_details,
            "elapsed-time": answer.elapsed_time,
            "timeout": answer.timeout,
        },
        "relationships": {
            "assessment": to_one("assessments", answer.assessment_id),
            "challenge": to_one("challenges", answer.challenge_id),
        },
    }


def serialize_answer(answer: Optional[Answer]) -> dict[str, Any]:
    if answer is None:
        return document(None)
    return document(serialize_answer_resource(answer))
