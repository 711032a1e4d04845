from fastapi import APIRouter

from pix_api.core.errors import NotFoundError
from pix_api.schemas.content_schema import serialize_challenge
from pix_api.services.airtable.client import AirtableRecordNotFound
from pix_api.services.content.repositories import challenge_repository

router = APIRouter()


@router.get("/{challenge_id}")
def get_challenge(challenge_id: str):
    try:
        challenge = challenge_repository.get(challenge_id)
    except AirtableRecordNotFound:
        raise NotFoundError(f"L'épreuve {challenge_id} est introuvable.")
    return serialize_challenge(challenge)
