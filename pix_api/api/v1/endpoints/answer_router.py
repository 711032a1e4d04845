# Fichier: pix_api/api/v1/endpoints/answer_router.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from pix_api.api.v1.dependencies import get_db
from pix_api.core.errors import NotFoundError
from pix_api.crud import answer_crud
from pix_api.schemas import answer_schema
from pix_api.services import answer_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_answer(
    answer_in: answer_schema.AnswerDocument,
    db: Session = Depends(get_db),
):
    """
    Enregistre la réponse à une épreuve, corrigée à partir de la solution Airtable.
    Renvoie 409 si l'évaluation contient déjà une réponse à cette épreuve.
    """
    answer = answer_service.save_answer(db, answer_in)
    return answer_schema.serialize_answer(answer)


@router.get("")
def find_answer(
    assessment: str = Query(...),
    challenge: str = Query(...),
    db: Session = Depends(get_db),
):
    answer = answer_crud.get_answer_by_challenge_and_assessment(db, challenge, assessment)
    return answer_schema.serialize_answer(answer)


@router.get("/{answer_id}")
def get_answer(answer_id: int, db: Session = Depends(get_db)):
    answer = answer_crud.get_answer(db, answer_id)
    if answer is None:
        raise NotFoundError(f"La réponse {answer_id} est introuvable.")
    return answer_schema.serialize_answer(answer)
