"""Answer submission: correction against the Airtable solution, then persistence."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pix_api.core.errors import ConflictError, NotFoundError
from pix_api.crud import answer_crud
from pix_api.models.answer_model import Answer
from pix_api.schemas.answer_schema import AnswerDocument
from pix_api.services import solution_service
from pix_api.services.airtable.client import AirtableRecordNotFound
from pix_api.services.content.repositories import solution_repository

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Une réponse a déjà été enregistrée pour cette épreuve dans cette évaluation."
CHALLENGE_NOT_FOUND_MESSAGE = "L'épreuve demandée est introuvable."


def save_answer(db: Session, answer_in: AnswerDocument) -> Answer:
    """Évalue puis enregistre une réponse.

    Lève ConflictError si l'évaluation contient déjà une réponse à cette
    épreuve, NotFoundError si l'épreuve n'existe pas dans Airtable.
    """

    assessment_id = answer_in.assessment_id
    challenge_id = answer_in.challenge_id
    attributes = answer_in.data.attributes

    if answer_crud.get_answer_by_challenge_and_assessment(db, challenge_id, assessment_id):
        logger.info("Réponse déjà présente (évaluation=%s, épreuve=%s)", assessment_id, challenge_id)
        raise ConflictError(CONFLICT_MESSAGE)

    try:
        solution = solution_repository.get(challenge_id)
    except AirtableRecordNotFound:
        raise NotFoundError(CHALLENGE_NOT_FOUND_MESSAGE, pointer="/data/relationships/challenge")

    evaluation = solution_service.validate(attributes.value, solution, timeout=attributes.timeout)

    try:
        answer = answer_crud.create_answer(
            db,
            value=attributes.value,
            result=evaluation.result.value,
            result_details=evaluation.result_details,
            elapsed_time=attributes.elapsed_time,
            timeout=attributes.timeout,
            assessment_id=assessment_id,
            challenge_id=challenge_id,
        )
    except IntegrityError:
        # Deux soumissions simultanées: la contrainte d'unicité tranche
        logger.info("Conflit d'unicité (évaluation=%s, épreuve=%s)", assessment_id, challenge_id)
        raise ConflictError(CONFLICT_MESSAGE)

    logger.info(
        "Réponse %s enregistrée (évaluation=%s, épreuve=%s, résultat=%s)",
        answer.id,
        assessment_id,
        challenge_id,
        answer.result,
    )
    return answer
