# Fichier: pix_api/crud/answer_crud.py

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pix_api.models.answer_model import Answer


def get_answer(db: Session, answer_id: int) -> Optional[Answer]:
    return db.get(Answer, answer_id)


def get_answer_by_challenge_and_assessment(
    db: Session,
    challenge_id: str,
    assessment_id: str,
) -> Optional[Answer]:
    """
    Récupère la réponse déjà donnée à une épreuve au cours d'une évaluation.

    Returns:
        L'objet Answer s'il existe, sinon None.
    """
    return (
        db.query(Answer)
        .filter(Answer.challenge_id == challenge_id, Answer.assessment_id == assessment_id)
        .first()
    )


def create_answer(
    db: Session,
    *,
    value: str,
    result: str,
    result_details: Optional[str],
    elapsed_time: Optional[int],
    timeout: Optional[int],
    assessment_id: str,
    challenge_id: str,
) -> Answer:
    """
    Enregistre une nouvelle réponse.

    Lève ``sqlalchemy.exc.IntegrityError`` si une réponse existe déjà pour le
    couple (évaluation, épreuve); la session est alors annulée.
    """
    db_answer = Answer(
        value=value,
        result=result,
        result_details=result_details,
        elapsed_time=elapsed_time,
        timeout=timeout,
        assessment_id=assessment_id,
        challenge_id=challenge_id,
    )
    db.add(db_answer)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(db_answer)
    return db_answer
