# Fichier: pix_api/models/answer_model.py

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, Text, DateTime, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from pix_api.db.base_class import Base


class AnswerStatus(str, enum.Enum):
    OK = "ok"
    KO = "ko"
    PARTIALLY = "partially"
    ABAND = "aband"
    TIMEDOUT = "timedout"
    UNIMPLEMENTED = "unimplemented"


class Answer(Base):
    """
    Réponse d'un utilisateur à une épreuve, dans le cadre d'une évaluation.
    Une seule réponse par couple (évaluation, épreuve); jamais modifiée après création.
    """
    __tablename__ = "answers"
    __table_args__ = (
        UniqueConstraint("assessment_id", "challenge_id", name="uq_answers_assessment_challenge"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    # Stocké en chaîne (pas d'Enum côté DB), les valeurs sont celles d'AnswerStatus
    result: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    result_details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    elapsed_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    timeout: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # L'évaluation n'est pas une table locale: simple identifiant
    assessment_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    # Identifiant Airtable de l'épreuve
    challenge_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<Answer(id={self.id}, assessment='{self.assessment_id}', challenge='{self.challenge_id}', result='{self.result}')>"
