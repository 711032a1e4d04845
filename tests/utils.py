"""Utility helpers for test factories."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

from pix_api.core.security import get_password_hash
from pix_api.models.answer_model import Answer
from pix_api.models.user_model import User


def create_user(db, password: str = "A124B2C3#!", **kwargs) -> User:
    defaults = {
        "first_name": "Jean",
        "last_name": "Dupont",
        "email": "jean.dupont@example.net",
        "cgu": True,
    }
    defaults.update(kwargs)
    user = User(password=get_password_hash(password), **defaults)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_answer(db, **kwargs) -> Answer:
    defaults = {
        "value": "2",
        "result": "ko",
        "challenge_id": "a_challenge_id",
        "assessment_id": "assessment_id",
    }
    defaults.update(kwargs)
    answer = Answer(**defaults)
    db.add(answer)
    db.commit()
    db.refresh(answer)
    return answer


def airtable_response(payload: Any = None, status_code: int = 200) -> MagicMock:
    """Fake ``requests.Response`` as returned by ``requests.get``."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


def challenge_record(record_id: str = "a_challenge_id", **fields) -> dict[str, Any]:
    defaults = {
        "Type d'épreuve": "QCU",
        "Bonnes réponses": "1",
    }
    defaults.update(fields)
    return {"id": record_id, "fields": defaults}
