"""Email/password authentication."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from pix_api.core import security
from pix_api.core.errors import InvalidCredentialsError
from pix_api.crud import user_crud
from pix_api.models.user_model import User

logger = logging.getLogger(__name__)


def authenticate(db: Session, email: str, password: str) -> tuple[User, str]:
    """Return the user and a fresh access token.

    Unknown email and wrong password raise the same InvalidCredentialsError
    so the response does not reveal which accounts exist.
    """

    user = user_crud.get_user_by_email(db, email)
    if user is None or not security.verify_password(password, user.password):
        logger.info("Échec d'authentification pour %s", email.strip().lower())
        raise InvalidCredentialsError()

    token = security.create_access_token(subject=user.id, extra_claims={"email": user.email})
    logger.info("Utilisateur %s authentifié.", user.id)
    return user, token
