import logging
import re
from typing import Generator, Optional

from fastapi import Depends, Request
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from pix_api.core import security
from pix_api.core.errors import UnauthorizedError
from pix_api.crud import user_crud
from pix_api.db import session as db_session
from pix_api.models.user_model import User

log = logging.getLogger(__name__)

_BEARER = re.compile(r"^bearer\s+(.+)$", flags=re.IGNORECASE)


def get_db() -> Generator[Session, None, None]:
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    match = _BEARER.match(authorization.strip())
    if not match:
        return None
    return match.group(1).strip() or None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = _extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        log.warning("Validation échouée: Pas de token fourni.")
        raise UnauthorizedError("Le token d'accès est manquant.")

    try:
        payload = security.decode_access_token(token)
        user_id = int(payload["sub"])
    except ExpiredSignatureError:
        log.warning("Validation échouée: Le token a expiré.")
        raise UnauthorizedError("Le token d'accès a expiré.")
    except (JWTError, KeyError, ValueError, TypeError):
        log.warning("Validation échouée: Le token est invalide ou mal formé.")
        raise UnauthorizedError("Le token d'accès est invalide.")

    user = user_crud.get_user(db, user_id)
    if user is None:
        log.warning("Validation échouée: Utilisateur avec ID %s non trouvé.", user_id)
        raise UnauthorizedError("Le token d'accès est invalide.")

    return user
