# Fichier: pix_api/api/v1/endpoints/user_router.py

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pix_api.api.v1.dependencies import get_current_user, get_db
from pix_api.crud import user_crud
from pix_api.models.user_model import User
from pix_api.schemas import user_schema

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user_endpoint(
    user_in: user_schema.UserCreateDocument,
    db: Session = Depends(get_db),
):
    attributes = user_in.data.attributes
    user_crud.validate_user_attributes(db, attributes)
    user = user_crud.create_user(db, attributes)
    logger.info("Utilisateur %s créé.", user.id)
    return user_schema.serialize_user(user)


@router.get("/me")
def read_users_me(current_user: User = Depends(get_current_user)):
    return user_schema.serialize_user(current_user)
