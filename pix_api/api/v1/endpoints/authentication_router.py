# Fichier: pix_api/api/v1/endpoints/authentication_router.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pix_api.api.v1.dependencies import get_db
from pix_api.schemas import authentication_schema
from pix_api.services import authentication_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_authentication(
    authentication_in: authentication_schema.AuthenticationDocument,
    db: Session = Depends(get_db),
):
    """Échange un couple email / mot de passe contre un token d'accès."""
    attributes = authentication_in.data.attributes
    user, token = authentication_service.authenticate(db, attributes.email, attributes.password)
    return authentication_schema.serialize_authentication(user.id, token)
