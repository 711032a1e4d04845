# Fichier: pix_api/crud/user_crud.py

import re
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pix_api.core.errors import UnprocessableEntityError
from pix_api.core.security import get_password_hash
from pix_api.models.user_model import User
from pix_api.schemas.user_schema import UserCreateAttributes

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-zA-Z])(?=.*\d).{8,}$")

CGU_MESSAGE = "Vous devez accepter les conditions d'utilisation de Pix pour créer un compte."
EMAIL_INVALID_MESSAGE = "Le champ email doit être une adresse e-mail valide."
EMAIL_TAKEN_MESSAGE = "Cette adresse electronique est déjà enregistrée."
PASSWORD_MESSAGE = "Votre mot de passe doit comporter au moins une lettre, un chiffre et 8 caractères."
EMPTY_MESSAGES = {
    "first-name": "Votre prénom n'est pas renseigné.",
    "last-name": "Votre nom n'est pas renseigné.",
}


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Récupère un utilisateur par son adresse email (insensible à la casse).

    Args:
        db: La session de base de données.
        email: L'email de l'utilisateur à rechercher.

    Returns:
        L'objet User s'il est trouvé, sinon None.
    """
    return db.query(User).filter(User.email == email.strip().lower()).first()


def validate_user_attributes(db: Session, attributes: UserCreateAttributes) -> None:
    """Lève UnprocessableEntityError avec une erreur par attribut invalide."""

    errors: list[tuple[str, str]] = []

    if not attributes.first_name.strip():
        errors.append(("first-name", EMPTY_MESSAGES["first-name"]))
    if not attributes.last_name.strip():
        errors.append(("last-name", EMPTY_MESSAGES["last-name"]))

    try:
        validate_email(attributes.email, check_deliverability=False)
    except EmailNotValidError:
        errors.append(("email", EMAIL_INVALID_MESSAGE))
    else:
        if get_user_by_email(db, attributes.email):
            errors.append(("email", EMAIL_TAKEN_MESSAGE))

    if not PASSWORD_PATTERN.match(attributes.password):
        errors.append(("password", PASSWORD_MESSAGE))

    if attributes.cgu is not True:
        errors.append(("cgu", CGU_MESSAGE))

    if errors:
        raise UnprocessableEntityError(errors)


def create_user(db: Session, attributes: UserCreateAttributes) -> User:
    """
    Crée un nouvel utilisateur dans la base de données.

    L'email est enregistré en minuscules et le mot de passe haché. Une
    inscription concurrente avec le même email lève UnprocessableEntityError.

    Returns:
        L'objet User qui vient d'être créé.
    """
    db_user = User(
        first_name=attributes.first_name.strip(),
        last_name=attributes.last_name.strip(),
        email=attributes.email.strip(),
        password=get_password_hash(attributes.password),
        cgu=attributes.cgu,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise UnprocessableEntityError([("email", EMAIL_TAKEN_MESSAGE)])
    db.refresh(db_user)
    return db_user
