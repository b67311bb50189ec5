"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_todo_service() : crée un TodoService à partir d’une session DB.

get_current_user_id() : extrait le bearer token et le vérifie via AuthService.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from typing import Optional

from fastapi import Depends, Header, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from app.db.session import get_session

from app.db.repositories.users import UserRepository
from app.features.authentication.services import AuthService

from app.db.repositories.todos import TodoRepository
from app.features.todos.services import TodoService

from app.core.config import jwt_settings, settings
from app.core.errors import MalformedTokenError, MissingTokenError, ValidationError


# -----------------------------
# Repositories
# -----------------------------
def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)

def get_todo_repository(session: Session = Depends(get_session)) -> TodoRepository:
    return TodoRepository(session)


# -----------------------------
# Services
# -----------------------------
def get_auth_service(user_repo: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(user_repo=user_repo, jwt_settings=jwt_settings)

def get_todo_service(todo_repo: TodoRepository = Depends(get_todo_repository)) -> TodoService:
    return TodoService(
        todo_repo,
        completed_list_owner_check=settings.COMPLETED_LIST_OWNER_CHECK,
    )


# -----------------------------
# Authentication data
# -----------------------------
# auto_error=False : on distingue nous-mêmes header absent / mal formé
bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token_from_bearer(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    if credentials is None:
        if request.headers.get("Authorization"):
            raise MalformedTokenError()
        raise MissingTokenError()
    if not credentials.credentials.strip():
        raise MalformedTokenError()
    return credentials.credentials

def get_current_user_id(
    access_token: str = Depends(get_access_token_from_bearer),
    auth_svc: AuthService = Depends(get_auth_service),
) -> int:
    return auth_svc.verify(access_token)


# -----------------------------
# Concurrence optimiste
# -----------------------------
def get_expected_version(
    if_match: Optional[str] = Header(default=None, alias="If-Match"),
) -> Optional[int]:
    """
    Lit l'en-tête If-Match ("3", "\"3\"", "W/\"3\"" ou "*").
    Absent ou "*" -> None (dernier écrit gagne).
    """
    if if_match is None:
        return None
    value = if_match.strip()
    if value == "*":
        return None
    if value.startswith("W/"):
        value = value[2:]
    value = value.strip('"')
    try:
        return int(value)
    except ValueError:
        raise ValidationError("Invalid If-Match header")
