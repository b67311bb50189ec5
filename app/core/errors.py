"""
➡️ But : Définir la taxonomie d'erreurs métier de l'application.

Les services lèvent ces exceptions (jamais de HTTPException dans la logique métier),
et app/main.py les traduit en réponses JSON {"detail": ...} avec le bon code HTTP.

🔹 Avantages :

Un seul endroit pour le mapping erreur -> statut HTTP.

Les services restent testables sans FastAPI.
"""

from typing import Dict, Optional


class AppError(Exception):
    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


# ---------- 400 ----------

class ValidationError(AppError):
    status_code = 400
    detail = "Invalid input"


class ConflictError(AppError):
    # Email déjà utilisé : 400 comme l'API historique
    status_code = 400
    detail = "Conflict"


# ---------- 401 ----------

class AuthError(AppError):
    """
    Toutes les erreurs d'authentification sortent en 401 avec le même corps.
    La sous-classe (raison précise) n'est utilisée que pour les logs.
    """
    status_code = 401
    detail = "Not authenticated"
    reason = "unauthenticated"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class MissingTokenError(AuthError):
    reason = "missing token"


class MalformedTokenError(AuthError):
    reason = "malformed authorization header"


class InvalidTokenError(AuthError):
    reason = "invalid or expired token"


class UserNotFoundError(AuthError):
    reason = "token user not found"


class InvalidCredentialsError(AuthError):
    detail = "Invalid credentials"
    reason = "invalid credentials"


# ---------- 404 / 412 / 500 ----------

class NotFoundError(AppError):
    status_code = 404
    detail = "Todo not found"


class PreconditionFailedError(AppError):
    status_code = 412
    detail = "Version mismatch"


class InternalError(AppError):
    status_code = 500
    detail = "Internal server error"
