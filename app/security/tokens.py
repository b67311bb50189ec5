import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, TypedDict

from jose import jwt, JWTError

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation JWT
# ==========================================================

@dataclass(frozen=True)
class JWTSettings:
    """
    Configuration des tokens JWT.

    - `secret` : clé secrète pour signer/valider les tokens
    - `issuer` : émetteur (utilisé dans le payload et vérifié au décodage)
    - `algorithm` : algo de signature (HS256 recommandé)
    - `access_ttl` : durée de vie d’un access token

    Pas de refresh token : la session est entièrement portée par l'access token
    (aucun état côté serveur).
    """
    secret: str
    issuer: str = "my-app"
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(minutes=60)


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # identifiant utilisateur
    email: str
    typ: str            # "access"
    jti: str
    iat: int
    exp: int


class TokenError(Exception):
    """Signature invalide, token expiré ou claims incohérents."""


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique pour un token."""
    return str(uuid.uuid4())


# ==========================================================
# 🎟️ Génération des tokens
# ==========================================================

def create_access_token(
    *,
    user_id: int,
    email: str,
    settings: JWTSettings,
    now: Optional[datetime] = None,
) -> str:
    """
    Crée un access token JWT signé (par défaut 60 min).
    `now` permet de forger des tokens déjà expirés dans les tests.
    """
    now = now or _now()
    payload: DecodedToken = {
        "iss": settings.issuer,
        "sub": str(user_id),
        "email": email,
        "typ": "access",
        "jti": new_jti(),
        "iat": int(now.timestamp()),
        "exp": int((now + settings.access_ttl).timestamp()),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_token(token: str, settings: JWTSettings) -> DecodedToken:
    """
    Décode et valide un token JWT (signature + expiration + émetteur).
    Lève TokenError en cas de signature invalide ou expirée.
    """
    try:
        decoded = jwt.decode(
            token,
            settings.secret,
            algorithms=[settings.algorithm],
            issuer=settings.issuer,
            options={"verify_aud": False},
        )
    except JWTError as e:
        raise TokenError(str(e)) from e
    return decoded  # type: ignore[return-value]


def user_id_from_token(token: str, settings: JWTSettings) -> int:
    """
    Valide un access token et renvoie l'id utilisateur qu'il porte.
    """
    decoded = decode_token(token, settings)
    if decoded.get("typ") != "access":
        raise TokenError("Invalid token type")
    try:
        return int(decoded["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise TokenError("Invalid subject") from e
