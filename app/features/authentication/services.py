import logging

from sqlalchemy.exc import IntegrityError

from app.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
)
from app.db.models.users import User
from app.db.repositories.users import UserRepository
from app.security.password import burn_verification, hash_password, verify_password
from app.security.tokens import (
    JWTSettings,
    TokenError,
    create_access_token,
    user_id_from_token,
)
from app.features.authentication.schemas import RegisterIn, LoginIn, TokenOut

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service d'authentification : orchestre le repository utilisateurs + tokens.
    Ne contient pas d'accès SQL direct et lève des erreurs métier (app.core.errors).
    """

    def __init__(self, *, user_repo: UserRepository, jwt_settings: JWTSettings):
        self.user_repo = user_repo
        self.jwt = jwt_settings

    # ---------- Register ----------
    def register(self, payload: RegisterIn) -> User:
        if self.user_repo.get_by_email(payload.email):
            raise ConflictError("Email already registered")
        try:
            user = self.user_repo.create(
                email=payload.email,
                hashed_password=hash_password(payload.password),
            )
        except IntegrityError:
            # inscription concurrente avec le même email : la contrainte UNIQUE a tranché
            self.user_repo.rollback()
            raise ConflictError("Email already registered")
        logger.info("Registered user id=%s", user.id)
        return user

    # ---------- Login ----------
    def login(self, payload: LoginIn) -> TokenOut:
        user = self.user_repo.get_by_email(payload.email)
        if user is None:
            # même coût qu'un mauvais mot de passe
            burn_verification(payload.password)
            logger.info("Login failed for %s", payload.email)
            raise InvalidCredentialsError()
        if not verify_password(payload.password, user.hashed_password):
            logger.info("Login failed for %s", payload.email)
            raise InvalidCredentialsError()

        token = create_access_token(user_id=user.id, email=user.email, settings=self.jwt)
        logger.info("Login succeeded for user id=%s", user.id)
        return TokenOut(
            token=token,
            token_type="bearer",
            expires_in=int(self.jwt.access_ttl.total_seconds()),
            user_id=user.id,
        )

    # ---------- Verify ----------
    def get_current_user(self, *, access_token: str) -> User:
        try:
            user_id = user_id_from_token(access_token, self.jwt)
        except TokenError as e:
            logger.warning("Rejected token: %s", e)
            raise InvalidTokenError() from e
        user = self.user_repo.get(user_id)
        if user is None:
            logger.warning("Rejected token: user id=%s not found", user_id)
            raise UserNotFoundError()
        return user

    def verify(self, token: str) -> int:
        """Valide un access token et renvoie l'id de l'utilisateur existant."""
        return self.get_current_user(access_token=token).id
