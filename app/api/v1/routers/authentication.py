from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies import get_access_token_from_bearer, get_auth_service
from app.features.authentication.services import AuthService
from app.features.authentication.schemas import RegisterIn, LoginIn, TokenOut
from app.features.users.schemas import UserOut  # pour /me & register

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Register
# -----------------------------
@router.post(
    "/register",
    summary="Créer un compte",
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={400: {"description": "Email déjà utilisé ou champs invalides"}},
)
def register(payload: RegisterIn, svc: AuthService = Depends(get_auth_service)):
    return svc.register(payload)

# -----------------------------
# Login
# -----------------------------
@router.post(
    "/login",
    summary="Se connecter",
    description="Retourne un access token à envoyer ensuite dans `Authorization: Bearer <token>`.",
    response_model=TokenOut,
    responses={401: {"description": "Identifiants invalides"}},
)
def login(payload: LoginIn, svc: AuthService = Depends(get_auth_service)):
    return svc.login(payload)

# -----------------------------
# Me (profil courant)
# -----------------------------
@router.get(
    "/me",
    summary="Récupérer l'utilisateur courant",
    response_model=UserOut,
    responses={
        200: {"description": "Utilisateur courant"},
        401: {"description": "Token invalide ou expiré"},
    },
)
def me(
    access_token: str = Depends(get_access_token_from_bearer),
    svc: AuthService = Depends(get_auth_service),
):
    return svc.get_current_user(access_token=access_token)
