from passlib.context import CryptContext

# pbkdf2_sha256 : hash salé, vérification à temps constant, aucune dépendance native
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Hash factice : vérifié quand l'email est inconnu pour que le temps de réponse
# soit le même qu'avec un mauvais mot de passe.
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def burn_verification(plain_password: str) -> None:
    """Effectue une vérification contre un hash factice (résultat ignoré)."""
    pwd_context.verify(plain_password, _DUMMY_HASH)
