"""
➡️ But : Porter l'état d'authentification côté client de façon explicite.

ClientSession remplace l'état global (mémoire + localStorage) : elle est créée une fois,
puis passée à chaque composant qui appelle l'API.

La persistance du token passe par une interface TokenStorage :

MemoryTokenStorage → le token disparaît avec le process

FileTokenStorage   → l'équivalent du localStorage (fichier JSON)
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

from jose import jwt, JWTError

logger = logging.getLogger(__name__)


class TokenStorage(Protocol):
    def load(self) -> Optional[str]: ...
    def save(self, token: str) -> None: ...
    def clear(self) -> None: ...


class MemoryTokenStorage:
    def __init__(self, token: Optional[str] = None):
        self._token = token

    def load(self) -> Optional[str]:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStorage:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable token file %s, ignored", self.path)
            return None
        token = data.get("token") if isinstance(data, dict) else None
        return token or None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token}), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class ClientSession:
    """
    Session client : le token est relu depuis le stockage à la création,
    comme le front qui relit localStorage au démarrage.
    """

    def __init__(self, storage: Optional[TokenStorage] = None):
        self.storage = storage or MemoryTokenStorage()
        self._token = self.storage.load()

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    @property
    def user_id(self) -> Optional[int]:
        """
        Id lu dans les claims du token, sans vérifier la signature
        (seul le serveur connaît la clé).
        """
        if not self._token:
            return None
        try:
            return int(jwt.get_unverified_claims(self._token)["sub"])
        except (JWTError, KeyError, TypeError, ValueError):
            return None

    def login(self, token: str) -> None:
        self._token = token
        self.storage.save(token)

    def logout(self) -> None:
        self._token = None
        self.storage.clear()

    def auth_headers(self) -> Dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}
