"""
➡️ But : Remplir une base de démo à partir d'un fichier YAML.

Format attendu :

users:
  - email: a@x.com
    password: secret1
    todos:
      - title: Buy milk
        description: 2%
        completed: false

Idempotent : un utilisateur déjà présent (même email) est ignoré avec ses todos.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml
from sqlmodel import Session

from app.db.models.base import utcnow
from app.db.repositories.todos import TodoRepository
from app.db.repositories.users import UserRepository
from app.security.password import hash_password

logger = logging.getLogger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Seed
# -----------------------------
def seed_all(*, session: Session, seed_path: str | Path) -> Dict[str, int]:
    data = load_seed_yaml(seed_path)
    user_repo = UserRepository(session)
    todo_repo = TodoRepository(session)
    counts = {"users": 0, "todos": 0}

    for u in data.get("users", []):
        email = str(u["email"]).strip()
        if user_repo.get_by_email(email):
            logger.info("Seed: %s already present, skipped", email)
            continue
        user = user_repo.create(email=email, hashed_password=hash_password(str(u["password"])))
        counts["users"] += 1

        for t in u.get("todos", []):
            completed = bool(t.get("completed", False))
            todo_repo.create(
                title=str(t["title"]),
                description=str(t["description"]),
                is_completed=completed,
                completed_on=utcnow() if completed else None,
                owner_id=user.id,
            )
            counts["todos"] += 1

    logger.info("Seed done: %(users)s users, %(todos)s todos", counts)
    return counts
