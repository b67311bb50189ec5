"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel (ou Base de SQLAlchemy).

Représente les objets persistés. Ici on représente les propriétés communes de toutes les tables.

Chaque champ = une colonne SQL (avec type, index, clé primaire...).

🔹 Avantages :

Tu manipules des objets Python, pas du SQL brut.

Facile à migrer vers PostgreSQL ou MySQL plus tard.
"""

from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator


def utcnow() -> datetime:
    # toujours avec fuseau : les versions récentes de SQLModel refusent les datetimes naïfs
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite ne conserve pas le fuseau : une valeur relue sans tzinfo est de l'UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Datetime de sortie API, toujours en UTC explicite
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class BaseModelDB(SQLModel, table=False):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
