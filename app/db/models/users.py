"""
➡️ But : Définir la structure des tables de la base (ORM).

Représente les utilisateurs : un email unique et un mot de passe hashé (jamais renvoyé par l'API).

🔹 Avantages :

Tu manipules des objets Python, pas du SQL brut.
"""

from sqlmodel import Field

from .base import BaseModelDB

class User(BaseModelDB, table=True):
    email: str = Field(index=True, unique=True)
    hashed_password: str
