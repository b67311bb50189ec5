"""
➡️ But : Définir le format de sortie d'un utilisateur.

Sépare les modèles "de stockage" (ORM) de ceux "de transfert" (I/O API).

🔹 Avantages :

Empêche d’exposer par erreur des infos sensibles (ex: hash de mot de passe).
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.db.models.base import UtcDatetime


class UserOut(BaseModel):
    id: int
    email: str
    created_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
