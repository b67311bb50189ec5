"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation).

Contient les modèles Pydantic utilisés par FastAPI :

TodoCreate  → corps de requête POST

TodoReplace → corps PUT (remplacement complet des trois champs)

TodoPatch   → corps PATCH (seuls les champs envoyés sont écrits)

TodoOut     → réponse de l’API

Les champs sortent en camelCase (isCompleted, completedOn, ownerId) comme l'API historique ;
en entrée, camelCase et snake_case sont acceptés.
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.db.models.base import UtcDatetime

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# Texte obligatoire : ni vide, ni uniquement des espaces
RequiredText = Annotated[str, Field(min_length=1), AfterValidator(_not_blank)]


class TodoCreate(BaseModel):
    title: RequiredText = Field(..., examples=["Buy milk"])
    description: RequiredText = Field(..., examples=["2%"])

    model_config = _CAMEL


class TodoReplace(BaseModel):
    title: RequiredText = Field(..., examples=["Buy milk"])
    description: RequiredText = Field(..., examples=["2%"])
    is_completed: bool = Field(False, examples=[True])

    model_config = _CAMEL


class TodoPatch(BaseModel):
    title: Optional[RequiredText] = Field(None, examples=["Buy oat milk"])
    description: Optional[RequiredText] = None
    is_completed: Optional[bool] = Field(None, examples=[True])

    model_config = _CAMEL

    @field_validator("title", "description", "is_completed")
    @classmethod
    def no_explicit_null(cls, value):
        # null explicite interdit : ces colonnes sont NOT NULL en base
        if value is None:
            raise ValueError("must not be null")
        return value


class TodoOut(BaseModel):
    id: int
    title: str
    description: str
    is_completed: bool
    completed_on: Optional[UtcDatetime]
    owner_id: int
    version: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
