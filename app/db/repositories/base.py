from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from sqlmodel import SQLModel, Session, select

# Type générique pour le modèle (User, Todo)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Chaque écriture est commitée immédiatement (une opération = une écriture).
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def find(self, *conditions) -> Sequence[ModelT]:
        """Retourne les enregistrements qui vérifient toutes les conditions, triés par id."""
        statement = select(self.model).where(*conditions).order_by(self.model.id)
        return self.session.exec(statement).all()

    def find_one(self, *conditions) -> Optional[ModelT]:
        """Premier enregistrement qui vérifie toutes les conditions, ou None."""
        return self.session.exec(select(self.model).where(*conditions)).first()

    # ---------- CREATE ----------

    def create(self, **fields) -> ModelT:
        """Crée et persiste un nouvel enregistrement."""
        entity = self.model(**fields)
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, **changes) -> ModelT:
        """Met à jour un enregistrement existant."""
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    # ---------- DELETE ----------

    def delete(self, entity: ModelT) -> None:
        """Supprime définitivement un enregistrement (pas de soft-delete)."""
        self.session.delete(entity)
        self.session.commit()

    def rollback(self) -> None:
        """Annule la transaction en cours (ex: après une violation de contrainte)."""
        self.session.rollback()
