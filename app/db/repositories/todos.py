from typing import Optional, Sequence

from app.db.repositories.base import BaseRepository
from app.db.models.todos import Todo

class TodoRepository(BaseRepository[Todo]):
    """
    Toutes les lectures sont filtrées par propriétaire : un todo d'un autre
    utilisateur est indiscernable d'un todo inexistant.
    """
    model = Todo

    def get_for_owner(self, todo_id: int, owner_id: int, *, completed: Optional[bool] = None) -> Optional[Todo]:
        conditions = [self.model.id == todo_id, self.model.owner_id == owner_id]
        if completed is not None:
            conditions.append(self.model.is_completed == completed)
        return self.find_one(*conditions)

    def list_for_owner(self, owner_id: int, *, completed: bool) -> Sequence[Todo]:
        return self.find(
            self.model.owner_id == owner_id,
            self.model.is_completed == completed,
        )
