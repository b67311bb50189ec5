"""
➡️ But : Contenir la logique métier des todos : propriété, machine à états, versions.

États d'un todo : Active (is_completed=False) ⇄ Completed (is_completed=True).
completed_on est posé à chaque passage à True et remis à None sinon.

Toutes les lectures/écritures sont filtrées par propriétaire ; un todo d'un autre
utilisateur répond NotFound (on ne révèle jamais son existence).

🔹 Avantages :

Code métier découplé du web.

Test unitaire possible sans passer par FastAPI.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence

from app.core.errors import NotFoundError, PreconditionFailedError
from app.db.models.base import utcnow
from app.db.models.todos import Todo
from app.db.repositories.todos import TodoRepository
from app.features.todos.schemas import TodoOut

logger = logging.getLogger(__name__)


class TodoService:
    def __init__(
        self,
        repo: TodoRepository,
        *,
        completed_list_owner_check: bool = True,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.repo = repo
        self.completed_list_owner_check = completed_list_owner_check
        self.now_fn = now_fn

    # --------------- Helpers ---------------
    def _get_owned(self, todo_id: int, owner_id: int, *, completed: Optional[bool] = None) -> Todo:
        todo = self.repo.get_for_owner(todo_id, owner_id, completed=completed)
        if todo is None:
            raise NotFoundError()
        return todo

    @staticmethod
    def _check_version(todo: Todo, expected_version: Optional[int]) -> None:
        if expected_version is not None and todo.version != expected_version:
            raise PreconditionFailedError(
                f"Version mismatch: expected {expected_version}, current {todo.version}"
            )

    def _completion(self, is_completed: bool) -> Dict[str, Any]:
        return {
            "is_completed": is_completed,
            "completed_on": self.now_fn() if is_completed else None,
        }

    def _write(self, todo: Todo, expected_version: Optional[int], **changes) -> Todo:
        self._check_version(todo, expected_version)
        changes["version"] = todo.version + 1
        changes["updated_at"] = self.now_fn()
        return self.repo.update(todo, **changes)

    # --------------- Queries ---------------
    def list_active(self, owner_id: int) -> Sequence[Todo]:
        return self.repo.list_for_owner(owner_id, completed=False)

    def list_completed(self, owner_id: int, *, caller_id: int) -> Sequence[Todo]:
        if owner_id != caller_id:
            if self.completed_list_owner_check:
                logger.warning("User %s asked for completed todos of user %s", caller_id, owner_id)
                raise NotFoundError("Owner not found")
            logger.debug("Listing completed todos of user %s for user %s", owner_id, caller_id)
        return self.repo.list_for_owner(owner_id, completed=True)

    def get(self, todo_id: int, owner_id: int) -> Todo:
        return self._get_owned(todo_id, owner_id)

    def get_completed(self, todo_id: int, owner_id: int) -> Todo:
        todo = self.repo.get_for_owner(todo_id, owner_id, completed=True)
        if todo is None:
            raise NotFoundError("Todo not found or not completed")
        return todo

    # --------------- Commands ---------------
    def create(self, owner_id: int, *, title: str, description: str) -> Todo:
        todo = self.repo.create(title=title, description=description, owner_id=owner_id)
        logger.info("Todo %s created by user %s", todo.id, owner_id)
        return todo

    def replace(
        self,
        todo_id: int,
        owner_id: int,
        *,
        title: str,
        description: str,
        is_completed: bool,
        expected_version: Optional[int] = None,
    ) -> Todo:
        """PUT : les trois champs sont toujours écrits."""
        todo = self._get_owned(todo_id, owner_id)
        return self._write(
            todo,
            expected_version,
            title=title,
            description=description,
            **self._completion(is_completed),
        )

    def patch(
        self,
        todo_id: int,
        owner_id: int,
        changes: Dict[str, Any],
        *,
        expected_version: Optional[int] = None,
    ) -> Todo:
        """PATCH : seuls les champs fournis sont écrits."""
        todo = self._get_owned(todo_id, owner_id)
        fields = {k: v for k, v in changes.items() if k in ("title", "description")}
        if "is_completed" in changes:
            fields.update(self._completion(changes["is_completed"]))
        if not fields:
            self._check_version(todo, expected_version)
            return todo
        return self._write(todo, expected_version, **fields)

    def mark_complete(self, todo_id: int, owner_id: int, *, expected_version: Optional[int] = None) -> Todo:
        todo = self._get_owned(todo_id, owner_id)
        todo = self._write(todo, expected_version, **self._completion(True))
        logger.info("Todo %s completed by user %s", todo.id, owner_id)
        return todo

    def delete(self, todo_id: int, owner_id: int, *, expected_version: Optional[int] = None) -> TodoOut:
        """Suppression définitive ; renvoie l'état du todo juste avant."""
        todo = self._get_owned(todo_id, owner_id)
        self._check_version(todo, expected_version)
        snapshot = TodoOut.model_validate(todo)
        self.repo.delete(todo)
        logger.info("Todo %s deleted by user %s", todo_id, owner_id)
        return snapshot

    # La vue "terminés" supprime avec la même sémantique (filtre propriétaire, pas de filtre d'état)
    delete_completed = delete
