"""
➡️ But : Contrôleur d'état côté client (liste active + liste terminée).

Règles :

- après une création, le todo renvoyé par le serveur est ajouté localement (jamais avant confirmation) ;
- après une suppression confirmée, il est retiré localement ;
- après un passage à terminé ou une modification, les deux listes sont rechargées ;
- en cas d'échec, une notification est émise et l'état local ne bouge pas.

Le filtre texte et le réordonnancement sont purement locaux : rien n'est envoyé au serveur.
"""

import logging
from typing import Callable, List, Optional

from app.client.api import TodoApiClient
from app.features.todos.schemas import TodoOut

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]  # (level, message), level in {"success", "error"}


def _log_notice(level: str, message: str) -> None:
    logger.log(logging.ERROR if level == "error" else logging.INFO, message)


def _matches(todo: TodoOut, query: str) -> bool:
    needle = query.strip().casefold()
    if not needle:
        return True
    return needle in todo.title.casefold() or needle in todo.description.casefold()


class TodoBoard:
    def __init__(self, api: TodoApiClient, *, notify: Optional[Notifier] = None):
        self.api = api
        self.notify = notify or _log_notice
        self.active: List[TodoOut] = []
        self.completed: List[TodoOut] = []

    # ---------- Lecture ----------
    async def refresh(self) -> bool:
        active = await self.api.list_active()
        if not active.ok:
            self.notify("error", f"Error fetching todos: {active.error.message}")
            return False
        completed = await self.api.list_completed()
        if not completed.ok:
            self.notify("error", f"Error fetching completed todos: {completed.error.message}")
            return False
        self.active = list(active.value)
        self.completed = list(completed.value)
        return True

    # ---------- Mutations ----------
    async def add(self, title: str, description: str) -> bool:
        if not title.strip() or not description.strip():
            self.notify("error", "Title and description are required")
            return False
        result = await self.api.create(title, description)
        if not result.ok:
            self.notify("error", f"Error adding todo: {result.error.message}")
            return False
        self.active.append(result.value)
        self.notify("success", "Todo added successfully")
        return True

    async def update(self, todo_id: int, *, title: str, description: str) -> bool:
        result = await self.api.patch(todo_id, {"title": title, "description": description})
        if not result.ok:
            self.notify("error", f"Error updating todo: {result.error.message}")
            return False
        self.notify("success", "Todo updated successfully")
        return await self.refresh()

    async def complete(self, todo_id: int) -> bool:
        result = await self.api.complete(todo_id)
        if not result.ok:
            self.notify("error", f"Error completing todo: {result.error.message}")
            return False
        self.notify("success", "Todo marked as completed")
        return await self.refresh()

    async def remove(self, todo_id: int) -> bool:
        result = await self.api.delete(todo_id)
        if not result.ok:
            self.notify("error", f"Error deleting todo: {result.error.message}")
            return False
        self.active = [t for t in self.active if t.id != todo_id]
        self.notify("success", "Todo deleted successfully")
        return True

    async def remove_completed(self, todo_id: int) -> bool:
        result = await self.api.delete_completed(todo_id)
        if not result.ok:
            self.notify("error", f"Error deleting completed todo: {result.error.message}")
            return False
        self.completed = [t for t in self.completed if t.id != todo_id]
        self.notify("success", "Completed todo deleted successfully")
        return True

    # ---------- Vue ----------
    def visible(self, query: str = "") -> List[TodoOut]:
        return [t for t in self.active if _matches(t, query)]

    def visible_completed(self, query: str = "") -> List[TodoOut]:
        return [t for t in self.completed if _matches(t, query)]

    def move(self, source: int, destination: int) -> None:
        """Déplace un todo actif dans la liste locale (non persisté)."""
        if not (0 <= source < len(self.active)) or not (0 <= destination < len(self.active)):
            raise IndexError("position out of range")
        item = self.active.pop(source)
        self.active.insert(destination, item)
