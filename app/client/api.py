"""
➡️ But : Client HTTP asynchrone de l'API Todo.

Chaque appel renvoie un Result : Ok(valeur) ou Err(ApiError). Les erreurs HTTP et réseau
ne sont jamais levées, l'appelant teste `result.ok`.

L'annulation suit celle de la tâche asyncio qui attend l'appel ; le timeout est celui du
httpx.AsyncClient fourni.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

import httpx

from app.client.session import ClientSession
from app.features.todos.schemas import TodoOut

logger = logging.getLogger(__name__)

T = TypeVar("T")

_KINDS = {
    400: "validation",
    401: "auth",
    404: "not_found",
    412: "precondition",
}


@dataclass(frozen=True)
class ApiError:
    kind: str           # validation | auth | not_found | precondition | internal | transport | decode | http
    message: str
    status: Optional[int] = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
            message = body.get("detail") if isinstance(body, dict) else None
        except ValueError:
            message = None
        kind = _KINDS.get(response.status_code)
        if kind is None:
            kind = "internal" if response.status_code >= 500 else "http"
        return cls(kind=kind, message=str(message or response.reason_phrase), status=response.status_code)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok = True


@dataclass(frozen=True)
class Err:
    error: ApiError
    ok = False


Result = Union[Ok[T], Err]


def _todo(data: Any) -> TodoOut:
    return TodoOut.model_validate(data)

def _todos(data: Any) -> List[TodoOut]:
    return [TodoOut.model_validate(item) for item in data]


class TodoApiClient:
    """
    `http` doit pointer sur le préfixe de l'API, ex. AsyncClient(base_url="http://localhost:5000/api").
    """

    def __init__(self, session: ClientSession, http: httpx.AsyncClient):
        self.session = session
        self.http = http

    async def _request(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], T],
        *,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: bool = True,
    ) -> "Result[T]":
        all_headers = dict(self.session.auth_headers()) if auth else {}
        all_headers.update(headers or {})
        try:
            response = await self.http.request(method, path, json=json, headers=all_headers)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            return Err(ApiError(kind="transport", message=str(e) or type(e).__name__))
        if response.is_error:
            error = ApiError.from_response(response)
            logger.info("%s %s -> %s %s", method, path, response.status_code, error.message)
            return Err(error)
        try:
            return Ok(parse(response.json()))
        except (ValueError, KeyError, TypeError) as e:
            # corps non JSON ou qui ne correspond pas au schéma attendu (ValidationError est un ValueError)
            logger.warning("%s %s -> unexpected body: %s", method, path, e)
            return Err(ApiError(kind="decode", message="Unexpected response body", status=response.status_code))

    @staticmethod
    def _if_match(version: Optional[int]) -> Dict[str, str]:
        return {"If-Match": f'"{version}"'} if version is not None else {}

    # ---------- Auth ----------
    async def register(self, email: str, password: str) -> "Result[Dict[str, Any]]":
        return await self._request(
            "POST", "/auth/register", dict, json={"email": email, "password": password}, auth=False
        )

    async def login(self, email: str, password: str) -> "Result[str]":
        result = await self._request(
            "POST", "/auth/login", lambda body: body["token"],
            json={"email": email, "password": password}, auth=False,
        )
        if result.ok:
            self.session.login(result.value)
        return result

    def logout(self) -> None:
        self.session.logout()

    # ---------- Todos ----------
    async def list_active(self) -> "Result[List[TodoOut]]":
        return await self._request("GET", "/todos", _todos)

    async def list_completed(self, owner_id: Optional[int] = None) -> "Result[List[TodoOut]]":
        owner_id = owner_id if owner_id is not None else self.session.user_id
        if owner_id is None:
            return Err(ApiError(kind="auth", message="Not logged in"))
        return await self._request("GET", f"/todos/complete/{owner_id}", _todos)

    async def get(self, todo_id: int) -> "Result[TodoOut]":
        return await self._request("GET", f"/todos/{todo_id}", _todo)

    async def create(self, title: str, description: str) -> "Result[TodoOut]":
        return await self._request(
            "POST", "/todos", _todo, json={"title": title, "description": description}
        )

    async def replace(
        self, todo_id: int, *, title: str, description: str, is_completed: bool,
        version: Optional[int] = None,
    ) -> "Result[TodoOut]":
        return await self._request(
            "PUT", f"/todos/{todo_id}", _todo,
            json={"title": title, "description": description, "isCompleted": is_completed},
            headers=self._if_match(version),
        )

    async def patch(self, todo_id: int, changes: Dict[str, Any], *, version: Optional[int] = None) -> "Result[TodoOut]":
        return await self._request(
            "PATCH", f"/todos/{todo_id}", _todo, json=changes, headers=self._if_match(version)
        )

    async def complete(self, todo_id: int, *, version: Optional[int] = None) -> "Result[TodoOut]":
        return await self._request(
            "PUT", f"/todos/complete/{todo_id}", _todo, headers=self._if_match(version)
        )

    async def delete(self, todo_id: int) -> "Result[TodoOut]":
        return await self._request("DELETE", f"/todos/{todo_id}", _todo)

    async def delete_completed(self, todo_id: int) -> "Result[TodoOut]":
        return await self._request("DELETE", f"/todos/complete/{todo_id}", _todo)
