"""
➡️ But : Définir les endpoints de l’API.

C’est la couche la plus proche du web :

Réceptionne les requêtes HTTP (GET, POST, PUT, PATCH, DELETE…)

Vérifie le bearer token (Depends(get_current_user_id))

Appelle le service correspondant

Retourne les schémas de sortie (response_model)

🔹 Avantages :

Automatiquement documentée dans Swagger :

summary, description, response_model, examples

Isolation totale du reste du code : les routes ne contiennent ni SQL ni logique métier.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Response, status
from app.api.v1.dependencies import get_current_user_id, get_expected_version, get_todo_service
from app.features.todos.schemas import TodoCreate, TodoOut, TodoPatch, TodoReplace
from app.features.todos.services import TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={
        401: {"description": "Token absent, mal formé, invalide ou expiré"},
        404: {"description": "Not Found"},
    },
)

_EXAMPLE = {
    "id": 1,
    "title": "Buy milk",
    "description": "2%",
    "isCompleted": False,
    "completedOn": None,
    "ownerId": 1,
    "version": 1,
    "createdAt": "2025-01-01T10:00:00Z",
    "updatedAt": "2025-01-01T10:00:00Z",
}


def _with_etag(response: Response, todo) -> TodoOut:
    out = TodoOut.model_validate(todo)
    response.headers["ETag"] = f'"{out.version}"'
    return out


@router.post(
    "",
    summary="Créer un todo",
    status_code=status.HTTP_201_CREATED,
    response_model=TodoOut,
    responses={400: {"description": "Titre ou description manquant"}},
)
def create_todo(
    payload: TodoCreate,
    response: Response,
    user_id: int = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    todo = svc.create(user_id, title=payload.title, description=payload.description)
    return _with_etag(response, todo)

@router.get(
    "",
    summary="Lister les todos actifs",
    description="Retourne tous les todos non terminés de l'utilisateur courant (ordre de création).",
    response_model=List[TodoOut],
    responses={200: {"content": {"application/json": {"example": [_EXAMPLE]}}}},
)
def list_active_todos(
    user_id: int = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    return svc.list_active(user_id)

# -----------------------------
# Vue "terminés"
# -----------------------------
@router.get(
    "/complete/{owner_id}",
    summary="Lister les todos terminés d'un utilisateur",
    description=(
        "L'identifiant du propriétaire vient du chemin. Si COMPLETED_LIST_OWNER_CHECK est actif "
        "(défaut), il doit être celui de l'appelant, sinon 404."
    ),
    response_model=List[TodoOut],
)
def list_completed_todos(
    owner_id: int = Path(...),
    user_id: int = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    return svc.list_completed(owner_id, caller_id=user_id)

@router.get(
    "/complete/item/{todo_id}",
    summary="Récupérer un todo terminé",
    response_model=TodoOut,
)
def get_completed_todo(
    response: Response,
    todo_id: int = Path(...),
    user_id: int = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    return _with_etag(response, svc.get_completed(todo_id, user_id))

@router.put(
    "/complete/{todo_id}",
    summary="Marquer un todo comme terminé",
    response_model=TodoOut,
    responses={412: {"description": "If-Match ne correspond pas à la version courante"}},
)
def complete_todo(
    response: Response,
    todo_id: int = Path(...),
    user_id: int = Depends(get_current_user_id),
    expected_version: Optional[int] = Depends(get_expected_version),
    svc: TodoService = Depends(get_todo_service),
):
    todo = svc.mark_complete(todo_id, user_id, expected_version=expected_version)
    return _with_etag(response, todo)

@router.delete(
    "/complete/{todo_id}",
    summary="Supprimer un todo depuis la vue terminés",
    response_model=TodoOut,
)
def delete_completed_todo(
    todo_id: int = Path(...),
    user_id: int = Depends(get_current_user_id),
    expected_version: Optional[int] = Depends(get_expected_version),
    svc: TodoService = Depends(get_todo_service),
):
    return svc.delete_completed(todo_id, user_id, expected_version=expected_version)

# -----------------------------
# Todo unitaire
# -----------------------------
@router.get(
    "/{todo_id}",
    summary="Récupérer un todo",
    response_model=TodoOut,
)
def get_todo(
    response: Response,
    todo_id: int = Path(...),
    user_id: int = Depends(get_current_user_id),
    svc: TodoService = Depends(get_todo_service),
):
    return _with_etag(response, svc.get(todo_id, user_id))

@router.put(
    "/{todo_id}",
    summary="Remplacer un todo",
    description="Remplacement complet : title, description et isCompleted sont toujours écrits.",
    response_model=TodoOut,
    responses={412: {"description": "If-Match ne correspond pas à la version courante"}},
)
def replace_todo(
    payload: TodoReplace,
    response: Response,
    todo_id: int = Path(...),
    user_id: int = Depends(get_current_user_id),
    expected_version: Optional[int] = Depends(get_expected_version),
    svc: TodoService = Depends(get_todo_service),
):
    todo = svc.replace(
        todo_id,
        user_id,
        title=payload.title,
        description=payload.description,
        is_completed=payload.is_completed,
        expected_version=expected_version,
    )
    return _with_etag(response, todo)

@router.patch(
    "/{todo_id}",
    summary="Mettre à jour partiellement un todo",
    response_model=TodoOut,
    responses={412: {"description": "If-Match ne correspond pas à la version courante"}},
)
def patch_todo(
    payload: TodoPatch,
    response: Response,
    todo_id: int = Path(...),
    user_id: int = Depends(get_current_user_id),
    expected_version: Optional[int] = Depends(get_expected_version),
    svc: TodoService = Depends(get_todo_service),
):
    todo = svc.patch(
        todo_id,
        user_id,
        payload.model_dump(exclude_unset=True),
        expected_version=expected_version,
    )
    return _with_etag(response, todo)

@router.delete(
    "/{todo_id}",
    summary="Supprimer un todo",
    description="Suppression définitive ; renvoie le todo supprimé.",
    response_model=TodoOut,
)
def delete_todo(
    todo_id: int = Path(...),
    user_id: int = Depends(get_current_user_id),
    expected_version: Optional[int] = Depends(get_expected_version),
    svc: TodoService = Depends(get_todo_service),
):
    return svc.delete(todo_id, user_id, expected_version=expected_version)
