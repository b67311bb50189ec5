"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description détaillée,

documenter les conventions (auth, dates, concurrence optimiste).

🔹 Avantages :

La doc est toujours complète et cohérente.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API Todo : FastAPI + SQLite.\n\n"
            "### Conventions\n"
            "- Authentification : `Authorization: Bearer <token>` obtenu via `/auth/login`.\n"
            "- Toutes les heures sont en UTC.\n"
            "- Champs JSON en camelCase (`isCompleted`, `completedOn`, `ownerId`).\n"
            "- Chaque todo porte une `version` (aussi en en-tête `ETag`) ; "
            "envoyer `If-Match` sur une écriture renvoie 412 si elle a changé.\n"
            "- `GET /todos/complete/{ownerId}` : par défaut (`COMPLETED_LIST_OWNER_CHECK=true`) "
            "l'ownerId doit être celui de l'appelant, sinon 404. L'API historique renvoyait les "
            "todos terminés de n'importe quel utilisateur ; `COMPLETED_LIST_OWNER_CHECK=false` "
            "rétablit ce comportement.\n"
            "- Erreurs : `{\"detail\": \"...\"}`.\n"
        ),
        routes=app.routes,
        tags=app.openapi_tags,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
