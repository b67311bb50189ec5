from datetime import datetime
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB

class Todo(BaseModelDB, table=True):
    title: str
    description: str
    is_completed: bool = Field(default=False, index=True)
    # non NULL  <=>  is_completed
    completed_on: Optional[datetime] = Field(default=None)
    owner_id: int = Field(index=True, foreign_key="user.id")
    # incrémentée à chaque écriture (If-Match / ETag)
    version: int = Field(default=1)
