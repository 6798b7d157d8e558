"""Project schemas"""
from typing import List, Optional

from pydantic import Field

from tokenforge.schemas.token import CamelModel


class ProjectCreateRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = ""


class ProjectUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class ProjectResponse(CamelModel):
    id: int
    name: str
    description: str = ""
    created_at: Optional[str] = None
    tokens: List[int] = Field(default_factory=list)  # token ids
