"""Database models"""
from tokenforge.models.database import Base, get_db
from tokenforge.models.project import Project
from tokenforge.models.token import TokenConfiguration

__all__ = [
    "Base",
    "get_db",
    "Project",
    "TokenConfiguration",
]
