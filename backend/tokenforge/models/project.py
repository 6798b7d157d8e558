"""Project models"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime

from tokenforge.models.database import Base


class Project(Base):
    """A workspace grouping related token configurations"""
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Project {self.name} (ID: {self.id})>"
