"""Token configuration models"""
from datetime import datetime
from sqlalchemy import Column, ForeignKey, Integer, String, Text, DateTime, JSON

from tokenforge.models.database import Base


class TokenConfiguration(Base):
    """A stored token configuration; blocks and metadata are kept as JSON documents"""
    __tablename__ = "tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    symbol = Column(String(10), nullable=False, index=True)
    decimals = Column(Integer, nullable=False, default=18)
    standard = Column(String(10), nullable=False)
    blocks = Column(JSON, nullable=False, default=list)
    # "metadata" is reserved on declarative classes
    token_metadata = Column("metadata", JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default="DRAFT", index=True)
    reviewers = Column(JSON, nullable=True)
    approvals = Column(JSON, nullable=True)
    contract_preview = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<TokenConfiguration {self.symbol} (ID: {self.id})>"
