"""Storage of projects and token configurations.

Records go in and come out as plain dicts in the export JSON shape
(camelCase keys). The store does not validate them or regenerate contract
previews; callers do that before saving.
"""
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tokenforge.models.project import Project
from tokenforge.models.token import TokenConfiguration

logger = structlog.get_logger()


class RecordNotFoundError(LookupError):
    """Raised when a project or token id does not exist"""

    def __init__(self, kind: str, record_id: int):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


# record key -> column attribute
_TOKEN_COLUMNS = {
    "name": "name",
    "symbol": "symbol",
    "decimals": "decimals",
    "standard": "standard",
    "blocks": "blocks",
    "metadata": "token_metadata",
    "status": "status",
    "reviewers": "reviewers",
    "approvals": "approvals",
    "contractPreview": "contract_preview",
}
_OPTIONAL_TOKEN_KEYS = ("reviewers", "approvals", "contractPreview")

_PROJECT_COLUMNS = ("name", "description")


def _timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _token_record(token: TokenConfiguration) -> Dict[str, Any]:
    record: Dict[str, Any] = {"id": token.id, "projectId": token.project_id}
    for key, attr in _TOKEN_COLUMNS.items():
        value = getattr(token, attr)
        if value is None and key in _OPTIONAL_TOKEN_KEYS:
            continue
        record[key] = value
    record["createdAt"] = _timestamp(token.created_at)
    record["updatedAt"] = _timestamp(token.updated_at)
    return record


class TokenStore:
    """Project and token CRUD over an async SQLAlchemy session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # Projects

    async def _load_project(self, project_id: int) -> Project:
        project = await self.db.get(Project, project_id)
        if project is None:
            raise RecordNotFoundError("Project", project_id)
        return project

    async def _project_record(self, project: Project) -> Dict[str, Any]:
        result = await self.db.execute(
            select(TokenConfiguration.id)
            .where(TokenConfiguration.project_id == project.id)
            .order_by(TokenConfiguration.id)
        )
        return {
            "id": project.id,
            "name": project.name,
            "description": project.description or "",
            "createdAt": _timestamp(project.created_at),
            "tokens": list(result.scalars().all()),
        }

    async def list_projects(self) -> List[Dict[str, Any]]:
        result = await self.db.execute(select(Project).order_by(Project.created_at.desc(), Project.id.desc()))
        return [await self._project_record(p) for p in result.scalars().all()]

    async def get_project(self, project_id: int) -> Dict[str, Any]:
        return await self._project_record(await self._load_project(project_id))

    async def create_project(self, name: str, description: str = "") -> Dict[str, Any]:
        project = Project(name=name, description=description or "")
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)
        logger.info("Project created", project_id=project.id, name=name)
        return await self._project_record(project)

    async def update_project(self, project_id: int, changes: Mapping[str, Any]) -> Dict[str, Any]:
        project = await self._load_project(project_id)
        for key in _PROJECT_COLUMNS:
            if key in changes and changes[key] is not None:
                setattr(project, key, changes[key])
        await self.db.commit()
        await self.db.refresh(project)
        return await self._project_record(project)

    async def delete_project(self, project_id: int) -> None:
        project = await self._load_project(project_id)
        await self.db.execute(delete(TokenConfiguration).where(TokenConfiguration.project_id == project_id))
        await self.db.delete(project)
        await self.db.commit()
        logger.info("Project deleted", project_id=project_id)

    # Tokens

    async def _load_token(self, token_id: int) -> TokenConfiguration:
        token = await self.db.get(TokenConfiguration, token_id)
        if token is None:
            raise RecordNotFoundError("Token", token_id)
        return token

    async def list_tokens(self, project_id: int) -> List[Dict[str, Any]]:
        await self._load_project(project_id)
        result = await self.db.execute(
            select(TokenConfiguration)
            .where(TokenConfiguration.project_id == project_id)
            .order_by(TokenConfiguration.id)
        )
        return [_token_record(t) for t in result.scalars().all()]

    async def get_token(self, token_id: int) -> Dict[str, Any]:
        return _token_record(await self._load_token(token_id))

    async def create_token(self, project_id: int, record: Mapping[str, Any]) -> Dict[str, Any]:
        await self._load_project(project_id)
        token = TokenConfiguration(project_id=project_id)
        for key, attr in _TOKEN_COLUMNS.items():
            if key in record:
                setattr(token, attr, record[key])
        self.db.add(token)
        await self.db.commit()
        await self.db.refresh(token)
        logger.info("Token created", token_id=token.id, project_id=project_id, symbol=token.symbol)
        return _token_record(token)

    async def update_token(self, token_id: int, changes: Mapping[str, Any]) -> Dict[str, Any]:
        """Apply a partial record; keys outside the token shape are ignored"""
        token = await self._load_token(token_id)
        for key, attr in _TOKEN_COLUMNS.items():
            if key in changes:
                setattr(token, attr, changes[key])
        await self.db.commit()
        await self.db.refresh(token)
        logger.info("Token updated", token_id=token_id, fields=sorted(k for k in changes if k in _TOKEN_COLUMNS))
        return _token_record(token)

    async def delete_token(self, token_id: int) -> None:
        token = await self._load_token(token_id)
        await self.db.delete(token)
        await self.db.commit()
        logger.info("Token deleted", token_id=token_id)
