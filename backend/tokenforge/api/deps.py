"""Shared endpoint dependencies and helpers"""
from typing import Any, Dict, Mapping

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tokenforge.models.database import get_db
from tokenforge.schemas.token import TokenFormData
from tokenforge.services.configuration import refresh_previews
from tokenforge.services.token_io import to_document
from tokenforge.services.token_store import RecordNotFoundError, TokenStore
from tokenforge.services.validation import validate_form


async def get_token_store(db: AsyncSession = Depends(get_db)) -> TokenStore:
    return TokenStore(db)


def not_found(e: RecordNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{e.kind} not found")


def checked_form(payload: Mapping[str, Any]) -> TokenFormData:
    """Validate a configuration, or fail with 422 and the per-field errors"""
    result = validate_form(payload)
    if not result.valid:
        raise HTTPException(
            status_code=422,
            detail={"message": "Token configuration is invalid", "errors": result.errors},
        )
    return result.value


def checked_document(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate a configuration and return its storable document with fresh previews"""
    return to_document(refresh_previews(checked_form(payload)))
