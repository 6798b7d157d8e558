"""Token standard catalog API endpoints"""
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from tokenforge.services.catalog import (
    SANCTIONED_JURISDICTIONS,
    default_metadata_fields,
    list_standards,
    standard_info,
)

router = APIRouter()


@router.get("/")
async def get_standards() -> List[Dict[str, Any]]:
    """List every supported standard with its description, features, pros and cons"""
    return [info.to_dict() for info in list_standards()]


@router.get("/jurisdictions")
async def get_jurisdictions() -> Dict[str, List[str]]:
    """Jurisdictions offered for ERC1400 transfer restriction"""
    return {"jurisdictions": list(SANCTIONED_JURISDICTIONS)}


@router.get("/{standard}")
async def get_standard(standard: str) -> Dict[str, Any]:
    info = standard_info(standard)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Unknown token standard: {standard}")
    return info.to_dict()


@router.get("/{standard}/metadata-fields")
async def get_metadata_fields(standard: str) -> List[Dict[str, Any]]:
    """Default metadata fields for a standard; empty for an unknown standard"""
    return [field.to_dict() for field in default_metadata_fields(standard)]
