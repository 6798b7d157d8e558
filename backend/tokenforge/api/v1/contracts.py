"""Contract preview and validation API endpoints"""
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from tokenforge.schemas.token import ContractPreviewResponse, ValidationResponse
from tokenforge.services.contract_templates import (
    UnsupportedStandardError,
    block_view,
    generate_contract,
)
from tokenforge.services.validation import validate

router = APIRouter()


@router.post("/preview", response_model=ContractPreviewResponse)
async def preview_contract(block: Dict[str, Any] = Body(...)):
    """Render the contract source for a (possibly partial) token block"""
    try:
        view = block_view(block)
        source = generate_contract(block)
    except UnsupportedStandardError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ContractPreviewResponse(
        contract_name=view.identifier,
        standard=view.standard,
        source=source,
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_configuration(payload: Dict[str, Any] = Body(...)):
    """Check a block, or a full configuration when the body has ``blocks``"""
    result = validate(payload)
    return ValidationResponse(valid=result.valid, errors=result.errors)
