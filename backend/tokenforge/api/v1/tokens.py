"""Token configuration API endpoints"""
from typing import Any, Dict

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Response

from tokenforge.api.deps import checked_form, get_token_store, not_found
from tokenforge.config import get_settings
from tokenforge.schemas.token import (
    ApprovalRequest,
    StatusAction,
    StatusChangeRequest,
    TokenFormData,
    TokenStatus,
    TokenStatusResponse,
)
from tokenforge.services.configuration import BlockLifecycleError, replace_blocks
from tokenforge.services.status_transitions import (
    IllegalStatusTransitionError,
    action_for,
    approval_progress,
    next_states,
    record_approval,
    transition,
)
from tokenforge.services.token_io import export_configuration, export_filename, to_document
from tokenforge.services.token_store import RecordNotFoundError, TokenStore

logger = structlog.get_logger()
settings = get_settings()

router = APIRouter()

# Keys a PATCH may change; status and approvals move only through the workflow endpoints
_EDITABLE_KEYS = ("name", "symbol", "decimals", "standard", "blocks", "metadata", "reviewers")


async def _load(store: TokenStore, token_id: int) -> Dict[str, Any]:
    try:
        return await store.get_token(token_id)
    except RecordNotFoundError as e:
        raise not_found(e)


def _status_response(record: Dict[str, Any]) -> TokenStatusResponse:
    status = TokenStatus(record["status"])
    approvals = list(record.get("approvals") or [])
    progress = approval_progress(approvals, settings.required_approvals)
    return TokenStatusResponse(
        token_id=record["id"],
        status=status,
        next_statuses=[
            StatusAction(status=target, **action_for(status, target))
            for target in next_states(status)
        ],
        approvals=approvals,
        approval_count=progress.count,
        required_approvals=progress.required,
        approval_progress=progress.label,
        quorum_met=progress.met,
    )


@router.get("/{token_id}")
async def get_token(token_id: int, store: TokenStore = Depends(get_token_store)) -> Dict[str, Any]:
    return await _load(store, token_id)


@router.patch("/{token_id}")
async def update_token(
    token_id: int,
    changes: Dict[str, Any] = Body(...),
    store: TokenStore = Depends(get_token_store),
) -> Dict[str, Any]:
    """Edit a stored configuration.

    The merged configuration is validated as a whole. Block edits keep the
    first block and every block id in place, and contract previews are
    regenerated before saving.
    """
    current = await _load(store, token_id)
    if "status" in changes and changes["status"] != current["status"]:
        raise HTTPException(status_code=409, detail="Use the status endpoint to change a token's status")

    merged = {key: value for key, value in current.items() if key in _EDITABLE_KEYS}
    merged["status"] = current["status"]
    merged.update({key: value for key, value in changes.items() if key in _EDITABLE_KEYS})
    edited = checked_form(merged)

    try:
        form = replace_blocks(TokenFormData.model_validate(current), edited.blocks)
    except BlockLifecycleError as e:
        raise HTTPException(status_code=409, detail=str(e))

    document = to_document(form.model_copy(update={
        "metadata": edited.metadata,
        "reviewers": edited.reviewers,
    }))
    document.pop("approvals", None)
    return await store.update_token(token_id, document)


@router.delete("/{token_id}", status_code=204)
async def delete_token(token_id: int, store: TokenStore = Depends(get_token_store)):
    try:
        await store.delete_token(token_id)
    except RecordNotFoundError as e:
        raise not_found(e)


@router.get("/{token_id}/status", response_model=TokenStatusResponse)
async def get_token_status(token_id: int, store: TokenStore = Depends(get_token_store)):
    """Current status, the moves available from it and approval progress"""
    return _status_response(await _load(store, token_id))


@router.post("/{token_id}/status", response_model=TokenStatusResponse)
async def change_token_status(
    token_id: int,
    request: StatusChangeRequest,
    store: TokenStore = Depends(get_token_store),
):
    record = await _load(store, token_id)
    try:
        status = transition(
            record["status"],
            request.status,
            record.get("approvals"),
            enforce_quorum=settings.enforce_approval_quorum,
            required=settings.required_approvals,
        )
    except IllegalStatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    record = await store.update_token(token_id, {"status": status.value})
    return _status_response(record)


@router.post("/{token_id}/approvals", response_model=TokenStatusResponse)
async def approve_token(
    token_id: int,
    request: ApprovalRequest,
    store: TokenStore = Depends(get_token_store),
):
    """Record an approval; approving twice with the same identity changes nothing"""
    record = await _load(store, token_id)
    if record["status"] != TokenStatus.PENDING_REVIEW.value:
        raise HTTPException(status_code=409, detail="Only tokens pending review can be approved")

    try:
        approvals = record_approval(record.get("approvals"), request.approver)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if approvals != list(record.get("approvals") or []):
        record = await store.update_token(token_id, {"approvals": approvals})
    return _status_response(record)


@router.get("/{token_id}/export")
async def export_token(token_id: int, store: TokenStore = Depends(get_token_store)):
    """Download the configuration as an import-ready JSON file"""
    record = await _load(store, token_id)
    form = TokenFormData.model_validate(record)
    logger.info("Token configuration exported", token_id=token_id)
    return Response(
        content=export_configuration(form),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(form)}"'},
    )
