"""Project and project token API endpoints"""
from typing import Any, Dict, List

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Request

from tokenforge.api.deps import checked_document, get_token_store, not_found
from tokenforge.schemas.project import ProjectCreateRequest, ProjectResponse, ProjectUpdateRequest
from tokenforge.schemas.token import TokenStatus
from tokenforge.services.token_io import MalformedImportError, import_configuration, to_document
from tokenforge.services.token_store import RecordNotFoundError, TokenStore

logger = structlog.get_logger()

router = APIRouter()


@router.get("/", response_model=List[ProjectResponse])
async def list_projects(store: TokenStore = Depends(get_token_store)):
    """List all projects, newest first"""
    return await store.list_projects()


@router.post("/", response_model=ProjectResponse, status_code=201)
async def create_project(request: ProjectCreateRequest, store: TokenStore = Depends(get_token_store)):
    return await store.create_project(request.name, request.description)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: int, store: TokenStore = Depends(get_token_store)):
    try:
        return await store.get_project(project_id)
    except RecordNotFoundError as e:
        raise not_found(e)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    request: ProjectUpdateRequest,
    store: TokenStore = Depends(get_token_store),
):
    try:
        return await store.update_project(project_id, request.model_dump(exclude_unset=True))
    except RecordNotFoundError as e:
        raise not_found(e)


@router.delete("/{project_id}", status_code=204)
async def delete_project(project_id: int, store: TokenStore = Depends(get_token_store)):
    """Delete a project together with its token configurations"""
    try:
        await store.delete_project(project_id)
    except RecordNotFoundError as e:
        raise not_found(e)


@router.get("/{project_id}/tokens")
async def list_project_tokens(project_id: int, store: TokenStore = Depends(get_token_store)) -> List[Dict[str, Any]]:
    try:
        return await store.list_tokens(project_id)
    except RecordNotFoundError as e:
        raise not_found(e)


@router.post("/{project_id}/tokens", status_code=201)
async def create_project_token(
    project_id: int,
    payload: Dict[str, Any] = Body(...),
    store: TokenStore = Depends(get_token_store),
) -> Dict[str, Any]:
    """Save a new token configuration.

    New tokens always start as an unreviewed DRAFT; contract previews are
    regenerated before saving.
    """
    payload = {key: value for key, value in payload.items() if key != "approvals"}
    payload["status"] = TokenStatus.DRAFT.value
    document = checked_document(payload)
    try:
        return await store.create_token(project_id, document)
    except RecordNotFoundError as e:
        raise not_found(e)


@router.post("/{project_id}/tokens/import", status_code=201)
async def import_project_token(
    project_id: int,
    request: Request,
    store: TokenStore = Depends(get_token_store),
) -> Dict[str, Any]:
    """Import an exported configuration file; the whole file is accepted or nothing is saved"""
    content = await request.body()
    try:
        form = import_configuration(content)
    except MalformedImportError as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": e.errors})

    try:
        record = await store.create_token(project_id, to_document(form))
    except RecordNotFoundError as e:
        raise not_found(e)

    logger.info("Token configuration imported", token_id=record["id"], project_id=project_id)
    return record
