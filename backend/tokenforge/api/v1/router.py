"""API v1 router aggregation"""
from fastapi import APIRouter

from tokenforge.api.v1 import contracts, projects, standards, tokens

api_router = APIRouter()

api_router.include_router(standards.router, prefix="/standards", tags=["Standards"])
api_router.include_router(contracts.router, prefix="/contracts", tags=["Contracts"])
api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(tokens.router, prefix="/tokens", tags=["Tokens"])
