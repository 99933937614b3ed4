"""Main API router."""

from fastapi import APIRouter

from repogate.api.repos import router as repos_router

api_router = APIRouter(prefix="/api")

api_router.include_router(repos_router, tags=["repos"])
