"""
API Router Aggregator.

Combines the endpoint routers into the single router mounted under /api.
"""

from fastapi import APIRouter

from referhub.api.endpoints import auth, candidates

api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    candidates.router,
    prefix="/candidates",
    tags=["Candidates"],
)
