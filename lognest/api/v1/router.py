"""
Main API router for v1 endpoints.
"""

from fastapi import APIRouter

from .endpoints import auth, interactions, logs, profiles, projects, tags


api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(tags.router, prefix="/tags", tags=["Tags"])
api_router.include_router(logs.router, prefix="/logs", tags=["Logs"])
api_router.include_router(interactions.router, prefix="/interactions", tags=["Interactions"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
