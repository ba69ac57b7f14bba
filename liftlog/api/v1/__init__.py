"""API v1 router aggregation."""

from fastapi import APIRouter

from liftlog.api.v1.endpoints import (
    exercises,
    health,
    logs,
    muscle_groups,
    profiles,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(muscle_groups.router, prefix="/muscle-groups", tags=["muscle-groups"])
api_router.include_router(logs.router, prefix="/logs", tags=["logs"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
