"""API v1 router aggregation."""

from fastapi import APIRouter

from gymlog.api.v1.endpoints import (
    exercises,
    health,
    plans,
    sessions,
    suggestions,
    templates,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(suggestions.router, prefix="/suggestions", tags=["suggestions"])
