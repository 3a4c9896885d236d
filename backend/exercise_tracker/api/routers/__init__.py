"""
Routers API pour l'Exercise Tracker.

Ce module regroupe tous les sous-routers et expose un router principal
a inclure dans l'application FastAPI.
"""
from fastapi import APIRouter

from exercise_tracker.api.routers.user_router import router as user_router
from exercise_tracker.api.routers.exercise_router import router as exercise_router

router = APIRouter()

router.include_router(user_router)
router.include_router(exercise_router)

__all__ = ["router"]
