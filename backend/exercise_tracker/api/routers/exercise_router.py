"""
Routes des exercices : enregistrement et historique.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from typing import Optional

from exercise_tracker.core.database import get_session
from exercise_tracker.domain.entities import ExerciseCreate, ExerciseLogged
from exercise_tracker.domain.entities.exercise import to_date_string, format_duration
from exercise_tracker.domain.services.user_service import user_service
from exercise_tracker.domain.services.exercise_service import exercise_service
from exercise_tracker.api.routers._shared import parse_body, error_payload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/users/{user_id}/exercises")
async def log_exercise(
    user_id: str,
    body: dict = Depends(parse_body),
    session: Session = Depends(get_session)
):
    """Enregistre un exercice pour un utilisateur existant"""
    try:
        user = user_service.find_by_id(session, user_id)
        if not user:
            return error_payload("User not found")

        exercise_data = ExerciseCreate.model_validate({
            "description": body.get("description"),
            "duration": body.get("duration"),
            "date": body.get("date"),
        })
        exercise = exercise_service.create(session, user, exercise_data)

        return ExerciseLogged(
            id=user.id,
            username=user.username,
            date=to_date_string(exercise.date),
            duration=format_duration(exercise.duration),
            description=exercise.description,
        ).model_dump(mode="json")
    except Exception as e:
        logger.error(f"Erreur enregistrement exercice pour {user_id}: {type(e).__name__}: {e}")
        return error_payload("Error logging exercise")


@router.get("/users/{user_id}/logs")
async def get_exercise_logs(
    user_id: str,
    session: Session = Depends(get_session),
    date_from: Optional[str] = Query(None, alias="from", description="Borne inferieure incluse (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, alias="to", description="Borne superieure incluse (YYYY-MM-DD)"),
    limit: Optional[str] = Query(None, description="Nombre maximum d'entrees")
):
    """Recupere l'historique d'exercices, du plus recent au plus ancien"""
    try:
        exercise_log = exercise_service.get_log(session, user_id, date_from, date_to, limit)
        return exercise_log.model_dump(mode="json")
    except Exception as e:
        logger.error(f"Erreur recuperation historique pour {user_id}: {type(e).__name__}: {e}")
        return error_payload("Error retrieving exercise logs")
