"""
Routes des utilisateurs : inscription et liste.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends
from sqlmodel import Session

from exercise_tracker.core.database import get_session
from exercise_tracker.domain.entities import UserCreate, UserRegistered, UserRead
from exercise_tracker.domain.services.user_service import user_service
from exercise_tracker.api.routers._shared import parse_body, error_payload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/users")
async def create_user(
    body: dict = Depends(parse_body),
    session: Session = Depends(get_session)
):
    """Inscrit un nouvel utilisateur"""
    try:
        user_data = UserCreate.model_validate({"username": body.get("username")})
        user = user_service.create(session, user_data)
        return UserRegistered(username=user.username, id=user.id).model_dump(mode="json")
    except Exception as e:
        logger.error(f"Erreur creation utilisateur: {type(e).__name__}: {e}")
        return error_payload("Username already taken")


@router.get("/users")
async def get_users(session: Session = Depends(get_session)):
    """Liste tous les utilisateurs (id et username uniquement)"""
    try:
        users = user_service.list_users(session)
        return [UserRead(id=u.id, username=u.username).model_dump(mode="json") for u in users]
    except Exception as e:
        logger.error(f"Erreur recuperation utilisateurs: {type(e).__name__}: {e}")
        return error_payload("Error fetching users")
