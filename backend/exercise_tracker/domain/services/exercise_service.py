"""
Service des exercices : enregistrement et historique filtre par dates.
"""
import logging
import re
from sqlmodel import Session, select
from uuid import UUID
from datetime import datetime
from typing import Optional, List

from exercise_tracker.domain.entities import (
    User, Exercise, ExerciseCreate, ExerciseLog, ExerciseLogEntry,
)
from exercise_tracker.domain.entities.exercise import parse_date
from exercise_tracker.domain.services.user_service import user_service

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_limit(value: Optional[str]) -> Optional[int]:
    """Interprete le parametre limit de facon permissive.

    Seul le prefixe entier compte ("2abc" -> 2). Sans chiffre, ou a 0,
    aucune limite n'est appliquee ; une valeur negative vaut sa valeur absolue.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    limit = abs(int(match.group(1)))
    return limit or None


class ExerciseService:

    def create(self, session: Session, user: User, exercise_data: ExerciseCreate) -> Exercise:
        # date absente : la valeur par defaut (instant de creation) s'applique
        exercise = Exercise(user_id=user.id, **exercise_data.model_dump(exclude_none=True))
        session.add(exercise)
        try:
            session.commit()
        except Exception:
            session.rollback()
            raise
        session.refresh(exercise)
        return exercise

    def list_for_user(
        self,
        session: Session,
        user_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Exercise]:
        query = select(Exercise).where(Exercise.user_id == UUID(str(user_id)))

        if date_from:
            query = query.where(Exercise.date >= date_from)
        if date_to:
            query = query.where(Exercise.date <= date_to)

        query = query.order_by(Exercise.date.desc())
        if limit:
            query = query.limit(limit)
        return session.exec(query).all()

    def get_log(
        self,
        session: Session,
        user_id: str,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> ExerciseLog:
        """Construit l'historique d'un utilisateur.

        La requete sur les exercices est executee meme si l'utilisateur
        n'existe pas ; l'absence n'est constatee qu'a la construction de la
        reponse et remonte comme une erreur (LookupError).
        """
        user = user_service.find_by_id(session, user_id)

        exercises = self.list_for_user(
            session,
            user_id,
            date_from=parse_date(date_from) if date_from else None,
            date_to=parse_date(date_to) if date_to else None,
            limit=parse_limit(limit),
        )

        if user is None:
            raise LookupError(f"Utilisateur introuvable: {user_id}")

        entries = [ExerciseLogEntry.from_exercise(e) for e in exercises]
        return ExerciseLog(
            username=user.username,
            id=user.id,
            count=len(entries),
            log=entries,
        )


exercise_service = ExerciseService()
