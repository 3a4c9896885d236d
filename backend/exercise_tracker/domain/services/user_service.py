"""
Service des utilisateurs : inscription, liste, recherche par identifiant.
"""
import logging
from sqlmodel import Session, select
from uuid import UUID
from typing import Optional, List

from exercise_tracker.domain.entities import User, UserCreate

logger = logging.getLogger(__name__)


class UserService:

    def create(self, session: Session, user_data: UserCreate) -> User:
        user = User(username=user_data.username)
        session.add(user)
        try:
            session.commit()
        except Exception:
            # Contrainte d'unicité sur username (ou erreur de stockage) : rien n'est écrit
            session.rollback()
            raise
        session.refresh(user)
        logger.info(f"Utilisateur cree: {user.username} ({user.id})")
        return user

    def list_users(self, session: Session) -> List[User]:
        # Pas de tri explicite : ordre naturel de la base
        return session.exec(select(User)).all()

    def find_by_id(self, session: Session, user_id: str) -> Optional[User]:
        """Retourne l'utilisateur, ou None si l'identifiant est inconnu.

        Un identifiant mal formé lève ValueError.
        """
        return session.get(User, UUID(str(user_id)))


user_service = UserService()
