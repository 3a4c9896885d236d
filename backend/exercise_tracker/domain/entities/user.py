"""
Entité User - Domain Layer
Représente un utilisateur de l'Exercise Tracker
"""
from sqlmodel import SQLModel, Field, Relationship
from pydantic import ConfigDict
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .exercise import Exercise


class UserBase(SQLModel):
    """Modèle de base pour User"""
    username: str = Field(unique=True, index=True, max_length=255)


class User(UserBase, table=True):
    """Entité User complète pour la base de données"""
    id: Optional[UUID] = Field(default_factory=uuid4, primary_key=True)

    # Relations
    exercises: List["Exercise"] = Relationship(back_populates="user")


class UserCreate(SQLModel):
    """Schéma pour créer un utilisateur"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: str = Field(min_length=1, max_length=255)


class UserRegistered(SQLModel):
    """Réponse de création d'un utilisateur : uniquement le nom et l'identifiant"""
    username: str
    id: UUID


class UserRead(SQLModel):
    """Schéma pour lire un utilisateur (réponse API)"""
    id: UUID
    username: str
