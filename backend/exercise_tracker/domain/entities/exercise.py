"""
Entité Exercise - Domain Layer
Représente un exercice enregistré par un utilisateur
"""
import math
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship
from pydantic import ConfigDict, field_validator
from typing import Optional, List, Union, Any, TYPE_CHECKING
from datetime import datetime, date, timezone
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .user import User

# Rendu "lisible" des dates exposé par l'API, ex. "Mon Jan 01 2024"
DATE_STRING_FORMAT = "%a %b %d %Y"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value: Any) -> datetime:
    """Convertit une date ISO (date seule ou date + heure) en datetime UTC.

    Une valeur sans fuseau est considérée comme exprimée en UTC.
    Lève ValueError si la valeur n'est pas interprétable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_date_string(value: datetime) -> str:
    """Rendu calendaire : jour de la semaine, mois, jour, année"""
    # SQLite relit les dates sans fuseau ; elles sont déjà en UTC
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_STRING_FORMAT)


def format_duration(value: float) -> Union[int, float]:
    """Durée entière rendue sans décimale (30.0 -> 30)"""
    if float(value).is_integer():
        return int(value)
    return value


class ExerciseBase(SQLModel):
    """Modèle de base pour Exercise"""
    description: str
    duration: float  # minutes


class Exercise(ExerciseBase, table=True):
    """Entité Exercise complète pour la base de données"""
    id: Optional[UUID] = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    date: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        index=True,
    )

    # Relations
    user: Optional["User"] = Relationship(back_populates="exercises")


class ExerciseCreate(ExerciseBase):
    """Schéma pour enregistrer un exercice (corps de requête)"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    description: str = Field(min_length=1)
    date: Optional[datetime] = None

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: float) -> float:
        # inf / nan ne sont pas représentables en JSON
        if not math.isfinite(v):
            raise ValueError("duration must be a finite number")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v: Any) -> Optional[datetime]:
        # Absente ou vide : la date de création sera utilisée
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return parse_date(v)


class ExerciseLogged(SQLModel):
    """Réponse après enregistrement d'un exercice"""
    id: UUID
    username: str
    date: str
    duration: Union[int, float]
    description: str


class ExerciseLogEntry(SQLModel):
    """Entrée de l'historique d'exercices"""
    description: str
    duration: Union[int, float]
    date: str

    @classmethod
    def from_exercise(cls, exercise: Exercise) -> "ExerciseLogEntry":
        return cls(
            description=exercise.description,
            duration=format_duration(exercise.duration),
            date=to_date_string(exercise.date),
        )


class ExerciseLog(SQLModel):
    """Historique d'exercices d'un utilisateur"""
    username: str
    id: UUID
    count: int
    log: List[ExerciseLogEntry]
