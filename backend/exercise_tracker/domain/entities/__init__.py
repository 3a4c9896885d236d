"""
Initialisation des entités du domaine
Résout les imports circulaires entre les modèles
"""

# Import des modèles dans l'ordre correct pour éviter les imports circulaires
from .user import User, UserCreate, UserRegistered, UserRead
from .exercise import Exercise, ExerciseCreate, ExerciseLogged, ExerciseLogEntry, ExerciseLog

__all__ = [
    "User", "UserCreate", "UserRegistered", "UserRead",
    "Exercise", "ExerciseCreate", "ExerciseLogged", "ExerciseLogEntry", "ExerciseLog",
]
