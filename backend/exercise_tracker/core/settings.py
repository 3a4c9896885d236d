"""
Configuration centralisée pour l'Exercise Tracker
Utilise pydantic-settings pour la gestion des variables d'environnement
"""
from pydantic_settings import BaseSettings
from pydantic import Field, model_validator
from typing import List


class Settings(BaseSettings):
    """Configuration de l'application"""

    # Database
    DATABASE_URL: str = Field(
        description="Chaîne de connexion à la base de données (obligatoire, pas de valeur par défaut)"
    )

    # Serveur
    PORT: int = Field(default=3000)
    PROJECT_URL: str = Field(
        default="",
        description="URL publique du projet, préfixée aux chemins POST dans le log des requêtes"
    )

    # CORS
    ALLOWED_ORIGINS: List[str] = Field(
        default=["*"],
        description="Origines autorisées pour CORS (toutes par défaut)"
    )

    # Monitoring (Sentry)
    SENTRY_DSN: str = Field(
        default="",
        description="DSN Sentry pour le error tracking (vide = Sentry desactive)"
    )

    # Application
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(
        default="",
        description="Niveau de logging (auto-configuré selon ENVIRONMENT si vide)"
    )

    @model_validator(mode="after")
    def _configure_environment(self) -> "Settings":
        """Configure DEBUG et LOG_LEVEL selon ENVIRONMENT."""
        is_prod = self.ENVIRONMENT == "production"
        # En production, forcer DEBUG=False
        if is_prod:
            self.DEBUG = False
        if not self.LOG_LEVEL:
            self.LOG_LEVEL = "WARNING" if is_prod else "INFO"
        self.LOG_LEVEL = self.LOG_LEVEL.upper()
        return self

    class Config:
        env_file = ".env"
        case_sensitive = True


def get_settings() -> Settings:
    """Récupère la configuration"""
    return Settings()
