"""
Configuration de la base de données avec SQLModel
"""
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine, SQLModel, Session
from exercise_tracker.core.settings import get_settings

settings = get_settings()


def build_engine(database_url: str, echo: bool = False):
    """Construit l'engine SQLModel adapté à l'URL fournie"""
    if database_url.startswith("sqlite"):
        # Les sessions traversent le threadpool de FastAPI
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # Base en mémoire : une seule connexion partagée sinon chaque connexion voit une base vide
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


# Engine unique pour tout le processus, réutilisé à chaque requête
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def create_db_and_tables():
    """Créer toutes les tables de la base de données"""
    # Enregistre les tables sur SQLModel.metadata
    import exercise_tracker.domain.entities  # noqa: F401
    SQLModel.metadata.create_all(engine)


def get_session():
    """Générateur de session de base de données pour l'injection de dépendance"""
    with Session(engine) as session:
        yield session
