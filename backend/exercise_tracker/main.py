"""
Application FastAPI principale pour l'Exercise Tracker
Point d'entrée de l'API backend
"""
import logging
from logging.handlers import RotatingFileHandler
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, FileResponse
from fastapi.requests import Request
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
import sentry_sdk

from exercise_tracker import __version__
from exercise_tracker.core.settings import get_settings
from exercise_tracker.core.database import create_db_and_tables
from exercise_tracker.api.routers import router

settings = get_settings()

BASE_DIR = Path(__file__).resolve().parent
VIEWS_DIR = BASE_DIR / "views"
PUBLIC_DIR = BASE_DIR / "public"

# Initialiser Sentry (uniquement si SENTRY_DSN est configure)
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.2 if settings.ENVIRONMENT == "production" else 1.0,
        send_default_pii=False,
    )

# Configuration du logging conditionnée par ENVIRONMENT
_log_level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

_handler = logging.StreamHandler(sys.stdout)

if settings.ENVIRONMENT == "production":
    from pythonjsonlogger import jsonlogger
    _handler.setFormatter(jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level"},
    ))
else:
    _handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))

_handlers: list[logging.Handler] = [_handler]
if settings.ENVIRONMENT != "production":
    _handlers.append(RotatingFileHandler(
        'app.log', maxBytes=5_000_000, backupCount=3,
    ))

logging.basicConfig(
    level=_log_level,
    handlers=_handlers,
)

# En production, réduire le bruit des modules tiers
if settings.ENVIRONMENT == "production":
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)
# Toujours émis, quel que soit LOG_LEVEL : une ligne par requête
access_logger = logging.getLogger("exercise_tracker.access")
access_logger.setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestionnaire de cycle de vie de l'application"""
    logger.info(f"Démarrage de l'Exercise Tracker v{__version__}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # Connexion unique, ouverte au démarrage et réutilisée par chaque requête
    create_db_and_tables()
    logger.info("Base de données initialisée")

    yield

    logger.info("Arrêt de l'Exercise Tracker")


app = FastAPI(
    title="Exercise Tracker API",
    description="API d'inscription d'utilisateurs et de suivi de leurs exercices",
    version=__version__,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan
)


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """Trace méthode, URL et adresse client de chaque requête.

    Pour les POST, le chemin est préfixé par PROJECT_URL.
    """
    async def dispatch(self, request: Request, call_next):
        method = request.method
        path = request.url.path
        url = f"{settings.PROJECT_URL}{path}" if method == "POST" else path
        client = request.client.host if request.client else "-"
        access_logger.info(f"{method} {url} - {client}")
        return await call_next(request)


app.add_middleware(RequestLoggerMiddleware)

# Configuration CORS (permissive par défaut)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Inclure les routes
app.include_router(router, prefix="/api")


@app.get("/", include_in_schema=False)
async def index():
    """Page d'accueil statique"""
    return FileResponse(VIEWS_DIR / "index.html")


@app.get("/health")
async def health_check():
    """Point de santé de l'API"""
    return JSONResponse(
        content={
            "status": "healthy",
            "version": __version__,
            "environment": settings.ENVIRONMENT,
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc):
    """Gestionnaire global des exceptions"""
    logger.error(f"Erreur non gérée: {type(exc).__name__}: {str(exc)}", exc_info=True)
    if settings.DEBUG:
        content = {
            "detail": "Internal server error",
            "type": type(exc).__name__,
            "message": str(exc),
        }
    else:
        content = {
            "detail": "Internal server error",
            "message": "An unexpected error occurred",
        }
    return JSONResponse(status_code=500, content=content)


# Fichiers statiques : monté APRES les routes pour que /api/* reste prioritaire
app.mount("/", StaticFiles(directory=PUBLIC_DIR), name="public")


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Lancement de l'application sur le port {settings.PORT}")
    uvicorn.run(
        "exercise_tracker.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
