"""
Utilitaires partages entre les routers API.
"""
import json
import logging
from fastapi import Request, HTTPException, status

logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def parse_body(request: Request) -> dict:
    """Lit le corps de la requete en JSON ou en formulaire.

    Retourne un dict vide pour les autres types de contenu ou un corps absent.
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith("application/json"):
        raw = await request.body()
        if not raw:
            return {}
        try:
            payload = json.loads(raw)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body")
        return payload if isinstance(payload, dict) else {}

    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    return {}


def error_payload(message: str) -> dict:
    """Erreur applicative : toujours HTTP 200 avec un champ `error`."""
    return {"error": message}
