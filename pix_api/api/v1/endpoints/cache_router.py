# Fichier: pix_api/api/v1/endpoints/cache_router.py

import logging

from fastapi import APIRouter, Response, status

from pix_api.core.cache import cache

router = APIRouter()
logger = logging.getLogger(__name__)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def flush_cache() -> Response:
    """Vide tout le cache: les contenus seront relus depuis Airtable."""
    cache.flush_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{cache_key}", status_code=status.HTTP_204_NO_CONTENT)
def remove_cache_entry(cache_key: str) -> Response:
    removed = cache.delete(cache_key)
    logger.info("Entrée de cache '%s' %s.", cache_key, "supprimée" if removed else "absente")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
