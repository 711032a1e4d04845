import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pix_api.core.config import settings
from pix_api.core.errors import InvalidPayloadError, JsonApiError, build_error_object
from pix_api.db.base import Base
from pix_api.db import session as db_session
from pix_api.api.v1.api import api_router
from pix_api.services.airtable.client import AirtableError

# --- Configuration du logging ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- Initialisation de l'application FastAPI ---
app = FastAPI(
    title="Pix API",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type"],
)

app.include_router(api_router, prefix="/api")


# --- Erreurs au format JSON:API ---
@app.exception_handler(JsonApiError)
async def jsonapi_error_handler(request: Request, exc: JsonApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_document())


def _pointer_from_location(location: tuple) -> str:
    # ("body", "data", "attributes", "value") -> "/data/attributes/value"
    parts = [str(part) for part in location if part != "body"]
    return "/" + "/".join(parts) if parts else "/data"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        build_error_object(
            InvalidPayloadError.status_code,
            InvalidPayloadError.title,
            error.get("msg", "Invalid value"),
            _pointer_from_location(tuple(error.get("loc", ()))),
        )
        for error in exc.errors()
    ]
    logger.info("Requête invalide sur %s: %s", request.url.path, errors)
    return JSONResponse(status_code=InvalidPayloadError.status_code, content={"errors": errors})


@app.exception_handler(AirtableError)
async def airtable_error_handler(request: Request, exc: AirtableError) -> JSONResponse:
    logger.error("Référentiel Airtable indisponible: %s", exc)
    content = {"errors": [build_error_object(503, "Service Unavailable", "Le référentiel de contenus est indisponible.")]}
    return JSONResponse(status_code=503, content=content)


# --- Événement de Démarrage ---
@app.on_event("startup")
async def startup():
    logger.info("Vérification et création des tables de la base de données...")
    async with db_session.async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Les tables de la base de données sont prêtes.")


# --- Route Racine ---
@app.get("/api")
def read_root():
    return {"name": "pix-api", "environment": settings.ENVIRONMENT}
