from dotenv import load_dotenv
load_dotenv()

import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from api.rest import rest
from config import Settings, settings as default_settings
from services import NoteService, ServiceContainer, ServiceError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        logger.warning("Unhandled service error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=422, content={"detail": str(exc)})


# ---- App creation ----
def create_app(
    settings: Optional[Settings] = None,
    services: Optional[ServiceContainer] = None,
) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title=settings.app_title, version=settings.app_version)
    app.state.services = services or ServiceContainer()

    app.add_middleware(GZipMiddleware, minimum_size=512)

    allowed = settings.allowed_origins or ["*"]
    allow_credentials = False if "*" in allowed else True
    logger.info("CORS allow_origins: %s | allow_credentials=%s", allowed, allow_credentials)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=86400,
    )

    # Avoid automatic trailing-slash redirect responses which can break CORS preflight flows
    app.router.redirect_slashes = False

    register_error_handlers(app)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "version": settings.app_version}

    notes = rest.attach_service(f"{settings.api_prefix}/notes", NoteService)
    app.include_router(notes.as_router(tags=["notes"]))
    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=default_settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("main:create_app", factory=True, host="0.0.0.0", port=port, reload=False)
