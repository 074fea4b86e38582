import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from studypro.core.config import settings
from studypro.core.errors import StudyProError
from studypro.core.logging import configure_logging
from studypro.db.base import Base
from studypro.db.session import SessionLocal, engine
from studypro.repositories.sql import SqlRepository
from studypro.services import accounts, content

# Import routers
from studypro.api.auth import router as auth_router
from studypro.api.billing import router as billing_router
from studypro.api.admin import router as admin_router
from studypro.api.content import router as content_router

logger = logging.getLogger(__name__)

def bootstrap() -> None:
    """Create tables, then seed the admin account and default content rows."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        repo = SqlRepository(db)
        accounts.seed_admin(repo)
        content.seed_content_if_empty(repo)
    finally:
        db.close()

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    bootstrap()
    logger.info("%s ready (env=%s)", settings.app_name, settings.app_env)
    yield

def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    @app.exception_handler(StudyProError)
    async def studypro_error_handler(request: Request, exc: StudyProError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.get("/api/health")
    def health():
        return {"status" : "ok", "env" : settings.app_env}

    # Include authentication routes
    app.include_router(auth_router)
    # Include plan, payment and access routes
    app.include_router(billing_router)
    # Include admin review and content management routes
    app.include_router(admin_router)
    # Include public content listing
    app.include_router(content_router)

    return app

app = create_app()

def run() -> None:
    import uvicorn

    configure_logging(settings.log_level, force=True)
    uvicorn.run("studypro.main:app", host=settings.app_host, port=settings.app_port, log_level=settings.log_level)
