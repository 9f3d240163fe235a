import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from urbannest.deps import build_engine
from urbannest.repository.properties import PropertyRepository
from urbannest.routers.properties import build_router
from urbannest.service.properties import PropertyService
from urbannest.sql import init_db

APP_NAME = "UrbanNest Listings API"
APP_VERSION = "1.0.0"
LOG_LEVEL = os.getenv("API_LOG_LEVEL", "INFO").upper()

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO),
                    format="%(asctime)s | %(levelname)s | %(message)s")
LOG = logging.getLogger("api")

def create_app(service: PropertyService, engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the HTTP app around an already constructed service.
    When an engine is given, the property table is created on startup if missing.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        LOG.info("Starting %s v%s", APP_NAME, APP_VERSION)
        if engine is not None:
            init_db(engine)
            LOG.info("Database ready: %s", engine.url.render_as_string(hide_password=True))
        yield
        LOG.info("Shutting down %s", APP_NAME)

    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description="Browse and search real-estate listings by location.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        LOG.exception("Storage failure on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    app.include_router(build_router(service))

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    return app

# Explicit wiring: engine -> repository -> service -> app
engine = build_engine()
app = create_app(PropertyService(PropertyRepository(engine)), engine=engine)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "urbannest.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8080")),
        log_level=LOG_LEVEL.lower(),
    )
