from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from . import __version__
from .config import Settings, settings as default_settings
from .context import AppContext
from .core.logging_config import setup_logging
from .core.telemetry import setup_telemetry
from .storage import StorageBackend
from .api.routes import auth, profile, projects, files
from .api.exceptions import (
    studynotes_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from .exceptions import StudyNotesException


def create_app(settings: Optional[Settings] = None, primary_storage: Optional[StorageBackend] = None) -> FastAPI:
    """Build the API application with its own context"""
    settings = settings or default_settings
    context = AppContext(settings, primary_storage=primary_storage)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        context.startup()
        yield
        context.shutdown()

    app = FastAPI(title="Study Notes API", version=__version__, lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,  # Session cookie
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StudyNotesException, studynotes_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(auth.router, prefix="/api")
    app.include_router(profile.router, prefix="/api")
    app.include_router(projects.router, prefix="/api")
    app.include_router(files.router, prefix="/api")

    @app.get("/")
    def root():
        return {"message": "Study Notes API"}

    @app.get("/health")
    def health():
        storage_status = context.storage.status()
        return {
            "status": "degraded" if storage_status["degraded"] else "healthy",
            "storage": storage_status,
        }

    setup_telemetry(app, settings)
    return app


setup_logging(default_settings)
app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn"""
    import uvicorn

    uvicorn.run("studynotes.main:app", host="0.0.0.0", port=8000)
