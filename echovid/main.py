import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from echovid.config import Settings, get_settings
from echovid.database import Database
from echovid.errors import register_error_handlers
from echovid.routers import auth, comments, ratings, videos
from echovid.services.blob_storage import (
    LOCAL_MEDIA_MOUNT,
    BlobStore,
    build_blob_store,
    local_blob_dir,
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    blob_store: BlobStore | None = None,
) -> FastAPI:
    """
    Build the API. Settings are loaded (and validated: SECRET_KEY is required) before anything else.
    database/blob_store can be injected; otherwise they are built from settings in the lifespan.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database or Database(settings.database_url)
        if settings.create_tables:
            db.create_all()
        app.state.database = db
        app.state.blob_store = blob_store or build_blob_store(settings)
        logger.info("EchoVid API ready (blob backend: %s)", settings.blob_backend)
        try:
            yield
        finally:
            # injected handles belong to the caller
            if database is None:
                db.dispose()

    app = FastAPI(title="EchoVid API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(videos.router)
    app.include_router(comments.router)
    app.include_router(ratings.router)

    if settings.blob_backend == "local" and blob_store is None:
        media_dir = local_blob_dir(settings)
        media_dir.mkdir(parents=True, exist_ok=True)
        app.mount(LOCAL_MEDIA_MOUNT, StaticFiles(directory=media_dir), name="media")

    @app.get("/")
    def root():
        return {"message": "EchoVid API", "docs": "/docs"}

    return app


def __getattr__(name: str):
    # `uvicorn echovid.main:app`: built on first access so importing create_app needs no SECRET_KEY
    if name == "app":
        app = create_app()
        globals()["app"] = app
        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
