"""
Database handle owned by the application: built in the lifespan, kept on app.state,
handed to endpoints through get_db (one session per request), disposed on shutdown.
"""
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class Database:
    def __init__(self, url: str, engine: Engine | None = None):
        if engine is None:
            # SQLite needs check_same_thread=False for FastAPI
            connect_args = {}
            kwargs = {}
            if url.startswith("sqlite"):
                connect_args = {"check_same_thread": False}
                if url in ("sqlite://", "sqlite:///:memory:"):
                    # in-memory db lives in one connection; share it
                    kwargs["poolclass"] = StaticPool
            else:
                kwargs["pool_pre_ping"] = True
            engine = create_engine(url, connect_args=connect_args, echo=False, **kwargs)
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def create_all(self) -> None:
        import echovid.models  # noqa: F401 - register models on the metadata
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
