from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from habitlab.core.config import settings


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across FastAPI's worker threads
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create missing tables. Alembic revisions describe the same schema."""
    import habitlab.models  # noqa: F401  register mappers

    Base.metadata.create_all(bind=engine)
