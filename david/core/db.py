# david/core/db.py
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from david.core.config import DATABASE_URL

# For SQLite we need check_same_thread False
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    future=True,
    connect_args=({"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_all() -> None:
    """Create all tables if they don't exist yet."""
    # Ensure models are imported so SQLAlchemy knows about them
    from david.models import orm  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_all() -> None:
    from david.models import orm  # noqa: F401

    Base.metadata.drop_all(bind=engine)
