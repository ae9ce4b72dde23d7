"""Database engine and session wiring for SQLAlchemy."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from referhub.core.config import settings

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)

# SessionLocal is injected in routes using Depends(get_db).
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Provide one DB session per request and close safely."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
