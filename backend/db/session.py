"""Database session management"""
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from config.settings import settings

DATABASE_URL = settings.DATABASE_URL

# SQLite needs check_same_thread off: sessions are used from executor threads
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# Create engine
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using
    connect_args=_connect_args,
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create tables that do not exist yet."""
    from models import Base
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.

    Usage in FastAPI:
        from fastapi import Depends
        from db.session import get_db

        @app.get("/links")
        def read_links(db: Session = Depends(get_db)):
            return db.query(SubmittedLink).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
