"""Database initialization and session management"""

import os
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from gradegoal.database.models import Base

# Database path
DB_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "data")
DB_PATH = os.path.join(DB_DIR, "gradegoal.db")

# Override with GRADEGOAL_DATABASE_URL, e.g. "sqlite://" for an in-memory store
DATABASE_URL = os.getenv("GRADEGOAL_DATABASE_URL", f"sqlite:///{DB_PATH}")


def create_db_engine(url: str = DATABASE_URL) -> Engine:
    """Create an engine; SQLite connections are shared across Streamlit reruns"""
    if url.startswith("sqlite"):
        if url == f"sqlite:///{DB_PATH}":
            os.makedirs(DB_DIR, exist_ok=True)
        return create_engine(
            url,
            connect_args={"check_same_thread": False},  # Needed for SQLite
            poolclass=StaticPool,
            echo=False  # Set to True for SQL query logging
        )
    return create_engine(url, echo=False)


def create_session_factory(db_engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


engine = create_db_engine()

# Session factory
SessionLocal = create_session_factory(engine)


def init_db(db_engine: Engine = engine):
    """Initialize database - create all tables"""
    Base.metadata.create_all(bind=db_engine)


def get_db_session() -> Session:
    """Get a new database session"""
    return SessionLocal()
