"""Database engine and session management."""
import uuid

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from planner.config import settings

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


def init_db(bind=None):
    """Create all tables"""
    import planner.models  # noqa: F401  # registers the mappers

    Base.metadata.create_all(bind=bind or engine)
