"""Pytest fixtures for planner tests."""

import os
from collections.abc import Generator
from datetime import date

os.environ.setdefault("PLANNER_DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from planner import models  # noqa: F401  # Imported for side effects
from planner.database import Base
from planner.repository import PlannerRepository
from planner.service import PlannerService

TODAY = date(2024, 1, 10)  # a Wednesday


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def repository(db_session) -> PlannerRepository:
    return PlannerRepository(db_session)


@pytest.fixture()
def service(repository, today) -> PlannerService:
    return PlannerService(repository, clock=lambda: today)


@pytest.fixture()
def user(service):
    return service.register_user("ana@example.com", "Ana")


@pytest.fixture()
def subject(service, user):
    return service.add_subject(user.id, "Anatomy")
