"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("SECRET_KEY", "secret-key")
os.environ.setdefault("AIRTABLE_API_KEY", "test-airtable-key")
os.environ.setdefault("AIRTABLE_BASE", "test-base")
os.environ.setdefault("ENVIRONMENT", "test")

from pix_api.core.cache import cache
from pix_api.db.base_class import Base
from pix_api.models.answer_model import Answer
from pix_api.models.user_model import User


TABLES = [
    User.__table__,
    Answer.__table__,
]


@pytest.fixture()
def engine(tmp_path):
    # Fichier SQLite plutôt que ":memory:": le TestClient sert les requêtes
    # depuis un autre thread, chaque session doit avoir sa propre connexion.
    engine = create_engine(
        f"sqlite:///{tmp_path / 'pix_test.db'}",
        connect_args={"check_same_thread": False},
        future=True,
    )
    Base.metadata.create_all(bind=engine, tables=TABLES)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=TABLES)
        engine.dispose()


@pytest.fixture()
def db_session(engine) -> Session:
    SessionLocal = sessionmaker(bind=engine, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine):
    from pix_api.api.v1.dependencies import get_db
    from pix_api.main import app

    SessionLocal = sessionmaker(bind=engine, future=True)

    def _override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _flush_cache():
    cache.flush_all()
    yield
    cache.flush_all()
