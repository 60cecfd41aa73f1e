"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite file with three companies and four jobs:

    c1: test1 (100, "0.1"), test2 (200, "0.2"), test3 (300, "0"), test4 (null, null)
    c2, c3: no jobs
"""

import os

# must be set before jobly.core.config is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from typing import Dict, Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from jobly.db.base import create_all, drop_all
from jobly.db.query import run_query
from jobly.db.session import get_db, make_engine
from jobly.main import app

COMPANIES = [
    ("c1", "C1", "Desc1", 1, "http://c1.img"),
    ("c2", "C2", "Desc2", 2, "http://c2.img"),
    ("c3", "C3", "Desc3", 3, "http://c3.img"),
]

JOBS = [
    ("test1", 100, "0.1", "c1"),
    ("test2", 200, "0.2", "c1"),
    ("test3", 300, "0", "c1"),
    ("test4", None, None, "c1"),
]


def _seed(db: Session) -> List[int]:
    for row in COMPANIES:
        run_query(
            db,
            """INSERT INTO companies (handle, name, description, num_employees, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            list(row),
        )
    ids = []
    for row in JOBS:
        rows = run_query(
            db,
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, $4)
               RETURNING id""",
            list(row),
        )
        ids.append(rows[0]["id"])
    db.commit()
    return ids


@pytest.fixture
def engine(tmp_path):
    """Fresh database file with the tables created."""
    engine = make_engine(f"sqlite:///{tmp_path / 'jobly_test.db'}")
    create_all(engine)
    yield engine
    drop_all(engine)
    engine.dispose()


@pytest.fixture
def job_ids(engine) -> List[int]:
    factory = sessionmaker(bind=engine, autoflush=False, future=True)
    with factory() as db:
        return _seed(db)


@pytest.fixture
def session_factory(engine, job_ids):
    return sessionmaker(bind=engine, autoflush=False, future=True)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def c1() -> Dict[str, object]:
    return {
        "handle": "c1",
        "name": "C1",
        "description": "Desc1",
        "numEmployees": 1,
        "logoUrl": "http://c1.img",
    }
