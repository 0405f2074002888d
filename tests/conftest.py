"""Shared fixtures: a fresh app over a temporary SQLite file per test."""

from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from jot.config import Settings
from jot.main import create_app
from jot.models.note import Note
from jot.models.repository import Repository
from jot.models.user import User
from jot.utils.security import hash_password

JWT_SECRET = "BrHTysKWKIhwOTyqYvqEUOf3rhTH06Q3k2ZBf3Zbcew="
ALICE = {"name": "Alice", "email": "alice@email.com", "password": "pass"}
BOB = {"name": "Bob", "email": "bob@email.com", "password": "hunter2"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_dir=tmp_path,
        db_path=tmp_path / "test.db",
        jwt_secret=JWT_SECRET,
        token_expire_days=7,
        device_code_expire_minutes=10,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def engine(app, client):
    return app.state.engine


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def users(engine) -> dict[str, int]:
    """Alice and Bob; returns their ids by name."""
    ids = {}
    with Session(engine) as session:
        for data in (ALICE, BOB):
            user = User(
                name=data["name"],
                email=data["email"],
                password_hash=hash_password(data["password"]),
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            ids[data["name"]] = user.id
    return ids


@pytest.fixture
def repositories(engine, users) -> dict[str, int]:
    ids = {}
    with Session(engine) as session:
        for key, name, owner in (
            ("work", "Work", "Alice"),
            ("home", "Home", "Bob"),
        ):
            repository = Repository(name=name, user_id=users[owner])
            session.add(repository)
            session.commit()
            session.refresh(repository)
            ids[key] = repository.id
    return ids


@pytest.fixture
def notes(engine, users, repositories) -> dict[str, int]:
    """Three notes for Alice, two for Bob."""
    today = datetime.now(timezone.utc).date()
    rows = [
        ("first", "First note\nsecond line\nthird line", ["tag1", "tag2"], "Alice", today, repositories["work"]),
        ("shopping", "Shopping list", ["tag2"], "Alice", date(2024, 1, 10), None),
        ("meeting", "Meeting minutes", ["tag1"], "Alice", date(2024, 1, 15), repositories["work"]),
        ("private", "Bob's private thought", ["tag1"], "Bob", today, repositories["home"]),
        ("another", "Another Note from bob", [], "Bob", today, None),
    ]
    ids = {}
    with Session(engine) as session:
        for key, content, tags, owner, target, repository_id in rows:
            note = Note(
                content=content,
                tags=tags,
                user_id=users[owner],
                target_date=target,
                repository_id=repository_id,
            )
            session.add(note)
            session.commit()
            session.refresh(note)
            ids[key] = note.id
    return ids


def login(client: TestClient, username: str = ALICE["email"], password: str = ALICE["password"]) -> str:
    """Log in and return the token; drops the auth cookie so tests choose the transport."""
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return response.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice_headers(client, users) -> dict[str, str]:
    return bearer(login(client))


@pytest.fixture
def bob_headers(client, users) -> dict[str, str]:
    return bearer(login(client, BOB["email"], BOB["password"]))
