from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from bloglist.core.config import Settings
from bloglist.core.security import get_password_hash
from bloglist.main import create_app
from bloglist.models import Post, User


SECRET = "tests-secret-key"
ROOT_PASSWORD = "secretpassword"

INITIAL_POSTS = [
    {"title": "React patterns", "author": "Michael Chan", "url": "https://reactpatterns.com/", "likes": 7},
    {"title": "Go To Statement Considered Harmful", "author": "Edsger W. Dijkstra", "url": "http://www.u.arizona.edu/~rubinson/copyright_violations/Go_To_Considered_Harmful.html", "likes": 5},
]


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        secret_key=SECRET,
        database_url=f"sqlite:///{tmp_path / 'bloglist.sqlite3'}",
        environment="test",
    )


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def root_user(db) -> User:
    user = User(username="root", name="Super User", password_hash=get_password_hash(ROOT_PASSWORD))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def seeded_posts(db, root_user: User) -> list[Post]:
    posts = [Post(**data) for data in INITIAL_POSTS]
    root_user.posts.extend(posts)
    db.commit()
    return posts


@pytest.fixture()
def root_token(client, root_user: User) -> str:
    return login(client, "root", ROOT_PASSWORD)


@pytest.fixture()
def posts_in_db(app):
    def _posts_in_db() -> list[dict]:
        session = app.state.session_factory()
        try:
            return [
                {"id": post.id, "title": post.title, "likes": post.likes, "user_id": post.user_id}
                for post in session.query(Post).all()
            ]
        finally:
            session.close()

    return _posts_in_db


@pytest.fixture()
def users_in_db(app):
    def _users_in_db() -> list[dict]:
        session = app.state.session_factory()
        try:
            return [
                {"id": user.id, "username": user.username, "post_ids": [post.id for post in user.posts]}
                for user in session.query(User).all()
            ]
        finally:
            session.close()

    return _users_in_db


def login(client, username: str, password: str) -> str:
    response = client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
