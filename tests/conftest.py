from __future__ import annotations

import base64
import threading
from types import SimpleNamespace

import pytest

from comicshare import create_app, db, notifications
from comicshare.config import TestingConfig
from comicshare.services.notification_service import PushDeliveryError


class FakePushClient:
    def __init__(self):
        self.sent = []
        self.failing_tokens = set()
        self._lock = threading.Lock()

    def send(self, token, title, body, data):
        if token in self.failing_tokens:
            raise PushDeliveryError(f"provider rejected {token}")
        with self._lock:
            self.sent.append({"token": token, "title": title, "body": body, "data": data})
        return "projects/test/messages/1"


def b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


@pytest.fixture
def push_client():
    return FakePushClient()


@pytest.fixture
def app(tmp_path, push_client):
    config = type(
        "Config",
        (TestingConfig,),
        {"SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'comicshare.db'}"},
    )
    app = create_app(config)
    notifications.use_push_client(push_client, app=app)
    yield app
    notifications.join(timeout=5, app=app)
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def make_user(client):
    def _make(login="alice", password="secret-pass", name=None):
        resp = client.post(
            "/api/user/register",
            json={"login": login, "password": password, "name": name or login.title()},
        )
        assert resp.status_code == 200, resp.get_json()
        headers = {"Authorization": f"Bearer {resp.get_json()['token']}"}
        me = client.get("/api/user", headers=headers).get_json()
        return SimpleNamespace(id=me["id"], login=login, password=password, headers=headers)

    return _make


def comic_payload(text="Night shift", description="A short story", pages=None):
    if pages is None:
        pages = [
            {"rows": 1, "columns": 1, "images": [{"image": b64(b"cover")}]},
            {
                "rows": 2,
                "columns": 2,
                "images": [
                    {"cellIndex": 3, "image": b64(b"p1-c3")},
                    {"cellIndex": 0, "image": b64(b"p1-c0")},
                    {"cellIndex": 2, "image": b64(b"p1-c2")},
                    {"cellIndex": 1, "image": b64(b"p1-c1")},
                ],
            },
        ]
    return {"text": text, "description": description, "pages": pages}


@pytest.fixture
def create_comic(client):
    def _create(user, **kwargs):
        resp = client.post("/api/comics", json=comic_payload(**kwargs), headers=user.headers)
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["comicId"]

    return _create
