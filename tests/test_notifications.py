import pytest
import requests

from comicshare import notifications
from comicshare.services.notification_service import (
    FcmPushClient,
    LoggingPushClient,
    PushDeliveryError,
    push_client_from_config,
)


def _register_device(client, user, token):
    resp = client.post("/api/user/fcm_token", json={"token": token}, headers=user.headers)
    assert resp.status_code == 200


def test_subscriber_is_notified_once(app, client, make_user, create_comic, push_client):
    alice = make_user("alice", name="Alice")
    bob = make_user("bob")
    carol = make_user("carol")
    _register_device(client, alice, "alice-device")
    _register_device(client, bob, "bob-device")
    _register_device(client, carol, "carol-device")
    client.post(f"/api/users/{alice.id}/subscribe", headers=bob.headers)

    comic_id = create_comic(alice, text="Pilot")
    notifications.join(timeout=5, app=app)

    assert len(push_client.sent) == 1
    push = push_client.sent[0]
    assert push["token"] == "bob-device"
    assert push["title"] == "New comic"
    assert push["body"] == 'Alice published a new comic: "Pilot"'
    assert push["data"]["type"] == "new_comic"
    assert push["data"]["comic_id"] == comic_id
    assert push["data"]["creator_id"] == alice.id


def test_failed_delivery_does_not_affect_publishing(app, client, make_user, create_comic, push_client):
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    _register_device(client, bob, "bob-device")
    _register_device(client, carol, "carol-device")
    for user in (bob, carol):
        client.post(f"/api/users/{alice.id}/subscribe", headers=user.headers)
    push_client.failing_tokens.add("bob-device")

    comic_id = create_comic(alice)
    notifications.join(timeout=5, app=app)

    assert [p["token"] for p in push_client.sent] == ["carol-device"]
    assert client.get(f"/api/comics/{comic_id}", headers=alice.headers).status_code == 200


def test_disabled_or_tokenless_subscribers_are_skipped(app, client, make_user, create_comic, push_client):
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    _register_device(client, bob, "bob-device")
    client.put("/api/user/notification_settings", json={"enabled": False}, headers=bob.headers)
    for user in (bob, carol):
        client.post(f"/api/users/{alice.id}/subscribe", headers=user.headers)

    create_comic(alice)
    notifications.join(timeout=5, app=app)
    assert push_client.sent == []


def test_fan_out_reports_counts(app, client, make_user, push_client):
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    _register_device(client, bob, "bob-device")
    _register_device(client, carol, "carol-device")
    for user in (bob, carol):
        client.post(f"/api/users/{alice.id}/subscribe", headers=user.headers)
    push_client.failing_tokens.add("carol-device")

    future = notifications.notify_new_comic(alice.id, "Alice", "comic-1", "Title", app=app)
    assert future.result(timeout=5) == (1, 1)


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def test_fcm_client_posts_v1_message():
    session = FakeSession(FakeResponse(200, {"name": "projects/demo/messages/42"}))
    push = FcmPushClient("demo", "access", timeout=3, session=session)

    assert push.send("device", "Hello", "World", {"comic_id": "c1", "n": 2}) == "projects/demo/messages/42"
    url, kwargs = session.calls[0]
    assert url == "https://fcm.googleapis.com/v1/projects/demo/messages:send"
    assert kwargs["headers"] == {"Authorization": "Bearer access"}
    assert kwargs["timeout"] == 3
    message = kwargs["json"]["message"]
    assert message["token"] == "device"
    assert message["notification"] == {"title": "Hello", "body": "World"}
    assert message["data"] == {"comic_id": "c1", "n": "2"}


def test_fcm_client_raises_on_provider_errors():
    rejected = FcmPushClient("demo", "access", session=FakeSession(FakeResponse(403)))
    with pytest.raises(PushDeliveryError):
        rejected.send("device", "t", "b", {})

    offline = FcmPushClient(
        "demo", "access", session=FakeSession(error=requests.ConnectionError("down"))
    )
    with pytest.raises(PushDeliveryError):
        offline.send("device", "t", "b", {})


def test_push_client_from_config():
    assert isinstance(push_client_from_config({}), LoggingPushClient)
    client = push_client_from_config({"FCM_PROJECT_ID": "demo", "FCM_ACCESS_TOKEN": "tok"})
    assert isinstance(client, FcmPushClient)
    assert client.url.endswith("/projects/demo/messages:send")
