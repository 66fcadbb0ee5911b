def test_like_toggles(client, make_user, create_comic):
    alice = make_user("alice")
    bob = make_user("bob")
    comic_id = create_comic(alice)

    assert client.post(f"/api/comics/{comic_id}/like", headers=bob.headers).get_json() == {"liked": True}
    assert client.get(f"/api/comics/{comic_id}/like", headers=bob.headers).get_json() == {"liked": True}
    assert client.get(f"/api/comics/{comic_id}/likes/count", headers=bob.headers).get_json() == {"count": 1}

    assert client.post(f"/api/comics/{comic_id}/like", headers=bob.headers).get_json() == {"liked": False}
    assert client.get(f"/api/comics/{comic_id}/like", headers=bob.headers).get_json() == {"liked": False}
    assert client.get(f"/api/comics/{comic_id}/likes/count", headers=bob.headers).get_json() == {"count": 0}


def test_like_count_spans_users(client, make_user, create_comic):
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    comic_id = create_comic(alice)
    for user in (alice, bob, carol):
        client.post(f"/api/comics/{comic_id}/like", headers=user.headers)
    assert client.get(f"/api/comics/{comic_id}/likes/count", headers=bob.headers).get_json() == {"count": 3}


def test_unlike_is_idempotent(client, make_user, create_comic):
    alice = make_user("alice")
    bob = make_user("bob")
    comic_id = create_comic(alice)
    client.post(f"/api/comics/{comic_id}/like", headers=bob.headers)

    for _ in range(2):
        resp = client.delete(f"/api/comics/{comic_id}/like", headers=bob.headers)
        assert resp.status_code == 200
        assert resp.get_json() == {"liked": False}
    assert client.get(f"/api/comics/{comic_id}/likes/count", headers=bob.headers).get_json() == {"count": 0}


def test_social_actions_on_missing_comic(client, make_user):
    bob = make_user("bob")
    assert client.post("/api/comics/missing/like", headers=bob.headers).status_code == 404
    assert client.delete("/api/comics/missing/like", headers=bob.headers).status_code == 404
    assert client.post("/api/comics/missing/favorite", headers=bob.headers).status_code == 404
    resp = client.post("/api/comics/missing/comments", json={"text": "hi"}, headers=bob.headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "comic_not_found"


def test_social_actions_require_authentication(client, make_user, create_comic):
    comic_id = create_comic(make_user("alice"))
    assert client.post(f"/api/comics/{comic_id}/like").status_code == 401
    assert client.post(f"/api/comics/{comic_id}/favorite").status_code == 401
    assert client.post(f"/api/comics/{comic_id}/comments", json={"text": "hi"}).status_code == 401


def test_favorites_toggle_and_list(client, make_user, create_comic):
    alice = make_user("alice")
    bob = make_user("bob")
    comic_id = create_comic(alice, text="Keeper")

    assert client.post(f"/api/comics/{comic_id}/favorite", headers=bob.headers).get_json() == {"favorited": True}
    assert client.get(f"/api/comics/{comic_id}/favorite", headers=bob.headers).get_json() == {"favorited": True}

    favorites = client.get("/api/user/favorites", headers=bob.headers).get_json()
    assert [f["id"] for f in favorites] == [comic_id]
    assert favorites[0]["text"] == "Keeper"
    assert favorites[0]["image"] is not None
    assert client.get("/api/user/favorites", headers=alice.headers).get_json() == []

    assert client.post(f"/api/comics/{comic_id}/favorite", headers=bob.headers).get_json() == {"favorited": False}
    assert client.get("/api/user/favorites", headers=bob.headers).get_json() == []


def test_comment_create_and_list(client, make_user, create_comic):
    alice = make_user("alice")
    bob = make_user("bob", name="Bobby")
    comic_id = create_comic(alice)

    resp = client.post(f"/api/comics/{comic_id}/comments", json={"text": "  great  "}, headers=bob.headers)
    assert resp.status_code == 201
    comment = resp.get_json()
    assert comment["text"] == "great"
    assert comment["user_id"] == bob.id
    assert comment["user_name"] == "Bobby"
    assert comment["created_at"].endswith("Z")

    client.post(f"/api/comics/{comic_id}/comments", json={"text": "thanks"}, headers=alice.headers)
    info = client.get(f"/api/comics/{comic_id}/info", headers=bob.headers).get_json()
    assert {c["text"] for c in info["comments"]} == {"great", "thanks"}
    mine = {c["text"]: c["isCommentMy"] for c in info["comments"]}
    assert mine == {"great": True, "thanks": False}


def test_empty_comment_is_rejected(client, make_user, create_comic):
    alice = make_user("alice")
    comic_id = create_comic(alice)
    for body in ({}, {"text": ""}, {"text": "   "}, {"text": 5}):
        resp = client.post(f"/api/comics/{comic_id}/comments", json=body, headers=alice.headers)
        assert resp.status_code == 400


def test_comment_deletion_rules(client, make_user, create_comic):
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    comic_id = create_comic(alice)

    def comment(user, text):
        resp = client.post(f"/api/comics/{comic_id}/comments", json={"text": text}, headers=user.headers)
        return resp.get_json()["id"]

    by_bob = comment(bob, "from bob")
    other_by_bob = comment(bob, "again from bob")

    # a stranger cannot tell the comment exists
    resp = client.delete(f"/api/comments/{by_bob}", headers=carol.headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "comment_not_found"

    assert client.delete(f"/api/comments/{by_bob}", headers=bob.headers).status_code == 200
    # the comic's creator moderates
    assert client.delete(f"/api/comments/{other_by_bob}", headers=alice.headers).status_code == 200
    assert client.delete(f"/api/comments/{by_bob}", headers=bob.headers).status_code == 404

    info = client.get(f"/api/comics/{comic_id}/info", headers=alice.headers).get_json()
    assert info["comments"] == []
