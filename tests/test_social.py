import uuid

from conftest import act_as


def test_follow_toggle_and_notification(client, alice, bob):
    r = client.post(f"/users/{bob['id']}/follow")
    assert r.status_code == 200
    assert r.json() == {"following": True, "followersCount": 1}

    r = client.post(f"/users/{bob['id']}/follow")
    assert r.json() == {"following": False, "followersCount": 0}

    client.post(f"/users/{bob['id']}/follow")

    act_as(client, bob["email"])
    items = client.get("/notifications").json()["notifications"]
    assert [item["type"] for item in items] == ["follow", "follow"]
    assert items[0]["message"] == "Alice started following you"
    assert items[0]["relatedId"] is None


def test_cannot_follow_self(client, alice):
    r = client.post(f"/users/{alice['id']}/follow")
    assert r.status_code == 400
    assert r.json() == {"error": "You cannot follow yourself"}


def test_follow_unknown_user(client, alice):
    assert client.post(f"/users/{uuid.uuid4()}/follow").status_code == 404
    assert client.post("/users/not-a-uuid/follow").status_code == 400


def test_user_overview(client, alice, bob):
    client.post("/posts", json={"content": "hello"})
    client.post(f"/users/{bob['id']}/follow")

    me = client.get(f"/users/{alice['id']}").json()
    assert me["isSelf"] is True
    assert me["isFollowing"] is False
    assert me["stats"] == {"postsCount": 1, "followersCount": 0, "followingCount": 1}
    assert me["profile"] is None

    other = client.get(f"/users/{bob['id']}").json()
    assert other["isSelf"] is False
    assert other["isFollowing"] is True
    assert other["name"] == "Bob"
    assert other["stats"]["followersCount"] == 1

    assert client.get(f"/users/{uuid.uuid4()}").status_code == 404


def test_profile_upsert(client, alice, bob):
    r = client.put("/users/me/profile", json={"bio": "Two shots, no sugar", "website": "https://example.com"})
    assert r.status_code == 200
    assert r.json()["bio"] == "Two shots, no sugar"
    assert r.json()["isPublic"] is True

    r = client.put("/users/me/profile", json={"location": "Tokyo"})
    assert r.json()["bio"] == "Two shots, no sugar"
    assert r.json()["location"] == "Tokyo"

    assert client.put("/users/me/profile", json={"website": "ftp://example.com"}).status_code == 400
    assert client.put("/users/me/profile", json={"bio": "x" * 161}).status_code == 400

    client.put("/users/me/profile", json={"isPublic": False})
    assert client.get(f"/users/{alice['id']}").json()["profile"]["location"] == "Tokyo"

    act_as(client, bob["email"])
    assert client.get(f"/users/{alice['id']}").json()["profile"] is None


def test_notifications_read_flow(client, alice, bob):
    post = client.post("/posts", json={"content": "brew"}).json()

    act_as(client, bob["email"])
    client.post(f"/posts/{post['id']}/like")
    client.post(f"/posts/{post['id']}/comments", json={"content": "yum"})
    client.post(f"/users/{alice['id']}/follow")

    act_as(client, alice["email"])
    page = client.get("/notifications").json()
    assert page["unreadCount"] == 3
    assert [item["type"] for item in page["notifications"]] == ["follow", "comment", "like"]
    assert page["hasMore"] is False

    first = page["notifications"][0]

    # Чужое уведомление: 403, несуществующее: 404
    act_as(client, bob["email"])
    assert client.post(f"/notifications/{first['id']}/read").status_code == 403
    assert client.post("/notifications/999999/read").status_code == 404

    act_as(client, alice["email"])
    r = client.post(f"/notifications/{first['id']}/read")
    assert r.status_code == 200
    assert r.json()["isRead"] is True

    unread = client.get("/notifications", params={"unreadOnly": "true"}).json()
    assert unread["unreadCount"] == 2
    assert len(unread["notifications"]) == 2

    r = client.post("/notifications/read-all")
    assert r.json() == {"success": True, "updated": 2}
    assert client.get("/notifications").json()["unreadCount"] == 0


def test_notifications_pagination(client, alice, bob):
    for i in range(3):
        client.post("/posts", json={"content": f"post {i}"})

    act_as(client, bob["email"])
    for post in client.get("/feed").json()["posts"]:
        client.post(f"/posts/{post['id']}/like")

    act_as(client, alice["email"])
    first = client.get("/notifications", params={"limit": 2}).json()
    assert len(first["notifications"]) == 2
    assert first["hasMore"] is True
    assert first["unreadCount"] == 3

    rest = client.get("/notifications", params={"limit": 2, "cursor": first["nextCursor"]}).json()
    assert len(rest["notifications"]) == 1
    assert rest["hasMore"] is False


def test_upload_image_validation(client, alice):
    r = client.post("/uploads/image", files={"file": ("cup.png", b"\x89PNG\r\n\x1a\n", "image/png")})
    assert r.status_code == 200
    assert r.json()["url"].startswith("https://")

    r = client.post("/uploads/image", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert r.status_code == 400

    big = b"0" * (5 * 1024 * 1024 + 1)
    r = client.post("/uploads/image", files={"file": ("big.jpg", big, "image/jpeg")})
    assert r.status_code == 400


def test_upload_requires_auth(client):
    r = client.post("/uploads/image", files={"file": ("cup.png", b"data", "image/png")})
    assert r.status_code == 401


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "database": "ok"}
