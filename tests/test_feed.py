from conftest import act_as


def create_post(client, content="Morning #coffee", **extra):
    r = client.post("/posts", json={"content": content, **extra})
    assert r.status_code == 201, r.text
    return r.json()


def notifications(client):
    return client.get("/notifications").json()


def test_create_post_merges_hashtags(client, alice):
    post = create_post(client, "Flat white #coffee #morning #coffee", hashtags=["#latte", "morning", " beans "])
    assert post["hashtags"] == ["coffee", "morning", "latte", "beans"]
    assert post["isPublic"] is True
    assert post["likesCount"] == 0
    assert post["commentsCount"] == 0
    assert post["isLiked"] is False
    assert post["user"] == {"id": alice["id"], "name": "Alice"}


def test_create_post_validation(client, alice):
    assert client.post("/posts", json={"content": ""}).status_code == 400
    assert client.post("/posts", json={"content": "   "}).status_code == 400
    assert client.post("/posts", json={"content": "x" * 281}).status_code == 400
    assert client.post("/posts", json={"content": "ok", "imageUrl": "not a url"}).status_code == 400
    assert client.post("/posts", json={"content": "x" * 280}).status_code == 201


def test_feed_pagination(client, alice):
    ids = [create_post(client, f"post {i}")["id"] for i in range(5)]

    first = client.get("/feed", params={"limit": 2}).json()
    assert [post["id"] for post in first["posts"]] == [ids[4], ids[3]]
    assert first["hasMore"] is True
    assert first["nextCursor"] == str(ids[3])

    second = client.get("/feed", params={"limit": 2, "cursor": first["nextCursor"]}).json()
    assert [post["id"] for post in second["posts"]] == [ids[2], ids[1]]
    assert second["hasMore"] is True

    last = client.get("/feed", params={"limit": 2, "cursor": second["nextCursor"]}).json()
    assert [post["id"] for post in last["posts"]] == [ids[0]]
    assert last["hasMore"] is False
    assert "nextCursor" not in last


def test_feed_with_unknown_cursor_is_empty(client, alice):
    create_post(client)
    page = client.get("/feed", params={"cursor": 999999}).json()
    assert page == {"posts": [], "hasMore": False}


def test_feed_rejects_bad_paging_values(client, alice):
    assert client.get("/feed", params={"limit": 0}).status_code == 400
    assert client.get("/feed", params={"cursor": "abc"}).status_code == 400


def test_feed_hides_private_posts(client, alice, bob):
    create_post(client, "public")
    private = create_post(client, "private", isPublic=False)

    act_as(client, bob["email"])
    feed = client.get("/feed").json()
    assert [post["content"] for post in feed["posts"]] == ["public"]
    assert client.get(f"/posts/{private['id']}").status_code == 404

    act_as(client, alice["email"])
    assert client.get(f"/posts/{private['id']}").status_code == 200


def test_user_posts_filter(client, alice, bob):
    create_post(client, "by alice")
    act_as(client, bob["email"])
    create_post(client, "by bob")

    page = client.get("/posts", params={"userId": alice["id"]}).json()
    assert [post["content"] for post in page["posts"]] == ["by alice"]

    everyone = client.get("/posts").json()
    assert len(everyone["posts"]) == 2


def test_get_post_missing_and_bad_id(client, alice):
    assert client.get("/posts/999999").status_code == 404
    assert client.get("/posts/abc").status_code == 400


def test_update_post_recomputes_hashtags(client, alice):
    post = create_post(client, "Espresso #dark", hashtags=["bold"])

    r = client.put(f"/posts/{post['id']}", json={"content": "Cappuccino #foam"})
    assert r.status_code == 200
    assert r.json()["content"] == "Cappuccino #foam"
    assert r.json()["hashtags"] == ["foam"]

    r = client.put(f"/posts/{post['id']}", json={"isPublic": False})
    assert r.json()["isPublic"] is False
    assert r.json()["hashtags"] == ["foam"]


def test_update_and_delete_check_existence_before_ownership(client, alice, bob):
    post = create_post(client)

    act_as(client, bob["email"])
    assert client.put(f"/posts/{post['id']}", json={"content": "hijack"}).status_code == 403
    assert client.delete(f"/posts/{post['id']}").status_code == 403
    assert client.put("/posts/999999", json={"content": "hijack"}).status_code == 404
    assert client.delete("/posts/999999").status_code == 404

    act_as(client, alice["email"])
    assert client.delete(f"/posts/{post['id']}").status_code == 200
    assert client.get(f"/posts/{post['id']}").status_code == 404


def test_like_toggle_round_trip(client, alice):
    post = create_post(client)

    first = client.post(f"/posts/{post['id']}/like").json()
    second = client.post(f"/posts/{post['id']}/like").json()
    third = client.post(f"/posts/{post['id']}/like").json()

    assert first == {"liked": True, "likesCount": 1}
    assert second == {"liked": False, "likesCount": 0}
    assert third == {"liked": True, "likesCount": 1}
    assert client.get(f"/posts/{post['id']}").json()["isLiked"] is True


def test_like_missing_post(client, alice):
    assert client.post("/posts/999999/like").status_code == 404
    assert client.post("/posts/abc/like").status_code == 400


def test_liking_own_post_does_not_notify(client, alice):
    post = create_post(client)
    client.post(f"/posts/{post['id']}/like")
    assert notifications(client)["notifications"] == []


def test_like_notifies_author_once_per_transition(client, alice, bob):
    post = create_post(client)

    act_as(client, bob["email"])
    client.post(f"/posts/{post['id']}/like")
    client.post(f"/posts/{post['id']}/like")
    feed = client.get("/feed").json()
    assert feed["posts"][0]["isLiked"] is False
    assert feed["posts"][0]["likesCount"] == 0

    act_as(client, alice["email"])
    items = notifications(client)["notifications"]
    assert len(items) == 1
    assert items[0]["type"] == "like"
    assert items[0]["relatedId"] == post["id"]
    assert items[0]["message"] == "Bob liked your post"
    assert items[0]["isRead"] is False

    # isLiked зависит от того, кто смотрит
    act_as(client, bob["email"])
    client.post(f"/posts/{post['id']}/like")
    assert client.get(f"/posts/{post['id']}").json()["isLiked"] is True
    act_as(client, alice["email"])
    assert client.get(f"/posts/{post['id']}").json()["isLiked"] is False
    assert len(notifications(client)["notifications"]) == 2


def test_comments_flow(client, alice, bob):
    post = create_post(client)

    act_as(client, bob["email"])
    r = client.post(f"/posts/{post['id']}/comments", json={"content": "Looks great"})
    assert r.status_code == 201
    comment = r.json()
    assert comment["postId"] == post["id"]
    assert comment["user"]["name"] == "Bob"

    assert client.get(f"/posts/{post['id']}").json()["commentsCount"] == 1

    act_as(client, alice["email"])
    items = notifications(client)["notifications"]
    assert [item["type"] for item in items] == ["comment"]

    # Свой комментарий к своему посту уведомления не создаёт
    client.post(f"/posts/{post['id']}/comments", json={"content": "Thanks"})
    assert len(notifications(client)["notifications"]) == 1


def test_comment_validation_and_missing_post(client, alice):
    post = create_post(client)
    assert client.post(f"/posts/{post['id']}/comments", json={"content": ""}).status_code == 400
    assert client.post(f"/posts/{post['id']}/comments", json={"content": "x" * 501}).status_code == 400
    assert client.post("/posts/999999/comments", json={"content": "hello"}).status_code == 404
    assert client.get("/posts/999999/comments").status_code == 404


def test_comment_pagination(client, alice):
    post = create_post(client)
    ids = [
        client.post(f"/posts/{post['id']}/comments", json={"content": f"c{i}"}).json()["id"]
        for i in range(3)
    ]

    first = client.get(f"/posts/{post['id']}/comments", params={"limit": 2}).json()
    assert [comment["id"] for comment in first["comments"]] == [ids[2], ids[1]]
    assert first["hasMore"] is True

    rest = client.get(f"/posts/{post['id']}/comments", params={"limit": 2, "cursor": first["nextCursor"]}).json()
    assert [comment["id"] for comment in rest["comments"]] == [ids[0]]
    assert rest["hasMore"] is False
    assert "nextCursor" not in rest


def test_update_and_delete_comment_ordering(client, alice, bob):
    post = create_post(client)
    comment = client.post(f"/posts/{post['id']}/comments", json={"content": "mine"}).json()

    act_as(client, bob["email"])
    assert client.put(f"/comments/{comment['id']}", json={"content": "theirs"}).status_code == 403
    assert client.delete(f"/comments/{comment['id']}").status_code == 403
    assert client.put("/comments/999999", json={"content": "theirs"}).status_code == 404
    assert client.delete("/comments/999999").status_code == 404

    act_as(client, alice["email"])
    r = client.put(f"/comments/{comment['id']}", json={"content": "edited"})
    assert r.status_code == 200
    assert r.json()["content"] == "edited"
    assert client.put(f"/comments/{comment['id']}", json={"content": ""}).status_code == 400

    assert client.delete(f"/comments/{comment['id']}").status_code == 200
    assert client.get(f"/posts/{post['id']}/comments").json()["comments"] == []


def test_deleting_post_keeps_notifications(client, alice, bob):
    post = create_post(client)

    act_as(client, bob["email"])
    client.post(f"/posts/{post['id']}/like")
    client.post(f"/posts/{post['id']}/comments", json={"content": "nice"})

    act_as(client, alice["email"])
    assert client.delete(f"/posts/{post['id']}").status_code == 200
    items = notifications(client)["notifications"]
    assert {item["type"] for item in items} == {"like", "comment"}
    assert all(item["relatedId"] == post["id"] for item in items)
