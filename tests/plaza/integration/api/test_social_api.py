"""Integration tests for posts, comments and likes endpoints."""

from fastapi.testclient import TestClient


def _create_post(client: TestClient, headers, content="hello plaza", visibility="PUBLIC"):
    response = client.post(
        "/api/posts",
        headers=headers,
        json={"content": content, "visibility": visibility},
    )
    assert response.status_code == 201
    return response.json()["data"]


def _create_comment(client: TestClient, headers, post_id: int, content="nice post"):
    response = client.post(
        f"/api/posts/{post_id}/comments",
        headers=headers,
        json={"content": content},
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestPosts:
    """Tests for /api/posts."""

    def test_requires_authentication(self, test_client: TestClient):
        response = test_client.get("/api/posts")

        assert response.status_code == 401

    def test_create_and_get(self, test_client: TestClient, auth_headers):
        post = _create_post(test_client, auth_headers)

        assert post["author"]["name"] == "Kim"
        assert post["likeCount"] == 0

        response = test_client.get(f"/api/posts/{post['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["content"] == "hello plaza"

    def test_blank_content_is_rejected(self, test_client: TestClient, auth_headers):
        response = test_client.post(
            "/api/posts",
            headers=auth_headers,
            json={"content": "   "},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_CONTENT"

    def test_views_count_for_other_users(
        self,
        test_client: TestClient,
        auth_headers,
        other_headers,
    ):
        post = _create_post(test_client, auth_headers)

        test_client.get(f"/api/posts/{post['id']}", headers=auth_headers)
        response = test_client.get(f"/api/posts/{post['id']}", headers=other_headers)

        assert response.json()["data"]["viewCount"] == 1

    def test_private_post_is_hidden(
        self,
        test_client: TestClient,
        auth_headers,
        other_headers,
    ):
        post = _create_post(test_client, auth_headers, visibility="PRIVATE")

        response = test_client.get(f"/api/posts/{post['id']}", headers=other_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "POST_NOT_FOUND"

    def test_feeds(self, test_client: TestClient, auth_headers, other_headers):
        _create_post(test_client, auth_headers, content="public one")
        _create_post(test_client, auth_headers, content="private one", visibility="PRIVATE")
        me = test_client.get("/me", headers=auth_headers).json()["data"]

        public = test_client.get("/api/posts", headers=other_headers).json()["data"]
        mine = test_client.get("/api/posts/me", headers=auth_headers).json()["data"]
        theirs = test_client.get(
            f"/api/posts/user/{me['id']}",
            headers=other_headers,
        ).json()["data"]

        assert [p["content"] for p in public["items"]] == ["public one"]
        assert mine["total"] == 2
        assert theirs["total"] == 1
        assert public["page"] == 0

    def test_update_and_delete_by_author_only(
        self,
        test_client: TestClient,
        auth_headers,
        other_headers,
    ):
        post = _create_post(test_client, auth_headers)
        url = f"/api/posts/{post['id']}"

        forbidden = test_client.put(url, headers=other_headers, json={"content": "x"})
        assert forbidden.status_code == 403
        assert forbidden.json()["code"] == "NOT_CONTENT_OWNER"

        updated = test_client.put(url, headers=auth_headers, json={"content": "edited"})
        assert updated.status_code == 200
        assert updated.json()["data"]["content"] == "edited"

        assert test_client.delete(url, headers=auth_headers).status_code == 200
        assert test_client.get(url, headers=auth_headers).status_code == 404


class TestComments:
    """Tests for comment and reply endpoints."""

    def test_comment_and_reply(
        self,
        test_client: TestClient,
        auth_headers,
        other_headers,
    ):
        post = _create_post(test_client, auth_headers)
        comment = _create_comment(test_client, other_headers, post["id"])

        reply = test_client.post(
            f"/api/comments/{comment['id']}/replies",
            headers=auth_headers,
            json={"content": "thanks"},
        )
        assert reply.status_code == 201
        assert reply.json()["data"]["parentId"] == comment["id"]

        listing = test_client.get(
            f"/api/posts/{post['id']}/comments",
            headers=auth_headers,
        ).json()["data"]
        assert [c["replyCount"] for c in listing["items"]] == [1]

        refreshed = test_client.get(f"/api/posts/{post['id']}", headers=auth_headers)
        assert refreshed.json()["data"]["commentCount"] == 2

    def test_reply_to_reply_is_rejected(self, test_client: TestClient, auth_headers):
        post = _create_post(test_client, auth_headers)
        comment = _create_comment(test_client, auth_headers, post["id"])
        reply = test_client.post(
            f"/api/comments/{comment['id']}/replies",
            headers=auth_headers,
            json={"content": "first reply"},
        ).json()["data"]

        response = test_client.post(
            f"/api/comments/{reply['id']}/replies",
            headers=auth_headers,
            json={"content": "nested"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REPLY_TARGET"

    def test_deleted_comment_keeps_its_place(
        self,
        test_client: TestClient,
        auth_headers,
    ):
        post = _create_post(test_client, auth_headers)
        comment = _create_comment(test_client, auth_headers, post["id"])
        url = f"/api/comments/{comment['id']}"

        assert test_client.delete(url, headers=auth_headers).status_code == 200

        assert test_client.get(url, headers=auth_headers).status_code == 404
        listing = test_client.get(
            f"/api/posts/{post['id']}/comments",
            headers=auth_headers,
        ).json()["data"]
        assert listing["items"][0]["isDeleted"] is True
        assert listing["items"][0]["content"] == "deleted comment"

    def test_edit_by_other_user(
        self,
        test_client: TestClient,
        auth_headers,
        other_headers,
    ):
        post = _create_post(test_client, auth_headers)
        comment = _create_comment(test_client, auth_headers, post["id"])

        response = test_client.put(
            f"/api/comments/{comment['id']}",
            headers=other_headers,
            json={"content": "hijacked"},
        )

        assert response.status_code == 403


class TestLikes:
    """Tests for like endpoints on posts and comments."""

    def test_like_and_unlike_post(
        self,
        test_client: TestClient,
        auth_headers,
        other_headers,
    ):
        post = _create_post(test_client, auth_headers)
        url = f"/api/posts/{post['id']}/like"

        liked = test_client.post(url, headers=other_headers)
        assert liked.status_code == 201
        assert liked.json()["data"] == {
            "targetType": "POST",
            "targetId": post["id"],
            "liked": True,
            "likeCount": 1,
        }

        view = test_client.get(f"/api/posts/{post['id']}", headers=other_headers)
        assert view.json()["data"]["isLiked"] is True

        likers = test_client.get(
            f"/api/posts/{post['id']}/likes",
            headers=auth_headers,
        ).json()["data"]
        assert [u["name"] for u in likers["items"]] == ["Lee"]

        unliked = test_client.delete(url, headers=other_headers)
        assert unliked.status_code == 200
        assert unliked.json()["data"]["likeCount"] == 0

    def test_duplicate_like(self, test_client: TestClient, auth_headers):
        post = _create_post(test_client, auth_headers)
        url = f"/api/posts/{post['id']}/like"
        assert test_client.post(url, headers=auth_headers).status_code == 201

        response = test_client.post(url, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_LIKE"
        count = test_client.get(f"/api/posts/{post['id']}", headers=auth_headers)
        assert count.json()["data"]["likeCount"] == 1

    def test_unlike_without_like(self, test_client: TestClient, auth_headers):
        post = _create_post(test_client, auth_headers)

        response = test_client.delete(
            f"/api/posts/{post['id']}/like",
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "LIKE_NOT_FOUND"

    def test_like_comment(self, test_client: TestClient, auth_headers):
        post = _create_post(test_client, auth_headers)
        comment = _create_comment(test_client, auth_headers, post["id"])

        response = test_client.post(
            f"/api/comments/{comment['id']}/like",
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["data"]["targetType"] == "COMMENT"
        listing = test_client.get(
            f"/api/posts/{post['id']}/comments",
            headers=auth_headers,
        ).json()["data"]
        assert listing["items"][0]["likeCount"] == 1
        assert listing["items"][0]["isLiked"] is True

    def test_like_missing_post(self, test_client: TestClient, auth_headers):
        response = test_client.post("/api/posts/999/like", headers=auth_headers)

        assert response.status_code == 404
