"""
DevConnect Backend — Post, Like & Comment Endpoint Tests
==========================================================

What we test:
    ✅ Create / list (newest first) / get / delete
    ✅ Malformed and unknown ids → 404
    ✅ Only the author may delete a post or a comment (401 otherwise)
    ✅ Like twice / unlike without like → 400
    ✅ Deleting a comment removes that comment, not the author's latest one
"""

import uuid

import pytest

from tests.conftest import auth_headers


async def _create_post(test_client, token, text="hello"):
    response = await test_client.post("/api/posts", json={"text": text}, headers=auth_headers(token))
    assert response.status_code == 200, response.text
    return response.json()


class TestPosts:

    @pytest.mark.asyncio
    async def test_create_snapshots_author(self, test_client, register_user):
        token = await register_user("Ada")
        post = await _create_post(test_client, token)

        me = (await test_client.get("/api/auth", headers=auth_headers(token))).json()
        assert post["text"] == "hello"
        assert post["name"] == "Ada"
        assert post["avatar"] == me["avatar"]
        assert post["user"] == me["id"]
        assert post["likes"] == [] and post["comments"] == []

    @pytest.mark.asyncio
    async def test_blank_text_rejected(self, test_client, register_user):
        token = await register_user()
        response = await test_client.post("/api/posts", json={"text": "   "}, headers=auth_headers(token))
        assert response.status_code == 400
        assert response.json()["msg"] == "Text is required"

    @pytest.mark.asyncio
    async def test_list_newest_first(self, test_client, register_user):
        token = await register_user()
        for text in ("one", "two", "three"):
            await _create_post(test_client, token, text)

        response = await test_client.get("/api/posts", headers=auth_headers(token))
        assert [p["text"] for p in response.json()] == ["three", "two", "one"]

    @pytest.mark.asyncio
    async def test_list_requires_token(self, test_client):
        response = await test_client.get("/api/posts")
        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize("post_id", ["not-a-uuid", str(uuid.uuid4())])
    async def test_get_unknown_or_malformed(self, test_client, register_user, post_id):
        token = await register_user()
        response = await test_client.get(f"/api/posts/{post_id}", headers=auth_headers(token))
        assert response.status_code == 404
        assert response.json()["msg"] == "Post not found"


class TestDeletePost:

    @pytest.mark.asyncio
    async def test_only_owner_can_delete(self, test_client, register_user):
        owner = await register_user("Owner")
        stranger = await register_user("Stranger")
        post = await _create_post(test_client, owner)

        denied = await test_client.delete(f"/api/posts/{post['id']}", headers=auth_headers(stranger))
        assert denied.status_code == 401
        assert denied.json()["msg"] == "User not authorized"
        still_there = await test_client.get(f"/api/posts/{post['id']}", headers=auth_headers(owner))
        assert still_there.status_code == 200

        removed = await test_client.delete(f"/api/posts/{post['id']}", headers=auth_headers(owner))
        assert removed.status_code == 200
        assert removed.json() == {"msg": "Post removed"}
        gone = await test_client.get(f"/api/posts/{post['id']}", headers=auth_headers(owner))
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown(self, test_client, register_user):
        token = await register_user()
        response = await test_client.delete(f"/api/posts/{uuid.uuid4()}", headers=auth_headers(token))
        assert response.status_code == 404


class TestLikes:

    @pytest.mark.asyncio
    async def test_like_twice_rejected(self, test_client, register_user):
        author = await register_user("Author")
        fan = await register_user("Fan")
        post = await _create_post(test_client, author)

        first = await test_client.put(f"/api/posts/like/{post['id']}", headers=auth_headers(fan))
        assert first.status_code == 200
        assert len(first.json()) == 1

        second = await test_client.put(f"/api/posts/like/{post['id']}", headers=auth_headers(fan))
        assert second.status_code == 400
        assert second.json()["msg"] == "Post already liked"

        stored = await test_client.get(f"/api/posts/{post['id']}", headers=auth_headers(fan))
        assert len(stored.json()["likes"]) == 1

    @pytest.mark.asyncio
    async def test_unlike_without_like(self, test_client, register_user):
        token = await register_user()
        post = await _create_post(test_client, token)

        response = await test_client.put(f"/api/posts/unlike/{post['id']}", headers=auth_headers(token))
        assert response.status_code == 400
        assert response.json()["msg"] == "Post has not yet been liked"

    @pytest.mark.asyncio
    async def test_like_unknown_post(self, test_client, register_user):
        token = await register_user()
        response = await test_client.put("/api/posts/like/nope", headers=auth_headers(token))
        assert response.status_code == 404


class TestComments:

    @pytest.mark.asyncio
    async def test_delete_targets_comment_id(self, test_client, register_user):
        author = await register_user("Author")
        commenter = await register_user("Commenter")
        post = await _create_post(test_client, author)
        headers = auth_headers(commenter)

        await test_client.post(f"/api/posts/comment/{post['id']}", json={"text": "first"}, headers=headers)
        comments = (
            await test_client.post(
                f"/api/posts/comment/{post['id']}", json={"text": "second"}, headers=headers
            )
        ).json()
        assert [c["text"] for c in comments] == ["second", "first"]
        first_id = comments[1]["id"]

        response = await test_client.delete(
            f"/api/posts/comment/{post['id']}/{first_id}", headers=headers
        )
        assert response.status_code == 200
        assert [c["text"] for c in response.json()] == ["second"]

    @pytest.mark.asyncio
    async def test_cannot_delete_others_comment(self, test_client, register_user):
        author = await register_user("Author")
        commenter = await register_user("Commenter")
        post = await _create_post(test_client, author)

        comments = (
            await test_client.post(
                f"/api/posts/comment/{post['id']}", json={"text": "mine"}, headers=auth_headers(commenter)
            )
        ).json()

        response = await test_client.delete(
            f"/api/posts/comment/{post['id']}/{comments[0]['id']}", headers=auth_headers(author)
        )
        assert response.status_code == 401
        assert response.json()["msg"] == "User not authorized"

    @pytest.mark.asyncio
    async def test_unknown_comment(self, test_client, register_user):
        token = await register_user()
        post = await _create_post(test_client, token)
        response = await test_client.delete(
            f"/api/posts/comment/{post['id']}/{uuid.uuid4()}", headers=auth_headers(token)
        )
        assert response.status_code == 404
        assert response.json()["msg"] == "Comment does not exist"

    @pytest.mark.asyncio
    async def test_blank_comment_rejected(self, test_client, register_user):
        token = await register_user()
        post = await _create_post(test_client, token)
        response = await test_client.post(
            f"/api/posts/comment/{post['id']}", json={"text": ""}, headers=auth_headers(token)
        )
        assert response.status_code == 400


class TestConversation:

    @pytest.mark.asyncio
    async def test_like_unlike_comment_uncomment(self, test_client, register_user):
        alice = await register_user("Alice")
        bob = await register_user("Bob")
        post = await _create_post(test_client, alice, "hello")
        post_id = post["id"]
        bob_headers = auth_headers(bob)

        assert (await test_client.put(f"/api/posts/like/{post_id}", headers=bob_headers)).status_code == 200
        assert (await test_client.put(f"/api/posts/unlike/{post_id}", headers=bob_headers)).json() == []

        comments = (
            await test_client.post(f"/api/posts/comment/{post_id}", json={"text": "nice"}, headers=bob_headers)
        ).json()
        assert comments[0]["name"] == "Bob"
        await test_client.delete(f"/api/posts/comment/{post_id}/{comments[0]['id']}", headers=bob_headers)

        final = (await test_client.get(f"/api/posts/{post_id}", headers=auth_headers(alice))).json()
        assert final["text"] == "hello"
        assert final["likes"] == []
        assert final["comments"] == []
