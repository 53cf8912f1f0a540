import pytest


@pytest.fixture
def post_id(alice, create_post):
    _, headers = alice
    return create_post(headers, "Hello").json()["postId"]


class TestComments:
    def test_create_and_list(self, client, bob, post_id):
        bob_id, headers = bob
        response = client.post(f"/api/comments/{post_id}", json={"content": "nice"}, headers=headers)
        assert response.status_code == 201
        comment = response.json()
        assert comment["content"] == "nice"
        assert comment["userId"] == bob_id
        assert comment["postId"] == post_id
        assert comment["user"] == {"username": "bob", "fullname": "Bob B"}

        later = client.post(f"/api/comments/{post_id}", json={"content": "again"}, headers=headers).json()
        listed = client.get(f"/api/comments/post/{post_id}").json()
        assert [c["id"] for c in listed] == [later["id"], comment["id"]]

    def test_empty_content_rejected(self, client, bob, post_id):
        _, headers = bob
        response = client.post(f"/api/comments/{post_id}", json={"content": ""}, headers=headers)
        assert response.status_code == 400

    def test_comment_on_missing_post(self, client, bob):
        _, headers = bob
        response = client.post("/api/comments/999", json={"content": "hello?"}, headers=headers)
        assert response.status_code == 500

    def test_author_updates_and_deletes(self, client, bob, post_id):
        _, headers = bob
        comment_id = client.post(f"/api/comments/{post_id}", json={"content": "typo"}, headers=headers).json()["id"]

        updated = client.put(f"/api/comments/{comment_id}", json={"content": "fixed"}, headers=headers)
        assert updated.status_code == 200
        assert updated.json()["content"] == "fixed"

        deleted = client.delete(f"/api/comments/{comment_id}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Comment deleted successfully"}
        assert client.get(f"/api/comments/post/{post_id}").json() == []

    def test_other_user_cannot_touch_comment(self, client, alice, bob, post_id):
        _, alice_headers = alice
        _, bob_headers = bob
        comment_id = client.post(f"/api/comments/{post_id}", json={"content": "mine"}, headers=bob_headers).json()["id"]

        for response in (
            client.put(f"/api/comments/{comment_id}", json={"content": "hijack"}, headers=alice_headers),
            client.delete(f"/api/comments/{comment_id}", headers=alice_headers),
        ):
            assert response.status_code == 404
            assert response.json() == {"message": "Comment not found or unauthorized"}

        assert client.get(f"/api/comments/post/{post_id}").json()[0]["content"] == "mine"

    def test_missing_comment(self, client, bob):
        _, headers = bob
        assert client.put("/api/comments/999", json={"content": "x"}, headers=headers).status_code == 404
        assert client.delete("/api/comments/999", headers=headers).status_code == 404
