import unittest

from fastapi.testclient import TestClient

from photoshare.auth import make_session_token
from photoshare.db import get_db
from photoshare.main import app

from tests.base import PNG_BYTES, DatabaseTestCase


class ApiTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def login(self, name: str) -> tuple[str, dict]:
        resp = self.client.post("/session", json={"name": name})
        self.assertIn(resp.status_code, (200, 201))
        body = resp.json()
        return body["identifier"], {"Authorization": f"Bearer {body['token']}"}

    def upload(self, headers: dict) -> str:
        resp = self.client.post(
            "/photos",
            headers=headers,
            files={"file": ("pic.png", PNG_BYTES, "image/png")},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["photo_id"]


class TestSession(ApiTestCase):
    def test_liveness(self) -> None:
        self.assertEqual(self.client.get("/liveness").json(), {"status": "ok"})

    def test_login_creates_then_reuses(self) -> None:
        first = self.client.post("/session", json={"name": "alice"})
        self.assertEqual(first.status_code, 201)
        again = self.client.post("/session", json={"name": "Alice"})
        self.assertEqual(again.status_code, 200)
        self.assertEqual(first.json()["identifier"], again.json()["identifier"])

    def test_register_conflict(self) -> None:
        self.assertEqual(self.client.post("/users", json={"name": "alice"}).status_code, 201)
        resp = self.client.post("/users", json={"name": "ALICE"})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["error"], "conflict")

    def test_short_name_rejected(self) -> None:
        self.assertEqual(self.client.post("/session", json={"name": "ab"}).status_code, 422)

    def test_requires_token(self) -> None:
        self.assertEqual(self.client.get("/stream").status_code, 401)
        bad = {"Authorization": "Bearer not-a-token"}
        self.assertEqual(self.client.get("/stream", headers=bad).status_code, 401)

    def test_token_for_unknown_user(self) -> None:
        headers = {"Authorization": f"Bearer {make_session_token('ghost00000')}"}
        self.assertEqual(self.client.get("/users", headers=headers).status_code, 401)


class TestSocialEndpoints(ApiTestCase):
    def test_follow_ban_flow(self) -> None:
        alice_id, alice = self.login("alice")
        bob_id, bob = self.login("bob")

        self.assertEqual(self.client.post(f"/users/{bob_id}/follows", headers=alice).status_code, 200)
        self.assertTrue(self.client.get(f"/follows/{bob_id}", headers=alice).json()["isFollowed"])
        self.assertEqual(self.client.post(f"/users/{bob_id}/follows", headers=alice).status_code, 409)
        self.assertEqual(self.client.post(f"/users/{alice_id}/follows", headers=alice).status_code, 400)

        photo_id = self.upload(bob)
        self.assertEqual(self.client.get("/stream", headers=alice).json(), [photo_id])

        self.assertEqual(self.client.post(f"/users/{bob_id}/bans", headers=alice).status_code, 200)
        self.assertTrue(self.client.get(f"/bans/{bob_id}", headers=alice).json()["banned"])
        self.assertEqual(self.client.get("/stream", headers=alice).json(), [])
        self.assertEqual(self.client.post(f"/users/{bob_id}/bans", headers=alice).status_code, 409)
        self.assertEqual(self.client.post(f"/users/{alice_id}/bans", headers=bob).status_code, 403)

        listed = [u["username"] for u in self.client.get("/users", headers=bob).json()]
        self.assertEqual(listed, ["bob"])

        self.assertEqual(self.client.delete(f"/users/{bob_id}/bans", headers=alice).status_code, 200)
        self.assertEqual(self.client.get("/stream", headers=alice).json(), [photo_id])
        self.assertEqual(self.client.delete(f"/users/{bob_id}/follows", headers=alice).status_code, 200)
        self.assertFalse(self.client.get(f"/follows/{bob_id}", headers=alice).json()["isFollowed"])

    def test_follow_unknown_user(self) -> None:
        _, alice = self.login("alice")
        resp = self.client.post("/users/nosuchuser/follows", headers=alice)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["error"], "not_found")


class TestUserEndpoints(ApiTestCase):
    def test_profile_and_rename(self) -> None:
        alice_id, alice = self.login("alice")
        self.login("bob")

        profile = self.client.get(f"/users/{alice_id}", headers=alice).json()
        self.assertEqual(profile["username"], "alice")
        self.assertEqual(profile["photos"], [])
        self.assertEqual(self.client.get("/users/by-name/ALICE", headers=alice).json()["user_id"], alice_id)
        self.assertEqual(self.client.get("/users/nosuchuser", headers=alice).status_code, 404)

        resp = self.client.patch("/users/username", headers=alice, json={"newUsername": "Bob"})
        self.assertEqual(resp.status_code, 409)
        resp = self.client.patch("/users/username", headers=alice, json={"newUsername": "alicia"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get(f"/users/{alice_id}/username", headers=alice).json(), {"username": "alicia"})


class TestPhotoEndpoints(ApiTestCase):
    def test_photo_lifecycle(self) -> None:
        _, owner = self.login("owner")
        _, fan = self.login("fan")
        photo_id = self.upload(owner)

        self.assertEqual(self.client.get(f"/photos/{photo_id}/image", headers=fan).content, PNG_BYTES)
        self.assertEqual(self.client.post(f"/photos/{photo_id}/likes", headers=fan).json()["created"], True)
        self.assertEqual(self.client.post(f"/photos/{photo_id}/likes", headers=fan).json()["created"], False)
        self.assertEqual(self.client.get(f"/photos/{photo_id}/likes", headers=fan).json(), {"liked": True, "likes_count": 1})

        resp = self.client.post(f"/photos/{photo_id}/comments", headers=fan, json={"content": "lovely"})
        self.assertEqual(resp.status_code, 201)
        comment_id = resp.json()["comment_id"]

        detail = self.client.get(f"/photos/{photo_id}", headers=fan).json()
        self.assertEqual(detail["username"], "owner")
        self.assertEqual(detail["likes_count"], 1)
        self.assertEqual([c["comment_id"] for c in detail["comments"]], [comment_id])
        self.assertNotIn("image_data", detail)

        self.assertEqual(self.client.delete(f"/photos/{photo_id}", headers=fan).status_code, 403)
        self.assertEqual(self.client.delete(f"/photos/{photo_id}", headers=owner).status_code, 200)
        self.assertEqual(self.client.get(f"/photos/{photo_id}", headers=fan).status_code, 404)
        self.assertEqual(self.client.get(f"/photos/{photo_id}/comments", headers=fan).status_code, 404)
        self.assertEqual(self.client.delete(f"/comments/{comment_id}", headers=fan).status_code, 404)

    def test_upload_rejects_non_images(self) -> None:
        _, owner = self.login("owner")
        resp = self.client.post(
            "/photos",
            headers=owner,
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get("/photos", headers=owner).json(), [])

    def test_upload_without_content_type_rejected(self) -> None:
        _, owner = self.login("owner")
        resp = self.client.post(
            "/photos",
            headers=owner,
            files={"file": ("noext", b"<html>not an image</html>", "")},
        )
        self.assertEqual(resp.status_code, 400, resp.text)
        self.assertEqual(resp.json()["error"], "invalid_operation")
        self.assertEqual(self.client.get("/photos", headers=owner).json(), [])

    def test_image_served_with_its_media_type(self) -> None:
        _, owner = self.login("owner")
        photo_id = self.upload(owner)

        resp = self.client.get(f"/photos/{photo_id}/image", headers=owner)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "image/png")
        self.assertEqual(resp.content, PNG_BYTES)
        self.assertEqual(self.client.get("/photos/nosuchphoto/image", headers=owner).status_code, 404)

    def test_delete_then_image_is_gone(self) -> None:
        _, owner = self.login("owner")
        photo_id = self.upload(owner)
        self.client.post(f"/photos/{photo_id}/likes", headers=owner)

        resp = self.client.delete(f"/photos/{photo_id}", headers=owner)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(self.client.get(f"/photos/{photo_id}/image", headers=owner).status_code, 404)
        self.assertEqual(self.client.delete(f"/photos/{photo_id}", headers=owner).status_code, 404)


if __name__ == "__main__":
    unittest.main()
