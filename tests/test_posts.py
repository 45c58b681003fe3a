import io
import os
import tempfile
import unittest

from craftycook.clients import ApiClient
from craftycook.errors import RemoteError, ValidationFailed
from craftycook.models import Post, PostStatus, PostType, Step, renumber_steps
from craftycook.notifications import Notifier
from craftycook.posts import PostStore
from tests.fakes import fake_session, make_response


def post_json(post_id, status="draft", title="Sourdough", **extra):
    return {"_id": post_id, "title": title, "type": "recipe", "status": status, **extra}


class TestPostModel(unittest.TestCase):
    """Step numbering stays contiguous."""

    def test_remove_step_renumbers(self):
        post = Post(title="Shelf", type=PostType.DIY)
        for text in ("measure", "cut", "sand", "paint"):
            post.add_step(text)
        removed = post.remove_step(2)
        self.assertEqual(removed.instruction, "cut")
        self.assertEqual([s.step_number for s in post.steps], [1, 2, 3])
        self.assertEqual([s.instruction for s in post.steps], ["measure", "sand", "paint"])

    def test_remove_missing_step(self):
        post = Post(title="Shelf", type="diy")
        with self.assertRaises(IndexError):
            post.remove_step(1)

    def test_server_steps_are_normalized(self):
        post = Post.model_validate(
            {
                "_id": "p1",
                "title": "Bread",
                "type": "recipe",
                "steps": [
                    {"stepNumber": 5, "instruction": "bake"},
                    {"stepNumber": 2, "instruction": "knead"},
                ],
            }
        )
        self.assertEqual([(s.step_number, s.instruction) for s in post.steps], [(1, "knead"), (2, "bake")])

    def test_renumber_steps(self):
        steps = [Step(step_number=9, instruction="a"), Step(step_number=3, instruction="b")]
        self.assertEqual([s.step_number for s in renumber_steps(steps)], [1, 2])

    def test_payload_uses_api_field_names(self):
        post = Post(title="Bread", type="recipe", status="published")
        post.add_step("knead", estimated_time=10)
        payload = post.to_payload()
        self.assertNotIn("_id", payload)
        self.assertEqual(payload["steps"][0]["stepNumber"], 1)
        self.assertEqual(payload["steps"][0]["estimatedTime"], 10)
        self.assertEqual(payload["likeCount"], 0)


class TestPostStore(unittest.TestCase):
    """Post CRUD against the API."""

    def store(self, *outcomes, token="tok"):
        api = ApiClient(base_url="http://api.test", token=token, session=fake_session(*outcomes))
        self.notifier = Notifier()
        return PostStore(api, self.notifier)

    def test_create_routes_drafts_and_published(self):
        store = self.store(
            {"success": True, "post": post_json("d1")},
            {"success": True, "post": post_json("p1", status="published")},
        )
        draft = store.create_post({"title": "Sourdough", "type": "recipe"})
        self.assertEqual(draft.status, PostStatus.DRAFT)
        store.create_post(Post(title="Sourdough", type="recipe", status="published"))
        self.assertEqual([d.id for d in store.drafts], ["d1"])
        self.assertEqual([p.id for p in store.posts], ["p1"])
        self.assertFalse(store.is_creating)

    def test_create_failure(self):
        store = self.store(make_response(400, {"success": False, "message": "Title is required"}))
        with self.assertRaises(RemoteError):
            store.create_post({"type": "recipe"})
        self.assertEqual(self.notifier.last.message, "Title is required")
        self.assertFalse(store.is_creating)

    def test_publish_moves_draft(self):
        store = self.store(
            {"success": True, "drafts": [post_json("d1"), post_json("d2")]},
            {"success": True, "post": post_json("d1", status="published")},
        )
        store.get_user_drafts()
        store.publish_post("d1")
        self.assertEqual([d.id for d in store.drafts], ["d2"])
        self.assertEqual(store.posts[0].status, PostStatus.PUBLISHED)
        self.assertEqual(store.api.session.request.call_args.args[0], "PATCH")
        self.assertEqual(self.notifier.last.message, "Post published successfully!")

    def test_update_replaces_everywhere(self):
        store = self.store(
            {"success": True, "post": post_json("p1", status="published")},
            {"success": True, "post": post_json("p1", status="published", title="Rye")},
        )
        store.get_post("p1")
        store.posts = [store.current_post]
        store.update_post("p1", {"title": "Rye"})
        self.assertEqual(store.current_post.title, "Rye")
        self.assertEqual(store.posts[0].title, "Rye")

    def test_get_posts_drops_empty_filters(self):
        store = self.store({"success": True, "posts": [post_json("p1", status="published")]})
        posts = store.get_posts(type="recipe", search="")
        self.assertEqual(len(posts), 1)
        self.assertEqual(store.api.session.request.call_args.kwargs["params"], {"type": "recipe"})

    def test_delete(self):
        store = self.store({"success": True, "post": post_json("p1")}, {"success": True})
        store.get_post("p1")
        store.drafts = [store.current_post]
        store.delete_post("p1")
        self.assertEqual(store.drafts, [])
        self.assertIsNone(store.current_post)

    def test_upload_from_path(self):
        store = self.store({"success": True, "url": "https://cdn.test/a.png"})
        fd, path = tempfile.mkstemp(suffix=".png")
        os.write(fd, b"\x89PNG")
        os.close(fd)
        try:
            url = store.upload_media(path)
        finally:
            os.remove(path)
        self.assertEqual(url, "https://cdn.test/a.png")
        kwargs = store.api.session.request.call_args.kwargs
        self.assertEqual(kwargs["data"], {"type": "image"})
        name, _, mime = kwargs["files"]["media"]
        self.assertTrue(name.endswith(".png"))
        self.assertEqual(mime, "image/png")
        self.assertNotIn("Content-Type", kwargs["headers"])

    def test_upload_file_object_and_bad_type(self):
        store = self.store({"success": True, "url": "https://cdn.test/v.mp4"})
        with self.assertRaises(ValidationFailed):
            store.upload_media(io.BytesIO(b"x"), media_type="gif")
        self.assertEqual(store.upload_media(io.BytesIO(b"x"), media_type="video"), "https://cdn.test/v.mp4")
        self.assertFalse(store.is_uploading)


if __name__ == "__main__":
    unittest.main()
