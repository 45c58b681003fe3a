import logging
import mimetypes
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

from .clients import ApiClient, error_message
from .config import ENDPOINTS
from .errors import CraftyCookError, RemoteError, ValidationFailed
from .models import Post, PostStatus
from .notifications import Notifier
from .utils import render_endpoint

logger = logging.getLogger(__name__)

MEDIA_TYPES = ("image", "video")


class PostStore:
    def __init__(self, api: ApiClient, notifier: Notifier) -> None:
        self.api = api
        self.notifier = notifier
        self.posts: List[Post] = []
        self.drafts: List[Post] = []
        self.current_post: Optional[Post] = None
        self.is_loading = False
        self.is_creating = False
        self.is_updating = False
        self.is_uploading = False

    @staticmethod
    def _post_from(data: Dict[str, Any]) -> Post:
        if not data.get("success") or "post" not in data:
            raise RemoteError(str(data.get("message") or "Unexpected response from server"), payload=data)
        return Post.model_validate(data["post"])

    @staticmethod
    def _as_payload(post: Union[Post, Dict[str, Any]]) -> Dict[str, Any]:
        return post.to_payload() if isinstance(post, Post) else dict(post)

    def _replace(self, post: Post) -> None:
        self.posts = [post if p.id == post.id else p for p in self.posts]
        self.drafts = [post if d.id == post.id else d for d in self.drafts]
        if self.current_post and self.current_post.id == post.id:
            self.current_post = post

    def create_post(self, post: Union[Post, Dict[str, Any]]) -> Post:
        self.is_creating = True
        try:
            created = self._post_from(self.api.post(ENDPOINTS["posts"], json=self._as_payload(post), auth=True))
        except CraftyCookError as exc:
            logger.error("Error creating post: %s", exc)
            self.notifier.error(error_message(exc, "Failed to create post"))
            raise
        finally:
            self.is_creating = False
        if created.status == PostStatus.DRAFT:
            self.drafts.insert(0, created)
        else:
            self.posts.insert(0, created)
        return created

    def update_post(self, post_id: str, update: Union[Post, Dict[str, Any]]) -> Post:
        self.is_updating = True
        try:
            data = self.api.put(
                render_endpoint(ENDPOINTS["post"], post_id=post_id), json=self._as_payload(update), auth=True
            )
            updated = self._post_from(data)
        except CraftyCookError as exc:
            logger.error("Error updating post %s: %s", post_id, exc)
            self.notifier.error(error_message(exc, "Failed to update post"))
            raise
        finally:
            self.is_updating = False
        self._replace(updated)
        return updated

    def publish_post(self, post_id: str) -> Post:
        self.is_updating = True
        try:
            data = self.api.patch(render_endpoint(ENDPOINTS["post_publish"], post_id=post_id), auth=True)
            published = self._post_from(data)
        except CraftyCookError as exc:
            logger.error("Error publishing post %s: %s", post_id, exc)
            self.notifier.error(error_message(exc, "Failed to publish post"))
            raise
        finally:
            self.is_updating = False
        self.drafts = [d for d in self.drafts if d.id != post_id]
        self.posts.insert(0, published)
        if self.current_post and self.current_post.id == post_id:
            self.current_post = published
        self.notifier.success("Post published successfully!")
        return published

    def get_posts(self, **filters: Any) -> List[Post]:
        params = {key: value for key, value in filters.items() if value}
        self.is_loading = True
        try:
            data = self.api.get(ENDPOINTS["posts"], params=params)
        except CraftyCookError as exc:
            logger.error("Error fetching posts: %s", exc)
            raise
        finally:
            self.is_loading = False
        self.posts = [Post.model_validate(p) for p in data.get("posts") or []]
        return self.posts

    def get_post(self, post_id: str) -> Post:
        self.is_loading = True
        try:
            post = self._post_from(self.api.get(render_endpoint(ENDPOINTS["post"], post_id=post_id)))
        except CraftyCookError as exc:
            logger.error("Error fetching post %s: %s", post_id, exc)
            raise
        finally:
            self.is_loading = False
        self.current_post = post
        return post

    def get_user_drafts(self) -> List[Post]:
        self.is_loading = True
        try:
            data = self.api.get(ENDPOINTS["drafts"], auth=True)
        except CraftyCookError as exc:
            logger.error("Error fetching drafts: %s", exc)
            raise
        finally:
            self.is_loading = False
        self.drafts = [Post.model_validate(d) for d in data.get("drafts") or []]
        return self.drafts

    def delete_post(self, post_id: str) -> None:
        try:
            self.api.delete(render_endpoint(ENDPOINTS["post"], post_id=post_id), auth=True)
        except CraftyCookError as exc:
            logger.error("Error deleting post %s: %s", post_id, exc)
            self.notifier.error(error_message(exc, "Failed to delete post"))
            raise
        self.posts = [p for p in self.posts if p.id != post_id]
        self.drafts = [d for d in self.drafts if d.id != post_id]
        if self.current_post and self.current_post.id == post_id:
            self.current_post = None
        self.notifier.success("Post deleted successfully!")

    def upload_media(self, media: Union[str, Path, BinaryIO], media_type: str = "image") -> str:
        """Upload an image or video and return its hosted URL."""
        if media_type not in MEDIA_TYPES:
            raise ValidationFailed(f"media type must be one of {', '.join(MEDIA_TYPES)}", field="type")
        self.is_uploading = True
        handle = None
        try:
            if isinstance(media, (str, Path)):
                path = Path(media)
                handle = path.open("rb")
                mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
                files = {"media": (path.name, handle, mime)}
            else:
                files = {"media": (Path(str(getattr(media, "name", "upload"))).name, media)}
            data = self.api.post(ENDPOINTS["upload"], files=files, data={"type": media_type}, auth=True)
        except CraftyCookError as exc:
            logger.error("Error uploading media: %s", exc)
            self.notifier.error(error_message(exc, "Failed to upload media"))
            raise
        finally:
            self.is_uploading = False
            if handle is not None:
                handle.close()
        if not data.get("url"):
            raise RemoteError(str(data.get("message") or "Upload did not return a URL"), payload=data)
        return str(data["url"])

    def clear_current_post(self) -> None:
        self.current_post = None

    def reset(self) -> None:
        self.posts = []
        self.drafts = []
        self.current_post = None
        self.is_loading = self.is_creating = self.is_updating = self.is_uploading = False
