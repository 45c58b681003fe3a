import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Set, Tuple

from .clients import ApiClient, error_message
from .config import ENDPOINTS
from .errors import CraftyCookError
from .models import Comment, InteractionRecord, Pagination, Post, ShareResult
from .notifications import Notifier
from .utils import render_endpoint

logger = logging.getLogger(__name__)

LOADING_FLAGS = ("like", "bookmark", "comment", "share")


def _find_comment(items: List[Comment], comment_id: str) -> Optional[Comment]:
    for comment in items:
        if comment.id == comment_id:
            return comment
        found = _find_comment(comment.replies, comment_id)
        if found is not None:
            return found
    return None


class InteractionStore:
    """Per-post engagement cache kept in step with the API.

    Cached values only ever come from server responses: a toggle waits for the
    server's ``isLiked``/``likeCount`` echo and stores exactly that. While a
    call is in flight its loading flag is set so the UI can disable the
    control that triggered it.
    """

    def __init__(self, api: ApiClient, notifier: Notifier) -> None:
        self.api = api
        self.notifier = notifier
        self.interactions: Dict[str, InteractionRecord] = {}
        self.comments: Dict[str, List[Comment]] = {}
        self.loading_states: Dict[str, bool] = {flag: False for flag in LOADING_FLAGS}
        self.viewed_posts: Set[str] = set()

    @contextmanager
    def _loading(self, flag: str) -> Iterator[None]:
        self.loading_states[flag] = True
        try:
            yield
        finally:
            self.loading_states[flag] = False

    def _fail(self, exc: CraftyCookError, fallback: str) -> None:
        self.notifier.error(error_message(exc, fallback))

    def _update(self, post_id: str, **fields: Any) -> InteractionRecord:
        current = self.interactions.get(post_id) or InteractionRecord()
        record = current.model_copy(update=fields)
        self.interactions[post_id] = record
        return record

    def get_interaction(self, post_id: str) -> InteractionRecord:
        return self.interactions.get(post_id) or InteractionRecord()

    # likes

    def toggle_like(self, post_id: str) -> Tuple[bool, int]:
        with self._loading("like"):
            try:
                data = self.api.post(render_endpoint(ENDPOINTS["like"], post_id=post_id), auth=True)
            except CraftyCookError as exc:
                self._fail(exc, "Failed to update like")
                raise
        is_liked, like_count = bool(data.get("isLiked")), int(data.get("likeCount", 0))
        self._update(post_id, is_liked=is_liked, like_count=like_count)
        self.notifier.success("Post liked!" if is_liked else "Post unliked")
        return is_liked, like_count

    # bookmarks

    def toggle_bookmark(self, post_id: str) -> Tuple[bool, int]:
        with self._loading("bookmark"):
            try:
                data = self.api.post(render_endpoint(ENDPOINTS["bookmark"], post_id=post_id), auth=True)
            except CraftyCookError as exc:
                self._fail(exc, "Failed to update bookmark")
                raise
        is_bookmarked, bookmark_count = bool(data.get("isBookmarked")), int(data.get("bookmarkCount", 0))
        self._update(post_id, is_bookmarked=is_bookmarked, bookmark_count=bookmark_count)
        self.notifier.success("Post bookmarked!" if is_bookmarked else "Bookmark removed")
        return is_bookmarked, bookmark_count

    def get_user_bookmarks(self) -> List[Post]:
        try:
            data = self.api.get(ENDPOINTS["bookmarks"], auth=True)
        except CraftyCookError as exc:
            logger.error("Failed to load bookmarked posts: %s", exc)
            self._fail(exc, "Failed to load bookmarked posts")
            raise
        return [Post.model_validate(p) for p in data.get("posts") or []]

    # comments

    def add_comment(self, post_id: str, text: str, parent_id: Optional[str] = None) -> Comment:
        with self._loading("comment"):
            try:
                data = self.api.post(
                    render_endpoint(ENDPOINTS["comments"], post_id=post_id),
                    json={"text": text, "parentCommentId": parent_id},
                    auth=True,
                )
            except CraftyCookError as exc:
                self._fail(exc, "Failed to add comment")
                raise
        comment = Comment.model_validate(data["comment"])
        cached = self.comments.get(post_id, [])
        parent = _find_comment(cached, parent_id) if parent_id else None
        if parent is not None:
            parent.replies.append(comment)
        else:
            self.comments[post_id] = [comment] + cached
        self.notifier.success("Comment added successfully")
        return comment

    def get_comments(self, post_id: str, page: int = 1) -> Tuple[List[Comment], Pagination]:
        try:
            data = self.api.get(render_endpoint(ENDPOINTS["comments"], post_id=post_id), params={"page": page})
        except CraftyCookError as exc:
            self._fail(exc, "Failed to load comments")
            raise
        comments = [Comment.model_validate(c) for c in data.get("comments") or []]
        pagination = Pagination.model_validate(data.get("pagination") or {"currentPage": page})
        if page == 1:
            self.comments[post_id] = comments
        else:
            self.comments[post_id] = self.comments.get(post_id, []) + comments
        return comments, pagination

    def _map_comments(self, func: Callable[[Comment], Optional[Comment]]) -> None:
        # func returns the replacement, or None to drop the comment.
        def walk(items: List[Comment]) -> List[Comment]:
            result = []
            for comment in items:
                mapped = func(comment)
                if mapped is None:
                    continue
                if mapped.replies:
                    mapped = mapped.model_copy(update={"replies": walk(mapped.replies)})
                result.append(mapped)
            return result

        for post_id in list(self.comments):
            self.comments[post_id] = walk(self.comments[post_id])

    def toggle_comment_like(self, comment_id: str) -> Tuple[bool, int]:
        try:
            data = self.api.post(render_endpoint(ENDPOINTS["comment_like"], comment_id=comment_id), auth=True)
        except CraftyCookError as exc:
            self._fail(exc, "Failed to update comment like")
            raise
        is_liked, like_count = bool(data.get("isLiked")), int(data.get("likeCount", 0))
        self._map_comments(
            lambda c: c.model_copy(update={"is_liked": is_liked, "like_count": like_count}) if c.id == comment_id else c
        )
        return is_liked, like_count

    def edit_comment(self, comment_id: str, text: str) -> Comment:
        try:
            data = self.api.put(
                render_endpoint(ENDPOINTS["comment"], comment_id=comment_id), json={"text": text}, auth=True
            )
        except CraftyCookError as exc:
            self._fail(exc, "Failed to update comment")
            raise
        updated = Comment.model_validate(data["comment"])
        # The edit response is not populated; keep the replies already loaded.
        self._map_comments(lambda c: updated.model_copy(update={"replies": c.replies}) if c.id == comment_id else c)
        self.notifier.success("Comment updated")
        return updated

    def delete_comment(self, comment_id: str) -> None:
        try:
            self.api.delete(render_endpoint(ENDPOINTS["comment"], comment_id=comment_id), auth=True)
        except CraftyCookError as exc:
            self._fail(exc, "Failed to delete comment")
            raise
        self._map_comments(lambda c: None if c.id == comment_id else c)
        self.notifier.success("Comment deleted")

    # sharing

    def share_post(
        self,
        post_id: str,
        platform: str,
        message: str = "",
        shared_with: Optional[List[str]] = None,
    ) -> ShareResult:
        with self._loading("share"):
            try:
                data = self.api.post(
                    render_endpoint(ENDPOINTS["share"], post_id=post_id),
                    json={"platform": platform, "message": message, "sharedWith": shared_with or []},
                    auth=True,
                )
            except CraftyCookError as exc:
                self._fail(exc, "Failed to share post")
                raise
        result = ShareResult.model_validate(data)
        self._update(post_id, share_count=result.share_count)
        if platform == "copy-link":
            self.notifier.success("Link copied to clipboard!")
        else:
            self.notifier.success("Post shared successfully!")
        return result

    # analytics

    def increment_views(self, post_id: str) -> bool:
        """Record one view per post per session. Returns whether a request was sent."""
        if post_id in self.viewed_posts:
            return False
        self.viewed_posts.add(post_id)
        try:
            self.api.post(render_endpoint(ENDPOINTS["view"], post_id=post_id))
        except CraftyCookError as exc:
            logger.error("Failed to increment views for %s: %s", post_id, exc)
        return True

    def get_post_engagement(self, post_id: str) -> InteractionRecord:
        try:
            data = self.api.get(render_endpoint(ENDPOINTS["engagement"], post_id=post_id))
        except CraftyCookError as exc:
            logger.error("Failed to get engagement data for %s: %s", post_id, exc)
            raise
        record = InteractionRecord.model_validate(data.get("engagement") or {})
        self.interactions[post_id] = record
        return record

    # utilities

    def set_interaction(self, post_id: str, **fields: Any) -> InteractionRecord:
        return self._update(post_id, **fields)

    def clear_comments(self, post_id: str) -> None:
        self.comments[post_id] = []

    def reset(self) -> None:
        self.interactions.clear()
        self.comments.clear()
        self.loading_states = {flag: False for flag in LOADING_FLAGS}
