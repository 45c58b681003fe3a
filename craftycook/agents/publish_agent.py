import logging
from typing import Any, Dict

from langchain_core.tools import tool

from craftycook.posts import PostStore

logger = logging.getLogger(__name__)


class PublishAgent:
    def __init__(self, posts: PostStore) -> None:
        self.posts = posts
        self.publish_tool = tool("publish_post", return_direct=True)(self._publish)

    def _publish(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create the post through the API and return the server's copy."""
        post = self.posts.create_post(payload)
        logger.info("Published %s %s", post.type.value, post.id)
        self.posts.notifier.success("Post published!")
        return post.model_dump(by_alias=True, mode="json")
