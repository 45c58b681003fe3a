import logging
from typing import Any, Dict, List, Optional, TypedDict

from langgraph.graph import END, StateGraph

from .agents import OrganizerAgent, PublishAgent
from .app import CraftyCookApp
from .errors import ValidationFailed
from .models import PostType
from .notifications import Notifier

logger = logging.getLogger(__name__)


class QuickCreateState(TypedDict, total=False):
    type: str
    title: str
    content: str
    description: str
    difficulty: str
    images: List[str]
    author_name: str
    items: List[str]
    steps: List[str]
    payload: Dict[str, Any]
    post: Dict[str, Any]


def reject(notifier: Notifier, message: str, field: Optional[str] = None) -> None:
    notifier.error(message)
    raise ValidationFailed(message, field=field)


def check_steps(state: QuickCreateState, notifier: Notifier) -> QuickCreateState:
    """Refuse to publish without steps.

    ``validate`` already rules out blank content in the graph; this also covers
    organized states handed over by other callers.
    """
    if not state.get("steps"):
        reject(notifier, "Please provide at least one step in your instructions", field="steps")
    return state


def build_quick_create(app: CraftyCookApp):
    """Graph: validate -> organize -> check_steps -> build_payload -> publish."""
    organizer = OrganizerAgent()
    publisher = PublishAgent(app.posts)
    notifier = app.notifier

    def node_validate(state: QuickCreateState) -> QuickCreateState:
        if not state.get("type") or not state.get("title") or not (state.get("content") or "").strip():
            reject(notifier, "Please fill in all required fields")
        if state["type"] not in (PostType.RECIPE.value, PostType.DIY.value):
            reject(notifier, "Post type must be recipe or diy", field="type")
        return state

    def node_organize(state: QuickCreateState) -> QuickCreateState:
        organized = organizer.organize_tool.invoke({"content": state["content"], "post_type": state["type"]})
        return {**state, "items": organized["items"], "steps": organized["steps"]}

    def node_check_steps(state: QuickCreateState) -> QuickCreateState:
        return check_steps(state, notifier)

    def node_build_payload(state: QuickCreateState) -> QuickCreateState:
        payload = organizer.build_payload_tool.invoke(
            {
                "post_type": state["type"],
                "title": state["title"],
                "items": state.get("items") or [],
                "steps": state["steps"],
                "description": state.get("description") or "",
                "difficulty": state.get("difficulty") or "beginner",
                "images": state.get("images") or [],
                "author_name": state.get("author_name") or "",
            }
        )
        return {**state, "payload": payload}

    def node_publish(state: QuickCreateState) -> QuickCreateState:
        post = publisher.publish_tool.invoke({"payload": state["payload"]})
        logger.info("Quick create published %s", post.get("_id"))
        return {**state, "post": post}

    graph_builder = StateGraph(QuickCreateState)
    graph_builder.add_node("validate", node_validate)
    graph_builder.add_node("organize", node_organize)
    graph_builder.add_node("check_steps", node_check_steps)
    graph_builder.add_node("build_payload", node_build_payload)
    graph_builder.add_node("publish", node_publish)

    graph_builder.set_entry_point("validate")
    graph_builder.add_edge("validate", "organize")
    graph_builder.add_edge("organize", "check_steps")
    graph_builder.add_edge("check_steps", "build_payload")
    graph_builder.add_edge("build_payload", "publish")
    graph_builder.add_edge("publish", END)

    return graph_builder.compile()


def run_quick_create(
    app: CraftyCookApp,
    title: str,
    content: str,
    post_type: str = "recipe",
    **extra: Any,
) -> QuickCreateState:
    graph = build_quick_create(app)
    initial_state: QuickCreateState = {"type": post_type, "title": title, "content": content, **extra}
    final_state = graph.invoke(initial_state)
    return final_state
