import logging
from typing import Any, Dict, List, Optional

from langchain_core.tools import tool

from craftycook.models import Ingredient, Material, PostStatus, PostType, Step, StepMaterial
from craftycook.splitter import split_content

logger = logging.getLogger(__name__)

PLACEHOLDER_ITEM = "See instructions"


def step_title(step_number: int) -> str:
    return f"Step {step_number}"


class OrganizerAgent:
    def __init__(self) -> None:
        self.organize_tool = tool("organize_content", return_direct=True)(self._organize)
        self.build_payload_tool = tool("build_post_payload", return_direct=True)(self._build_payload)

    def _organize(self, content: str, post_type: str = "recipe") -> Dict[str, List[str]]:
        """Split free text into items (ingredients or materials) and ordered steps."""
        result = split_content(content, post_type)
        logger.info("Organized %d items and %d steps for a %s", len(result.items), len(result.steps), post_type)
        return {"items": result.items, "steps": result.steps}

    def _build_payload(
        self,
        post_type: str,
        title: str,
        items: List[str],
        steps: List[str],
        description: str = "",
        difficulty: str = "beginner",
        images: Optional[List[str]] = None,
        author_name: str = "",
    ) -> Dict[str, Any]:
        """Turn organized items and steps into the JSON body of a new published post."""
        kind = PostType(post_type)
        images = images or []
        if not description:
            noun = "delicious recipe" if kind == PostType.RECIPE else "creative DIY project"
            description = f"A {noun} shared by {author_name or 'the community'}"
        names = items or [PLACEHOLDER_ITEM]
        # The server derives the post's ingredients/materials from step materials.
        first_step_materials = [StepMaterial(name=name, quantity="1") for name in names]
        payload: Dict[str, Any] = {
            "title": title,
            "description": description,
            "type": kind.value,
            "difficulty": difficulty,
            "coverImage": images[0] if images else "",
            "images": images,
            "tags": [],
            "status": PostStatus.PUBLISHED.value,
            "steps": [
                Step(
                    step_number=idx,
                    title=step_title(idx),
                    instruction=line,
                    materials=first_step_materials if idx == 1 else [],
                ).to_payload()
                for idx, line in enumerate(steps, start=1)
            ],
        }
        if kind == PostType.RECIPE:
            payload["ingredients"] = [Ingredient(name=name).to_payload() for name in names]
            payload["cuisine"] = "Other"
        else:
            payload["materials"] = [Material(name=name).to_payload() for name in names]
            payload["category"] = "other"
            payload["skillLevel"] = difficulty
        return payload
