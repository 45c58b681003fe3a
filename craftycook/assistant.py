import logging
import re
from collections import deque
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

from .clients import ApiClient
from .config import AI_DETAIL_TIMEOUT, AI_TIMEOUT, ENDPOINTS
from .errors import CraftyCookError, RemoteError, RequestTimeout, ValidationFailed
from .models import RecipeDetail, Suggestion
from .notifications import Notifier

logger = logging.getLogger(__name__)

HISTORY_SIZE = 5
TIMEOUT_MESSAGE = "Request timed out. Trying again may help, or check your connection."


def ingredient_tokens(text: str) -> List[str]:
    return [token.strip().lower() for token in re.split(r"[,\n]", text or "") if token.strip()]


class AIAssistant:
    """Client for the service's AI suggestion endpoints.

    The server proxies to a third-party text generation API and answers with
    offline suggestions (``fallback: true``) when that API is unavailable.
    """

    def __init__(
        self,
        api: ApiClient,
        notifier: Notifier,
        timeout: float = AI_TIMEOUT,
        detail_timeout: float = AI_DETAIL_TIMEOUT,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.timeout = timeout
        self.detail_timeout = detail_timeout
        self.history: Deque[Dict[str, Any]] = deque(maxlen=HISTORY_SIZE)

    @staticmethod
    def _unwrap(data: Dict[str, Any], fallback: str) -> Dict[str, Any]:
        if not data.get("success"):
            raise RemoteError(str(data.get("message") or fallback), payload=data)
        return data.get("data") or {}

    def get_suggestions(self, text: str, context: str = "recipe_suggestions") -> Suggestion:
        if not (text or "").strip():
            self.notifier.error("Please enter ingredients or a prompt")
            raise ValidationFailed("Please enter ingredients or a prompt", field="prompt")
        tokens = ingredient_tokens(text)
        try:
            data = self.api.post(
                ENDPOINTS["ai_suggestions"],
                json={"ingredients": tokens or text, "prompt": text, "context": context},
                timeout=self.timeout,
                auth=True,
            )
            payload = self._unwrap(data, "Failed to get suggestions")
        except CraftyCookError as exc:
            logger.error("AI suggestion error: %s", exc)
            self.notifier.error(exc.message or "Failed to get AI suggestions")
            raise
        fallback = bool(data.get("fallback"))
        provider = data.get("provider") or {"name": "offline" if fallback else "cohere"}
        suggestion = Suggestion.model_validate({**payload, "provider": provider, "fallback": fallback})
        self.history.appendleft({"query": text, "suggestion": suggestion, "at": datetime.now()})
        self.notifier.success("Recipe suggestions generated!")
        return suggestion

    def recent_suggestions(self) -> List[Dict[str, Any]]:
        """Most recent first, at most ``HISTORY_SIZE`` entries."""
        return list(self.history)

    def recall(self, query: str) -> Optional[Suggestion]:
        for entry in self.history:
            if entry["query"] == query:
                return entry["suggestion"]
        return None

    def clear_history(self) -> None:
        self.history.clear()

    def get_recipe_detail(self, recipe_idea: str, ingredients: Optional[str] = None) -> RecipeDetail:
        if not (recipe_idea or "").strip():
            raise ValidationFailed("Please provide a recipe idea to get full details.", field="recipeIdea")
        tokens = ingredient_tokens(ingredients or "")
        try:
            data = self.api.post(
                ENDPOINTS["ai_recipe_detail"],
                json={"recipeIdea": recipe_idea, "ingredients": ", ".join(tokens) if tokens else (ingredients or "")},
                timeout=self.detail_timeout,
                auth=True,
            )
            payload = self._unwrap(data, "Failed to get recipe details")
        except RequestTimeout:
            logger.warning("Recipe detail for %r timed out after %ss", recipe_idea, self.detail_timeout)
            self.notifier.error(TIMEOUT_MESSAGE)
            raise
        except CraftyCookError as exc:
            logger.error("Recipe detail error: %s", exc)
            self.notifier.error(exc.message or "Failed to get recipe details")
            raise
        detail = RecipeDetail.model_validate(payload)
        self.notifier.success("Recipe details loaded!")
        return detail
