"""
Quick smoke check against a running CraftyCook API.

Usage:
    CRAFTYCOOK_API_URL=http://localhost:5001 CRAFTYCOOK_API_TOKEN=... uv run python scripts/check_api.py <post-id>
"""

import sys

from craftycook import build_app
from craftycook.utils import setup_logging


def main() -> None:
    if len(sys.argv) < 2:
        raise SystemExit("Pass a post id to inspect")
    post_id = sys.argv[1]
    setup_logging()

    with build_app() as app:
        engagement = app.interactions.get_post_engagement(post_id)
        print("Engagement:", engagement.model_dump())
        comments, pagination = app.interactions.get_comments(post_id)
        print(f"Comments: {len(comments)} of {pagination.total_comments}")
        if app.api.is_authenticated:
            suggestion = app.assistant.get_suggestions("chicken, rice, broccoli")
            print("Suggestion:", suggestion.title, "(offline)" if suggestion.fallback else "")
            print("Recent queries:", [entry["query"] for entry in app.assistant.recent_suggestions()])


if __name__ == "__main__":
    main()
