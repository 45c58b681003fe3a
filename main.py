import argparse
import sys

from craftycook import build_app, run_quick_create
from craftycook.errors import CraftyCookError
from craftycook.utils import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Quick-create a CraftyCook post from a text file.")
    parser.add_argument("title")
    parser.add_argument("content_file", help="free text with ingredients/materials and steps; '-' for stdin")
    parser.add_argument("--type", dest="post_type", choices=("recipe", "diy"), default="recipe")
    parser.add_argument("--difficulty", default="beginner")
    args = parser.parse_args()

    setup_logging()
    if args.content_file == "-":
        content = sys.stdin.read()
    else:
        with open(args.content_file, encoding="utf-8") as fh:
            content = fh.read()

    with build_app() as app:
        try:
            final_state = run_quick_create(
                app, args.title, content, post_type=args.post_type, difficulty=args.difficulty
            )
        except CraftyCookError as exc:
            print("Publish failed:", exc.message)
            return 1
    print("Published:", final_state.get("post", {}).get("_id"))
    print("Items:", ", ".join(final_state.get("items") or []))
    print("Steps:", len(final_state.get("steps") or []))
    return 0


if __name__ == "__main__":
    sys.exit(main())
