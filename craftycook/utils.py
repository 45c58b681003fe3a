import logging
from pathlib import Path

import dotenv


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def load_dotenv(env_path: str = ".env") -> bool:
    path = Path(env_path)
    if not path.exists():
        return False
    # Existing environment wins over the file.
    return dotenv.load_dotenv(path, override=False)


def render_endpoint(template: str, **params: object) -> str:
    return template.format(**{key: str(value) for key, value in params.items()})
