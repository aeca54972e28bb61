"""Environment-driven configuration for taskmirror."""

import logging
import os
from dotenv import load_dotenv

load_dotenv()

# Directory holding per-user category lists (best-effort persistence)
CATEGORY_STORAGE_DIR = os.getenv("CATEGORY_STORAGE_DIR", "./.taskmirror/categories")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configure_logging(level: str = None) -> None:
    """Configure root logging once for applications embedding the store."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
