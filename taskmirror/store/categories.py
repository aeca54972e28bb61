"""Category set and its per-user persistence."""

import json
import logging
from pathlib import Path
from typing import Iterable, List

from taskmirror.models.constants import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)


class CategorySet:
    """Ordered set of unique category names."""

    def __init__(self, seed: Iterable[str] = DEFAULT_CATEGORIES):
        self._seed = tuple(seed)
        self._names: List[str] = []
        self.reset()

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __iter__(self):
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def as_list(self) -> List[str]:
        return list(self._names)

    def reset(self) -> None:
        """Drop everything but the seed categories."""
        self._names = []
        self.union(self._seed)

    def add(self, name: str) -> bool:
        """Append ``name``; returns False if it was already present."""
        if name in self._names:
            return False
        self._names.append(name)
        return True

    def remove(self, name: str) -> bool:
        if name not in self._names:
            return False
        self._names.remove(name)
        return True

    def union(self, names: Iterable[str]) -> None:
        """Append each unseen non-empty name, keeping first-seen order."""
        for name in names:
            if name:
                self.add(name)


class CategoryStorage:
    """Best-effort JSON file persistence of each user's category list.

    I/O problems are logged and otherwise ignored; the in-memory set stays
    authoritative for the session.
    """

    def __init__(self, directory):
        self.directory = Path(directory)

    def path_for(self, user_id: str) -> Path:
        return self.directory / f"categories-{user_id}.json"

    def load(self, user_id: str) -> List[str]:
        path = self.path_for(user_id)
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read categories for user {user_id}: {type(e).__name__}: {str(e)}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Ignoring malformed category file {path}")
            return []
        return [str(name) for name in data if name]

    def save(self, user_id: str, names: List[str]) -> None:
        path = self.path_for(user_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(list(names)), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not save categories for user {user_id}: {type(e).__name__}: {str(e)}")
