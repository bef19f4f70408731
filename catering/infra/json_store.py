"""JSON list file persistence shared by the repositories.

Reads fail loudly with PersistenceError (a corrupt file must not look like an
empty store). Writes go through a temp file in the same directory and are moved
into place, so readers never see a half-written file.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List

from catering.domain.errors import PersistenceError

logger = logging.getLogger(__name__)


class JsonListStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.lock = RLock()

    def load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in %s: %s", self.path, e)
            raise PersistenceError() from e
        except OSError as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise PersistenceError() from e
        if not isinstance(data, list):
            logger.error("Unexpected data in %s: expected a list, got %s", self.path, type(data).__name__)
            raise PersistenceError()
        return data

    def save(self, rows: List[Dict[str, Any]]) -> None:
        tmp_path = None
        try:
            os.makedirs(self.path.parent, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.stem}_", suffix=".json")
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(rows, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to write %s: %s", self.path, e)
            raise PersistenceError() from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    @staticmethod
    def next_id(rows: List[Dict[str, Any]]) -> int:
        return max((int(r.get('id') or 0) for r in rows), default=0) + 1
