"""Birth date persistence.

A small JSON key-value file holds the birth date as an ISO string under
``STORAGE_KEY``. Reads fail closed: a missing file, corrupt JSON or an
unparseable date all load as "no birth date" so the user is asked again.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .life_weeks_domain import parse_birth_date

logger = logging.getLogger(__name__)

STORAGE_KEY = "life-weeks-birthday"


class BirthDateStore:
    """JSON file store for the single persisted birth date."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: not a JSON object", self.path)
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        tmp_path.replace(self.path)

    def load(self) -> Optional[date]:
        """Return the persisted birth date, or None if absent or invalid."""
        raw = self._read().get(STORAGE_KEY)
        if raw is None:
            return None

        if not isinstance(raw, str):
            logger.warning("Ignoring non-string birth date in %s: %r", self.path, raw)
            return None

        try:
            return parse_birth_date(raw)
        except ValueError as e:
            logger.warning("Ignoring persisted birth date %r: %s", raw, e)
            return None

    def save(self, birth_date: date) -> None:
        """Persist the birth date, keeping any other keys in the file."""
        data = self._read()
        data[STORAGE_KEY] = birth_date.isoformat()
        self._write(data)
        logger.info("Saved birth date %s to %s", birth_date.isoformat(), self.path)

    def clear(self) -> bool:
        """Remove the persisted birth date. Returns True if one was stored."""
        data = self._read()
        if STORAGE_KEY not in data:
            return False

        del data[STORAGE_KEY]
        self._write(data)
        logger.info("Cleared birth date from %s", self.path)
        return True
