"""Key-value stores for the persisted calculator state: one JSON file per key."""

import logging
import os
from pathlib import Path

log = logging.getLogger("card_calculator")

STATE_DIR = Path(os.environ.get("CALCULATOR_STATE_DIR") or Path(__file__).resolve().parent.parent / "state")


def _safe_key(key: str) -> str:
    return "".join(c if c.isalnum() or c in "-_" else "_" for c in key)


class MemoryStore:
    """In-process store. Used by tests and when no state directory is wanted."""

    def __init__(self, initial: dict | None = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True


class JsonFileStore:
    """
    File-backed store: <directory>/<key>.json.
    Writes go to a temp file first and are moved into place, so a reader never
    sees a half-written state. Read/write failures are reported, never raised.
    """

    def __init__(self, directory: Path | str | None = None):
        self.directory = Path(directory) if directory else STATE_DIR

    def path_for(self, key: str) -> Path:
        return self.directory / f"{_safe_key(key)}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Could not read state file %s: %s", path, e)
            return None

    def set(self, key: str, value: str) -> bool:
        path = self.path_for(key)
        tmp = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            log.warning("Could not write state file %s: %s", path, e)
            return False
        return True
