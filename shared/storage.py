# shared/storage.py
import json
import logging
import os
import re
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_name(name: str, kind: str) -> str:
    if not name or not _NAME_RE.match(name) or name in (".", ".."):
        raise ValueError(f"Invalid storage {kind}: {name!r}")
    return name


class JsonFileStore:
    """
    Key/value store persisted as one JSON file per key.

    Stores are rooted at a directory; ``namespace()`` hands out an isolated
    child store in a sub-directory. Values must be JSON-serializable.
    """

    def __init__(self, root):
        self.root = Path(root)

    def namespace(self, name: str) -> "JsonFileStore":
        return JsonFileStore(self.root / _check_name(name, "namespace"))

    def _path(self, key: str) -> Path:
        return self.root / f"{_check_name(key, 'key')}.json"

    def get(self, key: str, default=None):
        path = self._path(key)
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except FileNotFoundError:
            return default
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, using default: %s", path, e)
            return default

    def set(self, key: str, value) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(value, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            os.unlink(tmp_name)
            raise

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass

    def __contains__(self, key: str) -> bool:
        return self._path(key).exists()
