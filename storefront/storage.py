# storefront/storage.py
import json
import os
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

import structlog

logger = structlog.get_logger(__name__)

# Key-value stores used to persist state between sessions. Like browser local
# storage they are best effort: reads of missing or unreadable data return
# None and failed writes are logged, never raised.


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class FileStorage:
    """Key-value storage kept in a single JSON object on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("storage_read_failed", path=str(self.path), error=str(e))
            return {}
        except UnicodeDecodeError as e:
            logger.warning("storage_corrupt", path=str(self.path), error=str(e))
            return {}
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("storage_corrupt", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("storage_corrupt", path=str(self.path), error="top level is not an object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error("storage_write_failed", path=str(self.path), error=str(e))

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)

    def clear(self) -> None:
        self._write_all({})
