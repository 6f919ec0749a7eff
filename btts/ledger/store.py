"""Key-value persistence for the prediction ledger."""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from btts.ledger.schema import LedgerSchemaError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Synchronous string store (browser localStorage semantics)."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore:
    """
    Store backed by a single JSON object on disk.

    Every set() rewrites the whole file through a temp file + rename. An
    unreadable file raises LedgerSchemaError on both get() and set().
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError as e:
            raise LedgerSchemaError("unknown", f"{self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise LedgerSchemaError(
                "unknown", f"{self.path} holds a {type(data).__name__}, expected an object"
            )
        return data

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(data, fh)
        tmp.replace(self.path)
        logger.debug(f"Wrote key '{key}' to {self.path}")
