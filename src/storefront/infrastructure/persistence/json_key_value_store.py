"""JSON-file-backed implementation of KeyValueStore.

The file holds a single JSON object mapping keys to string blobs, the
same shape browser local storage exposes.
"""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.exceptions import StorageUnavailableError
from storefront.domain.repository.key_value_store import KeyValueStore


class JsonFileKeyValueStore(KeyValueStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- KeyValueStore interface ----------------------------------------------

    def get(self, key: str) -> str | None:
        return self._load_raw().get(key)

    def set(self, key: str, value: str) -> None:
        records = self._load_raw()
        records[key] = value
        self._persist_raw(records)

    def remove(self, key: str) -> None:
        records = self._load_raw()
        if records.pop(key, None) is not None:
            self._persist_raw(records)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, str]:
        if not self._file_path.exists():
            return {}
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageUnavailableError(
                f"Cannot read storage file {self._file_path}: {exc}"
            ) from exc
        if not isinstance(raw, dict):
            raise StorageUnavailableError(
                f"Storage file {self._file_path} does not hold a JSON object"
            )
        return raw

    def _persist_raw(self, records: dict[str, str]) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StorageUnavailableError(
                f"Cannot write storage file {self._file_path}: {exc}"
            ) from exc
