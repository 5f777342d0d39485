"""Durable storage for the saved-guide library and the user's preferences.

Two independent JSON records live under fixed keys. Each write replaces the
whole record. A missing or unreadable record never stops the app from
starting: it is logged and treated as an empty library / default preferences.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from studygenie.config import LIBRARY_KEY, SETTINGS_KEY
from studygenie.errors import PersistenceCorruption
from studygenie.logging import get_logger
from studygenie.models import Preferences, StudyBundle

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class JsonFileStore:
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        with open(self._path(key), "w", encoding="utf-8") as f:
            f.write(value)


class MemoryStore:
    def __init__(self, initial: Optional[dict] = None):
        self.data = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


def _decode(raw: str, key: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise PersistenceCorruption(f"{key}: {e}") from e


def _decode_library(raw: str) -> list[StudyBundle]:
    data = _decode(raw, LIBRARY_KEY)
    if not isinstance(data, list):
        raise PersistenceCorruption(f"{LIBRARY_KEY}: expected a list, got {type(data).__name__}")
    library, seen = [], set()
    for i, entry in enumerate(data):
        try:
            bundle = StudyBundle.model_validate(entry)
        except ValidationError as e:
            logger.warning("Dropping unreadable saved guide at position %d: %s", i, e)
            continue
        if bundle.id in seen:
            continue
        seen.add(bundle.id)
        library.append(bundle)
    return library


def _decode_preferences(raw: str) -> Preferences:
    data = _decode(raw, SETTINGS_KEY)
    try:
        return Preferences.model_validate(data)
    except ValidationError as e:
        raise PersistenceCorruption(f"{SETTINGS_KEY}: {e}") from e


class LibraryStore:
    """Saved study guides, most recently saved first, plus preferences."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._library: list[StudyBundle] = []

    @property
    def library(self) -> list[StudyBundle]:
        return list(self._library)

    def load(self) -> tuple[list[StudyBundle], Preferences]:
        self._library = []
        preferences = Preferences()

        raw = self.store.get(LIBRARY_KEY)
        if raw is not None:
            try:
                self._library = _decode_library(raw)
            except PersistenceCorruption as e:
                logger.warning("Ignoring corrupt library record: %s", e)

        raw = self.store.get(SETTINGS_KEY)
        if raw is not None:
            try:
                preferences = _decode_preferences(raw)
            except PersistenceCorruption as e:
                logger.warning("Ignoring corrupt preferences record: %s", e)

        logger.info("Loaded %d saved guides", len(self._library))
        return self.library, preferences

    def contains(self, bundle_id: str) -> bool:
        return any(b.id == bundle_id for b in self._library)

    def get(self, bundle_id: str) -> Optional[StudyBundle]:
        return next((b for b in self._library if b.id == bundle_id), None)

    def _persist(self) -> None:
        records = [b.to_record() for b in self._library]
        self.store.set(LIBRARY_KEY, json.dumps(records, ensure_ascii=False, indent=2))

    def save(self, bundle: StudyBundle) -> bool:
        """Prepend ``bundle``; returns False if its id is already saved."""
        if self.contains(bundle.id):
            return False
        self._library = [bundle, *self._library]
        self._persist()
        logger.info("Saved guide %s (%s)", bundle.id, bundle.topic)
        return True

    def delete(self, bundle_id: str) -> bool:
        if not self.contains(bundle_id):
            return False
        self._library = [b for b in self._library if b.id != bundle_id]
        self._persist()
        logger.info("Deleted guide %s", bundle_id)
        return True

    def save_preferences(self, preferences: Preferences) -> None:
        self.store.set(
            SETTINGS_KEY,
            json.dumps(preferences.model_dump(mode="json", by_alias=True), ensure_ascii=False),
        )
