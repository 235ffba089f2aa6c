#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Persistent Store
Key-value storage with JSON values and graceful recovery from corruption

Every value is kept as its own JSON text, so one unreadable entry falls back to
the caller's default without affecting the other keys.
"""

import json
import shutil
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any
import logging

logger = logging.getLogger(__name__)

# ===== EXCEPTIONS =====

class StorageError(Exception):
    """Base exception for storage errors"""
    pass

class StorageWriteError(StorageError):
    """A value could not be serialized or durably written"""
    pass

# ===== STORES =====

class KeyValueStore(ABC):
    """String-keyed store holding JSON-serializable values"""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Read a value, falling back to default when missing or unreadable"""
        raw = self._items.get(key)
        if raw is None:
            return default

        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"⚠️ Stored value for key '{key}' is corrupted, using default: {e}")
            return default

    def set(self, key: str, value: Any) -> None:
        """Serialize and durably write a value"""
        try:
            raw = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"❌ Value for key '{key}' is not serializable: {e}")
            raise StorageWriteError(f"Cannot serialize value for '{key}': {e}") from e

        # Kept even if the write fails; the next successful write persists it
        self._items[key] = raw
        self._flush()

    def remove(self, key: str) -> bool:
        if key not in self._items:
            return False
        del self._items[key]
        self._flush()
        return True

    def keys(self) -> List[str]:
        return list(self._items)

    def __contains__(self, key: str) -> bool:
        return key in self._items

    @abstractmethod
    def _flush(self) -> None:
        """Persist all items, raising StorageWriteError on failure"""

class MemoryStore(KeyValueStore):
    """In-process store, nothing survives the process"""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        super().__init__()
        self._items.update(items or {})
        self.write_count = 0

    def set_raw(self, key: str, raw: str) -> None:
        """Place raw text under a key without serialization"""
        self._items[key] = raw

    def _flush(self) -> None:
        self.write_count += 1

class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON object file: {key: json text}"""

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self.save_count = 0
        self.last_save: Optional[str] = None
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.info(f"📂 Store file {self.path} not found, starting empty")
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"❌ Store file {self.path} is corrupted: {e}")
            self._move_corrupted()
            return
        except OSError as e:
            logger.error(f"❌ Failed to read store file {self.path}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning(f"⚠️ Store file {self.path} has an unexpected format")
            self._move_corrupted()
            return

        for key, raw in data.items():
            if isinstance(raw, str):
                self._items[key] = raw
            else:
                logger.warning(f"⚠️ Skipping non-text entry '{key}' in {self.path}")

        logger.info(f"📂 Loaded {len(self._items)} keys from {self.path}")

    def _move_corrupted(self) -> None:
        """Move an unreadable store file aside so a clean one can be written"""
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        corrupted = self.path.with_name(f"{self.path.stem}.corrupted_{timestamp}.json")
        try:
            shutil.move(str(self.path), str(corrupted))
            logger.warning(f"🔄 Corrupted store file moved to {corrupted}")
        except OSError as e:
            logger.error(f"❌ Failed to move corrupted store file: {e}")

    def _flush(self) -> None:
        # Atomic save through a temporary file
        temp_file = self.path.with_suffix('.tmp')

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(self._items, f, ensure_ascii=False, indent=2)

            # Check the written file parses
            with open(temp_file, 'r', encoding='utf-8') as f:
                json.load(f)

            temp_file.replace(self.path)
        except (OSError, ValueError) as e:
            if temp_file.exists():
                temp_file.unlink()
            logger.error(f"❌ Failed to write store file {self.path}: {e}")
            raise StorageWriteError(f"Failed to write {self.path}: {e}") from e

        self.save_count += 1
        self.last_save = datetime.now().isoformat()
        logger.debug(f"💾 Store saved to {self.path}")
