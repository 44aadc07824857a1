"""Saved uploads and merge results, one JSON file per named slot.

An absent slot is a valid, empty result.
"""
from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from enum import Enum
from typing import List, Optional

import structlog

from .config import get_settings
from .errors import StorageError
from .records import Record

logger = structlog.get_logger(__name__)


class Slot(str, Enum):
    PRIMARY = 'primaryFile'
    SECONDARY = 'secondaryFile'
    MERGED = 'mergedData'


@dataclass
class StoredFile:
    slot: Slot
    name: str
    type: str
    size: int = 0
    content: Optional[List[Record]] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data['slot'] = self.slot.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'StoredFile':
        return cls(
            slot=Slot(data['slot']),
            name=data.get('name', ''),
            type=data.get('type', ''),
            size=int(data.get('size') or 0),
            content=data.get('content'),
        )


class SlotStore:
    def __init__(self, directory: str):
        self.directory = directory

    def _path(self, slot: Slot) -> str:
        return os.path.join(self.directory, f"{Slot(slot).value}.json")

    def save(self, stored: StoredFile) -> None:
        path = self._path(stored.slot)
        try:
            os.makedirs(self.directory, exist_ok=True)
            tmp_path = f"{path}.tmp"
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(stored.to_dict(), f, ensure_ascii=False)
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(Slot(stored.slot).value, str(exc)) from exc
        logger.debug("slot_saved", slot=Slot(stored.slot).value, rows=len(stored.content or []))

    def load(self, slot: Slot) -> Optional[StoredFile]:
        path = self._path(slot)
        if not os.path.exists(path):
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return StoredFile.from_dict(json.load(f))
        except (OSError, ValueError, KeyError) as exc:
            raise StorageError(Slot(slot).value, str(exc)) from exc

    def delete(self, slot: Slot) -> None:
        try:
            os.remove(self._path(slot))
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageError(Slot(slot).value, str(exc)) from exc

    def clear(self) -> None:
        for slot in Slot:
            self.delete(slot)


def get_store() -> SlotStore:
    return SlotStore(get_settings().storage_dir)
