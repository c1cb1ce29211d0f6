"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/store.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Ordered in-memory record index mirrored to a persisted
                key-value slot. Records are admitted in batches and
                deduplicated by national identifier number.
------------------------------------------------------------------------------
"""

import json
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from pydantic import ValidationError

from core.config import AppConfig
from core.logger import get_logger, log_store_event
from core.models.record import IdentityRecord

logger = get_logger("store")


class RecordPersistence(ABC):
    """Read/write access to the two persisted slots (records, Drive folder)."""

    @abstractmethod
    def load_records_blob(self) -> Optional[str]:
        """Returns the serialized record list or None if absent."""
        pass

    @abstractmethod
    def save_records_blob(self, blob: str) -> None:
        pass

    @abstractmethod
    def clear_records(self) -> None:
        pass

    @abstractmethod
    def load_drive_folder_id(self) -> Optional[str]:
        pass

    @abstractmethod
    def save_drive_folder_id(self, folder_id: str) -> None:
        pass


class SettingsPersistence(RecordPersistence):
    """Persistence backed by the application QSettings."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def load_records_blob(self) -> Optional[str]:
        return self.config.get_records_blob()

    def save_records_blob(self, blob: str) -> None:
        self.config.set_records_blob(blob)

    def clear_records(self) -> None:
        self.config.remove_records_blob()

    def load_drive_folder_id(self) -> Optional[str]:
        if not self.config.has_drive_folder_id():
            return None
        return self.config.get_drive_folder_id()

    def save_drive_folder_id(self, folder_id: str) -> None:
        self.config.set_drive_folder_id(folder_id)


class InMemoryPersistence(RecordPersistence):
    """Volatile persistence, used by tests and headless runs."""

    def __init__(self, records_blob: Optional[str] = None, drive_folder_id: Optional[str] = None) -> None:
        self.records_blob = records_blob
        self.drive_folder_id = drive_folder_id

    def load_records_blob(self) -> Optional[str]:
        return self.records_blob

    def save_records_blob(self, blob: str) -> None:
        self.records_blob = blob

    def clear_records(self) -> None:
        self.records_blob = None

    def load_drive_folder_id(self) -> Optional[str]:
        return self.drive_folder_id

    def save_drive_folder_id(self, folder_id: str) -> None:
        self.drive_folder_id = folder_id


class RecordStore:
    """
    Ordered list of identity records.

    The list only grows through add_records() and only shrinks through
    clear(). Every admission call rewrites the persisted blob wholesale.
    """

    def __init__(self, persistence: RecordPersistence) -> None:
        self.persistence = persistence
        self._records: List[IdentityRecord] = []

    @property
    def records(self) -> List[IdentityRecord]:
        """Snapshot of the stored records in insertion order."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))

    def is_empty(self) -> bool:
        return not self._records

    def nid_numbers(self) -> set:
        return {r.nid_number for r in self._records}

    def load(self) -> List[IdentityRecord]:
        """
        Reads the persisted index once at start-up.
        A missing slot means no data yet; unreadable data is logged and
        the store starts empty.

        Returns:
            The loaded records.
        """
        self._records = []
        try:
            blob = self.persistence.load_records_blob()
        except Exception as e:
            logger.error(f"Failed to read persisted records: {e}")
            return []

        if not blob:
            return []

        try:
            data = json.loads(blob)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Failed to load records: {e}")
            return []

        if not isinstance(data, list):
            logger.error("Failed to load records: stored index is not a list")
            return []

        loaded: List[IdentityRecord] = []
        for entry in data:
            try:
                loaded.append(IdentityRecord.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping malformed stored record: {e.error_count()} validation error(s)")

        self._records = loaded
        logger.info(f"Loaded {len(loaded)} records from index")
        return self.records

    def add_records(self, new_records: Iterable[IdentityRecord]) -> List[IdentityRecord]:
        """
        Admits a batch of records.

        A record is admitted when its national identifier is non-empty and
        not yet present, neither in the store nor earlier in the same batch.
        Duplicates are dropped silently.

        Args:
            new_records: Candidates in arrival order.

        Returns:
            The records that were actually appended.
        """
        seen = self.nid_numbers()
        admitted: List[IdentityRecord] = []
        dropped = 0
        for rec in new_records:
            if not rec.nid_number or rec.nid_number in seen:
                dropped += 1
                continue
            seen.add(rec.nid_number)
            admitted.append(rec)

        self._records.extend(admitted)
        self._persist()

        if dropped:
            logger.info(f"Dropped {dropped} duplicate or unidentified record(s)")
        log_store_event("add", admitted=len(admitted), total=len(self._records))
        return admitted

    def clear(self) -> None:
        """Removes every record from memory and from persisted state."""
        self._records = []
        self.persistence.clear_records()
        log_store_event("clear")
        logger.info("Record index wiped")

    def _persist(self) -> None:
        blob = json.dumps([r.to_storage() for r in self._records], ensure_ascii=False)
        self.persistence.save_records_blob(blob)
