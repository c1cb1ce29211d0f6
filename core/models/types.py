"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/models/types.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Centralized enumeration and type definitions.
------------------------------------------------------------------------------
"""

from enum import Enum


class SourceType(str, Enum):
    """Origin of an identity record."""
    LOCAL = "LOCAL"
    DRIVE_SYNC = "DRIVE"


class FileStatus(str, Enum):
    """Processing state of a single file within an ingestion batch."""
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (FileStatus.DONE, FileStatus.FAILED)
