"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/drive.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Drive folder configuration helpers. Parses folder ids out of
                pasted sharing links and provides the Drive sync stand-in,
                which returns a fixed record instead of contacting a cloud.
------------------------------------------------------------------------------
"""

import re
import time
from typing import List

from core.logger import get_logger
from core.models.record import IdentityRecord
from core.models.types import SourceType
from core.store import RecordStore

logger = get_logger("drive")

# Drive ids are long runs of letters, digits, '-' and '_'
FOLDER_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{25,}")


def parse_drive_folder_id(text: str) -> str:
    """
    Extracts a folder id from a sharing URL or a raw id.

    Returns:
        The first run of at least 25 id characters, or the trimmed input
        when there is none.
    """
    text = text or ""
    match = FOLDER_ID_PATTERN.search(text)
    return match.group(0) if match else text.strip()


class DriveSyncStub:
    """
    Stand-in for a Drive folder import. Waits `delay` seconds and yields a
    single canned record regardless of the folder.
    """

    def __init__(self, delay: float = 2.0) -> None:
        self.delay = delay

    def fetch_records(self, folder_id: str) -> List[IdentityRecord]:
        if self.delay > 0:
            time.sleep(self.delay)
        logger.info(f"Drive sync (stub) for folder {folder_id}")
        return [
            IdentityRecord(
                id=f"drive-{int(time.time() * 1000)}",
                full_name_en="Cloud Sync User",
                full_name_bn="ক্লাউড সিঙ্ক ইউজার",
                nid_number="1990987654321",
                date_of_birth="1990-12-31",
                source_file="Drive_Batch_Index.pdf",
                source_type=SourceType.DRIVE_SYNC,
            )
        ]

    def sync(self, store: RecordStore, folder_id: str) -> List[IdentityRecord]:
        """Fetches the canned records and admits them. Returns the admitted ones."""
        return store.add_records(self.fetch_records(folder_id))
