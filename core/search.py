"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/search.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Record lookup by national identifier fragment and exact date
                of birth. A 4-digit fragment matches the identifier suffix,
                anything else must match the full identifier.
------------------------------------------------------------------------------
"""

import time
from typing import Iterable, List

from core.logger import get_logger, mask_nid
from core.models.record import IdentityRecord, SearchFilters, digits_only
from core.store import RecordStore

logger = get_logger("search")

SUFFIX_LENGTH = 4


def matches(record: IdentityRecord, nid_query: str, dob: str) -> bool:
    """
    Checks a single record against an already normalized query.

    Args:
        record: The candidate record.
        nid_query: Digits-only identifier fragment.
        dob: Trimmed date of birth, compared as text.
    """
    if record.date_of_birth.strip() != dob:
        return False
    clean_nid = digits_only(record.nid_number)
    if len(nid_query) == SUFFIX_LENGTH:
        return clean_nid[-SUFFIX_LENGTH:] == nid_query
    return clean_nid == nid_query


def search_records(records: Iterable[IdentityRecord], filters: SearchFilters) -> List[IdentityRecord]:
    """
    Filters records by identifier fragment and date of birth.
    Full linear scan; result keeps the input order. No match is an empty
    list, never an error.
    """
    nid_query = digits_only(filters.nid_query)
    dob = filters.dob.strip()
    return [r for r in records if matches(r, nid_query, dob)]


class SearchEngine:
    """
    Runs queries against a record store with a fixed latency floor.
    The delay only shapes the interactive experience; pass 0 for tests
    and batch use.
    """

    def __init__(self, store: RecordStore, delay: float = 0.0) -> None:
        self.store = store
        self.delay = delay

    def search(self, filters: SearchFilters) -> List[IdentityRecord]:
        if self.delay > 0:
            time.sleep(self.delay)
        results = search_records(self.store.records, filters)
        logger.info(f"Search for '{mask_nid(digits_only(filters.nid_query))}' / '{filters.dob}': {len(results)} match(es)")
        return results
