"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/ai/base.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Abstract interface of the extraction adapter that turns a
                document image or PDF into identity records.
------------------------------------------------------------------------------
"""

from abc import ABC, abstractmethod
from typing import List

from core.models.record import IdentityRecord
from core.models.types import SourceType


class ExtractionAdapter(ABC):
    """Abstract base class for all extraction backends."""

    @abstractmethod
    def extract(
        self,
        data: bytes,
        mime_type: str,
        file_name: str,
        source_type: SourceType = SourceType.LOCAL
    ) -> List[IdentityRecord]:
        """
        Extracts zero or more identity records from a single file.

        Raises:
            ExtractionError: The file could not be processed.
        """
        pass
