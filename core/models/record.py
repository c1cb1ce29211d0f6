"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/models/record.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Identity record domain model. Bilingual (English/Bengali)
                person data keyed by the national identifier number, plus
                the search filter and per-file progress value objects.
------------------------------------------------------------------------------
"""

import json
import random
import re
import string
import time
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.types import FileStatus, SourceType

_NON_DIGITS = re.compile(r"\D")

UNKNOWN_NAME_EN = "Unknown"
UNKNOWN_NAME_BN = "অজানা"
UNKNOWN_DOB = "Unknown"


def digits_only(value: Any) -> str:
    """Strips every non-digit character. None becomes an empty string."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def generate_record_id(index: int = 0, prefix: str = "rec") -> str:
    """Builds an opaque record id like 'rec-1700000000000-0-k3j9x'."""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=5))
    return f"{prefix}-{millis}-{index}-{suffix}"


class IdentityRecord(BaseModel):
    """
    A single extracted person. Immutable once created.
    Persisted with camelCase keys so stored blobs stay readable by older
    index versions.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=generate_record_id)
    full_name_en: str = Field(alias="fullNameEn")
    full_name_bn: str = Field(alias="fullNameBn")
    father_name_en: Optional[str] = Field(default=None, alias="fatherNameEn")
    father_name_bn: Optional[str] = Field(default=None, alias="fatherNameBn")
    mother_name_en: Optional[str] = Field(default=None, alias="motherNameEn")
    mother_name_bn: Optional[str] = Field(default=None, alias="motherNameBn")
    address_en: Optional[str] = Field(default=None, alias="addressEn")
    address_bn: Optional[str] = Field(default=None, alias="addressBn")
    blood_group: Optional[str] = Field(default=None, alias="bloodGroup")
    voter_serial: Optional[str] = Field(default=None, alias="voterSerial")
    nid_number: str = Field(alias="nidNumber")
    date_of_birth: str = Field(alias="dateOfBirth")
    source_file: str = Field(alias="sourceFile")
    source_type: SourceType = Field(default=SourceType.LOCAL, alias="sourceType")
    raw_text: Optional[str] = Field(default=None, alias="rawText")

    @field_validator("nid_number", mode="before")
    @classmethod
    def normalize_nid(cls, v: Any) -> str:
        return digits_only(v)

    @field_validator("voter_serial", mode="before")
    @classmethod
    def normalize_voter_serial(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return digits_only(v)

    @classmethod
    def from_extraction(
        cls,
        item: Dict[str, Any],
        file_name: str,
        source_type: SourceType = SourceType.LOCAL,
        index: int = 0
    ) -> "IdentityRecord":
        """
        Normalizes one raw item returned by the extraction model.

        Missing names fall back to 'Unknown' / 'অজানা', a missing birth date
        to 'Unknown'. Optional text fields default to empty strings and the
        raw item is kept as JSON for diagnostics.

        Args:
            item: Raw dictionary as produced by the model (camelCase keys).
            file_name: Name of the source file.
            source_type: Where the file came from.
            index: Position of the item in the response, used for the id.
        """
        def text(key: str, default: str = "") -> str:
            val = item.get(key)
            if val is None or val == "":
                return default
            return str(val)

        return cls(
            id=generate_record_id(index),
            full_name_en=text("fullNameEn", UNKNOWN_NAME_EN),
            full_name_bn=text("fullNameBn", UNKNOWN_NAME_BN),
            father_name_en=text("fatherNameEn"),
            father_name_bn=text("fatherNameBn"),
            mother_name_en=text("motherNameEn"),
            mother_name_bn=text("motherNameBn"),
            address_en=text("addressEn"),
            address_bn=text("addressBn"),
            blood_group=text("bloodGroup"),
            voter_serial=text("voterSerial"),
            nid_number=text("nidNumber"),
            date_of_birth=text("dateOfBirth", UNKNOWN_DOB),
            source_file=file_name,
            source_type=source_type,
            raw_text=json.dumps(item, ensure_ascii=False),
        )

    def to_storage(self) -> Dict[str, Any]:
        """Serializes to the persisted camelCase representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SearchFilters(BaseModel):
    """Search query: identifier fragment plus exact date of birth."""
    model_config = ConfigDict(populate_by_name=True)

    nid_query: str = Field(default="", alias="nidQuery")
    dob: str = ""


class FileProgress(BaseModel):
    """Visible status of one file in an ingestion batch."""
    index: int
    name: str
    status: FileStatus = FileStatus.PENDING
    error: Optional[str] = None
    count: Optional[int] = None
