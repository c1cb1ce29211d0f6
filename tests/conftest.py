import os
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from typing import Dict, List, Union
from PyQt6.QtCore import QSettings

from core.ai.base import ExtractionAdapter
from core.config import AppConfig
from core.ingestion import FileBlob, IngestionPipeline
from core.models.record import IdentityRecord
from core.models.types import SourceType
from core.store import InMemoryPersistence, RecordStore


def make_record(nid: str, dob: str = "1990-01-01", name: str = "Test Person", **kwargs) -> IdentityRecord:
    """Builds a record with sensible defaults for tests."""
    data = dict(
        full_name_en=name,
        full_name_bn="পরীক্ষা",
        nid_number=nid,
        date_of_birth=dob,
        source_file="test.pdf",
    )
    data.update(kwargs)
    return IdentityRecord(**data)


class FakeExtractor(ExtractionAdapter):
    """
    Scripted extraction adapter. Maps file names to either a list of raw
    items (camelCase dicts) or an exception to raise.
    """

    def __init__(self, script: Dict[str, Union[List[dict], Exception]]):
        self.script = script
        self.calls: List[str] = []

    def extract(self, data, mime_type, file_name, source_type=SourceType.LOCAL):
        self.calls.append(file_name)
        outcome = self.script.get(file_name, [])
        if isinstance(outcome, Exception):
            raise outcome
        return [
            IdentityRecord.from_extraction(item, file_name, source_type, i)
            for i, item in enumerate(outcome)
        ]


def blob(name: str, mime_type: str = "application/pdf") -> FileBlob:
    return FileBlob(name=name, mime_type=mime_type, data=b"%PDF-1.4 test")


@pytest.fixture
def clean_config(tmp_path):
    """AppConfig writing to a temporary INI file."""
    settings_path = str(tmp_path / "test_config.ini")
    config = AppConfig()
    config.settings = QSettings(settings_path, QSettings.Format.IniFormat)
    return config


@pytest.fixture
def persistence():
    return InMemoryPersistence()


@pytest.fixture
def store(persistence):
    return RecordStore(persistence)


@pytest.fixture
def make_pipeline(store):
    def _make(script):
        extractor = FakeExtractor(script)
        return IngestionPipeline(extractor, store), extractor
    return _make
