from conftest import make_record

from core.drive import DriveSyncStub, parse_drive_folder_id
from core.models.types import SourceType


def test_parse_folder_url():
    url = "https://drive.google.com/drive/folders/1RlLX_K0YAwvrKbhg9L8yWRILn9P-70mE?usp=sharing"
    assert parse_drive_folder_id(url) == "1RlLX_K0YAwvrKbhg9L8yWRILn9P-70mE"


def test_parse_raw_id():
    assert parse_drive_folder_id("  1RlLX_K0YAwvrKbhg9L8yWRILn9P-70mE ") == "1RlLX_K0YAwvrKbhg9L8yWRILn9P-70mE"


def test_parse_short_text_is_returned_trimmed():
    """Without a long id run the trimmed input is used as is."""
    assert parse_drive_folder_id("  my-folder  ") == "my-folder"
    assert parse_drive_folder_id("") == ""


def test_stub_returns_canned_record():
    stub = DriveSyncStub(delay=0)
    records = stub.fetch_records("any-folder")
    assert len(records) == 1
    rec = records[0]
    assert rec.full_name_en == "Cloud Sync User"
    assert rec.nid_number == "1990987654321"
    assert rec.date_of_birth == "1990-12-31"
    assert rec.source_file == "Drive_Batch_Index.pdf"
    assert rec.source_type == SourceType.DRIVE_SYNC
    assert rec.id.startswith("drive-")


def test_sync_admits_once(store):
    stub = DriveSyncStub(delay=0)
    assert len(stub.sync(store, "folder")) == 1
    assert stub.sync(store, "folder") == []
    assert len(store) == 1


def test_sync_respects_existing_nid(store):
    store.add_records([make_record("1990987654321", name="Local")])
    assert DriveSyncStub(delay=0).sync(store, "folder") == []
    assert store.records[0].full_name_en == "Local"


def test_stub_waits(monkeypatch):
    slept = []
    monkeypatch.setattr("core.drive.time.sleep", lambda s: slept.append(s))
    DriveSyncStub().fetch_records("folder")
    assert slept == [2.0]
