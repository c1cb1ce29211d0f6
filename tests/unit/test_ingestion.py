import pytest
from unittest.mock import MagicMock
from conftest import blob, make_record

from core.errors import MissingCredentialError
from core.ingestion import (NO_RECORDS_MESSAGE, FileBlob, collect_supported, is_supported_mime)
from core.models.types import FileStatus


def item(nid, name="Person", dob="1990-01-01"):
    return {"fullNameEn": name, "fullNameBn": "ব্যক্তি", "nidNumber": nid, "dateOfBirth": dob}


def test_batch_processes_files_in_order(make_pipeline, store):
    pipeline, extractor = make_pipeline({
        "a.pdf": [item("111"), item("222")],
        "b.png": [item("333")],
    })
    run = pipeline.ingest([blob("a.pdf"), blob("b.png", "image/png")])

    assert extractor.calls == ["a.pdf", "b.png"]
    assert [q.status for q in run.queue] == [FileStatus.DONE, FileStatus.DONE]
    assert [q.count for q in run.queue] == [2, 1]
    assert [r.nid_number for r in store.records] == ["111", "222", "333"]
    assert run.finished


def test_failure_isolation(make_pipeline, store):
    """A failing file does not stop the others; successful records are admitted."""
    pipeline, extractor = make_pipeline({
        "1.pdf": [item("111")],
        "2.pdf": RuntimeError("Processing failed: boom"),
        "3.pdf": [item("333")],
    })
    run = pipeline.ingest([blob("1.pdf"), blob("2.pdf"), blob("3.pdf")])

    assert extractor.calls == ["1.pdf", "2.pdf", "3.pdf"]
    assert [q.status for q in run.queue] == [FileStatus.DONE, FileStatus.FAILED, FileStatus.DONE]
    assert run.queue[1].error == "Processing failed: boom"
    assert run.done_count == 2
    assert run.failed_count == 1
    assert [r.nid_number for r in store.records] == ["111", "333"]


def test_zero_records_marks_file_failed(make_pipeline, store):
    pipeline, _ = make_pipeline({"empty.pdf": []})
    run = pipeline.ingest([blob("empty.pdf")])

    assert run.queue[0].status == FileStatus.FAILED
    assert run.queue[0].error == NO_RECORDS_MESSAGE
    assert store.is_empty()


def test_error_without_message_gets_generic_text(make_pipeline):
    pipeline, _ = make_pipeline({"x.pdf": RuntimeError()})
    run = pipeline.ingest([blob("x.pdf")])
    assert run.queue[0].error == "Processing error"


def test_missing_credential_message(make_pipeline):
    pipeline, _ = make_pipeline({"x.pdf": MissingCredentialError()})
    run = pipeline.ingest([blob("x.pdf")])
    assert run.queue[0].error == "System configuration missing: API Key not detected."


def test_event_sequence(make_pipeline):
    """Every file reports PROCESSING before its terminal state."""
    pipeline, _ = make_pipeline({"a.pdf": [item("1")], "b.pdf": ValueError("bad")})
    run = pipeline.start([blob("a.pdf"), blob("b.pdf")])

    assert [q.status for q in run.queue] == [FileStatus.PENDING, FileStatus.PENDING]

    events = [(e.index, e.status) for e in run]
    assert events == [
        (0, FileStatus.PROCESSING),
        (0, FileStatus.DONE),
        (1, FileStatus.PROCESSING),
        (1, FileStatus.FAILED),
    ]


def test_store_untouched_until_batch_ends(make_pipeline, store):
    pipeline, _ = make_pipeline({"a.pdf": [item("1")], "b.pdf": [item("2")]})
    run = pipeline.start([blob("a.pdf"), blob("b.pdf")])

    for event in run:
        if event.status.is_terminal and event.index == 0:
            assert store.is_empty()
    assert len(store) == 2


def test_single_admission_call(make_pipeline, store):
    pipeline, _ = make_pipeline({"a.pdf": [item("1")], "b.pdf": [item("2")]})
    store.add_records = MagicMock(wraps=store.add_records)
    pipeline.ingest([blob("a.pdf"), blob("b.pdf")])
    store.add_records.assert_called_once()


def test_all_failed_skips_admission(make_pipeline, store):
    pipeline, _ = make_pipeline({"a.pdf": RuntimeError("x")})
    store.add_records = MagicMock(wraps=store.add_records)
    run = pipeline.ingest([blob("a.pdf")])
    store.add_records.assert_not_called()
    assert run.admitted == []


def test_empty_batch(make_pipeline, store):
    pipeline, extractor = make_pipeline({})
    run = pipeline.ingest([])
    assert run.queue == []
    assert run.finished
    assert extractor.calls == []
    assert store.is_empty()


def test_batch_dedup_against_store(make_pipeline, store):
    store.add_records([make_record("111")])
    pipeline, _ = make_pipeline({"a.pdf": [item("111"), item("222")]})
    run = pipeline.ingest([blob("a.pdf")])

    assert run.total_extracted == 2
    assert [r.nid_number for r in run.admitted] == ["222"]
    assert len(store) == 2


def test_progress_callback_receives_events(make_pipeline):
    pipeline, _ = make_pipeline({"a.pdf": [item("1")]})
    events = []
    pipeline.ingest([blob("a.pdf")], progress_callback=events.append)
    assert [e.status for e in events] == [FileStatus.PROCESSING, FileStatus.DONE]


def test_run_cannot_be_iterated_twice(make_pipeline):
    pipeline, _ = make_pipeline({})
    run = pipeline.start([])
    list(run)
    with pytest.raises(RuntimeError):
        iter(run)


def test_extraction_defaults_applied(make_pipeline, store):
    pipeline, _ = make_pipeline({"a.pdf": [{"nidNumber": "12 34-56"}]})
    pipeline.ingest([blob("a.pdf")])
    rec = store.records[0]
    assert rec.nid_number == "123456"
    assert rec.full_name_en == "Unknown"
    assert rec.full_name_bn == "অজানা"
    assert rec.date_of_birth == "Unknown"
    assert rec.source_file == "a.pdf"
    assert rec.father_name_en == ""


def test_file_blob_from_path(tmp_path):
    path = tmp_path / "scan.pdf"
    path.write_bytes(b"%PDF-1.4")
    fb = FileBlob.from_path(path)
    assert fb.name == "scan.pdf"
    assert fb.mime_type == "application/pdf"
    assert fb.read() == b"%PDF-1.4"
    assert fb.is_supported()


def test_file_blob_from_path_is_lazy(tmp_path):
    """Creating a blob does not touch the disk; reading a missing file raises."""
    fb = FileBlob.from_path(tmp_path / "gone.pdf")
    assert fb.data is None
    with pytest.raises(OSError):
        fb.read()


def test_unreadable_file_fails_in_its_own_turn(make_pipeline, store, tmp_path):
    paths = [tmp_path / "a.pdf", tmp_path / "gone.pdf", tmp_path / "c.pdf"]
    paths[0].write_bytes(b"%PDF")
    paths[2].write_bytes(b"%PDF")
    pipeline, extractor = make_pipeline({"a.pdf": [item("111")], "c.pdf": [item("333")]})

    events = []
    run = pipeline.ingest([FileBlob.from_path(p) for p in paths], progress_callback=events.append)

    assert [(q.name, q.status) for q in run.queue] == [
        ("a.pdf", FileStatus.DONE),
        ("gone.pdf", FileStatus.FAILED),
        ("c.pdf", FileStatus.DONE),
    ]
    assert "gone.pdf" in run.queue[1].error
    assert (1, FileStatus.PROCESSING) in [(e.index, e.status) for e in events]
    assert extractor.calls == ["a.pdf", "c.pdf"]
    assert [r.nid_number for r in store.records] == ["111", "333"]


def test_supported_mime_types():
    assert is_supported_mime("application/pdf")
    assert is_supported_mime("image/jpeg")
    assert not is_supported_mime("text/plain")
    assert not is_supported_mime(None)


def test_collect_supported(tmp_path):
    pdf = tmp_path / "a.pdf"
    png = tmp_path / "b.png"
    txt = tmp_path / "c.txt"
    for p in (pdf, png, txt):
        p.write_bytes(b"x")
    result = collect_supported([txt, png, tmp_path / "missing.pdf", pdf])
    assert result == [png, pdf]
