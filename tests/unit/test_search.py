import logging
import pytest
from conftest import make_record

from core.models.record import SearchFilters
from core.search import SearchEngine, matches, search_records


@pytest.fixture
def records():
    return [
        make_record("1234567890123", dob="1990-01-01", name="Alpha"),
        make_record("9999990123", dob="1990-01-01", name="Beta"),
        make_record("5550123", dob="1985-05-05", name="Gamma"),
        make_record("1111222233334444", dob="1990-01-01", name="Delta"),
    ]


def test_suffix_match_requires_dob(records):
    """A 4-digit query matches the last four digits, DOB must match too."""
    results = search_records(records, SearchFilters(nid_query="0123", dob="1990-01-01"))
    assert [r.full_name_en for r in results] == ["Alpha", "Beta"]


def test_full_number_match(records):
    results = search_records(records, SearchFilters(nid_query="1234567890123", dob="1990-01-01"))
    assert len(results) == 1
    assert results[0].full_name_en == "Alpha"


def test_partial_non_suffix_query_does_not_match(records):
    """Queries of other lengths are exact matches, not substrings."""
    assert search_records(records, SearchFilters(nid_query="12345", dob="1990-01-01")) == []
    assert search_records(records, SearchFilters(nid_query="123", dob="1990-01-01")) == []


def test_dob_mismatch_excludes(records):
    assert search_records(records, SearchFilters(nid_query="0123", dob="1985-05-06")) == []
    results = search_records(records, SearchFilters(nid_query="0123", dob="1985-05-05"))
    assert [r.full_name_en for r in results] == ["Gamma"]


def test_query_is_normalized(records):
    """Separators in the query and whitespace around the DOB are ignored."""
    results = search_records(records, SearchFilters(nid_query=" 12-34 567 890 123 ", dob=" 1990-01-01 "))
    assert [r.full_name_en for r in results] == ["Alpha"]


def test_empty_query_matches_nothing(records):
    assert search_records(records, SearchFilters(nid_query="", dob="1990-01-01")) == []


def test_result_keeps_store_order(records):
    reordered = list(reversed(records))
    results = search_records(reordered, SearchFilters(nid_query="0123", dob="1990-01-01"))
    assert [r.full_name_en for r in results] == ["Beta", "Alpha"]


def test_matches_single_record():
    rec = make_record("1990987654321", dob="1990-12-31")
    assert matches(rec, "4321", "1990-12-31")
    assert not matches(rec, "4321", "1990-12-30")
    assert not matches(rec, "54321", "1990-12-31")


def test_search_filters_accept_camel_case():
    filters = SearchFilters.model_validate({"nidQuery": "0123", "dob": "1990-01-01"})
    assert filters.nid_query == "0123"


def test_engine_searches_store(store):
    store.add_records([make_record("1234567890123"), make_record("9876543210987")])
    engine = SearchEngine(store, delay=0)
    results = engine.search(SearchFilters(nid_query="0987", dob="1990-01-01"))
    assert [r.nid_number for r in results] == ["9876543210987"]


def test_engine_applies_delay(store, monkeypatch):
    slept = []
    monkeypatch.setattr("core.search.time.sleep", lambda s: slept.append(s))
    engine = SearchEngine(store, delay=0.4)
    assert engine.search(SearchFilters(nid_query="0000", dob="1990-01-01")) == []
    assert slept == [0.4]


@pytest.mark.parametrize("query, expected", [
    ("6789", ["1990123456789"]),
    ("6780", ["2000123456780"]),
    ("1990123456789", ["1990123456789"]),
    ("123456789", []),
    ("0000", []),
])
def test_suffix_versus_exact(query, expected):
    records = [make_record("1990123456789"), make_record("2000123456780")]
    results = search_records(records, SearchFilters(nid_query=query, dob="1990-01-01"))
    assert [r.nid_number for r in results] == expected


def test_engine_masks_full_nid_in_log(store, caplog):
    caplog.set_level(logging.INFO, logger="nidpro.search")
    SearchEngine(store).search(SearchFilters(nid_query="1990987654321", dob="1990-12-31"))
    assert "*********4321" in caplog.text
    assert "1990987654321" not in caplog.text
