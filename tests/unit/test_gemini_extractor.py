import json
import pytest
from unittest.mock import MagicMock, patch

from core.ai.gemini_extractor import GeminiExtractor, parse_records_json
from core.errors import ExtractionError, MalformedResponseError, MissingCredentialError
from core.models.types import SourceType


@pytest.fixture(autouse=True)
def reset_rate_limit_state():
    GeminiExtractor._cooldown_until = None
    GeminiExtractor._adaptive_delay = 0.0
    yield
    GeminiExtractor._cooldown_until = None
    GeminiExtractor._adaptive_delay = 0.0


@pytest.fixture
def mock_genai():
    with patch("core.ai.gemini_extractor.genai") as mock:
        yield mock


def response(text):
    resp = MagicMock()
    resp.text = text
    return resp


ITEMS = [
    {"fullNameEn": "Rahim Uddin", "fullNameBn": "রহিম উদ্দিন", "nidNumber": "123 456 7890",
     "dateOfBirth": "1985-02-14", "voterSerial": "No. 0042"},
    {"fullNameEn": "Amina Begum", "fullNameBn": "আমিনা বেগম", "nidNumber": "9876543210",
     "dateOfBirth": "1990-07-01", "bloodGroup": "A+"},
]


def test_missing_key_raises():
    extractor = GeminiExtractor(api_key="")
    with pytest.raises(MissingCredentialError) as exc:
        extractor.extract(b"data", "application/pdf", "a.pdf")
    assert str(exc.value) == "System configuration missing: API Key not detected."


def test_extract_builds_records(mock_genai):
    client = mock_genai.Client.return_value
    client.models.generate_content.return_value = response(json.dumps(ITEMS, ensure_ascii=False))

    extractor = GeminiExtractor(api_key="test")
    records = extractor.extract(b"%PDF", "application/pdf", "voters.pdf", SourceType.LOCAL)

    assert [r.nid_number for r in records] == ["1234567890", "9876543210"]
    assert records[0].voter_serial == "0042"
    assert records[1].blood_group == "A+"
    assert all(r.source_file == "voters.pdf" for r in records)
    assert len({r.id for r in records}) == 2
    assert json.loads(records[0].raw_text)["fullNameEn"] == "Rahim Uddin"

    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-3-pro-preview"


def test_extract_sends_inline_document(mock_genai):
    client = mock_genai.Client.return_value
    client.models.generate_content.return_value = response("[]")

    extractor = GeminiExtractor(api_key="test", model_name="gemini-test")
    assert extractor.extract(b"\x89PNG", "image/png", "card.png") == []

    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    contents = kwargs["contents"]
    assert len(contents) == 2
    assert isinstance(contents[1], str)


def test_service_error_is_wrapped(mock_genai):
    client = mock_genai.Client.return_value
    client.models.generate_content.side_effect = RuntimeError("quota project disabled")

    extractor = GeminiExtractor(api_key="test")
    with pytest.raises(ExtractionError) as exc:
        extractor.extract(b"x", "application/pdf", "a.pdf")
    assert str(exc.value) == "Processing failed: quota project disabled"


def test_malformed_response(mock_genai):
    client = mock_genai.Client.return_value
    client.models.generate_content.return_value = response("this is not json")

    extractor = GeminiExtractor(api_key="test")
    with pytest.raises(MalformedResponseError):
        extractor.extract(b"x", "application/pdf", "a.pdf")


def test_rate_limit_retry(mock_genai):
    """429 triggers back-off and a retry."""
    client = mock_genai.Client.return_value
    error_429 = RuntimeError("429 RESOURCE_EXHAUSTED")
    client.models.generate_content.side_effect = [error_429, response(json.dumps(ITEMS[:1]))]

    extractor = GeminiExtractor(api_key="test")
    with patch("time.sleep") as mock_sleep:
        records = extractor.extract(b"x", "application/pdf", "a.pdf")

    assert len(records) == 1
    assert client.models.generate_content.call_count == 2
    assert mock_sleep.called


def test_rate_limit_exhausted(mock_genai):
    client = mock_genai.Client.return_value
    client.models.generate_content.side_effect = RuntimeError("RESOURCE_EXHAUSTED")

    extractor = GeminiExtractor(api_key="test")
    with patch("time.sleep"):
        with pytest.raises(ExtractionError):
            extractor.extract(b"x", "application/pdf", "a.pdf")
    assert client.models.generate_content.call_count == GeminiExtractor.MAX_RETRIES


def test_timeout_passed_to_client(mock_genai):
    GeminiExtractor(api_key="test", timeout=30)
    mock_genai.Client.assert_called_once()
    assert mock_genai.Client.call_args.kwargs["http_options"] is not None

    mock_genai.Client.reset_mock()
    GeminiExtractor(api_key="test", timeout=0)
    assert mock_genai.Client.call_args.kwargs["http_options"] is None


@pytest.mark.parametrize("text, expected", [
    ('```json\n[{"nidNumber": "1"}]\n```', [{"nidNumber": "1"}]),
    ('[{"nidNumber": "1"},]', [{"nidNumber": "1"}]),
    ('{"nidNumber": "1"}', [{"nidNumber": "1"}]),
    ("", []),
    (None, []),
])
def test_parse_records_json(text, expected):
    assert parse_records_json(text) == expected


@pytest.mark.parametrize("text", ["[1, 2]", '"text"', "{broken"])
def test_parse_records_json_rejects(text):
    with pytest.raises(MalformedResponseError) as exc:
        parse_records_json(text)
    assert str(exc.value).startswith("Processing failed:")
