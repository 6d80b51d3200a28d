import base64
import json

import httpx
import pytest

from src.attendance_ledger.attendance_ledger.core.exceptions import OracleUnavailableError
from src.attendance_ledger.attendance_ledger.ocr.extractor import GeminiNameExtractor, Screenshot, parse_names


def _answer(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _extractor(handler) -> GeminiNameExtractor:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GeminiNameExtractor("test-key", client=client)


def test_posts_images_and_prompt_and_parses_names():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_answer('["Arjun Singh", "Meera Devi", "Arjun Singh"]'))

    names = _extractor(handler).extract_names([Screenshot(b"\x89PNG", "image/png"), Screenshot(b"jpg", "image/jpeg")])

    assert names == ["Arjun Singh", "Meera Devi"]
    assert seen["url"].path.endswith("/models/gemini-2.5-flash:generateContent")
    assert seen["url"].params["key"] == "test-key"
    parts = seen["body"]["contents"][0]["parts"]
    assert parts[0]["inline_data"] == {"mime_type": "image/png", "data": base64.b64encode(b"\x89PNG").decode()}
    assert parts[1]["inline_data"]["mime_type"] == "image/jpeg"
    assert "JSON array" in parts[-1]["text"]


def test_markdown_fences_are_stripped():
    extractor = _extractor(lambda r: httpx.Response(200, json=_answer('```json\n["Kavya"]\n```')))

    assert extractor.extract_names([Screenshot(b"img")]) == ["Kavya"]


def test_empty_answer_is_an_empty_extraction():
    extractor = _extractor(lambda r: httpx.Response(200, json={"candidates": []}))

    assert extractor.extract_names([Screenshot(b"img")]) == []


@pytest.mark.parametrize("status", [429, 500, 403])
def test_http_errors_raise_oracle_unavailable(status):
    extractor = _extractor(lambda r: httpx.Response(status, json={"error": "nope"}))

    with pytest.raises(OracleUnavailableError):
        extractor.extract_names([Screenshot(b"img")])


def test_transport_failure_raises_oracle_unavailable():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(OracleUnavailableError):
        _extractor(handler).extract_names([Screenshot(b"img")])


def test_unparsable_answer_raises_oracle_unavailable():
    extractor = _extractor(lambda r: httpx.Response(200, json=_answer("I can see Arjun and Meera")))

    with pytest.raises(OracleUnavailableError):
        extractor.extract_names([Screenshot(b"img")])


def test_missing_key_fails_before_any_request():
    calls = []
    client = httpx.Client(transport=httpx.MockTransport(lambda r: calls.append(r) or httpx.Response(200)))

    with pytest.raises(OracleUnavailableError, match="GEMINI_API_KEY"):
        GeminiNameExtractor("", client=client).extract_names([Screenshot(b"img")])
    assert calls == []


def test_parse_names_skips_blanks_and_non_strings():
    assert parse_names('["  Arjun ", "", 42, null, "Meera"]') == ["Arjun", "Meera"]
    assert parse_names("") == []


def test_parse_names_rejects_non_list():
    with pytest.raises(OracleUnavailableError):
        parse_names('{"names": ["Arjun"]}')
