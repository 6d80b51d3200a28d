"""Name extraction oracle.

Screenshots of a video meeting are sent to a vision model that answers with a
JSON array of the participant names it can read. Each call is one round trip;
nothing is streamed and nothing is retried here.
"""

from __future__ import annotations

import base64
import json
import logging
import re
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

import httpx

from ..core.exceptions import OracleUnavailableError

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = (
    "This is one or more screenshots from a video meeting (Zoom/Meet/Teams). "
    "Please extract ALL the visible participant names. "
    "Look for names in participant lists, gallery view labels, or chat mentions if they represent attendance. "
    "Return only a JSON array of strings containing the unique names found. "
    'Format: ["Name 1", "Name 2", ...]'
)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


@dataclass(frozen=True)
class Screenshot:
    data: bytes
    mime_type: str = "image/png"
    filename: str = "screenshot.png"


class NameExtractor(Protocol):
    def extract_names(self, images: Sequence[Screenshot]) -> list[str]:
        raise NotImplementedError


def parse_names(text: Optional[str]) -> list[str]:
    """Parse the model answer into names, in the order given, without duplicates.

    Raises OracleUnavailableError when the answer is not a JSON array.
    """
    cleaned = _FENCE_RE.sub("", text or "").strip()
    if not cleaned:
        return []

    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise OracleUnavailableError(f"Unparsable extraction output: {cleaned[:80]!r}") from e
    if not isinstance(payload, list):
        raise OracleUnavailableError("Extraction output is not a list of names")

    names: list[str] = []
    seen: set[str] = set()
    for item in payload:
        if not isinstance(item, str):
            continue
        name = item.strip()
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return names


class GeminiNameExtractor:
    """Gemini `generateContent` client used as the extraction oracle."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_MODEL = "gemini-2.5-flash"

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: Optional[str] = None,
        timeout: float = 60.0,
        client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key or ""
        self.model = model or self.DEFAULT_MODEL
        self._timeout = timeout
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _payload(self, images: Sequence[Screenshot]) -> dict:
        parts: list[dict] = [
            {
                "inline_data": {
                    "mime_type": img.mime_type,
                    "data": base64.b64encode(img.data).decode("ascii"),
                }
            }
            for img in images
        ]
        parts.append({"text": EXTRACTION_PROMPT})
        return {
            "contents": [{"parts": parts}],
            "generationConfig": {"responseMimeType": "application/json"},
        }

    def extract_names(self, images: Sequence[Screenshot]) -> list[str]:
        if not self.is_configured:
            raise OracleUnavailableError("API key is missing. Set GEMINI_API_KEY.")
        if not images:
            raise OracleUnavailableError("No screenshots to scan")

        url = f"{self.BASE_URL}/models/{self.model}:generateContent"
        try:
            response = self._get_client().post(url, params={"key": self.api_key}, json=self._payload(images))
        except httpx.HTTPError as e:
            logger.error("extraction request failed: %s", e)
            raise OracleUnavailableError("Extraction service is unreachable") from e

        if response.status_code == 429:
            logger.warning("extraction rate limited")
            raise OracleUnavailableError("Extraction service rate limit reached, try again later")
        if response.status_code != 200:
            logger.error("extraction failed: %s - %s", response.status_code, response.text[:200])
            raise OracleUnavailableError(f"Extraction service error {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise OracleUnavailableError("Extraction service returned invalid JSON") from e

        text = self._answer_text(body)
        if not text:
            logger.warning("extraction returned an empty answer for %d image(s)", len(images))
            return []

        names = parse_names(text)
        logger.info("extracted %d name(s) from %d image(s)", len(names), len(images))
        return names

    @staticmethod
    def _answer_text(body: dict) -> str:
        candidates = body.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts if isinstance(p, dict))
