"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/ai/gemini_extractor.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Gemini backed extraction adapter. Sends the document as an
                inline part, forces a JSON array response and normalizes
                every item into an IdentityRecord. Handles rate limiting
                with adaptive back-off.
------------------------------------------------------------------------------
"""

import datetime
import json
import random
import re
import time
from typing import Any, List, Optional

from google import genai
from google.genai import types

from core.ai.base import ExtractionAdapter
from core.ai.prompts import IDENTITY_RESPONSE_SCHEMA, PROMPT_IDENTITY_EXTRACTION
from core.errors import ExtractionError, MalformedResponseError, MissingCredentialError
from core.logger import get_logger, log_ai_interaction
from core.models.record import IdentityRecord
from core.models.types import SourceType

logger = get_logger("ai.gemini")

_FENCE_START = re.compile(r"^```(?:json)?\n?")
_FENCE_END = re.compile(r"\n?```$")


def parse_records_json(text: Optional[str]) -> List[dict]:
    """
    Parses the model answer into a list of raw record dictionaries.

    Markdown code fences are stripped; a single object is accepted as a
    one-element list. An empty answer means no records.

    Raises:
        MalformedResponseError: The text is not JSON or not a list of objects.
    """
    txt = (text or "").replace("\x00", "").strip() or "[]"
    if txt.startswith("```"):
        txt = _FENCE_END.sub("", _FENCE_START.sub("", txt)).strip()

    try:
        parsed = json.loads(txt, strict=False)
    except json.JSONDecodeError:
        # Heuristic repair for trailing commas
        repaired = re.sub(r",\s*([\]}])", r"\1", txt)
        try:
            parsed = json.loads(repaired, strict=False)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Processing failed: response is not valid JSON ({e.msg})")

    if isinstance(parsed, dict):
        parsed = [parsed]
    if not isinstance(parsed, list) or not all(isinstance(item, dict) for item in parsed):
        raise MalformedResponseError("Processing failed: response is not a list of records")
    return parsed


class GeminiExtractor(ExtractionAdapter):
    """Identity record extraction through the Gemini API (Cloud AI)."""

    MAX_RETRIES: int = 5
    _cooldown_until: Optional[datetime.datetime] = None
    _adaptive_delay: float = 0.0

    def __init__(self, api_key: str, model_name: str = "gemini-3-pro-preview", timeout: Optional[float] = None) -> None:
        """
        Initializes the extractor.

        Args:
            api_key: The Google GenAI API key.
            model_name: The target Gemini model name.
            timeout: Optional request timeout in seconds. None or 0 waits indefinitely.
        """
        self.api_key: str = api_key or ""
        self.model_name: str = model_name
        self.timeout: Optional[float] = timeout if timeout else None
        self.client: Optional[genai.Client] = None

        if not self.api_key:
            logger.warning("Missing API key. Gemini extraction will be inactive.")
        else:
            try:
                http_options = None
                if self.timeout:
                    http_options = types.HttpOptions(timeout=int(self.timeout * 1000))
                self.client = genai.Client(api_key=self.api_key, http_options=http_options)
            except Exception as e:
                logger.error(f"Failed to initialize Gemini Client: {e}")
                self.client = None

    def extract(
        self,
        data: bytes,
        mime_type: str,
        file_name: str,
        source_type: SourceType = SourceType.LOCAL
    ) -> List[IdentityRecord]:
        if not self.api_key:
            raise MissingCredentialError()
        if not self.client:
            raise ExtractionError("Processing failed: Gemini client is not available.")

        contents = [
            types.Part.from_bytes(data=data, mime_type=mime_type),
            PROMPT_IDENTITY_EXTRACTION,
        ]
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=IDENTITY_RESPONSE_SCHEMA,
            temperature=0.1
        )

        logger.info(f"Extracting records from {file_name} ({mime_type}, {len(data)} bytes)")
        response = self._execute_generate(contents, config)

        try:
            txt = response.text
        except Exception as e:
            raise MalformedResponseError(f"Processing failed: response text inaccessible ({e})")

        items = parse_records_json(txt)
        log_ai_interaction(PROMPT_IDENTITY_EXTRACTION, txt or "", items)

        records = [
            IdentityRecord.from_extraction(item, file_name, source_type, index)
            for index, item in enumerate(items)
        ]
        logger.info(f"{file_name}: {len(records)} record(s) extracted")
        return records

    def _execute_generate(self, contents: Any, config: types.GenerateContentConfig) -> Any:
        if type(self)._adaptive_delay > 0:
            time.sleep(type(self)._adaptive_delay)

        for attempt in range(self.MAX_RETRIES):
            self._wait_for_cooldown()
            try:
                response = self.client.models.generate_content(
                    model=self.model_name,
                    contents=contents,
                    config=config
                )
                if type(self)._adaptive_delay > 0:
                    type(self)._adaptive_delay *= 0.5
                    if type(self)._adaptive_delay < 0.2:
                        type(self)._adaptive_delay = 0.0
                return response
            except Exception as e:
                if self._is_rate_limit_error(e):
                    self._handle_rate_limit(attempt)
                    continue
                logger.error(f"Extraction request failed: {e}")
                raise ExtractionError(f"Processing failed: {str(e) or 'Check document quality.'}") from e

        raise ExtractionError(f"Processing failed: rate limit still active after {self.MAX_RETRIES} attempts.")

    def _is_rate_limit_error(self, e: Exception) -> bool:
        if getattr(e, "code", None) == 429:
            return True
        return "RESOURCE_EXHAUSTED" in str(e)

    def _handle_rate_limit(self, attempt: int) -> None:
        new_delay = max(2.0, type(self)._adaptive_delay * 2.0)
        type(self)._adaptive_delay = min(256.0, new_delay)
        delay = max(2 * (2 ** attempt) + random.uniform(0, 1), type(self)._adaptive_delay)
        logger.warning(f"Rate limit hit. Backing off for {delay:.1f}s")
        type(self)._cooldown_until = datetime.datetime.now() + datetime.timedelta(seconds=delay)

    def _wait_for_cooldown(self) -> None:
        cooldown = type(self)._cooldown_until
        if cooldown and cooldown > datetime.datetime.now():
            wait_time = (cooldown - datetime.datetime.now()).total_seconds()
            if wait_time > 0:
                time.sleep(wait_time)
        type(self)._cooldown_until = None
