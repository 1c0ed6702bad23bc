"""Language-model transaction extraction.

``OpenRouterExtractor`` talks to any OpenAI-compatible chat-completions
endpoint (OpenRouter by default) through the ``openai`` SDK. The client is
created lazily by :func:`create_extractor`; nothing happens at import time.
"""

import json
import os
from abc import ABC, abstractmethod
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from moneytrack.domain.errors import ExtractionError, MalformedResponseError
from moneytrack.llm.prompting import SchemaHint, build_messages, strip_code_fence
from moneytrack.logging_setup import get_logger

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "mistralai/mistral-7b-instruct"
DEFAULT_TIMEOUT = 30.0

_logger = get_logger("moneytrack.llm.extractor")


class LLMExtractor(ABC):
    """Turns free text into header-keyed records."""

    @abstractmethod
    def extract(self, text: str, schema_hint: SchemaHint) -> list[dict[str, Any]]:
        """Extract records from ``text``.

        Raises:
            ExtractionError: If the service could not be reached or failed
            MalformedResponseError: If the reply was not a JSON object or array of objects
        """
        pass


class OpenRouterExtractor(LLMExtractor):
    """Chat-completions extractor."""

    def __init__(self, client: Any, model: str = DEFAULT_MODEL):
        """Initialize extractor.

        Args:
            client: ``openai.OpenAI`` instance (or an object of the same shape)
            model: Model name to request
        """
        self.client = client
        self.model = model

    def extract(self, text: str, schema_hint: SchemaHint) -> list[dict[str, Any]]:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=build_messages(text, schema_hint),
            )
        except OpenAIError as e:
            raise ExtractionError(f"Extraction request failed: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise ExtractionError("Extraction response had no message content") from e
        if not content or not content.strip():
            raise ExtractionError("Extraction response was empty")

        try:
            data = json.loads(strip_code_fence(content))
        except json.JSONDecodeError as e:
            _logger.debug("Unparseable extraction response: %s", content)
            raise MalformedResponseError(f"Extraction response was not valid JSON: {e}") from e

        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise MalformedResponseError("Extraction response was not a list of objects")

        _logger.info("Extracted %d record(s) with %s", len(data), self.model)
        return data


def create_extractor(
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Optional[OpenRouterExtractor]:
    """Build an extractor from arguments or environment.

    Reads OPENROUTER_API_KEY, MONEYTRACK_LLM_MODEL, MONEYTRACK_LLM_BASE_URL and
    MONEYTRACK_LLM_TIMEOUT. Returns None when no API key is available, in
    which case callers use the local parser.
    """
    api_key = api_key or os.environ.get("OPENROUTER_API_KEY")
    if not api_key:
        return None

    model = model or os.environ.get("MONEYTRACK_LLM_MODEL") or DEFAULT_MODEL
    if timeout is None:
        try:
            timeout = float(os.environ.get("MONEYTRACK_LLM_TIMEOUT", DEFAULT_TIMEOUT))
        except ValueError:
            timeout = DEFAULT_TIMEOUT

    client = OpenAI(
        api_key=api_key,
        base_url=os.environ.get("MONEYTRACK_LLM_BASE_URL") or OPENROUTER_BASE_URL,
        timeout=timeout,
    )
    return OpenRouterExtractor(client, model=model)
