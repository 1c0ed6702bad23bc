"""Language-model extraction for moneytrack."""

from moneytrack.llm.extractor import LLMExtractor, OpenRouterExtractor, create_extractor
from moneytrack.llm.prompting import SchemaHint

__all__ = ["LLMExtractor", "OpenRouterExtractor", "create_extractor", "SchemaHint"]
