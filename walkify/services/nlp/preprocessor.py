"""Preprocessing utilities for natural language parsing."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PreprocessedQuery:
    """Normalized view of the user's free-text query."""

    original_text: str
    normalized_text: str
    lower_text: str
    tokens: Tuple[str, ...]


class QueryPreprocessor:
    """Whitespace and apostrophe cleanup for Ukrainian walk requests."""

    # Typographic apostrophes users type in words like кав’ярня
    _APOSTROPHE_PATTERN = re.compile(r"[’ʼ‘`´]")
    _TOKEN_PATTERN = re.compile(r"[\w'-]+|[,.;!?]")

    def process(self, query: str) -> PreprocessedQuery:
        cleaned = self._normalize_whitespace(self._APOSTROPHE_PATTERN.sub("'", query or ""))
        lower = cleaned.lower()
        return PreprocessedQuery(
            original_text=query,
            normalized_text=cleaned,
            lower_text=lower,
            tokens=tuple(self._TOKEN_PATTERN.findall(lower)),
        )

    @staticmethod
    def _normalize_whitespace(text: str) -> str:
        return " ".join(text.strip().split())
