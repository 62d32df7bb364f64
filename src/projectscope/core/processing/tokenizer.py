from __future__ import annotations

"""
Context Token Estimation.

Estimates how many prompt tokens a rendered project base context will
cost. Uses tiktoken BPE encodings and falls back to a character-density
heuristic when an encoding cannot be loaded (e.g. offline first run).
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict

import tiktoken

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN_AVG = 4
MODERN_ENCODING = "o200k_base"
LEGACY_ENCODING = "cl100k_base"

# -----------------------------------------------------------------------------
# STRATEGY INTERFACES
# -----------------------------------------------------------------------------

class TokenizerStrategy(ABC):
    """Abstract token counting algorithm."""

    @abstractmethod
    def count(self, text: str) -> int:
        """
        Calculate the token count for a text segment.

        Args:
            text: Input string.

        Returns:
            int: Token count.
        """


class HeuristicStrategy(TokenizerStrategy):
    """Character-density estimate: one token per four characters."""

    def count(self, text: str) -> int:
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)


class TiktokenStrategy(TokenizerStrategy):
    """
    BPE encoder backed by tiktoken.

    The encoding object is loaded lazily and cached on the instance.
    """

    def __init__(self, encoding_name: str = MODERN_ENCODING) -> None:
        self.encoding_name = encoding_name
        self._encoding: Any = None

    def _get_encoding(self) -> Any:
        if self._encoding is None:
            try:
                self._encoding = tiktoken.get_encoding(self.encoding_name)
            except ValueError:
                # Older tiktoken releases do not ship o200k_base
                self._encoding = tiktoken.get_encoding(LEGACY_ENCODING)
        return self._encoding

    def count(self, text: str) -> int:
        return len(self._get_encoding().encode(text, disallowed_special=()))

# -----------------------------------------------------------------------------
# SERVICE
# -----------------------------------------------------------------------------

class TokenizerService:
    """
    Token estimation with graceful degradation.

    Constructed explicitly by the caller; no process-wide instance exists.
    """

    def __init__(self, encoding_name: str = MODERN_ENCODING) -> None:
        self.heuristic = HeuristicStrategy()
        self._tiktoken: TokenizerStrategy = TiktokenStrategy(encoding_name)

    def count(self, text: str) -> int:
        """
        Count tokens in 'text'.

        Returns 0 for empty input. Any failure of the BPE encoder (network
        needed to fetch encoding files, corrupted cache) routes to the
        heuristic rather than failing the caller.
        """
        if not text:
            return 0
        try:
            return self._tiktoken.count(text)
        except Exception as e:
            logger.warning(f"BPE token counting failed: {e}. Using heuristic estimate.")
            return self.heuristic.count(text)

    def describe(self, text: str) -> Dict[str, int]:
        """Token and character totals for a rendered block."""
        return {"tokens": self.count(text), "characters": len(text)}
