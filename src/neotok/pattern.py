"""Word segmentation applied to plain text before byte-level BPE."""

from enum import Enum
from typing import Iterator

import regex as re

from .errors import PatternError


class TokenPattern(str, Enum):
    """
    Pre-defined word segmentation patterns.

    Source: https://github.com/openai/tiktoken/blob/main/tiktoken_ext/openai_public.py
    GPT-NeoX reuses the GPT-2 pattern unchanged.
    """

    GPT2 = (
        r"'s|'t|'re|'ve|'m|'ll|'d|"
        r" ?\p{L}+|"
        r" ?\p{N}+|"
        r" ?[^\s\p{L}\p{N}]+|"
        r"\s+(?!\S)|"
        r"\s+"
    )

    @classmethod
    def get(cls, name: str) -> str:
        """Get patterns by name (case-insensitive)."""
        try:
            return cls[name.upper().replace("-", "_")].value
        except KeyError:
            raise PatternError(
                f"Unknown pattern: {name!r}. "
                f"Valid patterns: {', '.join(pat.name for pat in cls)}"
            ) from None


class WordSegmenter:
    """Splits text into word-like fragments with a compiled pattern."""

    def __init__(self, pattern: str = TokenPattern.GPT2.value) -> None:
        self.pat = pattern
        self.compiled_pat: re.Pattern[str] = _compile_pattern(pattern)

    def split(self, text: str) -> Iterator[str]:
        """
        Lazily yield maximal non-overlapping matches from left to right.

        Every alternative of the built-in pattern ends in a catch-all
        whitespace branch, so the matches concatenate back to ``text``.
        Each call returns a fresh iterator.
        """
        return (m.group(0) for m in self.compiled_pat.finditer(text))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.pat!r})"


def resolve_pattern(pattern: str) -> str:
    """
    Return the regex for a built-in pattern name, or ``pattern`` itself.

    Names are matched case-insensitively against :class:`TokenPattern`;
    anything else is treated as a raw regex.
    """
    if pattern.upper().replace("-", "_") in TokenPattern.__members__:
        return TokenPattern.get(pattern)
    return pattern


def list_patterns() -> list[str]:
    """Return names of all available built-in segmentation patterns."""
    return [pat.name for pat in TokenPattern]


def _compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile and validate a regex pattern.

    :param pattern: Regex pattern string to compile.
    :return: Compiled regex pattern.
    :raises PatternError: If pattern is invalid.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError("invalid regex pattern", pattern=pattern, regex_err=e) from e
