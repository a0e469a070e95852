"""Custom exception hierarchy for neotok tokenization errors."""

import regex as re

from .types import Token


class NeoTokError(Exception):
    """Base exception for all neotok errors."""


class ConfigError(NeoTokError):
    """Raised when the vocabulary, merges or added tokens are inconsistent."""

    def __init__(
        self,
        message: str,
        *,
        rule: str | None = None,
        token: str | None = None,
        token_id: Token | None = None,
    ) -> None:
        """Initialize with optional context that gets appended to the message."""
        extra = " "
        if rule is not None:
            extra += f"(rule: {rule!r}) "
        if token is not None:
            extra += f"(token: {token!r}) "
        if token_id is not None:
            extra += f"(id: {token_id}) "
        super().__init__(message + extra)
        self.rule = rule
        self.token = token
        self.token_id = token_id


class UnknownTokenError(NeoTokError):
    """Raised when decoding an ID that is neither an added token nor in the vocabulary."""

    def __init__(self, message: str, *, invalid_tok: Token | None = None) -> None:
        extra = " "
        if invalid_tok is not None:
            extra += f"(invalid token: {invalid_tok}) "
        super().__init__(message + extra)
        self.invalid_tok = invalid_tok


class UnreachableStateError(NeoTokError):
    """Raised when an internal invariant established at build time is broken."""


class ModelLoadError(NeoTokError):
    """Raised when loading a tokenizer configuration from disk fails."""

    def __init__(self, message: str, *, model_path: str | None = None) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        super().__init__(message + extra)
        self.model_path = model_path


class PatternError(NeoTokError):
    """Raised when compiling and/or validating regex patterns."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        regex_err: re.error | None = None,
    ) -> None:
        """
        Initialize PatternError with pattern details.

        Args:
            message: Error message.
            pattern: The regex pattern that failed.
            regex_err: The underlying regex error from the regex library.
        """
        extra = " "
        if pattern:
            extra += f"(pattern: {pattern!r}) "
        if regex_err:
            extra += f"(reason: {regex_err}) "
        super().__init__(message + extra)
        self.pattern = pattern
        self.regex_err = regex_err
