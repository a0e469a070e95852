"""
Tokenizer configuration: the in-memory data a tokenizer is built from.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .added_tokens import AddedToken
from .errors import ConfigError
from .merges import RawMerge
from .types import SurfaceString, Token


@dataclass(frozen=True)
class TokenizerConfig:
    """
    Vocabulary, merges, added tokens and normalizer for one trained tokenizer.

    :param vocab: Surface string -> token ID.
    :param merges: Merge rules in learned order, as ``"a b"`` or ``(a, b)``.
    :param added_tokens: Added tokens in registration order.
    :param normalizer: Unicode normalization form name, or ``None``.
    :param pattern: Built-in pattern name (e.g. "gpt2") or a raw segmentation regex.
    :param leading_space_correction: Whether to apply the leading-space correction.
    :param space_token_id: Pin the leading-space sentinel ID instead of
                           looking up ``"Ġ"`` in ``vocab``.
    """

    vocab: Mapping[SurfaceString, Token]
    merges: Sequence[RawMerge]
    added_tokens: Sequence[AddedToken] = ()
    normalizer: str | None = None
    pattern: str = "gpt2"
    leading_space_correction: bool = True
    space_token_id: Token | None = field(default=None)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], **options: Any) -> "TokenizerConfig":
        """
        Build a config from a parsed Hugging Face ``tokenizer.json`` document.

        Reads ``model.vocab``, ``model.merges``, ``added_tokens[*].id`` /
        ``content`` and ``normalizer.type``. Extra keyword arguments are
        passed through to the constructor.

        :raises ConfigError: If a required section is missing or malformed.
        """
        try:
            model = data["model"]
            vocab = model["vocab"]
            merges = model["merges"]
        except (KeyError, TypeError) as e:
            raise ConfigError(f"tokenizer config is missing model section: {e}") from e

        if not isinstance(vocab, Mapping):
            raise ConfigError("model.vocab must be a mapping")
        if not isinstance(merges, Sequence) or isinstance(merges, str):
            raise ConfigError(
                f"model.merges must be a list, got {type(merges).__name__}"
            )

        added_tokens = []
        for entry in data.get("added_tokens") or ():
            try:
                tok_id, content = int(entry["id"]), entry["content"]
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigError(f"malformed added token entry: {entry!r}") from e
            if not isinstance(content, str):
                raise ConfigError(f"malformed added token entry: {entry!r}")
            added_tokens.append(AddedToken(tok_id, content))

        normalizer = data.get("normalizer")
        if isinstance(normalizer, Mapping):
            normalizer = normalizer.get("type")
        if normalizer is not None and not isinstance(normalizer, str):
            raise ConfigError(f"malformed normalizer entry: {normalizer!r}")

        return cls(
            vocab=vocab,
            merges=merges,
            added_tokens=tuple(added_tokens),
            normalizer=normalizer,
            **options,
        )
