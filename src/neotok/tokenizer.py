"""
Encoder/decoder facade for byte-level BPE with a fixed trained vocabulary.
"""

import logging
from typing import Iterable

from ._decorators import measure_time
from ._sanitise import render_bytes
from .added_tokens import TextSpan, TokenLiteral, split_added_tokens
from .bpe import encode_word
from .byte_codec import surface_to_bytes
from .config import TokenizerConfig
from .correction import LeadingSpaceCorrection, build_leading_space_correction
from .errors import UnknownTokenError, UnreachableStateError
from .merges import MergeTable, build_merge_table
from .normalizer import Normalizer, get_normalizer
from .pattern import WordSegmenter, resolve_pattern
from .types import SurfaceString, Token
from .vocab import Vocabulary, build_vocab

log = logging.getLogger(__name__)


class Tokenizer:
    """
    Byte-level BPE tokenizer over immutable lookup tables.

    Instances are created by :func:`build_tokenizer` and hold no mutable
    state, so ``encode`` and ``decode`` may be called from several threads
    at once.
    """

    __slots__ = (
        "_vocab",
        "_merges",
        "_correction",
        "_segmenter",
        "_normalizer",
        "_normalize",
    )

    def __init__(
        self,
        vocab: Vocabulary,
        merges: MergeTable,
        correction: LeadingSpaceCorrection,
        segmenter: WordSegmenter,
        normalizer: str | None = None,
    ) -> None:
        self._vocab = vocab
        self._merges = merges
        self._correction = correction
        self._segmenter = segmenter
        self._normalizer = normalizer
        self._normalize: Normalizer = get_normalizer(normalizer)

    @property
    def vocab(self) -> Vocabulary:
        return self._vocab

    @property
    def merges(self) -> MergeTable:
        return self._merges

    @property
    def correction(self) -> LeadingSpaceCorrection:
        return self._correction

    @property
    def segmenter(self) -> WordSegmenter:
        return self._segmenter

    @property
    def normalizer(self) -> str | None:
        """Name of the Unicode normalization form applied before encoding."""
        return self._normalizer

    def encode(self, text: str) -> list[Token]:
        """
        Encode text into a sequence of token IDs.

        Text is normalized, added-token literals are sliced out and emitted
        as-is, the remaining spans are split into words and each word is
        byte-encoded and merged. The leading-space correction then runs once
        over the full sequence.

        :param text: Text to encode.
        :returns: Token IDs; empty for empty text.
        """
        text = self._normalize(text)
        tokens: list[Token] = []

        for segment in split_added_tokens(text, self.vocab.added_tokens):
            match segment:
                case TokenLiteral(id=tok):
                    tokens.append(tok)
                case TextSpan(text=span):
                    for word in self.segmenter.split(span):
                        tokens.extend(
                            encode_word(word.encode("utf-8"), self.vocab, self.merges)
                        )
                case _:
                    raise UnreachableStateError(f"unknown segment: {segment!r}")

        return self.correction.apply(tokens)

    def decode(self, tokens: Iterable[Token], errors: str = "replace") -> str:
        """
        Decode token IDs back into text.

        Added tokens decode to their literal content; every other ID is
        looked up in the reverse vocabulary and its surface string mapped
        back to raw bytes.

        :param tokens: Token IDs to decode.
        :param errors: How to handle invalid UTF-8, "strict" or "replace".
        :raises UnknownTokenError: If any ID is neither an added token nor in the vocabulary.
        """
        return b"".join(self.token_bytes(tok) for tok in tokens).decode(
            "utf-8", errors=errors
        )

    def token_bytes(self, tok: Token) -> bytes:
        """
        Return the raw bytes a single token ID stands for.

        :raises UnknownTokenError: If ``tok`` cannot be resolved.
        """
        content = self.vocab.added_contents.get(tok)
        if content is not None:
            return content.encode("utf-8")
        surface = self.vocab.decoder.get(tok)
        if surface is None:
            raise UnknownTokenError("token not found in vocabulary", invalid_tok=tok)
        return surface_to_bytes(surface)

    def token_to_id(self, surface: SurfaceString) -> Token | None:
        """Return the ID of a surface string, or ``None`` if it is not in the vocabulary."""
        return self.vocab.encoder.get(surface)

    def id_to_token(self, tok: Token) -> SurfaceString | None:
        """Return the surface string of an ID, or ``None`` if it is not in the vocabulary."""
        return self.vocab.decoder.get(tok)

    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary, added tokens included."""
        return len(self.vocab)

    def render_tokens(self, tokens: Iterable[Token]) -> list[str]:
        """Render each token on its own, escaping control characters and partial UTF-8."""
        return [render_bytes(self.token_bytes(tok)) for tok in tokens]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(vocab_size={self.vocab_size()}, "
            f"merges={len(self.merges)}, added_tokens={len(self.vocab.added_tokens)}, "
            f"normalizer={self.normalizer!r})"
        )


@measure_time
def build_tokenizer(config: TokenizerConfig) -> Tokenizer:
    """
    Build a tokenizer from a configuration.

    All tables are derived here and never modified afterwards. Any
    inconsistency aborts the build, so a tokenizer is either fully usable
    or not created at all.

    :param config: Vocabulary, merges, added tokens and options.
    :raises ConfigError: If the configuration is inconsistent.
    :raises PatternError: If the segmentation pattern does not compile.
    """
    # validate the normalizer before doing the expensive work
    get_normalizer(config.normalizer)
    segmenter = WordSegmenter(resolve_pattern(config.pattern))

    vocab = build_vocab(config.vocab, config.added_tokens)
    merges = build_merge_table(config.merges, vocab.encoder)
    if config.leading_space_correction:
        correction = build_leading_space_correction(vocab, config.space_token_id)
    else:
        correction = LeadingSpaceCorrection.disabled()

    log.info(
        f"tokenizer built: {len(vocab)} tokens, {len(merges)} merge rules, "
        f"{len(vocab.added_tokens)} added tokens"
    )
    return Tokenizer(vocab, merges, correction, segmenter, config.normalizer)
