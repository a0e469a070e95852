"""
Runtime vocabulary tables built from a surface-string -> ID mapping.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

from .added_tokens import AddedToken
from .byte_codec import BYTE_TO_SURFACE, bytes_to_surface
from .errors import ConfigError
from .types import SurfaceString, Token

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Vocabulary:
    """
    Read-only lookup tables shared by every encode/decode call.

    ``encoder`` maps surface strings to IDs and already contains the surface
    form of every added token; ``decoder`` is its exact inverse.
    ``byte_tokens[b]`` is the ID of the single-byte surface token for byte
    ``b``. ``added_tokens`` keeps registration order, which is the
    precedence order used when splitting text.
    """

    encoder: Mapping[SurfaceString, Token]
    decoder: Mapping[Token, SurfaceString]
    byte_tokens: tuple[Token, ...]
    added_tokens: tuple[AddedToken, ...]
    added_contents: Mapping[Token, str]
    # surface-token-ID sequence of each added token's UTF-8 bytes
    added_token_sequences: tuple[tuple[Token, tuple[Token, ...]], ...]

    def __len__(self) -> int:
        return len(self.decoder)


def build_vocab(
    raw_vocab: Mapping[SurfaceString, Token],
    added_toks: Sequence[AddedToken] = (),
) -> Vocabulary:
    """
    Build the runtime vocabulary tables.

    :param raw_vocab: Surface string -> token ID mapping from the tokenizer config.
    :param added_toks: Added tokens in registration order.
    An added token whose surface string is absent is registered under its
    own ID. A surface string that is already present must carry the same ID
    as the added token; a mismatch is rejected rather than overwritten, so a
    tokenizer.json whose vocabulary and added_tokens disagree will not load.

    :raises ConfigError: If a byte has no single-byte token, an ID is negative
                         or duplicated, or an added token conflicts with an
                         existing vocabulary entry.
    """
    encoder: dict[SurfaceString, Token] = dict(raw_vocab)

    for surface, tok in encoder.items():
        if not isinstance(tok, int) or tok < 0:
            raise ConfigError("token ids must be non-negative integers", token=surface)

    # byte value -> id of its single-byte surface token
    byte_tokens: list[Token] = []
    for b in range(256):
        surface = BYTE_TO_SURFACE[b]
        if surface not in encoder:
            raise ConfigError(f"vocabulary has no token for byte {b}", token=surface)
        byte_tokens.append(encoder[surface])

    added_contents = _register_added_tokens(encoder, added_toks)

    decoder: dict[Token, SurfaceString] = {}
    for surface, tok in encoder.items():
        if tok in decoder:
            raise ConfigError(
                f"duplicate token id shared with {decoder[tok]!r}",
                token=surface,
                token_id=tok,
            )
        decoder[tok] = surface

    sequences = tuple(
        (added.id, tuple(byte_tokens[b] for b in added.content.encode("utf-8")))
        for added in added_toks
    )

    log.debug(
        f"built vocabulary with {len(decoder)} tokens ({len(added_contents)} added tokens)"
    )
    return Vocabulary(
        encoder=MappingProxyType(encoder),
        decoder=MappingProxyType(decoder),
        byte_tokens=tuple(byte_tokens),
        added_tokens=tuple(added_toks),
        added_contents=MappingProxyType(added_contents),
        added_token_sequences=sequences,
    )


def _register_added_tokens(
    encoder: dict[SurfaceString, Token], added_toks: Sequence[AddedToken]
) -> dict[Token, str]:
    """Add the surface form of each added token to ``encoder`` and return id -> content."""
    added_contents: dict[Token, str] = {}
    ids_in_use = set(encoder.values())

    for added in added_toks:
        if not isinstance(added.content, str):
            raise ConfigError("added token content must be a string", token_id=added.id)
        if not added.content:
            raise ConfigError("added token content is empty", token_id=added.id)
        if not isinstance(added.id, int) or added.id < 0:
            raise ConfigError(
                "added token id must be a non-negative integer", token=added.content
            )
        if added.id in added_contents:
            raise ConfigError(
                "duplicate added token id", token=added.content, token_id=added.id
            )
        added_contents[added.id] = added.content

        surface = bytes_to_surface(added.content.encode("utf-8"))
        existing = encoder.get(surface)
        if existing is None:
            if added.id in ids_in_use:
                raise ConfigError(
                    "added token id already belongs to another vocabulary entry",
                    token=added.content,
                    token_id=added.id,
                )
            encoder[surface] = added.id
            ids_in_use.add(added.id)
        elif existing != added.id:
            raise ConfigError(
                f"added token conflicts with vocabulary id {existing}",
                token=added.content,
                token_id=added.id,
            )

    return added_contents
