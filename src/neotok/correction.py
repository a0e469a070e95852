"""
Leading-space correction.

The reference tokenizer for GPT-NeoX merges a lone leading-space token
("Ġ") with the token that follows it more eagerly than the merge table
alone predicts. When that lone token ends up next to a token ``X`` across a
word boundary and ``"Ġ" + X`` is itself a vocabulary entry, the pair is
replaced by that entry. The correction is bound to one sentinel ID and can
be switched off for vocabularies without this behaviour.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping

from .byte_codec import SPACE_MARKER
from .errors import ConfigError
from .types import Token
from .vocab import Vocabulary

log = logging.getLogger(__name__)

# id of the lone "Ġ" token in the GPT-NeoX-20B vocabulary
NEOX_SPACE_TOKEN_ID: Final[Token] = 209


@dataclass(frozen=True, slots=True)
class LeadingSpaceCorrection:
    """Maps the token after a sentinel to the single token that replaces the pair."""

    sentinel: Token | None
    table: Mapping[Token, Token] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def disabled(cls) -> "LeadingSpaceCorrection":
        """Return a correction that never changes its input."""
        return cls(sentinel=None)

    @property
    def enabled(self) -> bool:
        return self.sentinel is not None and bool(self.table)

    def apply(self, tokens: list[Token]) -> list[Token]:
        """
        Collapse every (sentinel, X) pair with a table entry for X, in place.

        Runs once over the whole encoded sequence. After a replacement the
        scan stays on the same index and never moves back, so positions
        already passed are not reprocessed.
        """
        if not self.enabled:
            return tokens
        sentinel, table = self.sentinel, self.table
        i = 0
        while i < len(tokens) - 1:
            if tokens[i] == sentinel and tokens[i + 1] in table:
                tokens[i] = table[tokens[i + 1]]
                del tokens[i + 1]
                continue
            i += 1
        return tokens


def build_leading_space_correction(
    vocab: Vocabulary, sentinel: Token | None = None
) -> LeadingSpaceCorrection:
    """
    Build the correction table from the vocabulary.

    For every entry ``"Ġ" + rest`` where ``rest`` is also an entry, the ID of
    ``rest`` maps to the ID of the combined entry.

    :param vocab: Fully built vocabulary, including added tokens.
    :param sentinel: ID of the lone leading-space token. Defaults to the
                     vocabulary's own ``"Ġ"`` entry.
    :raises ConfigError: If ``sentinel`` is given but not a vocabulary ID.
    """
    if sentinel is None:
        sentinel = vocab.encoder[SPACE_MARKER]
    elif sentinel not in vocab.decoder:
        raise ConfigError(
            "leading-space sentinel is not in the vocabulary", token_id=sentinel
        )

    table: dict[Token, Token] = {}
    for surface, tok in vocab.encoder.items():
        if len(surface) < 2 or surface[0] != SPACE_MARKER:
            continue
        rest_tok = vocab.encoder.get(surface[1:])
        if rest_tok is not None:
            table[rest_tok] = tok

    log.debug(f"leading-space correction: sentinel {sentinel}, {len(table)} entries")
    return LeadingSpaceCorrection(sentinel=sentinel, table=MappingProxyType(table))
