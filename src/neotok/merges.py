"""
Merge table construction: ordered merge rules resolved to token IDs.
"""

import logging
from bisect import bisect_right
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple, Sequence, TypeAlias

from .errors import ConfigError
from .types import SurfaceString, Token, TokenPair

log = logging.getLogger(__name__)

# "a b" strings (classic tokenizer.json) or ["a", "b"] pairs (newer files)
RawMerge: TypeAlias = str | Sequence[str]


class MergeRule(NamedTuple):
    """Two adjacent tokens that merge into one. Position in the table is its priority."""

    left: Token
    right: Token
    merged: Token


@dataclass(frozen=True, slots=True)
class MergeTable:
    """
    Merge rules in learned order plus a pair index.

    ``ranks`` maps a token pair to the ascending indices of every rule for
    that pair. It lets the merge engine jump over rules with no adjacent
    occurrence without changing which rule is applied next.
    """

    rules: tuple[MergeRule, ...]
    ranks: Mapping[TokenPair, tuple[int, ...]]

    def __len__(self) -> int:
        return len(self.rules)

    def next_rank(self, pair: TokenPair, after: int) -> int | None:
        """Return the lowest rule index for ``pair`` that is greater than ``after``."""
        indices = self.ranks.get(pair)
        if not indices:
            return None
        pos = bisect_right(indices, after)
        return indices[pos] if pos < len(indices) else None


def split_merge(merge: RawMerge) -> tuple[SurfaceString, SurfaceString]:
    """
    Split a raw merge entry into its left and right surface strings.

    :raises ConfigError: If a string has no space separator, or any other
                         entry is not a pair of strings.
    """
    if isinstance(merge, str):
        left, sep, right = merge.partition(" ")
        if not sep:
            raise ConfigError("merge rule has no space separator", rule=merge)
        return left, right
    try:
        parts = list(merge)
    except TypeError:
        raise ConfigError(
            "merge rule must be a string or a pair", rule=repr(merge)
        ) from None
    if len(parts) != 2 or not all(isinstance(part, str) for part in parts):
        raise ConfigError("merge rule must be a pair of strings", rule=repr(merge))
    return parts[0], parts[1]


def build_merge_table(
    merges: Iterable[RawMerge], encoder: Mapping[SurfaceString, Token]
) -> MergeTable:
    """
    Resolve merge rules against the vocabulary, keeping input order as priority.

    :param merges: Merge rules in learned order.
    :param encoder: Surface string -> token ID mapping.
    :raises ConfigError: If a rule is malformed, or its left part, right part
                         or their concatenation is missing from the vocabulary.
    """
    if merges is None or isinstance(merges, str):
        raise ConfigError(
            f"merges must be a list of merge rules, got {type(merges).__name__}"
        )
    rules: list[MergeRule] = []
    ranks: dict[TokenPair, list[int]] = {}

    for idx, merge in enumerate(merges):
        left, right = split_merge(merge)
        rule = MergeRule(
            _lookup(encoder, left, merge),
            _lookup(encoder, right, merge),
            _lookup(encoder, left + right, merge),
        )
        rules.append(rule)
        ranks.setdefault((rule.left, rule.right), []).append(idx)

    if len(ranks) < len(rules):
        log.warning(f"{len(rules) - len(ranks)} merge rules repeat an earlier pair")
    log.debug(f"resolved {len(rules)} merge rules")

    return MergeTable(
        rules=tuple(rules),
        ranks=MappingProxyType({pair: tuple(idxs) for pair, idxs in ranks.items()}),
    )


def _lookup(
    encoder: Mapping[SurfaceString, Token], surface: SurfaceString, merge: RawMerge
) -> Token:
    try:
        return encoder[surface]
    except KeyError:
        raise ConfigError(
            "merge rule references unknown token",
            rule=merge if isinstance(merge, str) else repr(merge),
            token=surface,
        ) from None
