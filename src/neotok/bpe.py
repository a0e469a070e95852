"""
Core Byte Pair Encoding (BPE) merge operations.

Rules are applied rule-major: each rule, in learned order, is run over the
whole word before the next rule is considered. A pair that only appears
after its rule's turn has passed is never merged. This is what the
trained vocabulary expects and it gives different results from the
"repeatedly merge the best-ranked adjacent pair" strategy, which must not
be substituted here.
"""

from .added_tokens import replace_subsequence
from .merges import MergeRule, MergeTable
from .types import Token
from .vocab import Vocabulary


def merge_pass(tokens: list[Token], rule: MergeRule) -> bool:
    """
    Apply one merge rule across ``tokens`` in place.

    After a replacement the scan stays on the same index, so a freshly
    merged token can immediately match the same rule again.

    :returns: Whether any pair was merged.
    """
    left, right, merged = rule
    changed = False
    i = 0
    while i < len(tokens) - 1:
        if tokens[i] == left and tokens[i + 1] == right:
            tokens[i] = merged
            del tokens[i + 1]
            changed = True
            continue
        i += 1
    return changed


def _next_rule(tokens: list[Token], table: MergeTable, after: int) -> int | None:
    """Return the lowest rule index above ``after`` whose pair is adjacent in ``tokens``."""
    best: int | None = None
    for pair in zip(tokens, tokens[1:]):
        rank = table.next_rank(pair, after)
        if rank is not None and (best is None or rank < best):
            best = rank
    return best


def apply_merges(tokens: list[Token], table: MergeTable) -> list[Token]:
    """
    Run every merge rule over ``tokens`` in table order, editing it in place.

    Rules whose pair is not adjacent anywhere in the current sequence would
    be no-op passes, so the loop jumps straight to the next rule that can
    fire. The sequence only changes inside ``merge_pass``, which keeps the
    jump equivalent to visiting every rule in order.
    """
    cursor = -1
    while len(tokens) > 1:
        idx = _next_rule(tokens, table, cursor)
        if idx is None:
            break
        merge_pass(tokens, table.rules[idx])
        cursor = idx
    return tokens


def encode_word(word: bytes, vocab: Vocabulary, table: MergeTable) -> list[Token]:
    """
    Encode the UTF-8 bytes of one segmented word into token IDs.

    1. map each byte to its single-byte surface token
    2. collapse byte patterns of added tokens into the added token ID
    3. apply merge rules in priority order
    """
    tokens = [vocab.byte_tokens[b] for b in word]
    for added_id, sequence in vocab.added_token_sequences:
        replace_subsequence(tokens, sequence, added_id)
    return apply_merges(tokens, table)
