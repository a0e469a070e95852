"""Added (special) tokens: whole strings that are never split or merged."""

from dataclasses import dataclass
from typing import NamedTuple, Sequence, TypeAlias

from .types import Token


@dataclass(frozen=True, slots=True)
class AddedToken:
    """A literal string such as ``<|endoftext|>`` with a fixed token ID."""

    id: Token
    content: str


class TokenLiteral(NamedTuple):
    """Segment holding the ID of an added token found in the text."""

    id: Token


class TextSpan(NamedTuple):
    """Segment holding plain text between added tokens."""

    text: str


Segment: TypeAlias = TokenLiteral | TextSpan


def split_added_tokens(text: str, added_toks: Sequence[AddedToken]) -> list[Segment]:
    """
    Slice added-token literals out of ``text``.

    At every step the literal with the smallest start offset in the
    remaining text is taken; when two literals start at the same offset the
    one registered first wins. Plain text before each literal is emitted as
    a ``TextSpan``, the literal itself as a ``TokenLiteral``.

    :param text: Normalized input text.
    :param added_toks: Added tokens in registration order.
    :returns: Segments in text order. Empty text gives an empty list.
    """
    segments: list[Segment] = []
    start = 0
    n = len(text)

    while start < n:
        nearest_pos = n
        nearest: AddedToken | None = None
        for added in added_toks:
            pos = text.find(added.content, start)
            # strict comparison keeps the first registered token on ties
            if pos != -1 and pos < nearest_pos:
                nearest_pos = pos
                nearest = added

        if nearest is None:
            segments.append(TextSpan(text[start:]))
            break

        if nearest_pos > start:
            segments.append(TextSpan(text[start:nearest_pos]))
        segments.append(TokenLiteral(nearest.id))
        start = nearest_pos + len(nearest.content)

    return segments


def replace_subsequence(
    tokens: list[Token], target: Sequence[Token], replacement: Token
) -> None:
    """
    Replace every contiguous occurrence of ``target`` in ``tokens`` with ``replacement``.

    Scans left to right and edits ``tokens`` in place; scanning resumes just
    after the inserted token so replacements never overlap.
    """
    width = len(target)
    if width == 0:
        return
    first = target[0]
    i = 0
    while i <= len(tokens) - width:
        # fast fail on the first element before comparing the slice
        if tokens[i] == first and tokens[i : i + width] == list(target):
            tokens[i : i + width] = [replacement]
        i += 1
