"""
Bijective mapping between raw bytes and printable "surface" characters.

Vocabulary keys are strings, so every byte value 0..255 is represented by
exactly one printable code point. Bytes that already render as visible
Latin-1 characters keep their own code point; the remaining 68 (control
characters, space, soft hyphen, ...) are shifted to ``chr(256 + n)``. The
space byte therefore becomes ``"Ġ"`` (U+0120) and newline ``"Ċ"`` (U+010A).
"""

from types import MappingProxyType
from typing import Final, Mapping

from .errors import UnreachableStateError


def bytes_to_unicode() -> dict[int, str]:
    """Build the byte -> surface character table used by GPT-2 style vocabularies."""
    # bytes that render fine in their original form and need no shifting
    bs = (
        list(range(ord("!"), ord("~") + 1))
        + list(range(ord("¡"), ord("¬") + 1))
        + list(range(ord("®"), ord("ÿ") + 1))
    )
    cs = bs[:]
    n = 0
    for b in range(256):
        if b not in bs:
            bs.append(b)
            cs.append(256 + n)
            n += 1
    return dict(zip(bs, (chr(c) for c in cs)))


BYTE_TO_SURFACE: Final[Mapping[int, str]] = MappingProxyType(bytes_to_unicode())
SURFACE_TO_BYTE: Final[Mapping[str, int]] = MappingProxyType(
    {ch: b for b, ch in BYTE_TO_SURFACE.items()}
)

# surface form of the space byte, the leading-space marker
SPACE_MARKER: Final[str] = BYTE_TO_SURFACE[ord(" ")]


def byte_to_surface(b: int) -> str:
    """Return the surface character for byte value ``b`` (0..255)."""
    return BYTE_TO_SURFACE[b]


def surface_to_byte(ch: str) -> int:
    """
    Return the byte value represented by surface character ``ch``.

    :raises UnreachableStateError: If ``ch`` is not one of the 256 surface characters.
    """
    try:
        return SURFACE_TO_BYTE[ch]
    except KeyError:
        raise UnreachableStateError(
            f"character {ch!r} (U+{ord(ch):04X}) is not a surface byte"
        ) from None


def bytes_to_surface(data: bytes) -> str:
    """Map raw bytes to their surface string."""
    return "".join(BYTE_TO_SURFACE[b] for b in data)


def surface_to_bytes(surface: str) -> bytes:
    """Map a surface string back to the raw bytes it represents."""
    return bytes(surface_to_byte(ch) for ch in surface)
