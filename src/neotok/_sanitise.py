"""
Utilities for rendering token bytes as displayable strings.
"""

import unicodedata


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    cleaned = []
    for c in s:
        # control category codes vary: Cc, Cf, Cn etc.
        # so check via first character
        if unicodedata.category(c)[0] != "C":
            cleaned.append(c)
        else:
            cleaned.append(f"\\u{ord(c):04x}")
    return "".join(cleaned)


def render_bytes(b: bytes) -> str:
    """
    Decode a single token's bytes for display.

    Byte-level tokens often hold a fragment of a multi-byte character, so
    undecodable bytes are shown as ``\\xNN`` escapes rather than being
    collapsed into replacement characters.
    """
    return _escape_ctrl_chars(b.decode("utf-8", errors="backslashreplace"))
