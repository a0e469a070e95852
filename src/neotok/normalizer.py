"""Unicode normalization applied to input text before splitting."""

import functools
import unicodedata
from typing import Callable, Final, TypeAlias

from .errors import ConfigError

Normalizer: TypeAlias = Callable[[str], str]

NORMALIZATION_FORMS: Final[frozenset[str]] = frozenset({"NFC", "NFD", "NFKC", "NFKD"})


def _identity(text: str) -> str:
    return text


def get_normalizer(name: str | None) -> Normalizer:
    """
    Return the normalization function for a Unicode normalization form.

    :param name: One of "NFC", "NFD", "NFKC", "NFKD" (case-insensitive), or
                 ``None`` for no normalization.
    :raises ConfigError: If ``name`` is not a standard normalization form.
    """
    if name is None:
        return _identity
    form = name.upper()
    if form not in NORMALIZATION_FORMS:
        raise ConfigError(
            f"unsupported normalizer {name!r}, "
            f"expected one of {sorted(NORMALIZATION_FORMS)}"
        )
    return functools.partial(unicodedata.normalize, form)
