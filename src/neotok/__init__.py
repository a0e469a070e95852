"""neotok: byte-level BPE tokenization for GPT-NeoX style vocabularies."""

from .added_tokens import AddedToken, TextSpan, TokenLiteral
from .config import TokenizerConfig
from .correction import NEOX_SPACE_TOKEN_ID, LeadingSpaceCorrection
from .errors import (
    ConfigError,
    ModelLoadError,
    NeoTokError,
    PatternError,
    UnknownTokenError,
    UnreachableStateError,
)
from .factory import from_pretrained, load_config
from .pattern import TokenPattern, WordSegmenter, list_patterns
from .tokenizer import Tokenizer, build_tokenizer

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("neotok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "TokenizerConfig",
    "AddedToken",
    "TokenLiteral",
    "TextSpan",
    "LeadingSpaceCorrection",
    "TokenPattern",
    "WordSegmenter",
    "NEOX_SPACE_TOKEN_ID",
    "NeoTokError",
    "ConfigError",
    "UnknownTokenError",
    "UnreachableStateError",
    "ModelLoadError",
    "PatternError",
    "build_tokenizer",
    "from_pretrained",
    "load_config",
    "list_patterns",
]
