"""
Core types for tokenization.
"""

from typing import TypeAlias

Token: TypeAlias = int
SurfaceString: TypeAlias = str
TokenPair: TypeAlias = tuple[Token, Token]
RawVocab: TypeAlias = dict[SurfaceString, Token]
