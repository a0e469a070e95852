"""Shared fixtures: a small synthetic GPT-NeoX style vocabulary."""

import pytest

from neotok import AddedToken, TokenizerConfig, build_tokenizer
from neotok.byte_codec import BYTE_TO_SURFACE, bytes_to_surface
from neotok.merges import split_merge


ADDED_TOKENS = (
    AddedToken(0, "<|endoftext|>"),
    AddedToken(1, "<|padding|>"),
)

MERGES = [
    "h e",
    "l l",
    "he ll",
    "hell o",
    "Ġ w",
    "o r",
    "Ġw or",
    "l d",
    "Ġwor ld",
    "Ġ Ċ",
]


def make_vocab(merges, added_tokens=ADDED_TOKENS) -> dict[str, int]:
    """
    Build a vocabulary with the added tokens first, then all 256 byte
    surface tokens, then every merge part and merge result in rule order.
    """
    vocab: dict[str, int] = {}
    for added in added_tokens:
        vocab[bytes_to_surface(added.content.encode("utf-8"))] = added.id
    next_id = max(vocab.values(), default=-1) + 1
    for b in range(256):
        vocab[BYTE_TO_SURFACE[b]] = next_id
        next_id += 1
    for merge in merges:
        left, right = split_merge(merge)
        for surface in (left, right, left + right):
            if surface not in vocab:
                vocab[surface] = next_id
                next_id += 1
    return vocab


def make_config(merges=MERGES, added_tokens=ADDED_TOKENS, **options) -> TokenizerConfig:
    """Return a config whose vocabulary covers ``merges``."""
    return TokenizerConfig(
        vocab=make_vocab(merges, added_tokens),
        merges=list(merges),
        added_tokens=added_tokens,
        **options,
    )


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def config():
    """Return the default synthetic config."""
    return make_config()


@pytest.fixture
def tokenizer(config):
    """Return a tokenizer built from the default synthetic config."""
    return build_tokenizer(config)


@pytest.fixture
def config_factory():
    """Return the config builder for tests that need their own merges or added tokens."""
    return make_config


@pytest.fixture
def vocab_factory():
    """Return the vocabulary builder."""
    return make_vocab
