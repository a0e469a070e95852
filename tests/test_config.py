"""Unit tests for configuration parsing, file loading and normalizers."""

import dataclasses
import json

import pytest

import neotok
from neotok import ConfigError, ModelLoadError, TokenizerConfig
from neotok.normalizer import get_normalizer


@pytest.fixture
def tokenizer_json(config):
    """Return the default config as a tokenizer.json style document."""
    return {
        "added_tokens": [
            {"id": added.id, "content": added.content, "special": True}
            for added in config.added_tokens
        ],
        "normalizer": {"type": "NFC"},
        "model": {
            "type": "BPE",
            "vocab": dict(config.vocab),
            "merges": list(config.merges),
        },
    }


# Parsing
# ---------------------------------------------------------------------------


def test_from_dict(tokenizer_json, config):
    parsed = TokenizerConfig.from_dict(tokenizer_json)
    assert parsed.vocab == config.vocab
    assert list(parsed.merges) == list(config.merges)
    assert parsed.added_tokens == config.added_tokens
    assert parsed.normalizer == "NFC"


def test_from_dict_pair_merges(tokenizer_json, tokenizer):
    """Merges stored as [left, right] lists build the same tokenizer."""
    tokenizer_json["model"]["merges"] = [
        merge.split(" ", 1) for merge in tokenizer_json["model"]["merges"]
    ]
    tok = neotok.build_tokenizer(TokenizerConfig.from_dict(tokenizer_json))
    assert tok.encode("hello world") == tokenizer.encode("hello world")


def test_from_dict_null_normalizer(tokenizer_json):
    tokenizer_json["normalizer"] = None
    assert TokenizerConfig.from_dict(tokenizer_json).normalizer is None


def test_from_dict_passes_options(tokenizer_json):
    parsed = TokenizerConfig.from_dict(tokenizer_json, leading_space_correction=False)
    assert parsed.leading_space_correction is False


def test_from_dict_missing_model_raises():
    with pytest.raises(ConfigError):
        TokenizerConfig.from_dict({"added_tokens": []})


def test_from_dict_malformed_added_token_raises(tokenizer_json):
    tokenizer_json["added_tokens"].append({"content": "<|no id|>"})
    with pytest.raises(ConfigError):
        TokenizerConfig.from_dict(tokenizer_json)


def test_from_dict_null_merges_raises(tokenizer_json):
    tokenizer_json["model"]["merges"] = None
    with pytest.raises(ConfigError):
        TokenizerConfig.from_dict(tokenizer_json)


def test_from_dict_string_merges_raises(tokenizer_json):
    tokenizer_json["model"]["merges"] = "h e"
    with pytest.raises(ConfigError):
        TokenizerConfig.from_dict(tokenizer_json)


def test_build_rejects_missing_merges(config_factory):
    """A config built directly, bypassing from_dict, is checked at build time."""
    config = dataclasses.replace(config_factory(), merges=None)
    with pytest.raises(ConfigError):
        neotok.build_tokenizer(config)


def test_from_dict_non_iterable_merge_entry_raises(tokenizer_json):
    tokenizer_json["model"]["merges"].append(5)
    with pytest.raises(ConfigError):
        neotok.build_tokenizer(TokenizerConfig.from_dict(tokenizer_json))


def test_from_dict_non_string_added_token_raises(tokenizer_json):
    tokenizer_json["added_tokens"].append({"id": 999, "content": 5})
    with pytest.raises(ConfigError):
        TokenizerConfig.from_dict(tokenizer_json)


def test_build_fails_fast_on_bad_merge(tokenizer_json):
    tokenizer_json["model"]["merges"].append("nospace")
    with pytest.raises(ConfigError):
        neotok.build_tokenizer(TokenizerConfig.from_dict(tokenizer_json))


# File loading
# ---------------------------------------------------------------------------


def test_from_pretrained(tokenizer_json, tokenizer, tmp_path):
    path = tmp_path / "tokenizer.json"
    path.write_text(json.dumps(tokenizer_json), encoding="utf-8")

    loaded = neotok.from_pretrained(path)
    assert loaded.encode("hello world") == tokenizer.encode("hello world")
    assert loaded.normalizer == "NFC"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ModelLoadError):
        neotok.load_config(tmp_path / "missing.json")


def test_load_config_wrong_suffix(tmp_path):
    path = tmp_path / "tokenizer.model"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ModelLoadError):
        neotok.load_config(path)


def test_load_config_invalid_json(tmp_path):
    path = tmp_path / "tokenizer.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ModelLoadError):
        neotok.load_config(path)


# Normalizers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("form", ["NFC", "nfkc", "NFD", "NFKD"])
def test_known_normalizers(form):
    assert get_normalizer(form)("ﬁ") in {"ﬁ", "fi"}


def test_identity_normalizer():
    assert get_normalizer(None)("café") == "café"


def test_unknown_normalizer_raises():
    with pytest.raises(ConfigError) as exc_info:
        get_normalizer("Lowercase")
    assert "'Lowercase'" in str(exc_info.value)
    assert exc_info.value.token is None


def test_unknown_normalizer_aborts_build(config_factory):
    with pytest.raises(ConfigError):
        neotok.build_tokenizer(config_factory(normalizer="BertNormalizer"))
