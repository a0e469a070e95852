"""Factory functions for creating tokenizers from tokenizer.json files."""

import json
import logging
from pathlib import Path
from typing import Any, Final

from .config import TokenizerConfig
from .errors import ModelLoadError
from .tokenizer import Tokenizer, build_tokenizer

log = logging.getLogger(__name__)

CONFIG_SUFFIX: Final[str] = ".json"


def load_config(model_path: str | Path, **options: Any) -> TokenizerConfig:
    """
    Read a Hugging Face ``tokenizer.json`` file into a :class:`TokenizerConfig`.

    :param model_path: Path to the ``.json`` file.
    :param options: Extra :class:`TokenizerConfig` fields, e.g. ``space_token_id``.
    :raises ModelLoadError: If the file does not exist, has the wrong
                            extension or is not valid JSON.
    :raises ConfigError: If the document lacks the expected sections.
    """
    path = Path(model_path)

    if not path.exists():
        raise ModelLoadError("model filepath does not exist", model_path=str(path))

    if path.suffix != CONFIG_SUFFIX:
        raise ModelLoadError("expected .json file", model_path=str(path))

    log.info(f"loading tokenizer config from {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ModelLoadError(f"invalid json: {e}", model_path=str(path)) from e

    return TokenizerConfig.from_dict(data, **options)


def from_pretrained(model_path: str | Path, **options: Any) -> Tokenizer:
    """
    Load a pre-trained tokenizer from a ``tokenizer.json`` file.

    :param model_path: Path to the ``.json`` file.
    :return: Tokenizer with all lookup tables built.
    :raises ModelLoadError: If the file cannot be read.
    :raises ConfigError: If the vocabulary, merges or added tokens are inconsistent.

    .. code-block:: python

        tokenizer = from_pretrained("20B_tokenizer.json")
        tokens = tokenizer.encode("Hello world")
    """
    return build_tokenizer(load_config(model_path, **options))
