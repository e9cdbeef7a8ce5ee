"""
Configuration models and YAML I/O for ledger-stream.

This module defines the Pydantic models that map 1:1 to a
``ledger-stream.yaml`` file, plus helpers for loading and saving it.

Key models:
- LedgerConfig: Top-level config (tokenizer + errors + includes + loader).
- TokenizerConfig: Comment-stripping behaviour.
- ErrorConfig: What the stream does with a line that fails to decode.
- IncludeConfig: Whether and how ``include`` directives are followed.
- LoaderConfig: How ledger files are read from disk into chunks.

Every field has a default, so ``LedgerConfig()`` is a working config and a
YAML file only needs to list the settings it changes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from ledger_stream.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class TokenizerConfig(BaseModel):
    """Tokenizer settings."""

    quote_aware_comments: bool = Field(
        True,
        description=(
            "If True, a ';' inside a quoted string does not start a comment. "
            "If False, every line is truncated at its first ';'."
        ),
    )


class ErrorConfig(BaseModel):
    """Per-line error policy."""

    policy: Literal["collect", "skip", "raise"] = Field(
        "collect",
        description=(
            "'collect' yields failed lines as error results, 'skip' logs and "
            "drops them, 'raise' aborts the stream on the first failure"
        ),
    )


class IncludeConfig(BaseModel):
    """Settings for following ``include`` directives (file loader only)."""

    resolve: bool = Field(True, description="If True, parse included files inline")
    max_depth: int = Field(16, ge=1, description="Maximum include nesting depth")


class LoaderConfig(BaseModel):
    """Settings for reading ledger files from disk."""

    encoding: str = Field("utf-8-sig", description="Text encoding of ledger files")
    lines_per_chunk: int = Field(
        1000, ge=1, description="Number of complete lines handed to the tokenizer at once"
    )


class LedgerConfig(BaseModel):
    """Top-level configuration for ledger-stream."""

    tokenizer: TokenizerConfig = Field(default_factory=TokenizerConfig)
    errors: ErrorConfig = Field(default_factory=ErrorConfig)
    includes: IncludeConfig = Field(default_factory=IncludeConfig)
    loader: LoaderConfig = Field(default_factory=LoaderConfig)


def load_config(path: str | Path) -> LedgerConfig:
    """Load and validate a YAML config into a LedgerConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file must contain a mapping, got {type(raw).__name__}: {path}"
        )
    logger.info("Loaded config from %s", path)
    return LedgerConfig.model_validate(raw)


def save_config(config: LedgerConfig, path: str | Path) -> None:
    """Serialize a LedgerConfig to YAML with a short header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# ledger-stream configuration\n\n")
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    logger.info("Saved config to %s", path)
