"""Extractor configuration, read from a config.json file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.json"

PARSERS = ("lalr", "earley")


@dataclass(frozen=True)
class GrammarOptions:
    """How the grammar is built and which naming conventions classify it."""

    parser: str = "lalr"
    start: str = "start"
    production_prefix: str = "relobjectname"  # Object-name productions
    production_suffix: str = "list"  # Aggregates of object names, never whitelists
    keyword_prefix: str = "K_"  # Keyword token references inside productions


@dataclass(frozen=True)
class ExtractorConfig:
    grammar_path: Path
    scratch_dir: Path
    options: GrammarOptions = field(default_factory=GrammarOptions)

    def with_paths(
        self,
        grammar_path: Optional[Union[str, Path]] = None,
        scratch_dir: Optional[Union[str, Path]] = None,
    ) -> ExtractorConfig:
        """Return a copy with the grammar and/or scratch paths overridden."""
        return replace(
            self,
            grammar_path=Path(grammar_path) if grammar_path else self.grammar_path,
            scratch_dir=Path(scratch_dir) if scratch_dir else self.scratch_dir,
        )


def parse_config(data: dict) -> ExtractorConfig:
    """Build an ExtractorConfig from decoded config.json content."""
    if not isinstance(data, dict):
        raise ConfigError("config must be a JSON object")
    try:
        grammar_path = Path(data["grammar_path"])
        scratch_dir = Path(data["scratch_dir"])
    except KeyError as e:
        raise ConfigError(f"config is missing required key {e.args[0]!r}") from e

    raw_options = data.get("options", {})
    known = set(GrammarOptions.__dataclass_fields__)
    unknown = sorted(set(raw_options) - known)
    if unknown:
        raise ConfigError(f"unknown option(s): {', '.join(unknown)}")
    for key, value in raw_options.items():
        if not isinstance(value, str) or not value:
            raise ConfigError(f"option {key!r} must be a non-empty string")

    options = GrammarOptions(**raw_options)
    if options.parser not in PARSERS:
        raise ConfigError(
            f"invalid parser {options.parser!r} (expected one of: {', '.join(PARSERS)})"
        )
    return ExtractorConfig(grammar_path, scratch_dir, options)


def load_config(path: Optional[Union[str, Path]] = None) -> ExtractorConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    try:
        with open(config_path) as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in config {config_path}: {e}") from e
    return parse_config(data)
