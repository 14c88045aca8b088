"""
Keyword extraction from lark grammars.

Reads the literal keyword tokens of a grammar and, for every object-name
production (``relobjectname*``), the keywords it accepts as identifiers.
Keywords accepted nowhere are the restricted keywords.

Usage:
    import grammar_keywords

    grammar_keywords.initialize()
    grammar_keywords.restricted_keywords()
    grammar_keywords.whitelist_for("relobjectname", "relobjectname_ext")
"""

from typing import List, Mapping, Optional, Tuple

from .classification import KeywordClassification
from .config import ExtractorConfig, GrammarOptions, load_config
from .errors import (
    ConfigError,
    DuplicateKeywordError,
    GrammarSyntaxError,
    KeywordExtractionError,
    LoadError,
    UninitializedAccessError,
)
from .extractor import KeywordExtractor, State
from .model import Keyword, KeywordDiff

__all__ = [
    "ConfigError",
    "DuplicateKeywordError",
    "ExtractorConfig",
    "GrammarOptions",
    "GrammarSyntaxError",
    "Keyword",
    "KeywordClassification",
    "KeywordDiff",
    "KeywordExtractionError",
    "KeywordExtractor",
    "LoadError",
    "State",
    "UninitializedAccessError",
    "image_for_label",
    "initialize",
    "keywords",
    "load_config",
    "restricted_keywords",
    "whitelist",
    "whitelist_for",
]

# Process-wide extractor, configured from the packaged config.json
default_extractor = KeywordExtractor()


def initialize() -> KeywordClassification:
    return default_extractor.initialize()


def keywords() -> Tuple[Keyword, ...]:
    return default_extractor.keywords()


def image_for_label(label: str) -> Optional[str]:
    return default_extractor.image_for_label(label)


def whitelist() -> Mapping[str, Tuple[str, ...]]:
    return default_extractor.whitelist()


def whitelist_for(*names: str) -> List[str]:
    return default_extractor.whitelist_for(*names)


def restricted_keywords() -> List[str]:
    return default_extractor.restricted_keywords()
