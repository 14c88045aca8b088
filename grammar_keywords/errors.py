"""Exceptions raised while loading a grammar and classifying its keywords."""


class KeywordExtractionError(Exception):
    """Base class for every error raised by grammar_keywords."""


class ConfigError(KeywordExtractionError):
    """The extractor configuration is unreadable or invalid."""


class LoadError(KeywordExtractionError):
    """The grammar file (or the scratch directory) cannot be used."""


class GrammarSyntaxError(KeywordExtractionError):
    """lark rejected the grammar text during parsing or analysis."""

    def __init__(self, message: str, grammar_path=None):
        super().__init__(message)
        self.grammar_path = grammar_path


class DuplicateKeywordError(GrammarSyntaxError):
    """The same keyword label was defined with two different images."""

    def __init__(self, label: str, first_image: str, second_image: str):
        super().__init__(
            f"keyword {label} defined twice with different images: "
            f"{first_image!r} and {second_image!r}"
        )
        self.label = label
        self.images = (first_image, second_image)


class UninitializedAccessError(KeywordExtractionError):
    """A keyword query was made before initialize() completed."""
