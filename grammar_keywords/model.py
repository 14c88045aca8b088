"""Data structures shared by the loader, the collectors and the classification."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple, Union

# Kind tags of the synthetic tokens framing every production body
HEADER_KIND = "RULE_NAME"
END_KIND = "END"


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GrammarToken:
    """A lexical unit from a production body."""

    image: str  # Raw text, e.g. 'K_SELECT' or '"("'
    kind: str  # 'TERMINAL', 'RULE', 'STRING', 'REGEXP', 'OP', ...


# ---------------------------------------------------------------------------
# Named grammar items
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LiteralTokenDefinition:
    """A named terminal defined by a single string literal: K_SELECT: "SELECT"."""

    name: str
    image: str  # The literal without quotes or flags


@dataclass(frozen=True)
class ProductionDefinition:
    """A grammar rule with its body materialized as an ordered token tuple.

    The tuple starts with a header token (the rule name) and ends with an
    end-of-definition sentinel, so ``tokens[first_token:last_token]`` covers
    the header and the body but never the sentinel.
    """

    name: str
    tokens: Tuple[GrammarToken, ...]

    @classmethod
    def from_body(cls, name: str, body: Tuple[GrammarToken, ...]) -> "ProductionDefinition":
        header = GrammarToken(image=name, kind=HEADER_KIND)
        end = GrammarToken(image="", kind=END_KIND)
        return cls(name=name, tokens=(header,) + tuple(body) + (end,))

    @property
    def first_token(self) -> int:
        return 0

    @property
    def last_token(self) -> int:
        return max(len(self.tokens) - 1, 0)


@dataclass(frozen=True)
class OtherItem:
    """Any table entry that is neither a literal token nor a linear production."""

    name: str
    kind: str  # 'PatternRE', 'declared', 'template', ...


NamedGrammarItem = Union[LiteralTokenDefinition, ProductionDefinition, OtherItem]


@dataclass(frozen=True)
class GrammarTables:
    """The two named tables published by the loader."""

    tokens: Mapping[str, NamedGrammarItem]
    productions: Mapping[str, NamedGrammarItem]

    def __post_init__(self):
        object.__setattr__(self, "tokens", MappingProxyType(dict(self.tokens)))
        object.__setattr__(self, "productions", MappingProxyType(dict(self.productions)))


# ---------------------------------------------------------------------------
# Derived entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Keyword:
    """A literal token whose image is alphabetic."""

    label: str
    image: str


@dataclass(frozen=True)
class KeywordDiff:
    """Expected-vs-actual difference between two keyword label sets."""

    missing: Tuple[str, ...]  # Expected but not computed
    unexpected: Tuple[str, ...]  # Computed but not expected

    @property
    def ok(self) -> bool:
        return not self.missing and not self.unexpected
