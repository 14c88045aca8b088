"""Read-only queries over the collected keywords and whitelists."""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .collectors import collect_keywords, collect_whitelist
from .config import GrammarOptions
from .model import GrammarTables, Keyword, KeywordDiff

log = logging.getLogger(__name__)


class KeywordClassification:
    """Immutable snapshot of a grammar's keywords and per-production whitelists."""

    def __init__(self, keywords: Mapping[str, Keyword], whitelist: Mapping[str, Iterable[str]]):
        self._keywords = MappingProxyType(dict(keywords))
        self._whitelist = MappingProxyType(
            {name: tuple(labels) for name, labels in whitelist.items()}
        )

    @classmethod
    def from_tables(cls, tables: GrammarTables, options: GrammarOptions) -> "KeywordClassification":
        keywords = collect_keywords(tables.tokens.values())
        whitelist = collect_whitelist(tables.productions, options)
        return cls(keywords, whitelist)

    def keywords(self) -> Tuple[Keyword, ...]:
        return tuple(self._keywords[label] for label in sorted(self._keywords))

    def image_for_label(self, label: str) -> Optional[str]:
        keyword = self._keywords.get(label)
        if keyword is None:
            log.debug("no keyword image found for %s", label)
            return None
        return keyword.image

    def whitelist(self) -> Mapping[str, Tuple[str, ...]]:
        return self._whitelist

    def whitelist_for(self, *names: str) -> List[str]:
        """Union of the named whitelists, in first-seen order.

        Names without a whitelist contribute nothing.
        """
        seen: Dict[str, None] = {}
        for name in names:
            for label in self._whitelist.get(name, ()):
                seen.setdefault(label)
        return list(seen)

    def restricted_keywords(self) -> List[str]:
        """Keywords no object-name production accepts as an identifier."""
        whitelisted = set()
        for labels in self._whitelist.values():
            whitelisted.update(labels)
        return sorted(label for label in self._keywords if label not in whitelisted)

    def compare_restricted(self, expected: Iterable[str]) -> KeywordDiff:
        expected_set = set(expected)
        actual_set = set(self.restricted_keywords())
        return KeywordDiff(
            missing=tuple(sorted(expected_set - actual_set)),
            unexpected=tuple(sorted(actual_set - expected_set)),
        )

    def to_dict(self) -> dict:
        return {
            "keywords": [
                {"label": kw.label, "image": kw.image} for kw in self.keywords()
            ],
            "whitelist": {
                name: list(self._whitelist[name]) for name in sorted(self._whitelist)
            },
            "restricted": self.restricted_keywords(),
        }
