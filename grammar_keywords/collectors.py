"""Keyword and whitelist collection over the loader's tables."""

import logging
from typing import Dict, Iterable, List, Mapping

from .config import GrammarOptions
from .errors import DuplicateKeywordError
from .model import Keyword, LiteralTokenDefinition, NamedGrammarItem, OtherItem, ProductionDefinition

log = logging.getLogger(__name__)


def collect_keywords(items: Iterable[NamedGrammarItem]) -> Dict[str, Keyword]:
    """Build the keyword set from the literal token definitions.

    Only literals whose image starts with a letter are keywords; punctuation
    literals such as ";" and every non-literal terminal are skipped.
    """
    log.info(">>> extracting keywords")
    keywords: Dict[str, Keyword] = {}
    for item in items:
        if isinstance(item, LiteralTokenDefinition):
            if not item.image or not item.image[0].isalpha():
                continue
            existing = keywords.get(item.name)
            if existing is not None and existing.image != item.image:
                raise DuplicateKeywordError(item.name, existing.image, item.image)
            keywords[item.name] = Keyword(label=item.name, image=item.image)
        elif isinstance(item, (ProductionDefinition, OtherItem)):
            log.debug("unknown token kind %s for %s", type(item).__name__, item.name)
        else:
            raise TypeError(f"not a grammar item: {item!r}")
    return keywords


def is_object_name_production(name: str, options: GrammarOptions) -> bool:
    return name.startswith(options.production_prefix) and not name.endswith(
        options.production_suffix
    )


def walk_production(production: ProductionDefinition, keyword_prefix: str) -> List[str]:
    """Return the keyword references between the first and the last token.

    The last token closes the definition and is never a keyword reference.
    """
    found = []
    for token in production.tokens[production.first_token : production.last_token]:
        if token.image.startswith(keyword_prefix):
            log.debug("    >> found %s", token.image)
            found.append(token.image)
    return found


def collect_whitelist(
    productions: Mapping[str, NamedGrammarItem], options: GrammarOptions
) -> Dict[str, List[str]]:
    """Collect, per object-name production, the keywords it accepts as names."""
    log.info(">>> extracting whitelisted keywords")
    whitelist: Dict[str, List[str]] = {}
    for name, item in productions.items():
        if not is_object_name_production(name, options):
            continue
        log.debug(">>>> whitelisted in %s type=%s", name, type(item).__name__)
        if isinstance(item, ProductionDefinition):
            whitelist[name] = walk_production(item, options.keyword_prefix)
        elif isinstance(item, (LiteralTokenDefinition, OtherItem)):
            log.debug("no token sequence for %s, whitelist left empty", name)
            whitelist[name] = []
        else:
            raise TypeError(f"not a grammar item: {item!r}")
    return whitelist
