"""
Grammar loading through lark.

Turns a .lark grammar file into the two named tables the collectors work on:
terminals (name -> literal token or other) and rules (name -> production or
other). lark does the heavy lifting; this module only reads its results.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Tuple

from lark import Lark, Token, Tree
from lark.exceptions import LarkError
from lark.grammar import Symbol
from lark.lexer import PatternStr
from lark.load_grammar import load_grammar

from .config import GrammarOptions
from .errors import GrammarSyntaxError, LoadError
from .model import (
    GrammarTables,
    GrammarToken,
    LiteralTokenDefinition,
    NamedGrammarItem,
    OtherItem,
    ProductionDefinition,
)

log = logging.getLogger(__name__)

CACHE_SUFFIX = ".lark-cache"


def read_grammar(grammar_path: Path) -> str:
    try:
        return grammar_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"cannot read grammar file {grammar_path}: {e}") from e


def prepare_scratch_dir(scratch_dir: Path) -> Path:
    try:
        scratch_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LoadError(f"cannot create scratch directory {scratch_dir}: {e}") from e
    return scratch_dir


def build_parser(
    text: str, grammar_path: Path, scratch_dir: Path, options: GrammarOptions
) -> Lark:
    """Run lark's full analysis of the grammar, as the generated parser would.

    With the LALR parser the analysis result is cached in the scratch
    directory; lark reuses it on the next run if the grammar is unchanged.
    """
    kwargs = {}
    if options.parser == "lalr":
        kwargs["cache"] = str(scratch_dir / (grammar_path.stem + CACHE_SUFFIX))
    try:
        return Lark(
            text,
            parser=options.parser,
            start=options.start,
            import_paths=[str(grammar_path.parent)],
            **kwargs,
        )
    except LarkError as e:
        raise GrammarSyntaxError(f"{grammar_path}: {e}", grammar_path) from e


# ---------------------------------------------------------------------------
# Table construction
# ---------------------------------------------------------------------------


def _grammar_token(leaf) -> GrammarToken:
    if isinstance(leaf, Symbol):
        return GrammarToken(image=str(leaf.name), kind="TERMINAL" if leaf.is_term else "RULE")
    return GrammarToken(image=str(leaf), kind=leaf.type)


def body_tokens(tree: Tree) -> Tuple[GrammarToken, ...]:
    """Flatten a rule definition tree into its leaves, in source order."""
    leaves = tree.scan_values(lambda v: isinstance(v, (Symbol, Token)))
    return tuple(_grammar_token(leaf) for leaf in leaves)


def build_token_table(grammar, options: GrammarOptions) -> Dict[str, NamedGrammarItem]:
    names = [str(name) for name, _definition in grammar.term_defs]
    # Keep every named terminal, even the ones no rule references
    terminals, _rules, _ignore = grammar.compile([options.start], set(names))
    compiled = {term.name: term for term in terminals}

    table: Dict[str, NamedGrammarItem] = {}
    for name in names:
        term = compiled.get(name)
        if term is None:
            # %declare'd terminals have no pattern
            table[name] = OtherItem(name=name, kind="declared")
        elif isinstance(term.pattern, PatternStr):
            table[name] = LiteralTokenDefinition(name=name, image=term.pattern.value)
        else:
            table[name] = OtherItem(name=name, kind=type(term.pattern).__name__)
    return table


def build_production_table(rule_defs: Iterable) -> Dict[str, NamedGrammarItem]:
    table: Dict[str, NamedGrammarItem] = {}
    for name, params, tree, _options in rule_defs:
        # lark hands back Token names; keep the public tables plain str
        name = str(name)
        if params:
            # Templates are instantiated per use; their body is not a token sequence
            table[name] = OtherItem(name=name, kind="template")
        elif not isinstance(tree, Tree):
            table[name] = OtherItem(name=name, kind=type(tree).__name__)
        else:
            table[name] = ProductionDefinition.from_body(name, body_tokens(tree))
    return table


def load_grammar_tables(
    grammar_path: Path, scratch_dir: Path, options: GrammarOptions
) -> GrammarTables:
    """Load, parse and analyze a grammar file and publish its named tables."""
    grammar_path = Path(grammar_path)
    scratch_dir = Path(scratch_dir)

    log.info("reading keywords from grammar %s", grammar_path)
    text = read_grammar(grammar_path)
    prepare_scratch_dir(scratch_dir)

    try:
        grammar, _used_files = load_grammar(
            text, str(grammar_path), [str(grammar_path.parent)], False
        )
    except LarkError as e:
        raise GrammarSyntaxError(f"{grammar_path}: {e}", grammar_path) from e

    build_parser(text, grammar_path, scratch_dir, options)

    try:
        tokens = build_token_table(grammar, options)
    except LarkError as e:
        raise GrammarSyntaxError(f"{grammar_path}: {e}", grammar_path) from e
    productions = build_production_table(grammar.rule_defs)

    log.info(
        "loaded %d named tokens and %d productions", len(tokens), len(productions)
    )
    return GrammarTables(tokens=tokens, productions=productions)
