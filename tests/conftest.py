from functools import lru_cache
from pathlib import Path
import textwrap

from grammar_keywords.classification import KeywordClassification
from grammar_keywords.config import ExtractorConfig, GrammarOptions
from grammar_keywords.extractor import KeywordExtractor
from grammar_keywords.loader import load_grammar_tables

ROOT = Path(__file__).resolve().parent.parent
SQL_GRAMMAR = ROOT / "grammar" / "sql.lark"
SCRATCH_DIR = ROOT / "build" / "lark-grammar"


@lru_cache(maxsize=None)
def sql_extractor() -> KeywordExtractor:
    """Extractor over the repository grammar, initialized once per test session."""
    extractor = KeywordExtractor(ExtractorConfig(SQL_GRAMMAR, SCRATCH_DIR))
    extractor.initialize()
    return extractor


def write_grammar(directory: Path, text: str, name: str = "test.lark") -> Path:
    path = directory / name
    path.write_text(textwrap.dedent(text).lstrip())
    return path


def classify(directory: Path, text: str, options: GrammarOptions = GrammarOptions()) -> KeywordClassification:
    grammar_path = write_grammar(directory, text)
    tables = load_grammar_tables(grammar_path, directory / "scratch", options)
    return KeywordClassification.from_tables(tables, options)

