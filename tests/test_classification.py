from pathlib import Path

import pytest

from grammar_keywords.classification import KeywordClassification
from grammar_keywords.model import Keyword, KeywordDiff

from conftest import classify

SELECT_ONLY = """
start: K_SELECT relobjectname
relobjectname: IDENT
IDENT: /[a-z]+/
K_SELECT: "SELECT"
%ignore " "
"""

SELECT_WHITELISTED = """
start: K_SELECT relobjectname
relobjectname: IDENT
             | K_SELECT
IDENT: /[a-z]+/
K_SELECT: "SELECT"
%ignore " "
"""

INLINE_KEYWORD_STRING = """
start: K_SELECT relobjectname
relobjectname: IDENT
             | "KEY"
IDENT: /[a-z]+/
K_SELECT: "SELECT"
K_KEY: "KEY"
%ignore " "
"""


def _classification():
    keywords = {
        label: Keyword(label, label[2:])
        for label in ("K_ACTION", "K_KEY", "K_SELECT", "K_TABLE", "K_FROM")
    }
    whitelist = {
        "relobjectname": ["K_ACTION", "K_KEY"],
        "relobjectname_ext": ["K_KEY", "K_TABLE", "K_ACTION"],
        "relobjectname_without_value": [],
    }
    return KeywordClassification(keywords, whitelist)


def test_unreferenced_keyword_is_restricted(tmp_path: Path):
    classification = classify(tmp_path, SELECT_ONLY)
    assert classification.restricted_keywords() == ["K_SELECT"]
    assert dict(classification.whitelist()) == {"relobjectname": ()}


def test_referenced_keyword_is_whitelisted(tmp_path: Path):
    classification = classify(tmp_path, SELECT_WHITELISTED)
    assert "K_SELECT" in classification.whitelist()["relobjectname"]
    assert "K_SELECT" not in classification.restricted_keywords()


def test_inline_keyword_string_does_not_whitelist(tmp_path: Path):
    classification = classify(tmp_path, INLINE_KEYWORD_STRING)
    assert classification.image_for_label("K_KEY") == "KEY"
    assert classification.whitelist_for("relobjectname") == []
    assert classification.restricted_keywords() == ["K_KEY", "K_SELECT"]


def test_whitelist_for_is_a_deduplicated_union():
    classification = _classification()
    assert classification.whitelist_for("relobjectname", "relobjectname_ext") == [
        "K_ACTION",
        "K_KEY",
        "K_TABLE",
    ]


def test_whitelist_for_ignores_unknown_names():
    classification = _classification()
    assert classification.whitelist_for("relobjectname", "no_such_production") == [
        "K_ACTION",
        "K_KEY",
    ]
    assert classification.whitelist_for() == []


def test_unknown_label_has_no_image():
    classification = _classification()
    assert classification.image_for_label("K_DOES_NOT_EXIST") is None
    assert classification.image_for_label("K_TABLE") == "TABLE"


def test_restricted_and_whitelisted_partition_the_keywords():
    classification = _classification()
    restricted = set(classification.restricted_keywords())
    whitelisted = set()
    for labels in classification.whitelist().values():
        whitelisted.update(labels)

    assert restricted | whitelisted == {kw.label for kw in classification.keywords()}
    assert not restricted & whitelisted
    assert restricted == {"K_FROM", "K_SELECT"}


def test_keywords_are_sorted_by_label():
    labels = [kw.label for kw in _classification().keywords()]
    assert labels == sorted(labels)


def test_views_are_read_only():
    classification = _classification()
    with pytest.raises(TypeError):
        classification.whitelist()["relobjectname"] = ("K_SELECT",)
    assert isinstance(classification.whitelist()["relobjectname"], tuple)


def test_source_mappings_are_copied():
    keywords = {"K_A": Keyword("K_A", "A")}
    whitelist = {"relobjectname": ["K_A"]}
    classification = KeywordClassification(keywords, whitelist)
    whitelist["relobjectname"].append("K_B")
    keywords["K_B"] = Keyword("K_B", "B")
    assert classification.whitelist()["relobjectname"] == ("K_A",)
    assert classification.image_for_label("K_B") is None


def test_compare_restricted_reports_both_directions():
    diff = _classification().compare_restricted(["K_SELECT", "K_ACTION"])
    assert diff == KeywordDiff(missing=("K_ACTION",), unexpected=("K_FROM",))
    assert not diff.ok
    assert _classification().compare_restricted(["K_FROM", "K_SELECT"]).ok


def test_to_dict():
    document = _classification().to_dict()
    assert document["keywords"][0] == {"label": "K_ACTION", "image": "ACTION"}
    assert document["whitelist"]["relobjectname"] == ["K_ACTION", "K_KEY"]
    assert document["restricted"] == ["K_FROM", "K_SELECT"]


def test_independent_loads_agree(tmp_path: Path):
    (tmp_path / "one").mkdir()
    (tmp_path / "two").mkdir()
    first = classify(tmp_path / "one", SELECT_WHITELISTED)
    second = classify(tmp_path / "two", SELECT_WHITELISTED)

    assert set(first.keywords()) == set(second.keywords())
    assert {name: set(labels) for name, labels in first.whitelist().items()} == {
        name: set(labels) for name, labels in second.whitelist().items()
    }
