import pytest

from core.search import SearchIndex, normalize_name, similarity, strip_parenthetical

from conftest import BAKER, BOND, EDGWARE_BAK, EDGWARE_CIR, ELEPHANT, KINGS_CROSS, OXFORD


def test_normalize_name():
    assert normalize_name("  King's Cross St. Pancras ") == "kings cross st pancras"
    assert normalize_name("Elephant & Castle") == "elephant and castle"
    assert normalize_name("") == ""


def test_strip_parenthetical():
    assert strip_parenthetical("Edgware Road (Bakerloo)") == "Edgware Road"
    assert strip_parenthetical("Bank") == "Bank"


def test_similarity_bounds():
    assert similarity("bank", "bank") == 1.0
    assert similarity("", "bank") == 0.0
    assert 0.0 < similarity("bank", "banks") < 1.0


@pytest.mark.parametrize("query,expected", [
    ("Oxford Circus", OXFORD),
    ("oxford circus", OXFORD),
    ("OXFORD CIRCUS", OXFORD),
    ("Bond Street", BOND),
    ("kings cross st pancras", KINGS_CROSS),
    ("Elephant and Castle", ELEPHANT),
])
def test_exact_names_resolve_to_one_station(index, query, expected):
    assert index.resolve(query) == {expected}


@pytest.mark.parametrize("query,expected", [
    ("Oxfrd Circus", OXFORD),
    ("Bakr Street", BAKER),
    ("Elefant & Castle", ELEPHANT),
])
def test_typos_still_resolve(index, query, expected):
    assert index.resolve(query) == {expected}


@pytest.mark.parametrize("query", ["", "   ", "Heathrow Airport", "zzz", "Piccadilly"])
def test_unrelated_text_is_unknown(index, query):
    assert index.resolve(query) == set()


def test_duplicate_name_reveals_both_stations(index):
    both = {EDGWARE_BAK, EDGWARE_CIR}
    assert index.resolve("Edgware Road") == both
    assert index.resolve("edgware road (bakerloo)") == both
    assert index.resolve("Edgware Road (Circle, District and H&C)") == both
    assert index.resolve("Edgwar Road") == both


def test_duplicate_group_is_built_at_index_time(index):
    assert index.duplicate_groups == {"Edgware Road": (EDGWARE_BAK, EDGWARE_CIR)}


def test_group_with_single_member_is_dropped(catalog, capsys):
    index = SearchIndex.build(catalog, duplicate_names=("Edgware Road", "Bank"))
    assert "Bank" not in index.duplicate_groups
    assert "Warning" in capsys.readouterr().out


def test_threshold_is_configurable(catalog):
    strict = SearchIndex.build(catalog, threshold=0.99)
    assert strict.resolve("Oxfrd Circus") == set()
    assert strict.resolve("Oxford Circus") == {OXFORD}


def test_best_match_reports_score(index):
    sid, score = index.best_match("Bond Street")
    assert (sid, score) == (BOND, 1.0)
    assert index.best_match("nothing like it") is None


def test_suggest_prefix(index):
    assert index.suggest("B") == ["Baker Street", "Bond Street", "Brixton"]
    assert index.suggest("edg") == [
        "Edgware Road (Bakerloo)", "Edgware Road (Circle, District and H&C)",
    ]
    assert index.suggest("b", limit=2) == ["Baker Street", "Bond Street"]
    assert index.suggest("") == []
