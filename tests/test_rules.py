from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote userbase seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userbase.domain.rules import check_rules  # noqa: E402


def test_empty_rules_pass():
    assert check_rules("anything goes !", {}).success is True


def test_min_length_mentions_limit():
    result = check_rules("ab", {"minLength": 3})
    assert result.success is False
    assert "3" in result.message
    assert check_rules("abc", {"minLength": 3})


def test_max_length():
    result = check_rules("abcdef", {"maxLength": 5})
    assert not result
    assert result.message == "Value must be at most 5 characters long!"
    assert check_rules("abcde", {"maxLength": 5})


@pytest.mark.parametrize("rules", [{"minLength": 0}, {"maxLength": 0}, {"match": ""}, {"noSpaces": False}])
def test_falsy_rules_are_skipped(rules):
    assert check_rules("has space 123 !", rules).success is True


def test_match_searches_anywhere():
    assert check_rules("xx123yy", {"match": r"\d+"})
    failed = check_rules("xxyy", {"match": r"\d+"})
    assert failed.message == r"Value must match the following regex: \d+"
    assert not check_rules("xx123yy", {"match": r"^\d+$"})


def test_character_class_rules():
    assert check_rules("a b", {"noSpaces": True}).message == "Value must not contain any spaces!"
    assert check_rules("a\tb", {"noSpaces": True}).success is False
    assert check_rules("a_b", {"noSpecialCharacters": True}).message == (
        "Value must not contain any special characters!"
    )
    assert check_rules("abc1", {"noNumbers": True}).message == "Value must not contain any numbers!"
    assert check_rules("123a", {"noLetters": True}).message == "Value must not contain any letters!"
    assert check_rules("Abc09", {"noSpecialCharacters": True, "noSpaces": True})
    assert check_rules("abc", {"noNumbers": True})
    assert check_rules("123", {"noLetters": True})


def test_first_failure_wins_in_fixed_order():
    rules = {"noLetters": True, "noSpaces": True, "minLength": 10}
    assert check_rules("a b", rules).message == "Value must be at least 10 characters long!"
    rules.pop("minLength")
    assert check_rules("a b", rules).message == "Value must not contain any spaces!"
