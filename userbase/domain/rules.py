"""Declarative string rules applied to field values before a user is stored."""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Optional

WHITESPACE_PATTERN = re.compile(r"\s")
SPECIAL_CHARACTER_PATTERN = re.compile(r"[^a-zA-Z0-9]")
DIGIT_PATTERN = re.compile(r"[0-9]")
LETTER_PATTERN = re.compile(r"[a-zA-Z]")


@dataclass
class RuleCheck:
    success: bool
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


def fail(message: str) -> RuleCheck:
    return RuleCheck(success=False, message=message)


@lru_cache(maxsize=128)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def check_rules(value: str, rules: Mapping[str, Any]) -> RuleCheck:
    """
    Validate ``value`` against a rule set, stopping at the first violation.

    Checks run in a fixed order: minLength, maxLength, match, noSpaces,
    noSpecialCharacters, noNumbers, noLetters. A rule that is missing or falsy
    is skipped, so ``minLength: 0`` never runs. ``match`` searches anywhere in
    the value; anchor the pattern to require a full match.
    """
    min_length = rules.get("minLength")
    if min_length and len(value) < min_length:
        return fail(f"Value must be at least {min_length} characters long!")

    max_length = rules.get("maxLength")
    if max_length and len(value) > max_length:
        return fail(f"Value must be at most {max_length} characters long!")

    pattern = rules.get("match")
    if pattern and not _compile(pattern).search(value):
        return fail(f"Value must match the following regex: {pattern}")

    if rules.get("noSpaces") and WHITESPACE_PATTERN.search(value):
        return fail("Value must not contain any spaces!")

    if rules.get("noSpecialCharacters") and SPECIAL_CHARACTER_PATTERN.search(value):
        return fail("Value must not contain any special characters!")

    if rules.get("noNumbers") and DIGIT_PATTERN.search(value):
        return fail("Value must not contain any numbers!")

    if rules.get("noLetters") and LETTER_PATTERN.search(value):
        return fail("Value must not contain any letters!")

    return RuleCheck(success=True)
