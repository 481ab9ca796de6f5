"""
Test-type classification: ordered, first-match-wins keyword rules over a free-form test type string.

A test type like "SAT_MATH_ALGEBRA" or "ACT_SCIENCE_DIAGNOSTIC" is lower-cased and matched by
substring, first against exam families (SAT, ACT, AP, quiz, adaptive, in that priority), then
against the subject rules of the matched family. Both the prompt builder and the fallback selector
classify through this module; they differ only in the tables they pass in.

Substring matching is literal: "adaptive" contains "ap" and "practice" contains
"act", so such strings land in the AP / ACT families. Order is the only overlap resolution.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

FAMILY_SAT = "SAT"
FAMILY_ACT = "ACT"
FAMILY_AP = "AP"
FAMILY_QUIZ = "QUIZ"
FAMILY_ADAPTIVE = "ADAPTIVE"


@dataclass(frozen=True)
class Rule(Generic[T]):
    keywords: tuple[str, ...]
    value: T

    def matches(self, lowered: str) -> bool:
        return any(k in lowered for k in self.keywords)


def first_match(rules: tuple[Rule[T], ...], lowered: str) -> T | None:
    for rule in rules:
        if rule.matches(lowered):
            return rule.value
    return None


FAMILY_RULES: tuple[Rule[str], ...] = (
    Rule(("sat",), FAMILY_SAT),
    Rule(("act",), FAMILY_ACT),
    Rule(("ap",), FAMILY_AP),
    Rule(("quiz",), FAMILY_QUIZ),
    Rule(("adaptive",), FAMILY_ADAPTIVE),
)


def classify_family(test_type: str) -> str | None:
    """Exam family for test_type, or None when no family keyword occurs."""
    return first_match(FAMILY_RULES, (test_type or "").lower())


@dataclass(frozen=True)
class FamilyTable(Generic[T]):
    """Subject rules for one family and the value used when none of them match (None: unclassified)."""

    subjects: tuple[Rule[T], ...]
    default: T | None = None


def classify(test_type: str, tables: dict[str, FamilyTable[T]], default: T) -> T:
    """
    Resolve test_type against per-family subject tables.
    Falls back to the family table's default, then to default, so the result is always defined.
    """
    lowered = (test_type or "").lower()
    family = first_match(FAMILY_RULES, lowered)
    table = tables.get(family) if family else None
    if table is None:
        return default
    value = first_match(table.subjects, lowered)
    if value is not None:
        return value
    return table.default if table.default is not None else default
