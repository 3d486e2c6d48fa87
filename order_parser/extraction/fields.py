"""Customer name and house number extraction.

Both extractors walk an ordered tuple of rules and stop at the first rule
that matches. Rule order is part of the contract: a name written as
``for Priya A2 205`` wins over a trailing ``- Priya`` signature.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Sequence

from order_parser.core.models import UNKNOWN_CUSTOMER, UNSPECIFIED_HOUSE


@dataclass(frozen=True)
class FieldRule:
    label: str
    pattern: Pattern[str]
    group: str = "value"


NAME_RULES: Sequence[FieldRule] = (
    FieldRule(
        "recipient before house number",
        re.compile(r"\bfor\s+(?P<value>[A-Za-z]+)\s+[A-Z]\d", re.IGNORECASE),
    ),
    FieldRule("dash signature", re.compile(r"[–-]\s*(?P<value>[A-Za-z]+)$")),
    FieldRule(
        "greeting",
        re.compile(r"Good\s+morning\s+(?P<value>[A-Za-z]+)", re.IGNORECASE),
    ),
)

# Block letter must be upper case.
HOUSE_NUMBER_PATTERN = re.compile(r"[A-Z]\d+[\s-]?\d+")


@dataclass(frozen=True)
class HouseNumber:
    raw: str
    normalized: str


def first_match(rules: Sequence[FieldRule], text: str) -> Optional[str]:
    """Return the captured value of the first rule that matches ``text``."""

    for rule in rules:
        match = rule.pattern.search(text)
        if match:
            return match.group(rule.group)
    return None


def extract_name(content: str) -> str:
    return first_match(NAME_RULES, content.strip()) or UNKNOWN_CUSTOMER


def find_house_number(content: str) -> Optional[HouseNumber]:
    """Locate the first house number, keeping the text as written for removal."""

    match = HOUSE_NUMBER_PATTERN.search(content)
    if not match:
        return None
    raw = match.group(0)
    normalized = re.sub(r"(?<=\d)[\s-](?=\d)", "-", raw, count=1)
    return HouseNumber(raw=raw, normalized=normalized)


def extract_house_number(content: str) -> str:
    house = find_house_number(content)
    return house.normalized if house else UNSPECIFIED_HOUSE
