"""Ordered cleanup steps that turn a message body into a product search surface.

Each step is a pure ``str -> str`` function with one job. ``SANITIZE_STEPS``
fixes their order: the house number goes before anything else touches the
text so its digits can never be read as a quantity, and none of the filler
patterns consume digits.
"""
from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

EMOJI_PATTERN = re.compile(
    "["
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F300-\U0001F5FF"  # symbols and pictographs
    "\U0001F680-\U0001F6FF"  # transport and map
    "\U0001F1E0-\U0001F1FF"  # flags
    "\U0001F900-\U0001F9FF"  # supplemental pictographs
    "\U0001FA70-\U0001FAFF"
    "\u2600-\u26FF"  # misc symbols
    "\u2700-\u27BF"  # dingbats
    "\uFE0F\u200D"  # variation selector, zero-width joiner
    "]"
)

GREETING_PATTERN = re.compile(r"Good\s+morning\s+[A-Za-z]+\s*,?", re.IGNORECASE)
BOOKING_PREFIX_PATTERN = re.compile(r"\bBook\s+", re.IGNORECASE)
RECIPIENT_PATTERN = re.compile(r"\bfor\s+[A-Za-z]+", re.IGNORECASE)
COLLECTION_TAIL_PATTERNS = (
    re.compile(r"When\s+can\s+I\s+collect.*$", re.IGNORECASE),
    re.compile(r"Will\s+collect.*$", re.IGNORECASE),
)
# Dot runs and ellipsis characters, leaving decimal points such as "1.5" intact.
ELLIPSIS_PATTERN = re.compile(r"…+|(?<!\d)\.+|\.+(?!\d)")

Step = Callable[[str], str]


def strip_emoji(text: str) -> str:
    return EMOJI_PATTERN.sub("", text).strip()


def remove_house_number(text: str, house_text: Optional[str]) -> str:
    """Drop the first occurrence of the house-number text as written."""

    if not house_text:
        return text
    return text.replace(house_text, "", 1)


def strip_greeting(text: str) -> str:
    return GREETING_PATTERN.sub("", text, count=1)


def strip_booking_prefix(text: str) -> str:
    return BOOKING_PREFIX_PATTERN.sub("", text, count=1)


def strip_recipient(text: str) -> str:
    return RECIPIENT_PATTERN.sub("", text, count=1)


def strip_collection_tail(text: str) -> str:
    for pattern in COLLECTION_TAIL_PATTERNS:
        text = pattern.sub("", text, count=1)
    return text


def strip_ellipsis(text: str) -> str:
    return ELLIPSIS_PATTERN.sub("", text)


def squeeze_whitespace(text: str) -> str:
    return " ".join(text.split())


SANITIZE_STEPS: Tuple[Step, ...] = (
    strip_greeting,
    strip_booking_prefix,
    strip_recipient,
    strip_collection_tail,
    strip_ellipsis,
    squeeze_whitespace,
)


def sanitize(content: str, house_text: Optional[str] = None) -> str:
    """Return ``content`` with emoji, the house number, and filler phrases removed."""

    text = strip_emoji(content)
    text = remove_house_number(text, house_text)
    for step in SANITIZE_STEPS:
        text = step(text)
    return text
