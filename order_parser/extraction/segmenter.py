"""Split pasted chat text into discrete messages."""
from __future__ import annotations

import re
from typing import Iterator, List, Optional

from order_parser.core.models import RawMessage

HEADER_PATTERN = re.compile(
    r"^\s*\[(?P<date>\d{2}-\d{2}-\d{4})\s+(?P<time>\d{2}:\d{2})\]\s+"
    r"(?P<phone>\+\d[\d ]*?)\s*:(?P<content>.*)$"
)


class _OpenMessage:
    """Mutable accumulator for the message currently being read."""

    def __init__(self, date: str, time: str, phone: str, content: str) -> None:
        self.date = date
        self.time = time
        self.phone = phone
        self.parts: List[str] = [content] if content else []

    def append(self, line: str) -> None:
        self.parts.append(line)

    def build(self) -> RawMessage:
        return RawMessage(
            date=self.date,
            time=self.time,
            phone=self.phone,
            content=" ".join(self.parts),
        )


def match_header(line: str) -> Optional[re.Match]:
    """Return the header match for a line, or None for body/orphan lines."""

    return HEADER_PATTERN.match(line)


def iter_messages(text: str) -> Iterator[RawMessage]:
    """Yield one ``RawMessage`` per header line, folding continuation lines in.

    Lines before the first header have no message to attach to and are
    dropped. Blank lines never add separators.
    """

    current: Optional[_OpenMessage] = None

    for line in text.splitlines():
        header = match_header(line)
        if header:
            if current is not None:
                yield current.build()
            current = _OpenMessage(
                date=header.group("date"),
                time=header.group("time"),
                phone=header.group("phone"),
                content=header.group("content").strip(),
            )
            continue

        stripped = line.strip()
        if current is not None and stripped:
            current.append(stripped)

    if current is not None:
        yield current.build()


def segment(text: str) -> List[RawMessage]:
    """Materialize ``iter_messages`` into a list."""

    return list(iter_messages(text))
