"""Deterministic order extraction used when the remote model is unavailable."""
from __future__ import annotations

import logging
from typing import List

from order_parser.core.models import OrderRecord, ParseReport, RawMessage
from order_parser.extraction.assembler import assemble
from order_parser.extraction.fields import extract_name, find_house_number
from order_parser.extraction.products import extract_products
from order_parser.extraction.sanitizer import sanitize, strip_emoji
from order_parser.extraction.segmenter import iter_messages

logger = logging.getLogger(__name__)


def parse_message(message: RawMessage) -> List[OrderRecord]:
    """Turn one message into zero or more order records."""

    content = strip_emoji(message.content)
    customer_name = extract_name(content)
    house = find_house_number(content)

    search_surface = sanitize(content, house.raw if house else None)
    matches = extract_products(search_surface)

    if house is None:
        return assemble(message, matches, customer_name=customer_name)
    return assemble(
        message,
        matches,
        customer_name=customer_name,
        house_number=house.normalized,
    )


def parse_with_report(text: str) -> ParseReport:
    """Parse ``text`` and also collect messages that produced no orders."""

    report = ParseReport()
    message_count = 0
    for message in iter_messages(text):
        message_count += 1
        orders = parse_message(message)
        if orders:
            report.orders.extend(orders)
        else:
            report.unmatched.append(message)

    logger.debug(
        "Parsed %d messages into %d orders (%d without orders)",
        message_count,
        len(report.orders),
        len(report.unmatched),
    )
    return report


def parse(text: str) -> List[OrderRecord]:
    """Extract order records from pasted chat text.

    Never raises for malformed input: lines without a header are ignored,
    and messages or products that cannot be read are left out.
    """

    return parse_with_report(text).orders
