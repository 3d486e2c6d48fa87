"""Join message metadata with extracted products into order records."""
from __future__ import annotations

import re
from typing import Iterable, List

from order_parser.core.models import (
    UNKNOWN_CUSTOMER,
    UNSPECIFIED_HOUSE,
    OrderRecord,
    ProductMatch,
    RawMessage,
)


def normalize_phone(phone: str) -> str:
    """Remove all whitespace so "+91 96198 82148" becomes "+919619882148"."""

    return re.sub(r"\s+", "", phone)


def assemble(
    message: RawMessage,
    matches: Iterable[ProductMatch],
    customer_name: str = UNKNOWN_CUSTOMER,
    house_number: str = UNSPECIFIED_HOUSE,
) -> List[OrderRecord]:
    """Emit one order per product match; no matches means no orders."""

    phone = normalize_phone(message.phone)
    return [
        OrderRecord(
            date=message.date,
            time=message.time,
            phone=phone,
            customer_name=customer_name,
            house_number=house_number,
            product=match.product,
            quantity=match.quantity,
            unit=match.unit,
        )
        for match in matches
    ]
