"""Data models shared by the fallback extractor, the remote path, and exports."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Union

UNKNOWN_CUSTOMER = "Unknown"
UNSPECIFIED_HOUSE = "Not specified"

Quantity = Union[int, float]


@dataclass(frozen=True)
class RawMessage:
    """One chat message after continuation lines have been folded in."""

    date: str
    time: str
    phone: str
    content: str


@dataclass(frozen=True)
class ProductMatch:
    product: str
    quantity: Quantity
    unit: str


@dataclass(frozen=True)
class OrderRecord:
    """A single (message, product) order line in the canonical schema."""

    date: str
    time: str
    phone: str
    product: str
    quantity: Quantity
    unit: str
    customer_name: str = UNKNOWN_CUSTOMER
    house_number: str = UNSPECIFIED_HOUSE
    price_per_unit: Quantity = 0
    amount: Quantity = 0

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase mapping used by the remote JSON contract."""

        data = asdict(self)
        return {
            "date": data["date"],
            "time": data["time"],
            "phone": data["phone"],
            "customerName": data["customer_name"],
            "houseNumber": data["house_number"],
            "product": data["product"],
            "quantity": data["quantity"],
            "unit": data["unit"],
            "pricePerUnit": data["price_per_unit"],
            "amount": data["amount"],
        }


@dataclass
class ParseReport:
    """Orders from one parse plus the messages that yielded none."""

    orders: List[OrderRecord] = field(default_factory=list)
    unmatched: List[RawMessage] = field(default_factory=list)
