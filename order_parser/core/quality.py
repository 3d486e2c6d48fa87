"""Lightweight quality checks that flag orders needing a follow-up."""
import logging
import math
from typing import Iterable, List, Tuple

from order_parser.core.models import UNKNOWN_CUSTOMER, UNSPECIFIED_HOUSE, OrderRecord
from order_parser.extraction.registry import PRODUCT_NAMES

logger = logging.getLogger(__name__)

VALID_UNITS = frozenset({"gm", "kg", "pieces"})


def validate_order(order: OrderRecord) -> List[str]:
    """Return a list of quality issues for a single order."""

    issues: List[str] = []

    # Delivery needs to know who and where.
    if not order.customer_name or order.customer_name == UNKNOWN_CUSTOMER:
        issues.append("missing customer name")
    if not order.house_number or order.house_number == UNSPECIFIED_HOUSE:
        issues.append("missing house number")

    # Model output is not bound to the registry.
    if order.product not in PRODUCT_NAMES:
        issues.append("unknown product")
    if order.unit not in VALID_UNITS:
        issues.append("invalid unit")
    if (
        not isinstance(order.quantity, (int, float))
        or not math.isfinite(order.quantity)
        or order.quantity <= 0
    ):
        issues.append("invalid quantity")

    return issues


def apply_quality_checks(orders: Iterable[OrderRecord]) -> List[Tuple[OrderRecord, List[str]]]:
    """Pair each order with its issues, logging a warning for flagged ones."""

    reviewed: List[Tuple[OrderRecord, List[str]]] = []

    for order in orders:
        issues = validate_order(order)
        if issues:
            logger.warning(
                "Order from %s at %s %s (%s) needs review: %s",
                order.phone,
                order.date,
                order.time,
                order.product,
                "; ".join(issues),
            )
        reviewed.append((order, issues))

    return reviewed
