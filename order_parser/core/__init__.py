"""Core building blocks for the order parser package."""
from order_parser.core.logging import configure_logging
from order_parser.core.models import (
    UNKNOWN_CUSTOMER,
    UNSPECIFIED_HOUSE,
    OrderRecord,
    ParseReport,
    ProductMatch,
    RawMessage,
)
from order_parser.core.quality import apply_quality_checks, validate_order

__all__ = [
    "UNKNOWN_CUSTOMER",
    "UNSPECIFIED_HOUSE",
    "OrderRecord",
    "ParseReport",
    "ProductMatch",
    "RawMessage",
    "apply_quality_checks",
    "configure_logging",
    "validate_order",
]
