"""Turn pasted WhatsApp order messages into structured order records."""
from order_parser.core import (
    UNKNOWN_CUSTOMER,
    UNSPECIFIED_HOUSE,
    OrderRecord,
    ParseReport,
    ProductMatch,
    RawMessage,
    apply_quality_checks,
    configure_logging,
    validate_order,
)
from order_parser.extraction import parse, parse_with_report, segment
from order_parser.pipeline import run_pipeline
from order_parser.processing import OrderParseResult, RemoteParseError, parse_orders
from order_parser.reporting import (
    TEMPLATE_HEADERS,
    order_to_template_row,
    orders_to_template_rows,
    render_csv,
    write_csv,
)

__all__ = [
    "TEMPLATE_HEADERS",
    "UNKNOWN_CUSTOMER",
    "UNSPECIFIED_HOUSE",
    "OrderParseResult",
    "OrderRecord",
    "ParseReport",
    "ProductMatch",
    "RawMessage",
    "RemoteParseError",
    "apply_quality_checks",
    "configure_logging",
    "order_to_template_row",
    "orders_to_template_rows",
    "parse",
    "parse_orders",
    "parse_with_report",
    "render_csv",
    "run_pipeline",
    "segment",
    "validate_order",
    "write_csv",
]
