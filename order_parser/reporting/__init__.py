"""Tabular export of parsed orders."""
from order_parser.reporting.sinks import (
    ensure_output_dir,
    push_to_google_sheets,
    render_csv,
    write_csv,
    write_excel,
)
from order_parser.reporting.templates import (
    TEMPLATE_HEADERS,
    default_export_name,
    order_to_template_row,
    orders_to_template_rows,
)

__all__ = [
    "TEMPLATE_HEADERS",
    "default_export_name",
    "ensure_output_dir",
    "order_to_template_row",
    "orders_to_template_rows",
    "push_to_google_sheets",
    "render_csv",
    "write_csv",
    "write_excel",
]
