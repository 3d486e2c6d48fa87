"""Mapping utilities to align order records with the export table."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List

from order_parser.core.models import OrderRecord

TEMPLATE_HEADERS = [
    "Date",
    "Time",
    "Phone Number",
    "Customer Name",
    "House Number",
    "Product",
    "Quantity",
    "Unit",
    "Price per Unit",
    "Amount",
]


def _format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def order_to_template_row(order: OrderRecord) -> Dict[str, str]:
    """Convert an OrderRecord into the export template dictionary."""

    return {
        "Date": order.date,
        "Time": order.time,
        "Phone Number": order.phone,
        "Customer Name": order.customer_name,
        "House Number": order.house_number,
        "Product": order.product,
        "Quantity": _format_number(order.quantity),
        "Unit": order.unit,
        "Price per Unit": _format_number(order.price_per_unit),
        "Amount": _format_number(order.amount),
    }


def orders_to_template_rows(orders: Iterable[OrderRecord]) -> List[Dict[str, str]]:
    """Convert an iterable of OrderRecord objects into template-aligned rows."""

    return [order_to_template_row(order) for order in orders]


def default_export_name(today: date | None = None) -> str:
    """Return the dated CSV file name, e.g. ``whatsapp_orders_2025-07-07.csv``."""

    return f"whatsapp_orders_{(today or date.today()).isoformat()}.csv"
