"""Export destinations for parsed order rows."""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Dict, Iterable, List

from openpyxl import Workbook

from order_parser.reporting.templates import TEMPLATE_HEADERS


def ensure_output_dir(output_path: Path) -> None:
    """Create parent folders for sink outputs when missing."""

    output_path.parent.mkdir(parents=True, exist_ok=True)


def render_csv(rows: Iterable[Dict[str, Any]]) -> str:
    """Render rows as CSV text: a bare header line, then fully quoted rows."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow([row.get(header, "") for header in TEMPLATE_HEADERS])
    body = buffer.getvalue().rstrip("\n")
    header = ",".join(TEMPLATE_HEADERS)
    return f"{header}\n{body}" if body else header


def write_csv(rows: Iterable[Dict[str, Any]], output_path: Path) -> None:
    """Write order rows to a CSV file with the fixed ten-column header."""

    ensure_output_dir(output_path)
    output_path.write_text(render_csv(rows), encoding="utf-8")


def write_excel(rows: Iterable[Dict[str, Any]], output_path: Path) -> None:
    """Write rows to an Excel workbook using openpyxl."""

    ensure_output_dir(output_path)
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "orders"
    sheet.append(TEMPLATE_HEADERS)
    for row in rows:
        sheet.append([row.get(header, "") for header in TEMPLATE_HEADERS])
    workbook.save(output_path)


def push_to_google_sheets(
    rows: Iterable[Dict[str, Any]],
    spreadsheet_id: str,
    worksheet_title: str = "Sheet1",
    service_account_path: Path | None = None,
) -> None:
    """Replace a Google Sheets worksheet with the order rows using a service account."""

    rows = list(rows)
    if not rows:
        return

    try:
        import gspread
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise ImportError("gspread is required for Google Sheets sinks; install order-parser[sheets]") from exc

    client = (
        gspread.service_account(filename=str(service_account_path))
        if service_account_path
        else gspread.service_account()
    )
    worksheet = client.open_by_key(spreadsheet_id).worksheet(worksheet_title)
    worksheet.clear()
    values: List[List[Any]] = [list(TEMPLATE_HEADERS)]
    values.extend([row.get(header, "") for header in TEMPLATE_HEADERS] for row in rows)
    worksheet.append_rows(values)
