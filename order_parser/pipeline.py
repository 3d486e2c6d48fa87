"""Pipeline orchestration: chat export in, order table out."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from order_parser.core.quality import apply_quality_checks
from order_parser.core.utils import load_env_file, read_text
from order_parser.processing.orders import parse_orders
from order_parser.reporting.sinks import push_to_google_sheets, write_csv, write_excel
from order_parser.reporting.templates import orders_to_template_rows

DEFAULT_SERVICE_ACCOUNT_PATHS = [
    Path("secrets/service_account.json"),
    Path("credentials/service_account.json"),
]
DEFAULT_SHEETS_ENV_FILE = Path("secrets/sheets.env")
_SHEETS_ENV_LOADED = False

logger = logging.getLogger(__name__)


def _ensure_sheets_env() -> None:
    """Populate Google Sheets env vars from secrets/sheets.env."""

    global _SHEETS_ENV_LOADED
    if _SHEETS_ENV_LOADED:
        return
    _SHEETS_ENV_LOADED = True

    env_path = Path(os.getenv("GOOGLE_SHEETS_ENV_FILE", DEFAULT_SHEETS_ENV_FILE))
    load_env_file(env_path)


def _default_service_account_path() -> Optional[Path]:
    for candidate in DEFAULT_SERVICE_ACCOUNT_PATHS:
        if candidate.exists():
            return candidate
    return None


def resolve_sheets_target(
    spreadsheet_id: Optional[str],
    worksheet_title: Optional[str],
    explicit_account_path: Optional[Path],
) -> Dict[str, Any]:
    """Combine CLI arguments with GOOGLE_SHEETS_* settings into a push target."""

    _ensure_sheets_env()
    spreadsheet_id = spreadsheet_id or os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID")
    if not spreadsheet_id:
        raise ValueError("spreadsheet_id is required when sink='sheets'")

    account_env = os.getenv("GOOGLE_SHEETS_SERVICE_ACCOUNT")
    account_path = (
        explicit_account_path
        or (Path(account_env) if account_env else None)
        or _default_service_account_path()
    )
    if not account_path:
        raise ValueError(
            "Provide --service-account pointing to your Google credentials or place a file at "
            f"{DEFAULT_SERVICE_ACCOUNT_PATHS[0]}"
        )

    return {
        "spreadsheet_id": spreadsheet_id,
        "worksheet_title": worksheet_title or os.getenv("GOOGLE_SHEETS_WORKSHEET", "Sheet1"),
        "service_account_path": account_path,
    }


def run_pipeline(
    input_path: Path,
    output_path: Path,
    sink: str = "csv",
    use_ai: Optional[bool] = None,
    custom_prompt: Optional[str] = None,
    spreadsheet_id: Optional[str] = None,
    worksheet_title: Optional[str] = None,
    service_account_path: Optional[Path] = None,
    excel_path: Optional[Path] = None,
) -> Path:
    """Parse a chat export, flag incomplete orders, and write the order table."""

    logger.info("Pipeline starting for %s", input_path)
    text = read_text(input_path)
    if not text.strip():
        message = f"No chat text found in {input_path}. Paste the exported messages into the file."
        logger.error(message)
        raise ValueError(message)

    result = parse_orders(text, use_ai=use_ai, custom_prompt=custom_prompt)
    if result.error:
        logger.warning("Remote parser unavailable: %s", result.error)
    logger.info("Parsed %d orders using the %s parser", len(result.orders), result.source)

    reviewed = apply_quality_checks(result.orders)
    flagged = sum(1 for _, issues in reviewed if issues)
    if flagged:
        logger.warning("%d of %d orders need review", flagged, len(reviewed))

    rows: List[Dict[str, Any]] = orders_to_template_rows(result.orders)
    write_csv(rows, output_path)
    logger.info("Wrote CSV output to %s", output_path)

    if sink == "excel":
        excel_target = excel_path or output_path.with_suffix(".xlsx")
        write_excel(rows, excel_target)
        logger.info("Wrote Excel output to %s", excel_target)
    elif sink == "sheets":
        target = resolve_sheets_target(spreadsheet_id, worksheet_title, service_account_path)
        push_to_google_sheets(rows, **target)
        logger.info(
            "Pushed %d rows to Google Sheets document %s (worksheet %s)",
            len(rows),
            target["spreadsheet_id"],
            target["worksheet_title"],
        )
    return output_path
