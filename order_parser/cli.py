"""Command line entry point for turning a chat export into an order table."""
import argparse
from pathlib import Path

from order_parser.core.logging import configure_logging
from order_parser.pipeline import run_pipeline
from order_parser.reporting.templates import default_export_name


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI entry point."""

    parser = argparse.ArgumentParser(description="Extract orders from pasted WhatsApp chat text")
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Text file holding the pasted chat messages",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("output") / default_export_name(),
        help="CSV file to write parsed orders to",
    )
    parser.add_argument(
        "--sink",
        choices=["csv", "sheets", "excel"],
        default="csv",
        help="Where to forward parsed rows after writing the CSV",
    )
    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Skip the hosted model and use the local parser only",
    )
    parser.add_argument(
        "--prompt",
        help="Additional instructions appended to the model's system prompt",
    )
    parser.add_argument(
        "--spreadsheet-id",
        help="Google Sheets spreadsheet ID for the sheets sink",
    )
    parser.add_argument(
        "--worksheet",
        help="Worksheet title inside the Google Sheets document",
    )
    parser.add_argument(
        "--service-account",
        type=Path,
        help="Path to a Google service account JSON key used for Sheets pushes",
    )
    parser.add_argument(
        "--excel-output",
        type=Path,
        help="Excel file to write when --sink=excel (defaults to the CSV path with .xlsx)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level, overrides LOG_LEVEL",
    )
    return parser


def main() -> None:
    """Entrypoint for running the pipeline from the command line."""

    args = build_parser().parse_args()
    configure_logging(args.log_level)
    output_path = run_pipeline(
        args.input,
        args.output,
        sink=args.sink,
        use_ai=False if args.no_ai else None,
        custom_prompt=args.prompt,
        spreadsheet_id=args.spreadsheet_id,
        worksheet_title=args.worksheet,
        service_account_path=args.service_account,
        excel_path=args.excel_output,
    )
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
