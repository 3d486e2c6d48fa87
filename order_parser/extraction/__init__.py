"""Deterministic fallback extractor for pasted chat orders."""
from order_parser.extraction.assembler import assemble, normalize_phone
from order_parser.extraction.fallback import parse, parse_message, parse_with_report
from order_parser.extraction.fields import extract_house_number, extract_name
from order_parser.extraction.products import extract_products, normalize_unit
from order_parser.extraction.registry import PRODUCT_REGISTRY, ProductDefinition
from order_parser.extraction.sanitizer import sanitize
from order_parser.extraction.segmenter import iter_messages, segment

__all__ = [
    "PRODUCT_REGISTRY",
    "ProductDefinition",
    "assemble",
    "extract_house_number",
    "extract_name",
    "extract_products",
    "iter_messages",
    "normalize_phone",
    "normalize_unit",
    "parse",
    "parse_message",
    "parse_with_report",
    "sanitize",
    "segment",
]
