"""Detect canonical products in sanitized content and resolve their quantities."""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Sequence, Tuple

from order_parser.core.models import ProductMatch, Quantity
from order_parser.extraction.registry import (
    COUNTED_PRODUCTS,
    PRODUCT_REGISTRY,
    ProductDefinition,
)

logger = logging.getLogger(__name__)

NUMBER_SOURCE = r"(?P<quantity>\d+(?:\.\d+)?)"
# Longest alternatives first.
UNIT_SOURCE = r"(?:(?P<unit>kg|gms|gm|g|pieces|piece|pcs)\b)?"

SHARED_SPLIT_PATTERN = re.compile(r"\s+and\s+", re.IGNORECASE)
SHARED_TAIL_PATTERN = re.compile(r"\s*[….]?\s*one\s+kg\s+each", re.IGNORECASE)
PIECES_PATTERN = re.compile(r"(?P<quantity>\d+)\s*(?:pieces|piece|pcs)", re.IGNORECASE)

UNIT_ALIASES = {
    "g": "gm",
    "gm": "gm",
    "gms": "gm",
    "gram": "gm",
    "grams": "gm",
    "kg": "kg",
    "kgs": "kg",
    "kilo": "kg",
    "kilos": "kg",
    "piece": "pieces",
    "pieces": "pieces",
    "pcs": "pieces",
    "pc": "pieces",
}


@dataclass(frozen=True)
class QuantityRule:
    """Builds the pattern that reads a quantity for one product."""

    label: str
    build: Callable[[ProductDefinition], Sequence[str]]


QUANTITY_RULES: Tuple[QuantityRule, ...] = (
    QuantityRule(
        "quantity before product",
        lambda product: [rf"{NUMBER_SOURCE}\s*{UNIT_SOURCE}\s*(?:of\s+)?(?:{product.source})"],
    ),
    QuantityRule(
        "quantity after product",
        lambda product: [rf"(?:{product.source})\s*[-–]?\s*{NUMBER_SOURCE}\s*{UNIT_SOURCE}"],
    ),
    QuantityRule(
        "quantity directly before product",
        lambda product: [rf"{NUMBER_SOURCE}\s*{UNIT_SOURCE}\s*(?:{product.source})"],
    ),
    QuantityRule("product specific", lambda product: list(product.quantity_sources)),
)


def to_number(raw: str) -> Quantity:
    """Parse a decimal string, keeping whole values as ``int``."""

    value = float(raw)
    return int(value) if value.is_integer() else value


def positive_quantity(raw: str) -> Optional[Quantity]:
    """Parse ``raw`` as a quantity, or None unless it is finite and above zero."""

    quantity = to_number(raw)
    if not math.isfinite(quantity) or quantity <= 0:
        return None
    return quantity


def default_unit(product: str) -> str:
    return "pieces" if product in COUNTED_PRODUCTS else "gm"


def normalize_unit(unit: Optional[str], product: str) -> str:
    """Map unit spellings onto ``gm``, ``kg`` or ``pieces``.

    A missing unit falls back to the product default. Unrecognised spellings
    are returned lower-cased so callers can flag them.
    """

    if not unit or not unit.strip():
        return default_unit(product)
    cleaned = unit.strip().lower()
    return UNIT_ALIASES.get(cleaned, cleaned)


def _compile(source: str) -> Pattern[str]:
    return re.compile(source, re.IGNORECASE)


def resolve_quantity(product: ProductDefinition, content: str) -> Optional[ProductMatch]:
    """Try each quantity rule in order; the first positive quantity wins."""

    for rule in QUANTITY_RULES:
        for source in rule.build(product):
            match = _compile(source).search(content)
            if not match:
                continue
            quantity = positive_quantity(match.group("quantity"))
            if quantity is None:
                continue
            return ProductMatch(
                product=product.name,
                quantity=quantity,
                unit=normalize_unit(match.group("unit"), product.name),
            )

    if product.name in COUNTED_PRODUCTS:
        match = PIECES_PATTERN.search(content)
        quantity = positive_quantity(match.group("quantity")) if match else None
        if quantity is not None:
            return ProductMatch(product=product.name, quantity=quantity, unit="pieces")

    return None


def _shared_phrases(content: str) -> Optional[Tuple[str, str]]:
    """Split "X and Y one kg each" into its two phrases.

    X runs up to the first "and"; Y runs up to the first "one kg each" after it.
    """

    split = SHARED_SPLIT_PATTERN.search(content, 1)
    if not split:
        return None
    tail = SHARED_TAIL_PATTERN.search(content, split.end() + 1)
    if not tail:
        return None
    return content[: split.start()].strip(), content[split.end() : tail.start()].strip()


def extract_shared_quantity(content: str) -> Optional[List[ProductMatch]]:
    """Handle "X and Y one kg each"; None when the construct is absent.

    Each phrase is tested against every product, so a message naming the
    same product on both sides yields two identical matches.
    """

    phrases = _shared_phrases(content)
    if phrases is None:
        return None

    matches: List[ProductMatch] = []
    for product in PRODUCT_REGISTRY:
        for phrase in phrases:
            if product.matches(phrase, whole_word_alias=False):
                matches.append(ProductMatch(product=product.name, quantity=1, unit="kg"))
    return matches


def extract_each_product(content: str) -> List[ProductMatch]:
    """Return at most one match per canonical product found in ``content``."""

    matches: List[ProductMatch] = []
    seen: set[str] = set()
    for product in PRODUCT_REGISTRY:
        if product.name in seen or not product.matches(content):
            continue
        resolved = resolve_quantity(product, content)
        if resolved is None:
            logger.debug("Dropping %s: no quantity found in %r", product.name, content)
            continue
        seen.add(product.name)
        matches.append(resolved)
    return matches


def extract_products(content: str) -> List[ProductMatch]:
    """Shared-quantity mode when it applies, per-product mode otherwise."""

    shared = extract_shared_quantity(content)
    if shared is not None:
        return shared
    return extract_each_product(content)
