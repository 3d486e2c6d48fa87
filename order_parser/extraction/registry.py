"""Canonical products recognised by the fallback extractor."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

# Quantity patterns embed ``source`` inside larger expressions, so every
# source must stay free of capturing groups and top-level alternation.
# ``quantity_sources`` are complete patterns with ``quantity`` and ``unit``
# groups, tried after the generic quantity rules.


@dataclass(frozen=True)
class ProductDefinition:
    """A canonical product name plus the expressions that recognise it."""

    name: str
    source: str
    alias_sources: Tuple[str, ...] = ()
    quantity_sources: Tuple[str, ...] = ()

    @property
    def pattern(self) -> Pattern[str]:
        return re.compile(self.source, re.IGNORECASE)

    def matches(self, text: str, whole_word_alias: bool = True) -> bool:
        """Return True when the product or one of its aliases appears in ``text``.

        Per-product extraction requires aliases to be whole words; the
        shared-quantity phrases are tested with the bare alias instead.
        """

        if self.pattern.search(text):
            return True
        for alias in self.alias_sources:
            expression = rf"\b{alias}\b" if whole_word_alias else alias
            if re.search(expression, text, re.IGNORECASE):
                return True
        return False


GINGER_TEA = ProductDefinition("Ginger Tea", r"ginger\s*tea")
MASALA_TEA = ProductDefinition("Masala Tea", r"masala\s*(?:tea|chai)")
AVOCADO = ProductDefinition("Avocado", r"(?:avocado|avacado|avokado)")
DRAGON_FRUIT = ProductDefinition(
    "Dragon Fruit",
    r"(?:dragon\s*fruit|dragon\s+(?!fruit))",
    alias_sources=("dragon",),
    quantity_sources=(
        r"(?P<quantity>\d+(?:\.\d+)?)\s*(?:(?P<unit>kg|gms|gm|g)\b)?\s*dragon\b",
        r"dragon\s*fruit?\s*(?P<quantity>\d+(?:\.\d+)?)\s*(?:(?P<unit>kg|gms|gm|g)\b)?",
    ),
)
CARDAMOM = ProductDefinition("Cardamom", r"cardamom")

PRODUCT_REGISTRY: Tuple[ProductDefinition, ...] = (
    GINGER_TEA,
    MASALA_TEA,
    AVOCADO,
    DRAGON_FRUIT,
    CARDAMOM,
)

PRODUCT_NAMES = frozenset(product.name for product in PRODUCT_REGISTRY)

# Products counted rather than weighed when no unit is given.
COUNTED_PRODUCTS = frozenset({AVOCADO.name})


def find_product(name: str) -> ProductDefinition | None:
    """Look up a definition by canonical name, ignoring case and spacing."""

    wanted = " ".join(name.split()).casefold()
    for product in PRODUCT_REGISTRY:
        if product.name.casefold() == wanted:
            return product
    return None
