"""Product detection, quantity resolution, and unit normalization."""
import pytest

from order_parser.core.models import ProductMatch
from order_parser.extraction.products import (
    extract_each_product,
    extract_products,
    extract_shared_quantity,
    normalize_unit,
    resolve_quantity,
)
from order_parser.extraction.registry import (
    AVOCADO,
    CARDAMOM,
    DRAGON_FRUIT,
    PRODUCT_REGISTRY,
    find_product,
)


def test_registry_holds_five_canonical_products():
    assert [product.name for product in PRODUCT_REGISTRY] == [
        "Ginger Tea",
        "Masala Tea",
        "Avocado",
        "Dragon Fruit",
        "Cardamom",
    ]
    assert find_product("  dragon   FRUIT ") is DRAGON_FRUIT
    assert find_product("Tomatoes") is None


def test_product_aliases_are_recognised():
    assert AVOCADO.matches("2 avacado please")
    assert AVOCADO.matches("Avokado 3")
    assert find_product("Masala Tea").matches("masala chai 100 gm")
    assert DRAGON_FRUIT.matches("dragon 2 kg")
    assert not DRAGON_FRUIT.matches("dragonfly")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("gm", "gm"),
        ("gms", "gm"),
        ("g", "gm"),
        ("GM", "gm"),
        ("kg", "kg"),
        ("piece", "pieces"),
        ("pcs", "pieces"),
        ("pieces", "pieces"),
    ],
)
def test_unit_spellings_normalize(raw, expected):
    assert normalize_unit(raw, "Cardamom") == expected


def test_missing_unit_defaults_per_product():
    assert normalize_unit(None, "Avocado") == "pieces"
    assert normalize_unit("", "Cardamom") == "gm"
    assert normalize_unit(None, "Dragon Fruit") == "gm"


def test_quantity_after_product():
    assert resolve_quantity(CARDAMOM, "Cardamom 100 gm") == ProductMatch("Cardamom", 100, "gm")
    assert resolve_quantity(CARDAMOM, "Cardamom - 50g") == ProductMatch("Cardamom", 50, "gm")


def test_quantity_before_product():
    assert resolve_quantity(CARDAMOM, "200 gms of cardamom") == ProductMatch("Cardamom", 200, "gm")
    assert resolve_quantity(AVOCADO, "3 avocado") == ProductMatch("Avocado", 3, "pieces")
    assert resolve_quantity(DRAGON_FRUIT, "1.5 kg dragon fruit") == ProductMatch(
        "Dragon Fruit", 1.5, "kg"
    )


def test_bare_dragon_quantity_rules():
    assert resolve_quantity(DRAGON_FRUIT, "Dragon 2 kg") == ProductMatch("Dragon Fruit", 2, "kg")
    assert resolve_quantity(DRAGON_FRUIT, "2kg dragon") == ProductMatch("Dragon Fruit", 2, "kg")


def test_avocado_pieces_anywhere_in_content():
    assert resolve_quantity(AVOCADO, "avocado please, 3 pcs") == ProductMatch("Avocado", 3, "pieces")


def test_unresolved_quantity_returns_none():
    assert resolve_quantity(CARDAMOM, "some cardamom please") is None
    assert resolve_quantity(CARDAMOM, "cardamom 0 gm") is None


def test_oversized_quantities_are_not_orders():
    huge = "9" * 400

    assert resolve_quantity(CARDAMOM, f"Cardamom {huge} gm") is None
    assert resolve_quantity(AVOCADO, "avocado please " + "1" * 5000 + " pcs") is None


def test_default_unit_when_no_unit_token():
    assert resolve_quantity(AVOCADO, "Avocado 4") == ProductMatch("Avocado", 4, "pieces")
    assert resolve_quantity(CARDAMOM, "Cardamom 50") == ProductMatch("Cardamom", 50, "gm")


def test_shared_quantity_applies_one_kg_to_each_phrase():
    assert extract_products("Avocado and Dragon fruit one kg each") == [
        ProductMatch("Avocado", 1, "kg"),
        ProductMatch("Dragon Fruit", 1, "kg"),
    ]


def test_shared_quantity_accepts_bare_dragon():
    assert extract_shared_quantity("avocado and dragon one kg each") == [
        ProductMatch("Avocado", 1, "kg"),
        ProductMatch("Dragon Fruit", 1, "kg"),
    ]


def test_shared_quantity_keeps_duplicates():
    assert extract_shared_quantity("Avocado and avacado one kg each") == [
        ProductMatch("Avocado", 1, "kg"),
        ProductMatch("Avocado", 1, "kg"),
    ]


def test_shared_quantity_without_known_products_yields_nothing():
    assert extract_products("Tomatoes and onions one kg each") == []


def test_shared_quantity_absent_returns_none():
    assert extract_shared_quantity("Avocado 2 and Dragon 1 kg") is None


def test_shared_quantity_scales_to_long_messages():
    words = " and ".join(f"item{index}" for index in range(3000))

    assert extract_shared_quantity(words) is None
    assert extract_shared_quantity(f"avocado and {words} one kg each") == [
        ProductMatch("Avocado", 1, "kg"),
    ]


def test_shared_quantity_splits_on_the_first_and():
    assert extract_shared_quantity("cardamom and ginger tea and masala tea... one kg each") == [
        ProductMatch("Ginger Tea", 1, "kg"),
        ProductMatch("Masala Tea", 1, "kg"),
        ProductMatch("Cardamom", 1, "kg"),
    ]


def test_each_product_mode_reads_every_product():
    assert extract_products("Ginger tea 250 gm and masala tea 250gm") == [
        ProductMatch("Ginger Tea", 250, "gm"),
        ProductMatch("Masala Tea", 250, "gm"),
    ]


def test_each_product_mode_dedups_by_name():
    assert extract_each_product("Ginger tea 250 gm, ginger tea 100 gm") == [
        ProductMatch("Ginger Tea", 250, "gm"),
    ]


def test_product_without_quantity_is_skipped_not_the_message():
    assert extract_products("Ginger tea 250 gm and cardamom") == [
        ProductMatch("Ginger Tea", 250, "gm"),
    ]


def test_unknown_products_are_ignored():
    assert extract_products("Tomatoes 2 kg") == []
