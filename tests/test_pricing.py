"""Currency conversion and store name lookup."""

import pytest

from utils.currency import format_price, to_display
from utils.stores import UNKNOWN_STORE, store_name_for


def test_to_display_uses_fixed_rate():
    assert to_display(100) == 85
    assert to_display(0) == 0


def test_to_display_does_not_round():
    assert to_display(15) == pytest.approx(12.75)
    assert to_display(0.99) == pytest.approx(0.8415)


def test_format_price_rounds_to_cents():
    assert format_price(15) == "€12.75"
    assert format_price(0.99) == "€0.84"
    assert format_price(0) == "€0.00"


@pytest.mark.parametrize("store_id, name", [("1", "Steam"), (1, "Steam"), ("7", "GOG"), (7, "GOG")])
def test_known_stores(store_id, name):
    assert store_name_for(store_id) == name


@pytest.mark.parametrize("store_id", ["2", "11", "", None, "steam", 70, "01"])
def test_unknown_store_ids(store_id):
    assert store_name_for(store_id) == UNKNOWN_STORE
