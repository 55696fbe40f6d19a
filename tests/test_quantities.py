"""
Tests for basket quantity aggregation and cost cache signatures.
"""
import pytest

from shipcost.modules.shipping.base import Order, OrderProduct
from shipcost.services.quantities import get_quantities, quantities_signature


class TestGetQuantities:

    def test_bundle_is_flattened(self, sample_order):
        """Bundled products count under their own code."""
        assert get_quantities(sample_order) == {"A": 2, "B": 3}

    def test_repeated_codes_accumulate(self):
        order = Order(products=[
            OrderProduct("A", 1),
            OrderProduct("C", 2, products=[OrderProduct("A", 4)]),
            OrderProduct("A", 0.5),
        ])

        assert get_quantities(order) == {"A": 5.5, "C": 2}

    def test_only_direct_bundle_children_are_counted(self):
        nested = OrderProduct("B", 3, products=[OrderProduct("X", 10)])
        order = Order(products=[OrderProduct("A", 1, products=[nested])])

        assert get_quantities(order) == {"A": 1, "B": 3}

    def test_empty_basket(self):
        assert get_quantities(Order()) == {}

    def test_order_is_not_modified(self, sample_order):
        get_quantities(sample_order)
        get_quantities(sample_order)

        assert sample_order.products[0].quantity == 2
        assert sample_order.products[0].products[0].quantity == 3


class TestQuantitiesSignature:

    @pytest.mark.parametrize(
        "first, second",
        [
            ({"A": 2, "B": 3}, {"B": 3, "A": 2}),
            ({"x": 1, "y": 2, "z": 3}, {"z": 3, "x": 1, "y": 2}),
            ({"A": 2}, {"A": 2.0}),
            ({}, {}),
        ],
    )
    def test_same_content_same_signature(self, first, second):
        assert quantities_signature(first) == quantities_signature(second)

    @pytest.mark.parametrize(
        "first, second",
        [
            ({"A": 2, "B": 3}, {"A": 3, "B": 2}),
            ({"A": 2}, {"A": 2, "B": 1}),
            ({"A": 1}, {"B": 1}),
        ],
    )
    def test_different_content_different_signature(self, first, second):
        assert quantities_signature(first) != quantities_signature(second)

    def test_signature_is_md5_hex(self):
        signature = quantities_signature({"A": 1})

        assert len(signature) == 32
        int(signature, 16)

    def test_baskets_with_reordered_items_share_signature(self):
        first = Order(products=[OrderProduct("A", 1), OrderProduct("B", 2)])
        second = Order(products=[OrderProduct("B", 2), OrderProduct("A", 1)])

        assert quantities_signature(get_quantities(first)) == quantities_signature(get_quantities(second))
