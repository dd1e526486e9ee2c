"""Unit tests for display-order helpers."""

import pytest

from dpf_cms.core.ordering import next_available_order, next_order_at_end


class TestNextAvailableOrder:
    @pytest.mark.parametrize(
        "used, expected",
        [
            ([], 0),
            ([0, 1, 2], 3),
            ([1, 2], 0),
            ([0, 2, 3], 1),
            ([None, 0, -1], 1),
        ],
    )
    def test_lowest_free_slot(self, used, expected):
        assert next_available_order(used) == expected

    def test_accepts_generators(self):
        assert next_available_order(i for i in range(4)) == 4


class TestNextOrderAtEnd:
    def test_empty_group_starts_at_zero(self):
        assert next_order_at_end([]) == 0
        assert next_order_at_end([None]) == 0

    def test_one_past_highest(self):
        assert next_order_at_end([3, 0, 7]) == 8
