"""
Тесты для Cart (aggregate)

Coverage:
- add / remove / clear и инварианты количества
- Ошибки как значения (NOT_FOUND, INVALID_ARGUMENT) без изменения состояния
- Изоляция снапшотов от последующих изменений
- restore из снапшота
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from cart_history.core.domain.cart import Cart
from cart_history.core.results import OperationStatus


FIXED_TIME = datetime(2024, 5, 1, 9, 30, 15, tzinfo=timezone.utc)


@pytest.fixture
def cart() -> Cart:
    return Cart(clock=lambda: FIXED_TIME)


@pytest.fixture
def filled_cart(cart) -> Cart:
    cart.add(1, "Apple", 2, Decimal("10"))
    cart.add(2, "Pear", 1, Decimal("5"))
    return cart


def quantities(cart: Cart) -> dict[int, int]:
    return {item.product_id: item.quantity for item in cart.items()}


class TestCartAdd:
    """Тесты добавления товаров."""

    def test_add_new_item(self, cart):
        result = cart.add(1, "Apple", 2, Decimal("10"))

        assert result.success
        assert result.status == OperationStatus.OK
        assert result.product_id == 1
        assert cart.entry_count == 1
        assert cart.get(1).quantity == 2

    def test_add_existing_item_merges_quantity(self, filled_cart):
        """Повторное добавление увеличивает количество, дубликата нет."""
        result = filled_cart.add(1, "Apple", 3, Decimal("10"))

        assert result.success
        assert filled_cart.entry_count == 2
        assert filled_cart.get(1).quantity == 5

    def test_add_existing_keeps_original_name_and_price(self, filled_cart):
        filled_cart.add(1, "Green apple", 1, Decimal("99"))

        item = filled_cart.get(1)
        assert item.name == "Apple"
        assert item.unit_price == Decimal("10")

    @pytest.mark.parametrize("quantity", [0, -1, -100])
    def test_add_non_positive_quantity_rejected(self, filled_cart, quantity):
        before = filled_cart.items()

        result = filled_cart.add(1, "Apple", quantity, Decimal("10"))

        assert not result.success
        assert result.status == OperationStatus.INVALID_ARGUMENT
        assert filled_cart.items() == before

    def test_add_invalid_price_rejected(self, cart):
        result = cart.add(3, "Broken", 1, Decimal("-1"))

        assert result.status == OperationStatus.INVALID_ARGUMENT
        assert cart.is_empty()

    def test_add_empty_name_rejected(self, cart):
        result = cart.add(3, "", 1, Decimal("1"))

    def test_add_fractional_quantity_rejected_for_new_item(self, cart):
        result = cart.add(1, "Apple", 2.5, Decimal("1"))

        assert result.status == OperationStatus.INVALID_ARGUMENT
        assert cart.is_empty()

    def test_add_fractional_quantity_rejected_for_existing_item(self, filled_cart):
        """Ошибка при слиянии количества возвращается как значение."""
        before = filled_cart.items()

        result = filled_cart.add(1, "Apple", 2.5, Decimal("10"))

        assert not result.success
        assert result.status == OperationStatus.INVALID_ARGUMENT
        assert filled_cart.items() == before

        assert result.status == OperationStatus.INVALID_ARGUMENT
        assert cart.is_empty()

    def test_insertion_order_preserved(self, cart):
        cart.add(3, "C", 1, Decimal("1"))
        cart.add(1, "A", 1, Decimal("1"))
        cart.add(2, "B", 1, Decimal("1"))
        cart.add(3, "C", 1, Decimal("1"))

        assert [item.product_id for item in cart.items()] == [3, 1, 2]


class TestCartRemove:
    """Тесты удаления товаров."""

    def test_remove_unknown_reports_not_found(self, filled_cart):
        before = filled_cart.items()

        result = filled_cart.remove(42, 1)

        assert not result.success
        assert result.status == OperationStatus.NOT_FOUND
        assert filled_cart.items() == before

    def test_partial_remove_decrements(self, filled_cart):
        filled_cart.add(1, "Apple", 3, Decimal("10"))

        result = filled_cart.remove(1, 2)

        assert result.success
        assert filled_cart.get(1).quantity == 3

    @pytest.mark.parametrize("quantity_to_remove", [0, -5, 2, 10])
    def test_remove_deletes_entry(self, filled_cart, quantity_to_remove):
        """q <= 0 или q >= текущего количества удаляет позицию целиком."""
        result = filled_cart.remove(1, quantity_to_remove)

        assert result.success
        assert filled_cart.get(1) is None
        assert quantities(filled_cart) == {2: 1}

    def test_remove_default_deletes_entry(self, filled_cart):
        filled_cart.remove(2)
        assert quantities(filled_cart) == {1: 2}


class TestCartTotals:
    """Тесты производных значений."""

    def test_empty_cart(self, cart):
        assert cart.total_price == Decimal("0")
        assert cart.total_quantity == 0
        assert cart.entry_count == 0
        assert cart.is_empty()

    def test_totals(self, filled_cart):
        filled_cart.add(3, "Plum", 4, Decimal("0.25"))

        assert filled_cart.total_price == Decimal("26.00")
        assert filled_cart.total_quantity == 7
        assert filled_cart.entry_count == 3
        assert len(filled_cart) == 3

    def test_clear(self, filled_cart):
        result = filled_cart.clear()

        assert result.success
        assert filled_cart.is_empty()


class TestCartSnapshotRestore:
    """Тесты snapshot/restore."""

    def test_snapshot_isolated_from_later_add(self, filled_cart):
        snapshot = filled_cart.snapshot()
        expected = list(filled_cart.items())

        filled_cart.add(1, "Apple", 5, Decimal("10"))
        filled_cart.add(3, "Plum", 1, Decimal("1"))

        assert snapshot.entries() == expected

    def test_snapshot_isolated_from_remove_and_clear(self, filled_cart):
        snapshot = filled_cart.snapshot()

        filled_cart.remove(1, 1)
        filled_cart.clear()

        assert [(i.product_id, i.quantity) for i in snapshot.entries()] == [(1, 2), (2, 1)]

    def test_snapshot_metadata(self, cart):
        first = cart.snapshot()
        second = cart.snapshot()

        assert first.created_at == FIXED_TIME
        assert second.snapshot_id == first.snapshot_id + 1

    def test_restore_replaces_contents(self, filled_cart):
        snapshot = filled_cart.snapshot()
        filled_cart.clear()
        filled_cart.add(9, "Melon", 1, Decimal("3"))

        result = filled_cart.restore(snapshot)

        assert result.success
        assert quantities(filled_cart) == {1: 2, 2: 1}

    def test_restore_does_not_share_state_with_snapshot(self, filled_cart):
        """После restore изменения корзины не затрагивают снапшот."""
        snapshot = filled_cart.snapshot()
        filled_cart.restore(snapshot)

        filled_cart.add(1, "Apple", 10, Decimal("10"))
        filled_cart.remove(2)

        assert [(i.product_id, i.quantity) for i in snapshot.entries()] == [(1, 2), (2, 1)]

    def test_restore_none_is_invalid_argument(self, filled_cart):
        before = filled_cart.items()

        result = filled_cart.restore(None)

        assert not result.success
        assert result.status == OperationStatus.INVALID_ARGUMENT
        assert filled_cart.items() == before


class TestCartLogging:
    """Тесты логирования операций."""

    def test_rejected_operation_logged_as_warning(self, cart, caplog):
        with caplog.at_level(logging.WARNING, logger="cart_history.core.domain.cart"):
            cart.remove(7)

        assert "not found" in caplog.text

    def test_add_logged_as_info(self, cart, caplog):
        with caplog.at_level(logging.INFO, logger="cart_history.core.domain.cart"):
            cart.add(1, "Apple", 2, Decimal("10"))

        assert "Added 'Apple': 2 pcs" in caplog.text
