"""
CartSession — владелец корзины и её истории для одного пользователя.

Корзина и история создаются в одном месте и передаются явно; глобальных
экземпляров нет. Сессия сохраняет снапшот после каждого успешного
изменения корзины.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from cart_history.core.domain.cart import Cart
from cart_history.core.results import CartOperationResult, HistoryResult
from cart_history.history import CartHistory, HistoryConfig

logger = logging.getLogger(__name__)


class CartSession:
    """
    Сессия работы с корзиной.

    При создании сохраняет базовый снапшот (пустая корзина).
    Неуспешные изменения (нет товара, неверный аргумент) в историю не попадают.
    """

    def __init__(
        self,
        capacity: Optional[int] = None,
        config: Optional[HistoryConfig] = None,
        cart: Optional[Cart] = None,
    ):
        """
        Args:
            capacity: ёмкость истории (см. CartHistory)
            config: конфигурация истории
            cart: корзина (default: новая пустая)
        """
        self.cart = cart if cart is not None else Cart()
        self.history = CartHistory(capacity=capacity, config=config)
        self.history.save(self.cart)

    def add(
        self, product_id: int, name: str, quantity: int, unit_price: Decimal
    ) -> CartOperationResult:
        result = self.cart.add(product_id, name, quantity, unit_price)
        self._commit(result)
        return result

    def remove(self, product_id: int, quantity_to_remove: int = 0) -> CartOperationResult:
        result = self.cart.remove(product_id, quantity_to_remove)
        self._commit(result)
        return result

    def clear_cart(self) -> CartOperationResult:
        result = self.cart.clear()
        self._commit(result)
        return result

    def undo(self) -> HistoryResult:
        return self.history.undo(self.cart)

    def redo(self) -> HistoryResult:
        return self.history.redo(self.cart)

    def clear_history(self) -> HistoryResult:
        """
        Очистка истории с новым базовым снапшотом текущего состояния корзины.
        """
        self.history.clear_history()
        result = self.history.save(self.cart)
        return replace(
            result,
            details=f"Change history cleared, baseline is cart state #{result.snapshot_id}",
        )

    def _commit(self, result: CartOperationResult) -> None:
        if not result.success:
            logger.debug("Skipping history save after failed operation: %s", result.status.value)
            return
        self.history.save(self.cart)
