"""
Cart History — bounded undo/redo over immutable cart snapshots.

Корзина (aggregate) мутируется клиентом, CartHistory (caretaker) хранит
снапшоты в двух стеках и восстанавливает корзину при undo/redo.
"""

from cart_history.core.domain import CartSnapshot, LineItem
from cart_history.core.domain.cart import Cart
from cart_history.core.results import (
    CartOperationResult,
    HistoryResult,
    OperationStatus,
)
from cart_history.history import CartHistory, HistoryConfig, InvalidHistoryCapacity
from cart_history.session import CartSession

__all__ = [
    "Cart",
    "CartHistory",
    "CartOperationResult",
    "CartSession",
    "CartSnapshot",
    "HistoryConfig",
    "HistoryResult",
    "InvalidHistoryCapacity",
    "LineItem",
    "OperationStatus",
]
