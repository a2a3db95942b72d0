"""
Результаты операций над корзиной и историей.

Все ожидаемые ошибки (нет товара, неверный аргумент, пустая история)
возвращаются как значения, а не исключения. Неуспешная операция
никогда не меняет состояние.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OperationStatus(str, Enum):
    """Статус выполнения операции."""

    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    EMPTY_HISTORY = "EMPTY_HISTORY"
    EMPTY_REDO = "EMPTY_REDO"


@dataclass(frozen=True)
class CartOperationResult:
    """Результат операции над корзиной (add/remove/clear/restore)."""

    success: bool
    status: OperationStatus
    product_id: Optional[int]

    # Для отображения пользователю
    details: str

    @classmethod
    def ok(cls, details: str, product_id: Optional[int] = None) -> "CartOperationResult":
        return cls(
            success=True,
            status=OperationStatus.OK,
            product_id=product_id,
            details=details,
        )

    @classmethod
    def failed(
        cls,
        status: OperationStatus,
        details: str,
        product_id: Optional[int] = None,
    ) -> "CartOperationResult":
        return cls(
            success=False,
            status=status,
            product_id=product_id,
            details=details,
        )


@dataclass(frozen=True)
class HistoryResult:
    """Результат операции над историей (save/undo/redo)."""

    success: bool
    status: OperationStatus

    # Глубина стеков после операции
    undo_depth: int
    redo_depth: int

    # Снапшот, ставший текущим (None если операция не выполнена)
    snapshot_id: Optional[int]

    # True если save вытеснил самый старый снапшот
    evicted: bool

    details: str
