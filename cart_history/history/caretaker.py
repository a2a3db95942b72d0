"""CartHistory — управление историей состояний корзины (caretaker).

Два стека снапшотов:
- undo: достижимые прошлые состояния, вершина — текущее состояние
- redo: состояния, отменённые через undo, доступные до следующего save

Правила:
- save кладёт новый снапшот в undo и очищает redo
- При заполнении undo до capacity вытесняется самый старый снапшот (дно стека)
- undo никогда не снимает последний (базовый) снапшот
- undo и redo взаимно обратны, пока между ними нет save
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from cart_history.core.domain import CartSnapshot
from cart_history.core.domain.cart import Cart
from cart_history.core.results import HistoryResult, OperationStatus

logger = logging.getLogger(__name__)


class InvalidHistoryCapacity(ValueError):
    """Ёмкость истории должна быть положительным целым числом."""
    pass


@dataclass(frozen=True)
class HistoryConfig:
    """Конфигурация истории.

    capacity — максимальное число снапшотов в undo стеке.
    """
    capacity: int = 10


class CartHistory:
    """Caretaker: хранит снапшоты корзины и выполняет save/undo/redo.

    Undo стек хранится в deque: вытеснение самого старого снапшота и
    push/pop на вершине выполняются за O(1). Корзина меняется только
    через Cart.restore.
    """

    def __init__(
        self,
        capacity: Optional[int] = None,
        config: Optional[HistoryConfig] = None
    ):
        """
        Args:
            capacity: максимальный размер undo стека (имеет приоритет над config)
            config: конфигурация истории (default HistoryConfig())

        Raises:
            InvalidHistoryCapacity: если capacity не положительное целое
        """
        self.config = config or HistoryConfig()
        resolved = self.config.capacity if capacity is None else capacity

        if isinstance(resolved, bool) or not isinstance(resolved, int) or resolved <= 0:
            raise InvalidHistoryCapacity(
                f"capacity must be a positive integer, got {resolved!r}"
            )

        self._capacity = resolved

        # Левый конец — дно (самый старый), правый — вершина (текущий)
        self._undo: Deque[CartSnapshot] = deque()
        self._redo: List[CartSnapshot] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def save(self, cart: Cart) -> HistoryResult:
        """Сохранение текущего состояния корзины.

        Если undo стек заполнен, вытесняется самый старый снапшот,
        порядок остальных сохраняется. Redo стек очищается всегда.

        Args:
            cart: корзина, состояние которой сохраняется

        Returns:
            HistoryResult с флагом evicted
        """
        snapshot = cart.snapshot()

        evicted = False
        if len(self._undo) >= self._capacity:
            dropped = self._undo.popleft()
            evicted = True
            logger.info(
                "History limit %d reached, dropped oldest state #%d",
                self._capacity,
                dropped.snapshot_id,
            )

        self._undo.append(snapshot)

        discarded = len(self._redo)
        self._redo.clear()
        if discarded:
            logger.debug("Discarded %d redo state(s) after new save", discarded)

        return self._create_result(
            status=OperationStatus.OK,
            snapshot_id=snapshot.snapshot_id,
            evicted=evicted,
            details=f"Saved cart state #{snapshot.snapshot_id} ({snapshot.item_count} items)"
        )

    def undo(self, cart: Cart) -> HistoryResult:
        """Отмена последнего сохранённого изменения.

        Текущее состояние (вершина undo) переходит в redo, корзина
        восстанавливается из нового вершинного снапшота. Базовый снапшот
        не снимается: при одном снапшоте в стеке операция ничего не делает.

        Returns:
            HistoryResult (EMPTY_HISTORY если отменять нечего)
        """
        if len(self._undo) <= 1:
            logger.warning("Cannot undo: change history is empty")
            return self._create_result(
                status=OperationStatus.EMPTY_HISTORY,
                snapshot_id=None,
                evicted=False,
                details="Cannot undo: change history is empty"
            )

        abandoned = self._undo.pop()
        self._redo.append(abandoned)

        previous = self._undo[-1]
        cart.restore(previous)

        return self._create_result(
            status=OperationStatus.OK,
            snapshot_id=previous.snapshot_id,
            evicted=False,
            details=f"Undo: restored cart state #{previous.snapshot_id}"
        )

    def redo(self, cart: Cart) -> HistoryResult:
        """Повтор последнего отменённого изменения.

        Returns:
            HistoryResult (EMPTY_REDO если повторять нечего)
        """
        if not self._redo:
            logger.warning("Cannot redo: no undone changes")
            return self._create_result(
                status=OperationStatus.EMPTY_REDO,
                snapshot_id=None,
                evicted=False,
                details="Cannot redo: no undone changes"
            )

        snapshot = self._redo.pop()
        self._undo.append(snapshot)
        cart.restore(snapshot)

        return self._create_result(
            status=OperationStatus.OK,
            snapshot_id=snapshot.snapshot_id,
            evicted=False,
            details=f"Redo: restored cart state #{snapshot.snapshot_id}"
        )

    def clear_history(self) -> None:
        """Очистка обоих стеков.

        После очистки undo невозможен до следующего save (нового базового снапшота).
        """
        self._undo.clear()
        self._redo.clear()
        logger.info("Change history cleared")

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def history_depth(self) -> int:
        return len(self._undo)

    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return len(self._undo) > 1

    def can_redo(self) -> bool:
        return bool(self._redo)

    def current(self) -> Optional[CartSnapshot]:
        """Текущий снапшот (вершина undo стека)."""
        return self._undo[-1] if self._undo else None

    def snapshots(self) -> tuple[CartSnapshot, ...]:
        """Undo стек от самого старого к текущему."""
        return tuple(self._undo)

    def _create_result(
        self,
        status: OperationStatus,
        snapshot_id: Optional[int],
        evicted: bool,
        details: str
    ) -> HistoryResult:
        """Создание результата операции."""
        return HistoryResult(
            success=status == OperationStatus.OK,
            status=status,
            undo_depth=len(self._undo),
            redo_depth=len(self._redo),
            snapshot_id=snapshot_id,
            evicted=evicted,
            details=details
        )
