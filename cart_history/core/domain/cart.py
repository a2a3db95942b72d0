"""
Cart — Корзина покупок (aggregate)

Мутируемый объект, состояние которого версионируется через CartHistory.

Инварианты:
1. Нет двух позиций с одинаковым product_id
2. Количество в хранимой позиции всегда > 0: уменьшение до 0 удаляет позицию
3. Порядок позиций — порядок добавления
4. Неуспешная операция не меняет состояние

Корзина не делает снапшоты сама: вызывающий код решает, когда
сохранять состояние в историю (несколько изменений можно сохранить одним шагом).
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional

from pydantic import ValidationError

from cart_history.core.results import CartOperationResult, OperationStatus

from .line_item import LineItem
from .snapshot import CartSnapshot

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Cart:
    """
    Корзина: упорядоченная по добавлению коллекция LineItem по product_id.

    Операции возвращают CartOperationResult вместо исключений.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            clock: источник времени для снапшотов (default: текущее время UTC)
        """
        self._clock = clock or _utc_now
        self._items: dict[int, LineItem] = {}
        self._next_snapshot_id = 0

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    def add(
        self,
        product_id: int,
        name: str,
        quantity: int,
        unit_price: Decimal,
    ) -> CartOperationResult:
        """
        Добавление товара.

        Если товар уже есть в корзине, увеличивается его количество
        (name и unit_price существующей позиции не меняются).

        Args:
            product_id: идентификатор товара
            name: название товара
            quantity: добавляемое количество (> 0)
            unit_price: цена за единицу (>= 0)

        Returns:
            CartOperationResult (INVALID_ARGUMENT при quantity <= 0 или
            некорректных полях позиции)
        """
        if quantity <= 0:
            logger.warning(
                "Rejected add of product %s: quantity must be positive, got %s",
                product_id,
                quantity,
            )
            return CartOperationResult.failed(
                OperationStatus.INVALID_ARGUMENT,
                f"Quantity must be positive, got {quantity}",
                product_id=product_id,
            )

        existing = self._items.get(product_id)

        if existing is not None:
            try:
                updated = existing.with_quantity(existing.quantity + quantity)
            except ValidationError as e:
                logger.warning("Rejected add of product %s: %s", product_id, e)
                return CartOperationResult.failed(
                    OperationStatus.INVALID_ARGUMENT,
                    f"Invalid line item: {e.error_count()} validation error(s)",
                    product_id=product_id,
                )
            self._items[product_id] = updated
            logger.info(
                "Updated quantity of '%s': %d pcs", updated.name, updated.quantity
            )
            return CartOperationResult.ok(
                f"Updated quantity of '{updated.name}': {updated.quantity} pcs",
                product_id=product_id,
            )

        try:
            item = LineItem(
                product_id=product_id,
                name=name,
                quantity=quantity,
                unit_price=unit_price,
            )
        except ValidationError as e:
            logger.warning("Rejected add of product %s: %s", product_id, e)
            return CartOperationResult.failed(
                OperationStatus.INVALID_ARGUMENT,
                f"Invalid line item: {e.error_count()} validation error(s)",
                product_id=product_id,
            )

        self._items[product_id] = item
        logger.info("Added '%s': %d pcs", item.name, item.quantity)
        return CartOperationResult.ok(
            f"Added '{item.name}': {item.quantity} pcs", product_id=product_id
        )

    def remove(self, product_id: int, quantity_to_remove: int = 0) -> CartOperationResult:
        """
        Удаление товара.

        quantity_to_remove <= 0 или >= текущего количества удаляет позицию
        целиком, иначе уменьшает количество.

        Args:
            product_id: идентификатор товара
            quantity_to_remove: сколько убрать (0 — убрать всё)

        Returns:
            CartOperationResult (NOT_FOUND если товара нет в корзине)
        """
        existing = self._items.get(product_id)

        if existing is None:
            logger.warning("Product with ID %s not found in cart", product_id)
            return CartOperationResult.failed(
                OperationStatus.NOT_FOUND,
                f"Product with ID {product_id} not found in cart",
                product_id=product_id,
            )

        if quantity_to_remove <= 0 or quantity_to_remove >= existing.quantity:
            del self._items[product_id]
            logger.info("Removed '%s' from cart", existing.name)
            return CartOperationResult.ok(
                f"Removed '{existing.name}' from cart", product_id=product_id
            )

        updated = existing.with_quantity(existing.quantity - quantity_to_remove)
        self._items[product_id] = updated
        logger.info(
            "Decreased quantity of '%s': %d pcs left", updated.name, updated.quantity
        )
        return CartOperationResult.ok(
            f"Decreased quantity of '{updated.name}': {updated.quantity} pcs left",
            product_id=product_id,
        )

    def clear(self) -> CartOperationResult:
        """Полная очистка корзины."""
        self._items.clear()
        logger.info("Cart cleared")
        return CartOperationResult.ok("Cart cleared")

    # -------------------------------------------------------------------------
    # SNAPSHOT / RESTORE
    # -------------------------------------------------------------------------

    def snapshot(self) -> CartSnapshot:
        """
        Снапшот текущего состояния.

        Позиции копируются глубоко: последующие изменения корзины
        не влияют на снапшот.
        """
        snapshot = CartSnapshot(
            snapshot_id=self._next_snapshot_id,
            created_at=self._clock(),
            items=tuple(item.model_copy(deep=True) for item in self._items.values()),
        )
        self._next_snapshot_id += 1

        logger.debug(
            "Saved cart state #%d (%d items)", snapshot.snapshot_id, snapshot.item_count
        )
        return snapshot

    def restore(self, snapshot: Optional[CartSnapshot]) -> CartOperationResult:
        """
        Замена всего содержимого корзины копией позиций снапшота.

        Args:
            snapshot: снапшот для восстановления

        Returns:
            CartOperationResult (INVALID_ARGUMENT если snapshot отсутствует)
        """
        if snapshot is None:
            logger.warning("Cannot restore cart state: snapshot is missing")
            return CartOperationResult.failed(
                OperationStatus.INVALID_ARGUMENT,
                "Cannot restore cart state: snapshot is missing",
            )

        self._items = {item.product_id: item for item in snapshot.entries()}
        logger.info(
            "Restored cart state #%d from %s",
            snapshot.snapshot_id,
            snapshot.created_at.strftime("%H:%M:%S"),
        )
        return CartOperationResult.ok(
            f"Restored cart state from {snapshot.created_at:%H:%M:%S}"
        )

    # -------------------------------------------------------------------------
    # READ ACCESSORS
    # -------------------------------------------------------------------------

    def items(self) -> tuple[LineItem, ...]:
        """Позиции корзины в порядке добавления."""
        return tuple(self._items.values())

    def get(self, product_id: int) -> Optional[LineItem]:
        return self._items.get(product_id)

    @property
    def total_price(self) -> Decimal:
        """Сумма стоимостей всех позиций."""
        return sum((item.extended_price for item in self._items.values()), Decimal("0"))

    @property
    def total_quantity(self) -> int:
        """Общее количество товаров (сумма quantity)."""
        return sum(item.quantity for item in self._items.values())

    @property
    def entry_count(self) -> int:
        """Количество позиций."""
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Cart(entries={self.entry_count}, total_price={self.total_price})"
