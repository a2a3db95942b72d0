"""
CartSnapshot — Снапшот состояния корзины

Immutable Pydantic модель (frozen=True): глубокая копия позиций корзины
на момент создания и время создания. Создаётся только через Cart.snapshot().
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .line_item import LineItem


class CartSnapshot(BaseModel):
    """
    Снапшот корзины (memento).

    Содержимое не меняется после создания. entries() всегда отдаёт
    новые копии, а не хранимые экземпляры.
    """

    snapshot_id: int = Field(..., ge=0, description="Монотонный идентификатор снапшота")
    created_at: datetime = Field(..., description="Время создания (UTC)")
    items: tuple[LineItem, ...] = Field(
        default_factory=tuple, description="Позиции корзины в порядке добавления"
    )

    model_config = {"frozen": True}

    def entries(self) -> list[LineItem]:
        """Копия сохранённых позиций."""
        return [item.model_copy(deep=True) for item in self.items]

    @property
    def item_count(self) -> int:
        """Количество позиций в снапшоте."""
        return len(self.items)
