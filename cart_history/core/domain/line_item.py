"""
LineItem — Позиция в корзине

Immutable Pydantic модель. Изменение количества создаёт новый экземпляр,
поэтому позиция, попавшая в снапшот, не может быть изменена через корзину.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class LineItem(BaseModel):
    """
    Позиция корзины: товар, количество и цена за единицу.

    Две позиции с одинаковым product_id — один и тот же товар.
    """

    product_id: int = Field(..., ge=0, description="Идентификатор товара")
    name: str = Field(..., min_length=1, description="Название товара")
    quantity: int = Field(..., ge=0, description="Количество (шт.)")
    unit_price: Decimal = Field(..., ge=0, description="Цена за единицу")

    model_config = {"frozen": True}

    @property
    def extended_price(self) -> Decimal:
        """Стоимость позиции: quantity × unit_price."""
        return self.quantity * self.unit_price

    def with_quantity(self, quantity: int) -> "LineItem":
        """
        Копия позиции с новым количеством.

        Args:
            quantity: Новое количество (>= 0)

        Returns:
            Новый экземпляр LineItem

        Raises:
            ValidationError: Если quantity < 0
        """
        return LineItem(
            product_id=self.product_id,
            name=self.name,
            quantity=quantity,
            unit_price=self.unit_price,
        )

    def __str__(self) -> str:
        return (
            f"{self.name} (ID: {self.product_id}) - "
            f"{self.quantity} x {self.unit_price:.2f} = {self.extended_price:.2f}"
        )
