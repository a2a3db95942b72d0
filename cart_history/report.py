"""
Текстовое представление корзины и истории для вывода пользователю.

Только чтение: функции не меняют ни корзину, ни историю.
"""

from cart_history.core.domain.cart import Cart
from cart_history.history import CartHistory


def render_cart(cart: Cart) -> str:
    """
    Содержимое корзины: позиции, итоговая сумма и количество товаров.

    Args:
        cart: корзина для отображения

    Returns:
        Многострочный текст ("Cart is empty." для пустой корзины)
    """
    if cart.is_empty():
        return "Cart is empty."

    lines = ["=== CART CONTENTS ==="]
    lines.extend(str(item) for item in cart.items())
    lines.append(f"TOTAL: {cart.total_price:.2f}")
    lines.append(f"Items count: {cart.total_quantity} pcs")
    lines.append("=====================")
    return "\n".join(lines)


def render_history(history: CartHistory) -> str:
    """Глубина undo/redo стеков."""
    return (
        f"History size: {history.history_depth()} of {history.capacity} states\n"
        f"Redo available: {history.redo_depth()} actions"
    )
