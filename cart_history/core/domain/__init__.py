"""
Domain models and value objects.

LineItem и CartSnapshot — immutable значения, Cart — мутируемый aggregate.
"""

from cart_history.core.domain.line_item import LineItem
from cart_history.core.domain.snapshot import CartSnapshot

__all__ = [
    "LineItem",
    "CartSnapshot",
]
