"""History — управление историей изменений корзины.

- Два стека снапшотов (undo/redo)
- Ограничение глубины истории с вытеснением самого старого снапшота
"""

from .caretaker import (
    CartHistory,
    HistoryConfig,
    InvalidHistoryCapacity,
)

__all__ = [
    "CartHistory",
    "HistoryConfig",
    "InvalidHistoryCapacity",
]
