"""Which product row is expanded in the review table. At most one at a time."""

from __future__ import annotations

from typing import Optional

from .catalog import product_index


class SelectionState:

    def __init__(self):
        self._expanded: Optional[str] = None

    @property
    def expanded(self) -> Optional[str]:
        return self._expanded

    def toggle(self, product: str) -> Optional[str]:
        """Collapse the product if it is expanded, otherwise expand it alone."""
        product_index(product)
        self._expanded = None if self._expanded == product else product
        return self._expanded

    def is_expanded(self, product: str) -> bool:
        product_index(product)
        return self._expanded == product

    def clear(self) -> None:
        self._expanded = None
