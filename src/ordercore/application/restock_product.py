"""Application service: Restock Product use case."""

from __future__ import annotations

from loguru import logger

from ordercore.domain.exceptions import InvalidQuantity, ProductNotFound
from ordercore.domain.repository.product_catalog import ProductCatalog


class RestockProductHandler:

    def __init__(self, product_catalog: ProductCatalog) -> None:
        self._product_catalog = product_catalog

    def handle(self, product_id: str, quantity: int) -> int:
        """Add ``quantity`` units to a product's stock and return the new level."""
        if quantity <= 0:
            raise InvalidQuantity("Restock quantity must be positive")

        product = self._product_catalog.find_by_id(product_id)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found")

        product.update_stock(quantity)
        self._product_catalog.save(product)
        logger.info("Product {} restocked by {} (now {})", product_id, quantity, product.stock)
        return product.stock
