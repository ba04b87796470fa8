"""Application service: Add Product use case."""

from __future__ import annotations

from loguru import logger

from ordercore.application.dto import ProductDTO, product_to_dto
from ordercore.domain.exceptions import ValidationError
from ordercore.domain.model.product import Product
from ordercore.domain.model.value_objects import DEFAULT_CURRENCY, Money
from ordercore.domain.repository.product_catalog import ProductCatalog


class AddProductHandler:

    def __init__(self, product_catalog: ProductCatalog) -> None:
        self._product_catalog = product_catalog

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        description: str = "",
        currency: str = DEFAULT_CURRENCY,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        all_products = self._product_catalog.list_all()
        if any(p.name.lower() == name.strip().lower() for p in all_products):
            raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing numeric IDs
        numeric_ids = [int(p.id) for p in all_products if p.id.isdigit()]
        next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        product = Product(
            id=next_id,
            name=name.strip(),
            description=description,
            price=Money.of(price, currency),
            stock=stock,
        )
        self._product_catalog.save(product)
        logger.info("Product {} '{}' added with {} in stock", product.id, product.name, stock)
        return product_to_dto(product)


class ListProductsHandler:

    def __init__(self, product_catalog: ProductCatalog) -> None:
        self._product_catalog = product_catalog

    def handle(self) -> list[ProductDTO]:
        return [product_to_dto(p) for p in self._product_catalog.list_all()]
