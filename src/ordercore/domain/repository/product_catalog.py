"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live
elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordercore.domain.model.product import Product


class ProductCatalog(ABC):

    @abstractmethod
    def find_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product.

        Updating an existing product must fail with ConcurrencyConflict
        when ``product.version`` differs from the stored version; on
        success the version is incremented.
        """
