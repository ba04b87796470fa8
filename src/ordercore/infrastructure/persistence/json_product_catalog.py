"""JSON-file-backed implementation of ProductCatalog."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from ordercore.domain.exceptions import ConcurrencyConflict
from ordercore.domain.model.product import Product
from ordercore.domain.model.value_objects import DEFAULT_CURRENCY, Money
from ordercore.domain.repository.product_catalog import ProductCatalog


class JsonProductCatalog(ProductCatalog):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductCatalog interface ---------------------------------------------

    def find_by_id(self, product_id: str) -> Product | None:
        raw = self._load_raw().get(product_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw().values()]

    def save(self, product: Product) -> None:
        records = self._load_raw()
        stored = records.get(product.id)
        if stored is not None:
            if stored["version"] != product.version:
                raise ConcurrencyConflict(
                    f"Product {product.id} was modified concurrently "
                    f"(stored version {stored['version']}, got {product.version})"
                )
            product.version += 1
        records[product.id] = self._to_raw(product)
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "version": product.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            price=Money(Decimal(raw["price"]), raw.get("currency", DEFAULT_CURRENCY)),
            stock=raw["stock"],
            version=raw.get("version", 0),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, dict]:
        records = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {raw["id"]: raw for raw in records}

    def _persist_raw(self, records: dict[str, dict]) -> None:
        self._file_path.write_text(
            json.dumps(list(records.values()), indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
