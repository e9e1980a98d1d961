"""Resolve the human-facing keys used by the CLI (sku, names) to entities."""

from __future__ import annotations

from invtrack.domain.exceptions import EntityNotFoundError
from invtrack.domain.model.catalog import Category, Location, Product
from invtrack.domain.service.catalog_service import CatalogService


def resolve_product(catalog: CatalogService, sku: str) -> Product:
    product = catalog.find_product_by_sku(sku)
    if product is None:
        raise EntityNotFoundError(f"Product not found: '{sku}'")
    return product


def resolve_location(catalog: CatalogService, name: str) -> Location:
    location = catalog.find_location_by_name(name)
    if location is None:
        raise EntityNotFoundError(f"Location not found: '{name}'")
    return location


def resolve_category(catalog: CatalogService, name: str) -> Category:
    category = catalog.find_category_by_name(name)
    if category is None:
        raise EntityNotFoundError(f"Category not found: '{name}'")
    return category
