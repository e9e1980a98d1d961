"""Validation of raw import rows.

Rows arrive as loose mappings: CSV rows are all strings, JSON rows carry
numbers. Each validator returns a tagged ``Result``: ``Ok`` wrapping a
typed row, or ``Err`` wrapping the ValidationError that explains why the
row was rejected. Nothing here touches storage.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from invtrack.domain.exceptions import ValidationError
from invtrack.domain.model.catalog import DEFAULT_MIN_STOCK_LEVEL
from invtrack.domain.model.value_objects import Money

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ValidationError


Result = Union[Ok[T], Err]


@dataclass(frozen=True)
class ProductRow:
    name: str
    sku: str
    category_name: str
    unit_cost: Money
    min_stock_level: int
    description: str | None


@dataclass(frozen=True)
class InventoryRow:
    sku: str
    location_name: str
    quantity: int


@dataclass(frozen=True)
class MovementRow:
    sku: str
    location_name: str
    quantity: int
    note: str | None


def validate_product_row(raw: Mapping[str, object]) -> Result[ProductRow]:
    try:
        unit_cost = Money.of(_required_text(raw, "unitCost"))
        return Ok(
            ProductRow(
                name=_required_text(raw, "name"),
                sku=_required_text(raw, "sku"),
                category_name=_required_text(raw, "categoryName"),
                unit_cost=unit_cost,
                min_stock_level=_integer(
                    raw, "minStockLevel", default=DEFAULT_MIN_STOCK_LEVEL, minimum=0
                ),
                description=_optional_text(raw, "description"),
            )
        )
    except ValidationError as exc:
        return Err(exc)


def validate_inventory_row(raw: Mapping[str, object]) -> Result[InventoryRow]:
    try:
        return Ok(
            InventoryRow(
                sku=_required_text(raw, "sku"),
                location_name=_required_text(raw, "locationName"),
                quantity=_integer(raw, "quantity", minimum=0),
            )
        )
    except ValidationError as exc:
        return Err(exc)


def validate_movement_row(raw: Mapping[str, object]) -> Result[MovementRow]:
    try:
        quantity = _integer(raw, "quantity")
        if quantity == 0:
            raise ValidationError("Field 'quantity' must not be zero")
        return Ok(
            MovementRow(
                sku=_required_text(raw, "sku"),
                location_name=_required_text(raw, "locationName"),
                quantity=quantity,
                note=_optional_text(raw, "note"),
            )
        )
    except ValidationError as exc:
        return Err(exc)


# --- Field coercion -----------------------------------------------------------


def _optional_text(raw: Mapping[str, object], key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required_text(raw: Mapping[str, object], key: str) -> str:
    text = _optional_text(raw, key)
    if text is None:
        raise ValidationError(f"Field '{key}' is required")
    return text


def _integer(
    raw: Mapping[str, object],
    key: str,
    default: int | None = None,
    minimum: int | None = None,
) -> int:
    value = raw.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValidationError(f"Field '{key}' is required")
        return default

    if isinstance(value, bool):
        raise ValidationError(f"Field '{key}' must be an integer, got {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            raise ValidationError(f"Field '{key}' must be an integer, got {value!r}") from None
    else:
        raise ValidationError(f"Field '{key}' must be an integer, got {value!r}")

    if minimum is not None and number < minimum:
        raise ValidationError(f"Field '{key}' must be at least {minimum}, got {number}")
    return number
