"""Pure consistency predicates for tracker records.

Every function here is side-effect free and returns ``bool``; raising for bad
input is the job of the usecases that call them. Text fields are trimmed before
blankness checks. NaN and infinities are rejected upstream by the usecases.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping

from core.repositories.activities import Activity, ActivityType
from core.repositories.products import (
    LegacyNaming,
    NormalizedNaming,
    Product,
    ProductColoris,
    ProductModel,
    ProductNaming,
    ProductType,
)
from core.repositories.stock_movements import StockMovement, StockMovementSource

_PRODUCT_ID_REQUIRED = frozenset({ActivityType.SALE, ActivityType.STOCK_CORRECTION})
_ACTIVITY_TYPE_VALUES = frozenset(member.value for member in ActivityType)
_STOCK_MOVEMENT_SOURCE_VALUES = frozenset(member.value for member in StockMovementSource)

# Sign rule per stock movement source; zero is rejected by every rule.
_QUANTITY_RULES: Mapping[StockMovementSource, Callable[[float], bool]] = {
    StockMovementSource.CREATION: lambda quantity: quantity > 0,
    StockMovementSource.SALE: lambda quantity: quantity < 0,
    StockMovementSource.INVENTORY_ADJUSTMENT: lambda quantity: quantity != 0,
}


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _as_product_type(value: Any) -> ProductType | None:
    try:
        return ProductType(value)
    except ValueError:
        return None


def product_naming(product: Product) -> ProductNaming | None:
    """Return the naming scheme a product uses, or ``None`` when it is ambiguous or incomplete.

    A scheme counts as in use as soon as one of its fields is filled. Exactly one
    scheme may be in use, and all of its fields must then be filled.
    """

    legacy_fields = (product.name, product.type, product.coloris)
    normalized_fields = (product.model_id, product.coloris_id)
    uses_legacy = any(_is_present(value) for value in legacy_fields)
    uses_normalized = any(_is_present(value) for value in normalized_fields)

    if uses_legacy == uses_normalized:
        return None

    if uses_legacy:
        product_type = _as_product_type(product.type)
        if _is_blank(product.name) or _is_blank(product.coloris) or product_type is None:
            return None
        return LegacyNaming(
            name=product.name.strip(),
            type=product_type,
            coloris=product.coloris.strip(),
        )

    if _is_blank(product.model_id) or _is_blank(product.coloris_id):
        return None
    return NormalizedNaming(
        model_id=product.model_id.strip(),
        coloris_id=product.coloris_id.strip(),
    )


def is_valid_product(product: Product) -> bool:
    return (
        product.unit_cost > 0
        and product.sale_price > 0
        and product.stock >= 0
        and product_naming(product) is not None
    )


def is_valid_product_model(model: ProductModel) -> bool:
    return (
        not _is_blank(model.id)
        and not _is_blank(model.name)
        and _as_product_type(model.type) is not None
    )


def is_valid_product_coloris(coloris: ProductColoris) -> bool:
    return (
        not _is_blank(coloris.id)
        and not _is_blank(coloris.model_id)
        and not _is_blank(coloris.coloris)
    )


def is_valid_product_model_for_type(model: ProductModel, product_type: ProductType) -> bool:
    return is_valid_product_model(model) and model.type == product_type


def is_valid_product_coloris_for_model(coloris: ProductColoris, model_id: str) -> bool:
    return is_valid_product_coloris(coloris) and coloris.model_id == model_id


def is_valid_activity(activity: Activity) -> bool:
    """SALE and STOCK_CORRECTION activities must reference a product."""

    if activity.type in _PRODUCT_ID_REQUIRED:
        return activity.product_id is not None
    return True


def is_negative_for_sale(activity: Activity) -> bool:
    return activity.type == ActivityType.SALE and activity.quantity < 0


def is_valid_quantity_for_source(quantity: float, source: Any) -> bool:
    if not is_valid_stock_movement_source(source):
        return False
    return _QUANTITY_RULES[StockMovementSource(source)](quantity)


def is_valid_stock_movement(movement: StockMovement) -> bool:
    if _is_blank(movement.product_id):
        return False
    return is_valid_quantity_for_source(movement.quantity, movement.source)


def _is_member(value: Any, enum_cls: type[Enum], values: frozenset[str]) -> bool:
    if isinstance(value, Enum):
        return isinstance(value, enum_cls)
    return isinstance(value, str) and value in values


def is_valid_activity_type(value: Any) -> bool:
    """Case-sensitive membership test against the ActivityType values."""

    return _is_member(value, ActivityType, _ACTIVITY_TYPE_VALUES)


def is_valid_stock_movement_source(value: Any) -> bool:
    """Case-sensitive membership test against the StockMovementSource values."""

    return _is_member(value, StockMovementSource, _STOCK_MOVEMENT_SOURCE_VALUES)


__all__ = [
    "product_naming",
    "is_valid_product",
    "is_valid_product_model",
    "is_valid_product_coloris",
    "is_valid_product_model_for_type",
    "is_valid_product_coloris_for_model",
    "is_valid_activity",
    "is_negative_for_sale",
    "is_valid_quantity_for_source",
    "is_valid_stock_movement",
    "is_valid_activity_type",
    "is_valid_stock_movement_source",
]
