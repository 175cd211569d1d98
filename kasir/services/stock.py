"""Recipe-driven stock movements and menu costing.

Functions here work on in-memory lists loaded from the record store and
mutate the RawMaterial objects in place. Nothing is clamped: stock can go
negative, and recipe lines pointing at materials that no longer exist are
skipped.
"""
import logging
import math
from decimal import Decimal, ROUND_HALF_UP

from kasir.errors import NotFound, ValidationFailed
from kasir.schemas.finance import ReorderSuggestion
from kasir.schemas.inventory import CostLine, MenuCosting, RawMaterial, StockChange
from kasir.schemas.menu import MenuItem
from kasir.schemas.sales import TransactionItem
from kasir.services.reports import low_stock

logger = logging.getLogger(__name__)


def _q3(x) -> Decimal:
    # use string to avoid float binary artifacts
    return Decimal(str(x)).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)


def _shift(material: RawMaterial, delta: Decimal) -> StockChange:
    before = material.stock
    material.stock = float(_q3(before) + delta)
    return StockChange(
        material_id=material.id, name=material.name,
        before=before, after=material.stock, delta=float(delta),
    )


def deduct_for_sale(materials: list[RawMaterial], menu_items: list[MenuItem],
                    menu_id: str, quantity: float) -> list[StockChange]:
    menu = next((m for m in menu_items if m.id == menu_id), None)
    if not menu:
        logger.debug("menu item %s not found, no stock deducted", menu_id)
        return []
    by_id = {m.id: m for m in materials}
    changes = []
    for line in menu.recipe:
        material = by_id.get(line.material_id)
        if not material:
            logger.debug("recipe of %s references missing material %s, skipped", menu.name, line.material_id)
            continue
        used = (_q3(line.quantity) * _q3(quantity)).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
        changes.append(_shift(material, -used))
    return changes


def deduct_for_cart(materials: list[RawMaterial], menu_items: list[MenuItem],
                    items: list[TransactionItem]) -> list[StockChange]:
    changes = []
    for it in items:
        changes.extend(deduct_for_sale(materials, menu_items, it.menu_id, it.quantity))
    for c in changes:
        logger.debug("stock %s: %s -> %s", c.name, c.before, c.after)
    return changes


def apply_purchase(materials: list[RawMaterial], material_id: str, quantity: float) -> StockChange:
    if quantity <= 0:
        raise ValidationFailed("Purchase quantity must be greater than zero")
    material = next((m for m in materials if m.id == material_id), None)
    if not material:
        raise NotFound(f"raw material {material_id} not found")
    return _shift(material, _q3(quantity))


REORDER_FACTOR = 2


def reorder_suggestions(materials: list[RawMaterial]) -> list[ReorderSuggestion]:
    """One purchase proposal per low-stock material: twice its minimum at its usual price and supplier."""
    return [
        ReorderSuggestion(
            material_id=m.id, name=m.name, unit=m.unit, stock=m.stock, min_stock=m.min_stock,
            suggested_quantity=float(_q3(m.min_stock) * REORDER_FACTOR),
            price=m.price, supplier=m.supplier,
        )
        for m in low_stock(materials)
    ]


def recipe_cost(menu: MenuItem, materials: list[RawMaterial]) -> tuple[float, list[CostLine]]:
    by_id = {m.id: m for m in materials}
    total = Decimal("0")
    lines = []
    for r in menu.recipe:
        mat = by_id.get(r.material_id)
        if not mat:
            lines.append(CostLine(material_id=r.material_id, quantity=r.quantity, missing=True))
            continue
        cost = Decimal(str(r.quantity)) * Decimal(str(mat.price))
        total += cost
        lines.append(CostLine(
            material_id=mat.id, name=mat.name, unit=mat.unit,
            quantity=r.quantity, unit_price=mat.price, cost=float(cost.quantize(Decimal("0.01"))),
        ))
    return float(total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)), lines


def max_servings(menu: MenuItem, materials: list[RawMaterial]) -> int | None:
    """Units of `menu` the current stock can still produce; None for an empty recipe."""
    needed = [r for r in menu.recipe if r.quantity > 0]
    if not needed:
        return None
    by_id = {m.id: m for m in materials}
    counts = []
    for r in needed:
        mat = by_id.get(r.material_id)
        if not mat or mat.stock <= 0:
            return 0
        counts.append(math.floor(_q3(mat.stock) / _q3(r.quantity)))
    return int(min(counts))


def costing(menu: MenuItem, materials: list[RawMaterial]) -> MenuCosting:
    cost, lines = recipe_cost(menu, materials)
    margin = float(Decimal(str(menu.price)) - Decimal(str(cost)))
    return MenuCosting(
        menu_id=menu.id,
        name=menu.name,
        price=menu.price,
        cost=cost,
        margin=margin,
        margin_pct=round(margin / menu.price * 100, 2) if menu.price else None,
        max_servings=max_servings(menu, materials),
        lines=lines,
    )
