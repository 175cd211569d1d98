import logging
from decimal import Decimal, ROUND_HALF_UP

from kasir.errors import EmptyCart, NotFound, ValidationFailed
from kasir.schemas.menu import MenuItem
from kasir.schemas.sales import CartLine, Discount, Quote, TransactionItem

logger = logging.getLogger(__name__)

PRESET_DISCOUNTS = [
    Discount(type="percentage", value=5, reason="Member Reguler (5%)"),
    Discount(type="percentage", value=10, reason="Member VIP (10%)"),
    Discount(type="percentage", value=15, reason="Promo Hari Ini (15%)"),
    Discount(type="fixed", value=5000, reason="Diskon Pembelian Pertama"),
    Discount(type="fixed", value=10000, reason="Voucher Rp 10.000"),
]


def _money(x) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def merge_lines(lines: list[CartLine]) -> list[CartLine]:
    """Collapse repeated menu ids into one line and drop non-positive quantities."""
    merged: dict[str, int] = {}
    for line in lines:
        # a non-positive line is dropped, it never cancels units of another line
        if line.quantity <= 0:
            continue
        merged[line.menu_id] = merged.get(line.menu_id, 0) + line.quantity
    return [CartLine(menu_id=mid, quantity=q) for mid, q in merged.items()]


def build_items(lines: list[CartLine], menu_items: list[MenuItem]) -> list[TransactionItem]:
    by_id = {m.id: m for m in menu_items}
    items: list[TransactionItem] = []
    for line in merge_lines(lines):
        menu = by_id.get(line.menu_id)
        if not menu:
            raise NotFound(f"menu item {line.menu_id} not found")
        if not menu.is_active:
            raise ValidationFailed(f"menu item {menu.name} is not active")
        items.append(TransactionItem(
            menu_id=menu.id,
            menu_name=menu.name,
            quantity=line.quantity,
            price=menu.price,
            subtotal=_money(line.quantity * menu.price),
        ))
    if not items:
        raise EmptyCart("Add at least one item to the cart")
    return items


def cart_subtotal(items: list[TransactionItem]) -> float:
    return _money(sum(i.subtotal for i in items))


def clamp_discount(discount: Discount, subtotal: float) -> Discount:
    """Validate a custom discount and clamp its value into range."""
    if discount.value <= 0 or not discount.reason.strip():
        raise ValidationFailed("A discount needs a positive value and a reason")
    max_value = 100.0 if discount.type == "percentage" else float(subtotal)
    safe = min(max(0.0, float(discount.value)), max_value)
    return Discount(type=discount.type, value=safe, reason=discount.reason.strip())


def discount_amount(discount: Discount | None, subtotal: float) -> float:
    if not discount:
        return 0.0
    if discount.type == "percentage":
        return _money(min(subtotal * discount.value / 100, subtotal))
    return _money(min(discount.value, subtotal))


def quote(lines: list[CartLine], menu_items: list[MenuItem], discount: Discount | None = None) -> Quote:
    items = build_items(lines, menu_items)
    subtotal = cart_subtotal(items)
    if discount:
        discount = clamp_discount(discount, subtotal)
    off = discount_amount(discount, subtotal)
    return Quote(
        items=items,
        subtotal=subtotal,
        discount=off,
        discount_reason=discount.reason if discount else None,
        total=_money(subtotal - off),
    )
