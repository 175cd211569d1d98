from datetime import datetime, timezone
from kasir.schemas.sales import Receipt, Transaction
from kasir.schemas.settings import StoreSettings

WIDTH = 32


def format_currency(amount: float, currency: str = "IDR") -> str:
    if currency == "IDR":
        return "Rp " + f"{amount:,.0f}".replace(",", ".")
    if currency == "EUR":
        s = f"{amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
        return "€" + s
    return f"${amount:,.2f}"


def receipt_number(issued_at: datetime) -> str:
    return "TRX" + str(int(issued_at.timestamp() * 1000))[-8:]


def _row(left: str, right: str, width: int = WIDTH) -> str:
    gap = max(1, width - len(left) - len(right))
    return f"{left}{' ' * gap}{right}"


def render_text(r: Receipt, currency: str = "IDR", width: int = WIDTH) -> str:
    rule = "-" * width
    out = [
        r.store_name.center(width).rstrip(),
        r.store_address.center(width).rstrip(),
        f"Telp: {r.store_phone}".center(width).rstrip(),
        rule,
        _row("No.", r.receipt_no, width),
        _row("Date", r.issued_at.strftime("%Y-%m-%d %H:%M"), width),
        _row("Cashier", r.cashier_name, width),
        rule,
    ]
    for it in r.items:
        out.append(it.menu_name[:width])
        out.append(_row(f"  {it.quantity:g} x {format_currency(it.price, currency)}",
                        format_currency(it.subtotal, currency), width))
    out.append(rule)
    out.append(_row("Subtotal", format_currency(r.subtotal, currency), width))
    if r.discount:
        out.append(_row("Discount", "-" + format_currency(r.discount, currency), width))
    out.append(_row("TOTAL", format_currency(r.total, currency), width))
    out.append(_row("Payment", r.payment_method, width))
    out.append(rule)
    out.append("Thank you!".center(width).rstrip())
    return "\n".join(out)


def build_receipt(txn: Transaction, store: StoreSettings) -> Receipt:
    issued = txn.created_at or datetime.combine(txn.date, datetime.min.time(), tzinfo=timezone.utc)
    subtotal = txn.subtotal if txn.subtotal is not None else sum(i.subtotal for i in txn.items)
    r = Receipt(
        receipt_no=receipt_number(issued),
        store_name=store.name,
        store_address=store.address,
        store_phone=store.phone,
        issued_at=issued,
        cashier_name=txn.cashier_name,
        items=txn.items,
        subtotal=subtotal,
        discount=txn.discount,
        discount_reason=txn.discount_reason,
        total=txn.total,
        payment_method=txn.payment_method,
    )
    r.text = render_text(r, store.currency)
    return r
