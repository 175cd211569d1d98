"""Aggregations behind the dashboard, report and notification views.

Every function takes full collections and re-scans them; there is no
incremental index. Date ranges are inclusive on both ends.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, TypeVar
from zoneinfo import ZoneInfo

from kasir.config import settings
from kasir.schemas.finance import Expense, ExpenseSummary, Purchase
from kasir.schemas.inventory import RawMaterial
from kasir.schemas.menu import MenuItem
from kasir.schemas.reports import CashFlowReport, DashboardStats, Notification, ProductSales, SalesReport
from kasir.schemas.sales import Transaction
from kasir.services.billing import _money

T = TypeVar("T")

SALES_MILESTONE = 100_000
BACKUP_TIP_AFTER = 10
WELCOME_UNTIL = 5


def today() -> date:
    return datetime.now(ZoneInfo(settings.TZ)).date()


def filter_by_date(records: Iterable[T], start: date, end: date) -> list[T]:
    return [r for r in records if start <= r.date <= end]


def in_month(records: Iterable[T], day: date) -> list[T]:
    return [r for r in records if r.date.year == day.year and r.date.month == day.month]


def sales_report(transactions: list[Transaction], start: date, end: date) -> SalesReport:
    picked = filter_by_date(transactions, start, end)
    products: dict[str, ProductSales] = {}
    for t in picked:
        for it in t.items:
            row = products.get(it.menu_id)
            if row:
                row.quantity += it.quantity
                row.revenue = _money(row.revenue + it.subtotal)
            else:
                products[it.menu_id] = ProductSales(
                    menu_id=it.menu_id, name=it.menu_name, quantity=it.quantity, revenue=it.subtotal,
                )
    return SalesReport(
        start_date=start,
        end_date=end,
        total_sales=_money(sum(t.total for t in picked)),
        total_transactions=len(picked),
        product_sales=sorted(products.values(), key=lambda p: p.quantity, reverse=True),
        transactions=picked,
    )


def cash_flow_report(transactions: list[Transaction], purchases: list[Purchase],
                     expenses: list[Expense], start: date, end: date) -> CashFlowReport:
    revenue = sum(t.total for t in filter_by_date(transactions, start, end))
    purchase_costs = sum(p.total for p in filter_by_date(purchases, start, end))
    operational = sum(e.amount for e in filter_by_date(expenses, start, end))
    total_expenses = purchase_costs + operational
    return CashFlowReport(
        start_date=start,
        end_date=end,
        revenue=_money(revenue),
        purchase_costs=_money(purchase_costs),
        operational_expenses=_money(operational),
        total_expenses=_money(total_expenses),
        net_profit=_money(revenue - total_expenses),
    )


def best_seller(transactions: list[Transaction], menu_items: list[MenuItem]) -> MenuItem | None:
    """Menu item with the most units sold over all history; first seen wins ties."""
    menus = {m.id: m for m in menu_items}
    counts: dict[str, float] = {}
    for t in transactions:
        for it in t.items:
            if it.menu_id in menus:
                counts[it.menu_id] = counts.get(it.menu_id, 0) + it.quantity
    best, best_count = None, 0.0
    for menu_id, count in counts.items():
        if count > best_count:
            best, best_count = menus[menu_id], count
    return best


def low_stock(materials: list[RawMaterial]) -> list[RawMaterial]:
    return [m for m in materials if m.stock <= m.min_stock]


def dashboard_stats(transactions: list[Transaction], materials: list[RawMaterial],
                    menu_items: list[MenuItem], purchases: list[Purchase],
                    expenses: list[Expense], day: date | None = None) -> DashboardStats:
    day = day or today()
    todays = [t for t in transactions if t.date == day]
    monthly_revenue = sum(t.total for t in in_month(transactions, day))
    monthly_expenses = (sum(p.total for p in in_month(purchases, day))
                        + sum(e.amount for e in in_month(expenses, day)))
    return DashboardStats(
        today_sales=_money(sum(t.total for t in todays)),
        total_transactions=len(todays),
        best_selling=best_seller(transactions, menu_items),
        low_stock_items=low_stock(materials),
        monthly_revenue=_money(monthly_revenue),
        monthly_expenses=_money(monthly_expenses),
        monthly_profit=_money(monthly_revenue - monthly_expenses),
    )


def expense_summary(expenses: list[Expense], day: date | None = None) -> ExpenseSummary:
    day = day or today()
    monthly = in_month(expenses, day)
    by_category: dict[str, float] = {}
    for e in monthly:
        by_category[e.category] = _money(by_category.get(e.category, 0) + e.amount)
    top = None
    for cat, amount in by_category.items():
        if top is None or amount > by_category[top]:
            top = cat
    return ExpenseSummary(
        month=day.strftime("%Y-%m"),
        total=_money(sum(e.amount for e in monthly)),
        count=len(monthly),
        by_category=by_category,
        top_category=top,
    )


def notifications(materials: list[RawMaterial], transactions: list[Transaction],
                  day: date | None = None, now: datetime | None = None) -> list[Notification]:
    day = day or today()
    now = now or datetime.now(timezone.utc)
    out = [
        Notification(
            id=f"low-stock-{m.id}",
            type="warning",
            title="Low stock",
            message=f"{m.name}: {m.stock:g} {m.unit} left",
            timestamp=now,
        )
        for m in low_stock(materials)
    ]
    todays_sales = sum(t.total for t in transactions if t.date == day)
    if todays_sales > SALES_MILESTONE:
        out.append(Notification(
            id="sales-milestone", type="success", title="Sales target reached",
            message=f"Sales today reached {_money(todays_sales):,.0f}",
            timestamp=now - timedelta(hours=2),
        ))
    if len(transactions) > BACKUP_TIP_AFTER:
        out.append(Notification(
            id="system-tip", type="info", title="Tip",
            message="Remember to export a backup regularly from Settings",
            timestamp=now - timedelta(days=1), read=True,
        ))
    if len(transactions) <= WELCOME_UNTIL:
        out.append(Notification(
            id="welcome", type="info", title="Welcome",
            message="Thanks for using the POS system. Explore the available features.",
            timestamp=now - timedelta(days=3),
        ))
    out.sort(key=lambda n: n.timestamp, reverse=True)
    return out
