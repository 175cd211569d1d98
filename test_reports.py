# test_reports.py
from datetime import date, datetime, timezone

from kasir.schemas.finance import Expense, Purchase
from kasir.schemas.sales import Transaction, TransactionItem
from kasir.services import reports
from kasir.services.seed import demo_materials, demo_menu

DAY = date(2026, 3, 14)


def txn(tid, day, *lines, discount=0.0):
    items = [TransactionItem(menu_id=m, menu_name=f"menu {m}", quantity=q, price=p, subtotal=q * p)
             for m, q, p in lines]
    subtotal = sum(i.subtotal for i in items)
    return Transaction(id=tid, date=day, items=items, subtotal=subtotal, discount=discount,
                       total=subtotal - discount, payment_method="Tunai", cashier_name="Admin Kasir")


def purchase(pid, day, total):
    return Purchase(id=pid, date=day, material_id="1", quantity=1, price=total, total=total)


def expense(eid, day, amount, category="Operasional"):
    return Expense(id=eid, date=day, category=category, description="x", amount=amount)


def test_filter_by_date_is_inclusive():
    rows = [txn("a", date(2026, 3, 1), ("1", 1, 10)),
            txn("b", date(2026, 3, 14), ("1", 1, 10)),
            txn("c", date(2026, 3, 15), ("1", 1, 10))]
    picked = reports.filter_by_date(rows, date(2026, 3, 1), DAY)
    assert [t.id for t in picked] == ["a", "b"]


def test_sales_report_groups_products():
    rows = [txn("a", DAY, ("1", 2, 25000), ("2", 1, 15000)),
            txn("b", DAY, ("2", 4, 15000), discount=5000),
            txn("c", date(2026, 2, 1), ("1", 10, 25000))]
    r = reports.sales_report(rows, DAY, DAY)
    assert r.total_transactions == 2
    assert r.total_sales == 50000 + 15000 + 60000 - 5000
    assert [(p.menu_id, p.quantity) for p in r.product_sales] == [("2", 5), ("1", 2)]
    assert r.product_sales[0].revenue == 75000


def test_cash_flow_report():
    r = reports.cash_flow_report(
        [txn("a", DAY, ("1", 4, 25000))],
        [purchase("p", DAY, 30000), purchase("old", date(2025, 1, 1), 99999)],
        [expense("e", DAY, 20000)],
        date(2026, 3, 1), date(2026, 3, 31),
    )
    assert r.revenue == 100000
    assert r.purchase_costs == 30000
    assert r.operational_expenses == 20000
    assert r.total_expenses == 50000
    assert r.net_profit == 50000


def test_best_seller_counts_units_over_all_history():
    menu = demo_menu()
    rows = [txn("a", date(2025, 1, 1), ("2", 5, 15000)),
            txn("b", DAY, ("1", 3, 25000)),
            txn("c", DAY, ("ghost", 50, 1000))]
    assert reports.best_seller(rows, menu).id == "2"


def test_best_seller_tie_keeps_first_seen():
    rows = [txn("a", DAY, ("1", 2, 25000)), txn("b", DAY, ("2", 2, 15000))]
    assert reports.best_seller(rows, demo_menu()).id == "1"
    assert reports.best_seller([], demo_menu()) is None


def test_low_stock_includes_equality():
    materials = demo_materials()
    materials[0].stock = 10      # == minStock
    materials[1].stock = 5.001   # just above
    materials[3].stock = -1
    assert [m.id for m in reports.low_stock(materials)] == ["1", "4"]


def test_dashboard_monthly_profit():
    stats = reports.dashboard_stats(
        [txn("a", DAY, ("1", 2, 25000)), txn("b", date(2026, 3, 2), ("2", 2, 15000)),
         txn("c", date(2026, 2, 28), ("2", 9, 15000))],
        demo_materials(),
        demo_menu(),
        [purchase("p", date(2026, 3, 3), 24000)],
        [expense("e", date(2026, 3, 10), 10000), expense("old", date(2026, 2, 10), 500000)],
        DAY,
    )
    assert stats.today_sales == 50000
    assert stats.total_transactions == 1
    assert stats.monthly_revenue == 80000
    assert stats.monthly_expenses == 34000
    assert stats.monthly_profit == 46000
    assert stats.best_selling.id == "2"
    assert stats.low_stock_items == []


def test_expense_summary():
    s = reports.expense_summary([
        expense("a", DAY, 100000, "Sewa"),
        expense("b", DAY, 30000, "Operasional"),
        expense("c", date(2026, 3, 1), 80000, "Operasional"),
        expense("d", date(2026, 4, 1), 999999, "Pajak"),
    ], DAY)
    assert s.month == "2026-03"
    assert s.count == 3
    assert s.total == 210000
    assert s.by_category == {"Sewa": 100000, "Operasional": 110000}
    assert s.top_category == "Operasional"


def test_notifications():
    now = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)
    materials = demo_materials()
    materials[3].stock = 1
    out = reports.notifications(materials, [txn("a", DAY, ("1", 5, 25000))], DAY, now)

    assert [n.id for n in out] == ["low-stock-4", "sales-milestone", "welcome"]
    assert out[0].type == "warning"
    assert "Mentega" in out[0].message


def test_notifications_backup_tip_for_busy_store():
    rows = [txn(str(i), date(2026, 3, 1), ("1", 1, 1000)) for i in range(11)]
    out = reports.notifications(demo_materials(), rows, DAY)
    assert [n.id for n in out] == ["system-tip"]
    assert out[0].read is True
