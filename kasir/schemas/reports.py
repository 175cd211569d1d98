from pydantic import Field
from typing import Optional, Literal
from datetime import date, datetime
from kasir.schemas.common import Record
from kasir.schemas.inventory import RawMaterial
from kasir.schemas.menu import MenuItem
from kasir.schemas.sales import Transaction

class ProductSales(Record):
    menu_id: str
    name: str
    quantity: float
    revenue: float

class SalesReport(Record):
    start_date: date
    end_date: date
    total_sales: float
    total_transactions: int
    product_sales: list[ProductSales] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)

class CashFlowReport(Record):
    start_date: date
    end_date: date
    revenue: float
    purchase_costs: float
    operational_expenses: float
    total_expenses: float
    net_profit: float

class DashboardStats(Record):
    today_sales: float
    total_transactions: int
    best_selling: Optional[MenuItem] = None
    low_stock_items: list[RawMaterial] = Field(default_factory=list)
    monthly_revenue: float
    monthly_expenses: float
    monthly_profit: float

class Notification(Record):
    id: str
    type: Literal["warning", "info", "success", "error"]
    title: str
    message: str
    timestamp: datetime
    read: bool = False
