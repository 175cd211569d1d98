from pydantic import Field
from typing import Optional, Literal, get_args
from datetime import date
from kasir.schemas.common import Record

ExpenseCategoryLiteral = Literal[
    "Operasional",
    "Sewa",
    "Listrik & Air",
    "Internet & Telepon",
    "Gaji Karyawan",
    "Transport & Delivery",
    "Pemasaran",
    "Perawatan Alat",
    "Asuransi",
    "Pajak",
    "Lainnya",
]
EXPENSE_CATEGORIES = get_args(ExpenseCategoryLiteral)

class PurchaseIn(Record):
    material_id: str
    quantity: float
    price: Optional[float] = None          # unit price; the material's price when omitted
    supplier: Optional[str] = None

class Purchase(Record):
    id: str
    date: date
    material_id: str
    material_name: str = ""
    quantity: float
    price: float
    total: float
    supplier: str = ""

class ExpenseIn(Record):
    category: ExpenseCategoryLiteral = "Operasional"
    description: str
    amount: float

class ReorderSuggestion(Record):
    material_id: str
    name: str
    unit: str
    stock: float
    min_stock: float
    suggested_quantity: float
    price: float
    supplier: str

class Expense(Record):
    id: str
    date: date
    category: str
    description: str
    amount: float

class ExpenseSummary(Record):
    month: str
    total: float
    count: int
    by_category: dict[str, float] = Field(default_factory=dict)
    top_category: Optional[str] = None
