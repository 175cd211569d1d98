from pydantic import Field
from typing import Optional
from datetime import datetime
from kasir.schemas.common import Record
from kasir.schemas.inventory import RawMaterial
from kasir.schemas.menu import MenuItem
from kasir.schemas.sales import Transaction
from kasir.schemas.finance import Purchase, Expense

class BackupDocument(Record):
    raw_materials: list[RawMaterial] = Field(default_factory=list)
    menu_items: list[MenuItem] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    purchases: list[Purchase] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    export_date: Optional[datetime] = None

class ImportResult(Record):
    restored: dict[str, int] = Field(default_factory=dict)

class CollectionInfo(Record):
    key: str
    records: int
    version: int
    updated_at: Optional[datetime] = None
