from typing import Literal
from pydantic import Field
from kasir.schemas.common import Record

class NotificationPrefs(Record):
    low_stock_alert: bool = True
    daily_report: bool = True
    sales_alert: bool = False
    system_updates: bool = True

class StoreSettings(Record):
    name: str = "Toko Roti & Kue"
    address: str = "Jl. Contoh No. 123, Jakarta"
    phone: str = "(021) 1234-5678"
    email: str = "kontak@tokoku.com"
    notifications: NotificationPrefs = Field(default_factory=NotificationPrefs)
    currency: Literal["IDR", "USD", "EUR"] = "IDR"
    language: Literal["id", "en"] = "id"
    tax_rate: float = Field(default=0.0, ge=0, le=100)
