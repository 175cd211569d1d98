from pydantic import Field
from typing import Optional, Literal
from datetime import date, datetime
from kasir.schemas.common import Record
from kasir.schemas.inventory import StockChange

PaymentMethodLiteral = Literal["Tunai", "Kartu Debit", "Kartu Kredit", "Transfer", "E-Wallet"]
DiscountTypeLiteral = Literal["percentage", "fixed"]

class TransactionItem(Record):
    menu_id: str
    menu_name: str
    quantity: float
    price: float
    subtotal: float

class Transaction(Record):
    id: str
    date: date
    items: list[TransactionItem]
    total: float
    payment_method: str
    cashier_name: str
    subtotal: Optional[float] = None
    discount: float = 0.0
    discount_reason: Optional[str] = None
    created_at: Optional[datetime] = None

class CartLine(Record):
    menu_id: str
    quantity: int = 1              # whole units only

class Discount(Record):
    type: DiscountTypeLiteral
    value: float
    reason: str = ""

class QuoteIn(Record):
    lines: list[CartLine]
    discount: Optional[Discount] = None

class CheckoutIn(QuoteIn):
    payment_method: PaymentMethodLiteral = "Tunai"

class Quote(Record):
    items: list[TransactionItem]
    subtotal: float
    discount: float = 0.0
    discount_reason: Optional[str] = None
    total: float

class CheckoutOut(Record):
    transaction: Transaction
    stock_changes: list[StockChange] = Field(default_factory=list)

class Receipt(Record):
    receipt_no: str
    store_name: str
    store_address: str
    store_phone: str
    issued_at: datetime
    cashier_name: str
    items: list[TransactionItem]
    subtotal: float
    discount: float
    discount_reason: Optional[str] = None
    total: float
    payment_method: str
    text: str = ""
