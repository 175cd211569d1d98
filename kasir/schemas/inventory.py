from pydantic import Field
from typing import Optional
from kasir.schemas.common import Record

class RawMaterialIn(Record):
    name: str
    unit: str
    stock: float = 0.0
    min_stock: float = 0.0
    price: float = 0.0
    supplier: str

class RawMaterial(RawMaterialIn):
    id: str

class StockChange(Record):
    material_id: str
    name: str
    before: float
    after: float
    delta: float

class RecipeLine(Record):
    material_id: str
    quantity: float = Field(ge=0)

class CostLine(Record):
    material_id: str
    name: Optional[str] = None
    unit: Optional[str] = None
    quantity: float
    unit_price: float = 0.0
    cost: float = 0.0
    missing: bool = False

class MenuCosting(Record):
    menu_id: str
    name: str
    price: float
    cost: float
    margin: float
    margin_pct: Optional[float] = None
    max_servings: Optional[int] = None
    lines: list[CostLine] = []
