from kasir.schemas.common import Record
from kasir.schemas.inventory import RecipeLine

class MenuItemIn(Record):
    name: str
    category: str
    price: float
    recipe: list[RecipeLine] = []
    is_active: bool = True

class MenuItem(MenuItemIn):
    id: str

