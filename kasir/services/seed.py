import logging
from datetime import datetime, timezone

from kasir.schemas.auth import User
from kasir.schemas.inventory import RawMaterial, RecipeLine
from kasir.schemas.menu import MenuItem
from kasir.schemas.sales import Transaction, TransactionItem
from kasir.schemas.settings import StoreSettings
from kasir.services import storage
from kasir.services.reports import today
from kasir.services.storage import RecordStore
from kasir.util.security import hash_pw

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@kasir.com"
ADMIN_PASSWORD = "admin123"


def demo_materials() -> list[RawMaterial]:
    return [
        RawMaterial(id="1", name="Tepung Terigu", unit="kg", stock=50, min_stock=10, price=12000, supplier="PT. Sumber Pangan"),
        RawMaterial(id="2", name="Gula Pasir", unit="kg", stock=25, min_stock=5, price=15000, supplier="Toko Manis Jaya"),
        RawMaterial(id="3", name="Telur Ayam", unit="butir", stock=200, min_stock=50, price=2500, supplier="Peternakan Sari"),
        RawMaterial(id="4", name="Mentega", unit="kg", stock=8, min_stock=2, price=35000, supplier="Dairy Fresh"),
    ]


def demo_menu() -> list[MenuItem]:
    return [
        MenuItem(id="1", name="Kue Brownies", category="Kue", price=25000, is_active=True, recipe=[
            RecipeLine(material_id="1", quantity=0.2),
            RecipeLine(material_id="2", quantity=0.15),
            RecipeLine(material_id="3", quantity=2),
            RecipeLine(material_id="4", quantity=0.1),
        ]),
        MenuItem(id="2", name="Roti Manis", category="Roti", price=15000, is_active=True, recipe=[
            RecipeLine(material_id="1", quantity=0.3),
            RecipeLine(material_id="2", quantity=0.05),
            RecipeLine(material_id="3", quantity=1),
            RecipeLine(material_id="4", quantity=0.05),
        ]),
    ]


def seed_demo(store: RecordStore) -> None:
    admin = User(id="1", email=ADMIN_EMAIL, password=hash_pw(ADMIN_PASSWORD), name="Admin Kasir", role="admin")
    txn = Transaction(
        id="1",
        date=today(),
        cashier_name=admin.name,
        payment_method="Tunai",
        total=50000,
        subtotal=50000,
        items=[TransactionItem(menu_id="1", menu_name="Kue Brownies", quantity=2, price=25000, subtotal=50000)],
        created_at=datetime.now(timezone.utc),
    )
    store.save(storage.USERS, [admin])
    store.save(storage.RAW_MATERIALS, demo_materials())
    store.save(storage.MENU_ITEMS, demo_menu())
    store.save(storage.TRANSACTIONS, [txn])
    store.save(storage.PURCHASES, [])
    store.save(storage.EXPENSES, [])
    store.save(storage.SETTINGS, [StoreSettings()])


def ensure_seeded(store: RecordStore) -> bool:
    """Seed demo data when the namespace has no users yet."""
    if store.get(storage.USERS):
        return False
    logger.info("no users in namespace %r, seeding demo data", store.namespace)
    seed_demo(store)
    return True


def reset_demo(store: RecordStore) -> None:
    logger.warning("resetting namespace %r to demo data", store.namespace)
    store.clear()
    seed_demo(store)
