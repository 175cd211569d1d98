# kasir/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kasir.middleware import RequestIdMiddleware
from kasir.db import Base, SessionLocal, engine
from kasir.config import settings
from kasir.errors import register_exception_handlers
from kasir.services.seed import ensure_seeded
from kasir.services.storage import RecordStore
import kasir.models  # noqa: F401  (registers tables)

from kasir.routers import auth, inventory, menu, cashier, transactions, purchases, expenses, reports
from kasir.routers import settings as settings_router
from kasir.routers import backup, admin

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def init_db():
    Base.metadata.create_all(bind=engine)
    if not settings.SEED_DEMO:
        return
    db = SessionLocal()
    try:
        if ensure_seeded(RecordStore(db)):
            db.commit()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("kasir API ready (env=%s, namespace=%s)", settings.APP_ENV, settings.STORE_NAMESPACE)
    yield


app = FastAPI(title="Kasir POS API", version="0.1.0", lifespan=lifespan)

# Middlewares
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(inventory.router)
app.include_router(menu.router)
app.include_router(cashier.router)
app.include_router(transactions.router)
app.include_router(purchases.router)
app.include_router(expenses.router)
app.include_router(reports.router)
app.include_router(settings_router.router)
app.include_router(backup.router)
app.include_router(admin.router)

@app.get("/healthz")
def healthz():
    return {"ok": True}
