# conftest.py
import os

# configure before kasir.config builds its Settings
os.environ.setdefault("APP_SECRET", "test-secret")
os.environ["DB_URL"] = "sqlite://"
os.environ["SEED_DEMO"] = "true"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from kasir.db import Base, SessionLocal, engine
from kasir.main import app
from kasir.services.seed import ADMIN_EMAIL, ADMIN_PASSWORD, reset_demo
from kasir.services.storage import RecordStore


@pytest.fixture(scope="session")
def base_url():
    # TestClient resolves relative paths against its own base
    return ""

@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c

@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture
def demo_store(client):
    # every API test starts from the demo data set
    db = SessionLocal()
    try:
        reset_demo(RecordStore(db))
        db.commit()
    finally:
        db.close()

@pytest.fixture
def auth_headers(client, base_url, demo_store):
    r = client.get(f"{base_url}/healthz")
    assert r.status_code == 200, f"/healthz failed: {r.text}"

    r = client.post(f"{base_url}/auth/login", params={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, f"/auth/login failed: {r.text}"
    tok = r.json()["access_token"]
    return {"Authorization": f"Bearer {tok}"}

@pytest.fixture(scope="session")
def rng_suffix():
    import random, string
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
