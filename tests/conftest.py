# tests/conftest.py
import os
import sys
import asyncio
import pandas as pd
import pytest
from fastapi.testclient import TestClient

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from carfinder.context import SESSIONS  # noqa: E402
from carfinder.reco.catalog import LocalCatalog  # noqa: E402


# --- fresh event loop per test; `run` drives coroutines on it ---
@pytest.fixture(autouse=True)
def fix_event_loop():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        yield loop
    finally:
        loop.close()


@pytest.fixture()
def run(fix_event_loop):
    def _run(coro):
        return fix_event_loop.run_until_complete(coro)
    return _run


# ---------- Sample inventory ----------
CARS = [
    # brand, model, year, price, color, fuelType, transmission, seats
    ("Toyota",        "Camry",     2021, 1_000_000, "White",  "Hybrid",   "Automatic", 5),
    ("Toyota",        "Corolla",   2019,   800_000, "Silver", "Petrol",   "Manual",    5),
    ("Toyota",        "Glanza",    2022,   900_000, "Red",    "Petrol",   "Manual",    5),
    ("Honda",         "Civic",     2020, 1_200_000, "Red",    "Petrol",   "Automatic", 5),
    ("Honda",         "City",      2021, 1_150_000, "Red",    "Petrol",   "Manual",    5),
    ("Honda",         "City",      2019,   850_000, "Red",    "Diesel",   "Manual",    5),
    ("Honda",         "Amaze",     2020,   690_000, "Red",    "Petrol",   "Manual",    5),
    ("Honda",         "Amaze",     2022,   720_000, "Red",    "CNG",      "Manual",    5),
    ("Honda",         "Jazz",      2018,   540_000, "Red",    "Petrol",   "Manual",    5),
    ("Honda",         "Elevate",   2023, 1_350_000, "White",  "Petrol",   "Automatic", 5),
    ("Hyundai",       "i20",       2021,   780_000, "White",  "Petrol",   "Manual",    5),
    ("Hyundai",       "Creta",     2022, 1_450_000, "Black",  "Diesel",   "Automatic", 5),
    ("Maruti Suzuki", "Swift",     2021,   620_000, "Blue",   "Petrol",   "Manual",    5),
    ("Tata",          "Nexon",     2022,   960_000, "Blue",   "Electric", "Automatic", 5),
    ("BMW",           "3 Series",  2020, 4_500_000, "Black",  "Petrol",   "Automatic", 5),
    ("Mercedes-Benz", "C-Class",   2019, 3_900_000, "Silver", "Diesel",   "Automatic", 5),
]
COLUMNS = ["brand", "model", "year", "price", "color", "fuelType", "transmission", "seats"]


@pytest.fixture
def sample_catalog_df():
    return pd.DataFrame(CARS, columns=COLUMNS)


@pytest.fixture
def local_catalog(sample_catalog_df):
    return LocalCatalog(df=sample_catalog_df)


class FakeCatalog:
    """LocalCatalog behind the async interface, recording every query."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []
        self.error = None

    async def query(self, criteria):
        self.calls.append(criteria)
        if self.error is not None:
            raise self.error
        return self.inner.page(criteria)


# ---------- Catalog stub for the resolver ----------
@pytest.fixture(autouse=True)
def fake_catalog(monkeypatch, local_catalog):
    fake = FakeCatalog(local_catalog)
    monkeypatch.setattr("carfinder.tools.get_catalog", lambda: fake)
    return fake


# ---------- Clear conversation contexts between tests ----------
@pytest.fixture(autouse=True)
def reset_state():
    SESSIONS.clear()
    yield
    SESSIONS.clear()


# ---------- FastAPI TestClient ----------
@pytest.fixture()
def client(monkeypatch, local_catalog):
    # no Twilio signature check in tests
    monkeypatch.setattr("carfinder.config.TWILIO_VALIDATE", False)

    from carfinder.main import app
    from carfinder.inventory_api import get_local_catalog
    app.dependency_overrides[get_local_catalog] = lambda: local_catalog
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# Helper: Twilio-style POST to /whatsapp
@pytest.fixture()
def post_wa(client):
    def _post(body: str, from_number: str = "whatsapp:+919800000000"):
        return client.post(
            "/whatsapp",
            data={"From": from_number, "Body": body},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
    return _post
