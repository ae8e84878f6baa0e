"""
Shared pytest fixtures: in-memory database, seeded pharmacy, API client.
"""
import os
from datetime import date, timedelta
from decimal import Decimal

# Must be set before mediserve.core.config is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["ALLOWED_HOSTS"] = "*"
os.environ["STOCK_MONITOR_ENABLED"] = "false"
os.environ["GROQ_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mediserve.api.deps import get_db
from mediserve.db.init_db import init_db
from mediserve.main import app
from mediserve.models.medicine import Medicine
from mediserve.models.pharmacy import Pharmacy
from mediserve.models.user import User

OWNER_PASSWORD = "StrongPass123!"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def make_pharmacy(db, email="owner@test.com", name="Test Pharmacy") -> Pharmacy:
    user = User(email=email, hashed_password="not-a-real-hash", name="Owner")
    db.add(user)
    db.flush()
    pharmacy = Pharmacy(owner_id=user.id, owner_name="Owner", pharmacy_name=name, email=email, is_open=True)
    db.add(pharmacy)
    db.commit()
    db.refresh(pharmacy)
    return pharmacy


def add_medicine(db, pharmacy, name, quantity, threshold, expires_in_days=365, brand="Generic") -> Medicine:
    medicine = Medicine(
        pharmacy_id=pharmacy.id,
        name=name,
        brand=brand,
        quantity=quantity,
        expiry_date=date.today() + timedelta(days=expires_in_days),
        price=Decimal("10.00"),
        low_stock_threshold=threshold,
    )
    db.add(medicine)
    db.commit()
    db.refresh(medicine)
    return medicine


@pytest.fixture
def pharmacy(db):
    return make_pharmacy(db)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager: lifespan (real DB, stock monitor) stays off
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    resp = client.post("/auth/register", json={
        "owner_name": "Medico Owner",
        "pharmacy_name": "MediServe",
        "email": "owner@mediserve.com",
        "password": OWNER_PASSWORD,
    })
    assert resp.status_code == 201, resp.text
    resp = client.post("/auth/login", json={"email": "owner@mediserve.com", "password": OWNER_PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
