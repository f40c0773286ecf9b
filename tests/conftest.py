"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from household_ledger.api.main import create_app
from household_ledger.infrastructure.database.models import Base
from household_ledger.infrastructure.database.session import get_db
from household_ledger.domain.models import Transaction


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for domain transactions with sensible defaults"""
    counter = {"n": 0}

    def _make(**overrides) -> Transaction:
        counter["n"] += 1
        fields = {
            "id": f"tx_{counter['n']}",
            "title": "Test",
            "amount": Decimal("100"),
            "category": "other",
            "date": "15/03/2023",
            "spender_id": "A",
            "type": "expense",
        }
        fields.update(overrides)
        if "amount" in overrides:
            fields["amount"] = Decimal(str(overrides["amount"]))
        if "paid_months" in overrides:
            fields["paid_months"] = frozenset(overrides["paid_months"])
        return Transaction(**fields)

    return _make


@pytest.fixture
def sample_transactions(make_transaction) -> list[Transaction]:
    """A household's first quarter of 2023"""
    return [
        make_transaction(id="rent", title="Rent", amount=1500, category="housing",
                         date="05/01/2023", is_fixed=True, paid_months={"2023-1", "2023-2"}),
        make_transaction(id="gym", title="Gym", amount=100, category="health",
                         date="10/02/2023", is_fixed=True, paid_months={"2023-2", "2023-3"}),
        make_transaction(id="bonus", title="Bonus", amount=1000, type="revenue",
                         category="income", date="20/03/2023"),
        make_transaction(id="market", title="Groceries", amount=400, category="groceries",
                         date="12/03/2023", is_paid=True),
        make_transaction(id="dinner", title="Dinner", amount=150, category="leisure",
                         date="25/03/2023", spender_id="B"),
        make_transaction(id="shoes", title="Shoes", amount=300, category="shopping",
                         date="02/02/2023", is_paid=True),
        make_transaction(id="trip", title="Trip", amount=2000, category="leisure",
                         date="01/04/2023"),
    ]
