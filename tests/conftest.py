import os

# Set up test environment BEFORE importing anything that reads DATABASE_URL
os.environ["DATABASE_URL"] = "sqlite://"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from urbannest.main import create_app
from urbannest.repository.properties import PropertyRepository
from urbannest.service.properties import PropertyService
from urbannest.sql import init_db, property_table


def _row(title, location, price, description=None, image_url=None, **extra):
    row = {
        "title": title,
        "location": location,
        "price": Decimal(price),
        "description": description,
        "image_url": image_url,
    }
    row.update(extra)
    return row


@pytest.fixture
def engine():
    """In-memory SQLite shared across threads (TestClient runs sync handlers in a threadpool)."""
    eng = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def seed(engine):
    def _seed(*rows):
        with engine.begin() as conn:
            conn.execute(property_table.insert(), list(rows))
    return _seed


@pytest.fixture
def repository(engine):
    return PropertyRepository(engine)


@pytest.fixture
def service(repository):
    return PropertyService(repository)


@pytest.fixture
def client(service):
    return TestClient(create_app(service))


@pytest.fixture
def brooklyn_manhattan(seed):
    seed(
        _row("Brownstone walk-up", "Brooklyn", "850000.00", id=1,
             description="Three floors, garden.", image_url="https://img.example.com/1.jpg"),
        _row("Midtown loft", "Manhattan", "1250000.50", id=2),
    )


@pytest.fixture
def downtown_uptown(seed):
    seed(
        _row("Corner unit", "Downtown", "300000"),
        _row("Hillside condo", "downtown Heights", "420000"),
        _row("Park view", "Uptown", "510000"),
    )


@pytest.fixture
def make_row():
    """Row builder for tests that seed their own data."""
    return _row
