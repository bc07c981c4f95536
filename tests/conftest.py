import json
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from app.core.config import Settings
from app.core.context import AppContext
from app.core.midtrans_client import PaymentGatewayError
from app.core.security import SessionAuthority
from app.database import create_db_and_tables
from app.main import create_app
from app.models.product import Product
from app.models.user import User


class FakeGateway:
    """Records Midtrans calls instead of sending them."""

    def __init__(self):
        self.charges: list[dict] = []
        self.checks: list[str] = []
        self.fail = False
        self.closed = False
        self.charge_response = {
            "status_code": "201",
            "transaction_status": "pending",
            "payment_type": "qris",
        }
        self.status_response = {
            "status_code": "200",
            "transaction_status": "settlement",
        }

    def charge(self, payload: dict) -> dict:
        if self.fail:
            raise PaymentGatewayError("gateway down")
        self.charges.append(payload)
        return self.charge_response

    def check(self, order_id: str) -> dict:
        if self.fail:
            raise PaymentGatewayError("gateway down")
        self.checks.append(order_id)
        return self.status_response

    def close(self) -> None:
        self.closed = True


def make_settings(**overrides) -> Settings:
    values = dict(
        DB_HOST="localhost",
        DB_PORT=5432,
        DB_USER="postgres",
        DB_PASSWORD="postgres",
        DB_NAME="order_app",
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        MIDTRANS_SERVER_KEY="SB-Mid-server-test",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def split_documents(response) -> list:
    return [json.loads(line) for line in response.text.splitlines() if line]


@pytest.fixture()
def documents():
    """Split a concatenated-JSON body into its documents."""
    return split_documents


@pytest.fixture()
def settings_factory():
    return make_settings


@pytest.fixture()
def settings():
    return make_settings()


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def context(settings, engine, gateway):
    return AppContext(
        settings=settings,
        engine=engine,
        sessions=SessionAuthority(settings.JWT_SECRET, settings.JWT_ALG),
        gateway=gateway,
    )


@pytest.fixture()
def client(context):
    with TestClient(create_app(context)) as client:
        yield client


@pytest.fixture()
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def seeded(db):
    """User alice/pw and two products."""
    db.add(User(user_name="alice", user_password="pw"))
    db.add(Product(product_id=1, product_name="Tea", product_price=1000))
    db.add(Product(product_id=2, product_name="Coffee", product_price=1500))
    db.commit()


@pytest.fixture()
def auth(client, context):
    """Put a valid session cookie for alice on the client."""
    issued = context.sessions.mint("alice", timedelta(minutes=10))
    client.cookies.set("token", issued.token)
    return issued
