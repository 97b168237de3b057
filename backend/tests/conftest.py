import os

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models.product import Product
from models.users import User
from utils.tokenJWT import create_access_token


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    # One fresh session per request, all on the same in-memory database
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(role="customer", status="active", password="secret", email=None, username=None):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            username=username or f"user{n}",
            email=email or f"user{n}@example.com",
            password=password,
            full_name=f"User {n}",
            address="1 Panel Street",
            phone="555-0100",
            role=role,
            status=status,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_product(db_session):
    def _make(price=10.0, discount=None, title="Saga #1"):
        product = Product(
            title=title,
            description="Issue one",
            price=price,
            discount=discount,
            category="comics",
            stock=10,
            image_url="http://img.example/saga1.png",
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product
    return _make


@pytest.fixture
def auth_header():
    def _header(user):
        token = create_access_token(user.id, user.email, user.role)
        return {"Authorization": f"Bearer {token}"}
    return _header


class FakeCatalog:
    """Catalog stand-in whose prices can change between calls."""

    def __init__(self):
        self.products = {}

    def put(self, product_id, price, discount=None):
        self.products[product_id] = SimpleNamespace(id=product_id, price=price, discount=discount)

    def find_product(self, product_id):
        return self.products.get(product_id)


@pytest.fixture
def catalog():
    return FakeCatalog()
