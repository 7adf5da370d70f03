"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from servitor.api.deps import get_db
from servitor.main import app
from servitor.models import Base, Order


@pytest.fixture
def test_engine(tmp_path):
    """Create test database engine."""
    # File-backed SQLite so every session gets its own connection
    engine = create_engine(
        f"sqlite:///{tmp_path / 'servitor.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def test_db(session_factory):
    """Create a test database session."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    """Create a test client with database session override."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def brew(session_factory):
    """Stand-in for the preparation workforce: mark cups of an order as brewed."""

    def _brew(order_id, cups=None):
        db = session_factory()
        try:
            order = db.query(Order).filter(Order.id == order_id).one()
            order.order_brewed = order.order_size if cups is None else cups
            db.commit()
        finally:
            db.close()

    return _brew


@pytest.fixture
def broken_store_client(session_factory):
    """Test client whose sessions fail on the given Session method."""
    from sqlalchemy.exc import OperationalError

    def _client(method):
        def fail(*args, **kwargs):
            raise OperationalError(method.upper(), {}, Exception("database unavailable"))

        def override_get_db():
            db = session_factory()
            setattr(db, method, fail)
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()
