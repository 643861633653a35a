import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.config import get_settings
from app.db import get_db
from app.main import app
from app.models import Base, Ticket, TicketStatusEnum
from app.security import build_expected_authorization
from app.services.queue import QueueService
from app.services.store import TicketStore

ADMIN_PASSWORD = "s3cret-pass"
BASE_URL = "https://venue.example"


@pytest.fixture(autouse=True)
def settings_env(monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setenv("BASE_URL", BASE_URL)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def SessionLocal(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db_session):
    return TicketStore(db_session)


@pytest.fixture()
def service(store):
    return QueueService(store, base_url=BASE_URL)


@pytest.fixture()
def add_ticket(db_session):
    def _add(number: int, status: TicketStatusEnum = TicketStatusEnum.WAITING, group_size: int = 2):
        ticket = Ticket(number=number, group_size=group_size, status=status)
        db_session.add(ticket)
        db_session.commit()
        return ticket

    return _add


@pytest.fixture()
def admin_headers():
    return {
        "Authorization": build_expected_authorization("admin", ADMIN_PASSWORD),
        "Origin": BASE_URL,
    }


@pytest.fixture()
def client(SessionLocal):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
