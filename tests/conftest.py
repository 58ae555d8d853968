import os

# Keep the module-level engine off the filesystem before stackhelper is imported
os.environ.setdefault("STACKHELPER_DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from stackhelper.database import Base, build_engine, get_db
from stackhelper.dtos.pet_dto import PetWriteDTO
from stackhelper.main import create_app
from stackhelper.services.pet_service import PetService
import stackhelper.models  # noqa: F401


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def pet_service(db_session):
    return PetService(db_session)


@pytest.fixture
def make_pet(pet_service):
    """Create a pet through the service and return its key"""
    def _make(name, friends_ids=None):
        return pet_service.create(PetWriteDTO(name=name, friends_ids=friends_ids or []))
    return _make


@pytest.fixture
def client(session_factory):
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
