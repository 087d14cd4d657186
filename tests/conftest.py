import os

# Must be set before medportal.core.settings is imported
os.environ["MEDPORTAL_DATABASE_URL"] = "sqlite://"
os.environ["MEDPORTAL_CREATE_TABLES_ON_STARTUP"] = "false"

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from medportal.core.db import get_db, init_db
from medportal.main import app
from medportal.models.orm.user import UserRole
from medportal.models.schemas.directory import (
    BrandCreateModel,
    ClinicCreateModel,
    DoctorCreateModel,
    ProductCreateModel,
    RepresentativeCreateModel,
    SpecializationCreateModel,
)
from medportal.models.schemas.user import ManagerCreateModel, SessionModel
from medportal.services.auth_service import AuthService
from medportal.services.directory_service import DirectoryService

ADMIN_EMAIL, ADMIN_PASSWORD = "admin@example.com", "admin-pass"
MANAGER_EMAIL, MANAGER_PASSWORD = "manager@example.com", "manager-pass"
REP_EMAIL, REP_PASSWORD = "rep@example.com", "rep-pass"


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
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def portal(db_session):
    """
    A small seeded portal: one account per role, a clinic with two doctors,
    a brand with two products, and two representatives under one manager.
    """
    admin = AuthService(db_session).create_account(ADMIN_EMAIL, ADMIN_PASSWORD, UserRole.SUPER_ADMIN)
    admin_session = SessionModel(user=admin, role=UserRole.SUPER_ADMIN)

    directory = DirectoryService(db_session)
    manager = directory.create_manager(
        ManagerCreateModel(email=MANAGER_EMAIL, password=MANAGER_PASSWORD, full_name="Mona Manager")
    )
    clinic = directory.create_clinic(ClinicCreateModel(name="Central Clinic", address="1 Main St"))
    specialization = directory.create_specialization(
        SpecializationCreateModel(name="cardiology", display_name="Cardiology")
    )
    doctors = [
        directory.create_doctor(
            DoctorCreateModel(
                first_name=first,
                last_name=last,
                specialization_id=specialization.id,
                clinic_ids=[clinic.id],
            )
        )
        for first, last in (("Alice", "Adams"), ("Bob", "Brown"))
    ]
    brand = directory.create_brand(BrandCreateModel(name="Cardiox"))
    products = [
        directory.create_product(ProductCreateModel(brand_id=brand.id, name=name))
        for name in ("Cardiox 10mg", "Cardiox 20mg")
    ]
    rep = directory.create_representative(
        RepresentativeCreateModel(
            first_name="Rita",
            last_name="Rep",
            manager_id=manager.id,
            email=REP_EMAIL,
            password=REP_PASSWORD,
            clinic_ids=[clinic.id],
            brand_ids=[brand.id],
        ),
        admin_session,
    )
    other_rep = directory.create_representative(
        RepresentativeCreateModel(first_name="Oscar", last_name="Other", manager_id=manager.id),
        admin_session,
    )

    return SimpleNamespace(
        admin=admin,
        manager=manager,
        clinic=clinic,
        specialization=specialization,
        doctors=doctors,
        brand=brand,
        products=products,
        rep=rep,
        other_rep=other_rep,
    )


@pytest.fixture
def foreign_rep(db_session, portal):
    """A representative on a second manager's team."""
    directory = DirectoryService(db_session)
    manager = directory.create_manager(
        ManagerCreateModel(email="second@example.com", password="second-pass", full_name="Sam Second")
    )
    return directory.create_representative(
        RepresentativeCreateModel(first_name="Xavier", last_name="Foreign", manager_id=manager.id),
        SessionModel(user=portal.admin, role=UserRole.SUPER_ADMIN),
    )


def sign_in(client, email, password):
    response = client.post("/auth/token", data={"username": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client, portal):
    return sign_in(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def manager_headers(client, portal):
    return sign_in(client, MANAGER_EMAIL, MANAGER_PASSWORD)


@pytest.fixture
def rep_headers(client, portal):
    return sign_in(client, REP_EMAIL, REP_PASSWORD)


@pytest.fixture
def login(client):
    """Sign in through the token endpoint and return the auth headers."""

    def _login(email, password):
        return sign_in(client, email, password)

    return _login
