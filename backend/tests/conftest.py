"""
Pytest configuration and fixtures
"""
import pytest
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash

from rentals import create_app
from rentals.extensions import db as _db
from rentals.models import Property, Floor, Unit, User, Tenant, UNIT_VACANT


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app("testing")

    with app.app_context():
        yield app


@pytest.fixture(scope="function")
def db(app):
    """Fresh schema for every test."""
    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture(scope="function")
def client(app, db):
    with app.test_client() as client:
        yield client


@pytest.fixture
def make_unit(db):
    """Create a unit on its own property and floor."""
    counter = {"n": 0}

    def _make(rent=45000, status=UNIT_VACANT, number=None):
        counter["n"] += 1
        prop = Property(name=f"Block {counter['n']}", location="Nairobi", type="apartment")
        floor = Floor(name="Ground", property=prop)
        unit = Unit(
            floor=floor,
            number=number or f"A{counter['n']}",
            type="2BR",
            status=status,
            rent=rent,
        )
        db.session.add_all([prop, floor, unit])
        db.session.commit()
        return unit

    return _make


@pytest.fixture
def make_user(db):
    def _make(role="landlord", email=None, password="secret123"):
        user = User(
            name=f"{role} user",
            email=email or f"{role}-{User.query.count() + 1}@example.com",
            password=generate_password_hash(password),
            role=role,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers(make_user):
    """Bearer headers for a freshly created user of the given role."""

    def _headers(role="landlord", user=None):
        user = user or make_user(role)
        token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
        return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    return _headers


@pytest.fixture
def tenant_payload():
    def _payload(unit_id, **overrides):
        data = {
            "name": "A",
            "email": "a@x.com",
            "phone": "1",
            "moveInDate": "2024-01-01",
            "leaseEnd": "2024-12-31",
            "unitId": unit_id,
        }
        data.update(overrides)
        return data

    return _payload


def assert_occupancy_invariant():
    """occupied iff exactly one tenant references the unit."""
    for unit in Unit.query.all():
        holders = Tenant.query.filter(Tenant.unit_id == unit.id).count()
        if unit.status == "occupied":
            assert holders == 1, f"unit {unit.id} occupied with {holders} tenants"
        else:
            assert holders == 0, f"unit {unit.id} {unit.status} with {holders} tenants"


@pytest.fixture
def occupancy_invariant():
    return assert_occupancy_invariant
