import os

TEST_DB_FILE = "test_elearning.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before the app module reads its settings
os.environ["DATABASE_URL"] = TEST_DB_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from elearning.db.base_class import Base  # noqa: E402
from elearning.db.session import Database, get_database  # noqa: E402
from elearning.main import app  # noqa: E402
from elearning.models.course import Course  # noqa: E402
from elearning.models.enrollment import Enrollment  # noqa: E402
from elearning.models.user import User  # noqa: E402

test_database = Database(TEST_DB_URL)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Connect once (creates the schema) for the whole test session."""
    test_database.ensure_connected()
    yield
    Base.metadata.drop_all(bind=test_database.engine)
    test_database.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def clean_tables():
    """Every test starts from empty tables (child -> parent)."""
    with test_database.session() as db:
        db.query(Enrollment).delete()
        db.query(Course).delete()
        db.query(User).delete()
        db.commit()
    yield


@pytest.fixture()
def database():
    return test_database


@pytest.fixture()
def client():
    """Test client whose handlers share the test Database."""
    app.dependency_overrides[get_database] = lambda: test_database
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
