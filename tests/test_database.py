import asyncio

import pytest
from sqlalchemy import inspect, text

from elearning.core.config import get_settings
from elearning.core.errors import ConfigurationError, StorageError
from elearning.db.session import Database, get_database
from elearning.main import app, lifespan


@pytest.mark.parametrize("url", [None, "", "   "])
def test_missing_connection_string_is_a_configuration_error(url):
    with pytest.raises(ConfigurationError):
        Database(url)


def test_connect_creates_tables_once(tmp_path):
    database = Database(f"sqlite:///{tmp_path}/lms.db")
    assert not database.connected

    factory = database.ensure_connected()
    assert database.connected
    assert database.ensure_connected() is factory

    tables = set(inspect(database.engine).get_table_names())
    assert {"User", "Course", "Enrollment"} <= tables
    database.dispose()


def test_failed_connect_caches_nothing_and_retries(tmp_path):
    database = Database(f"sqlite:///{tmp_path}/missing/dir/lms.db")

    with pytest.raises(StorageError):
        database.ensure_connected()
    assert not database.connected
    assert database.engine is None

    # next call tries again from scratch
    database.url = f"sqlite:///{tmp_path}/lms.db"
    database.ensure_connected()
    assert database.connected
    database.dispose()


def test_in_memory_database_is_supported():
    database = Database("sqlite://")
    with database.session() as db:
        count = db.execute(
            text("SELECT count(*) FROM sqlite_master WHERE type = 'table'")
        ).scalar()
    assert count >= 3
    database.dispose()


def test_storage_failure_is_a_500_with_error(tmp_path, client):
    broken = Database(f"sqlite:///{tmp_path}/missing/dir/lms.db")
    app.dependency_overrides[get_database] = lambda: broken

    r = client.get("/api/users")
    assert r.status_code == 500
    assert r.json() == {"error": "Database connection failed"}


def test_startup_without_database_url_is_fatal(monkeypatch):
    monkeypatch.delenv("DATABASE_URL")
    get_settings.cache_clear()

    async def start():
        async with lifespan(app):
            pass

    try:
        with pytest.raises(ConfigurationError):
            asyncio.run(start())
    finally:
        get_settings.cache_clear()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_query_failure_hides_driver_details(tmp_path):
    database = Database(f"sqlite:///{tmp_path}/lms.db")

    with pytest.raises(StorageError) as excinfo:
        with database.session() as db:
            db.execute(text("SELECT secret FROM no_such_table"))

    assert excinfo.value.message == "Database operation failed"
    assert "no_such_table" not in excinfo.value.to_response()["error"]
    database.dispose()
