"""Tests for the database connection manager."""

import aiosqlite
import pytest

from samay_sahayak.db import engine
from samay_sahayak.db.engine import ConnectionState, DatabaseManager
from samay_sahayak.exceptions import DatabaseUnavailableError, StorageError


class TestDatabaseManager:
    """Tests for connection lifecycle and bounded retry."""

    async def test_connect(self, temp_db_path):
        manager = DatabaseManager(temp_db_path, max_retries=1, retry_delay=0)
        assert manager.state == ConnectionState.DISCONNECTED

        await manager.connect()

        assert manager.is_connected
        assert temp_db_path.exists()
        assert manager.health() == {"state": "connected", "path": str(temp_db_path), "error": None}

    async def test_retries_then_fails(self, temp_db_path, monkeypatch):
        attempts = []

        async def failing_init(db_path):
            attempts.append(db_path)
            raise aiosqlite.OperationalError("unable to open database file")

        monkeypatch.setattr(engine, "init_db", failing_init)
        manager = DatabaseManager(temp_db_path, max_retries=3, retry_delay=0)

        with pytest.raises(DatabaseUnavailableError) as exc_info:
            await manager.connect()

        assert len(attempts) == 3
        assert manager.state == ConnectionState.ERROR
        assert manager.last_error == "unable to open database file"
        assert exc_info.value.category == StorageError.CONNECTION
        assert exc_info.value.status_code == 500

    async def test_ensure_connected_recovers(self, temp_db_path, monkeypatch):
        real_init = engine.init_db
        calls = []

        async def flaky_init(db_path):
            calls.append(db_path)
            if len(calls) == 1:
                raise aiosqlite.OperationalError("disk I/O error")
            await real_init(db_path)

        monkeypatch.setattr(engine, "init_db", flaky_init)
        manager = DatabaseManager(temp_db_path, max_retries=1, retry_delay=0)

        with pytest.raises(DatabaseUnavailableError):
            await manager.connect()
        await manager.ensure_connected()

        assert manager.is_connected
        assert manager.last_error is None

    async def test_ensure_connected_single_attempt(self, temp_db_path, monkeypatch):
        attempts = []

        async def failing_init(db_path):
            attempts.append(db_path)
            raise aiosqlite.OperationalError("locked")

        monkeypatch.setattr(engine, "init_db", failing_init)
        manager = DatabaseManager(temp_db_path, max_retries=5, retry_delay=0)

        with pytest.raises(DatabaseUnavailableError):
            await manager.ensure_connected()
        assert len(attempts) == 1

    async def test_check(self, temp_db_path):
        manager = DatabaseManager(temp_db_path, max_retries=1, retry_delay=0)
        assert await manager.check() is False

        await manager.connect()
        assert await manager.check() is True

    async def test_close(self, temp_db_path):
        manager = DatabaseManager(temp_db_path, max_retries=1, retry_delay=0)
        await manager.connect()
        await manager.close()
        assert manager.state == ConnectionState.DISCONNECTED
