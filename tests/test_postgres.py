import pytest

import db.postgres as postgres
from settings.config import settings


def test_database_url_prefers_pgbouncer(monkeypatch):
    monkeypatch.setattr(settings, "PGBOUNCER_DSN", "postgresql+asyncpg://app_user:pw@pgbouncer:6432/finance")

    assert postgres.database_url() == "postgresql+asyncpg://app_user:pw@pgbouncer:6432/finance"


def test_database_url_falls_back_to_postgres(monkeypatch):
    monkeypatch.setattr(settings, "PGBOUNCER_DSN", None)

    assert postgres.database_url() == settings.POSTGRES_DSN


@pytest.mark.asyncio
async def test_session_factory_is_reused_until_close():
    factory = postgres.get_session_factory()

    assert postgres.get_session_factory() is factory
    assert factory.kw["expire_on_commit"] is False

    await postgres.close_postgres()

    assert postgres.get_session_factory() is not factory
    await postgres.close_postgres()
