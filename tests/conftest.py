from __future__ import annotations

import pytest

from core import config, db
from main import create_app

from fakes import FakeDatabase, FakePool


@pytest.fixture()
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def raw_pool(database: FakeDatabase) -> FakePool:
    return FakePool(database, max_size=config.POOL_MAX_SIZE)


@pytest.fixture()
def app(raw_pool: FakePool):
    async def pool_factory(cfg: config.PoolConfig) -> db.Pool:
        return db.Pool(raw_pool, acquire_timeout=cfg.acquire_timeout)

    return create_app(
        pool_factory=pool_factory,
        config_loader=lambda: config.PoolConfig(dsn="postgresql://tests@localhost/users"),
    )
