from collections.abc import Iterator
from pathlib import Path

import pytest
from pytest import MonkeyPatch

from urlshortener.constants import ENV
from urlshortener.models import ShortURLModel
from urlshortener import store as store_module
from urlshortener.dao.memory import ShortURLMemoryDAO
from urlshortener.dao.logfile import ShortURLLogFileDAO
from urlshortener.dao.sql import ShortURLSQLDAO


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    for group in (ENV.App, ENV.Storage, ENV.Pipeline):
        for name in group:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _store_cache() -> Iterator[None]:
    store_module._build_store.cache_clear()
    yield
    store_module._build_store.cache_clear()


@pytest.fixture
def short_url() -> ShortURLModel:
    return ShortURLModel(target='https://example.com/blog/article-123', shortcode='a1b2c3d4', user_id=1)


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / 'data' / 'short-url-db.json'


@pytest.fixture
def memory_dao() -> ShortURLMemoryDAO:
    return ShortURLMemoryDAO()


@pytest.fixture
def logfile_dao(log_path: Path) -> ShortURLLogFileDAO:
    return ShortURLLogFileDAO(file_storage_path=log_path)


@pytest.fixture
def sqlite_dsn(tmp_path: Path) -> str:
    return f'sqlite:///{tmp_path / "urls.db"}'


@pytest.fixture
def sql_dao(sqlite_dsn: str) -> Iterator[ShortURLSQLDAO]:
    dao = ShortURLSQLDAO(database_dsn=sqlite_dsn)
    yield dao
    dao.close()
