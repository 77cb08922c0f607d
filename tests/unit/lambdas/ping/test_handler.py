import json
import time
import threading
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from urlshortener.types import LambdaContext
from urlshortener.lambdas.ping import app
from urlshortener import store as store_module
from urlshortener.constants import ENV
from urlshortener.store import ShortURLStore
from urlshortener.dao.sql import short_url_sql_dao
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.exceptions import DataStoreError


class TestPingHandler:
    dao: ShortURLBaseDAO
    context: LambdaContext

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, make_event) -> None:
        self.dao = MagicMock(spec=ShortURLBaseDAO)
        self.dao.ping.return_value = True
        store = ShortURLStore(self.dao, ping_timeout=1.0)
        monkeypatch.setattr(app, 'get_store', lambda: store)
        self.context = context
        self.event = make_event(path='/ping', user_id=None)

    def test_lambda_handler(self) -> None:
        response = app.lambda_handler(self.event, self.context)

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {'status': 'ok'}
        self.dao.ping.assert_called_once_with(1.0)

    def test_lambda_handler_with_unavailable_store(self) -> None:
        self.dao.ping.side_effect = DataStoreError('Database at sqlite:///urls.db did not answer within 1.0s.')

        response = app.lambda_handler(self.event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['errorCode'] == 'DATA_STORE_UNAVAILABLE'

    def test_lambda_handler_with_broken_configuration(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setattr(app, 'get_store', MagicMock(side_effect=RuntimeError('boom')))

        response = app.lambda_handler(self.event, self.context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'

    def test_lambda_handler_with_store_build_failure(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setattr(app, 'get_store', MagicMock(side_effect=DataStoreError("Can't connect to database at sqlite:///urls.db.")))

        response = app.lambda_handler(self.event, self.context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['errorCode'] == 'DATA_STORE_UNAVAILABLE'

    def test_lambda_handler_fails_fast_on_cold_start(self, monkeypatch: MonkeyPatch, sqlite_dsn: str) -> None:
        monkeypatch.setenv(ENV.Storage.DATABASE_DSN, sqlite_dsn)
        monkeypatch.setenv(ENV.Storage.PING_TIMEOUT, '0.2')
        monkeypatch.setattr(app, 'get_store', store_module.get_store)
        monkeypatch.setattr(store_module.atexit, 'register', MagicMock())
        # Table creation hangs like a connection attempt to an unreachable host
        release = threading.Event()
        monkeypatch.setattr(short_url_sql_dao, 'create_tables', lambda engine: release.wait(5))

        try:
            started = time.monotonic()
            response = app.lambda_handler(self.event, self.context)
            elapsed = time.monotonic() - started
        finally:
            release.set()

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['errorCode'] == 'DATA_STORE_UNAVAILABLE'
        assert elapsed < 1.0
