import json

import pytest
from pytest import MonkeyPatch

from urlshortener.types import LambdaContext
from urlshortener.lambdas.shorten_batch import app
from urlshortener.models import ShortURLModel
from urlshortener.store import ShortURLStore
from urlshortener.utils import hash_url


class TestShortenBatchHandler:
    store: ShortURLStore
    context: LambdaContext

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, store: ShortURLStore, context: LambdaContext, make_event) -> None:
        monkeypatch.setattr(app, 'get_store', lambda: store)
        self.store = store
        self.context = context
        self.make_event = make_event

    def batch_event(self, batch, **kwargs):
        body = batch if isinstance(batch, str) else json.dumps(batch)
        return self.make_event(method='POST', path='/api/shorten/batch', body=body, **kwargs)

    def test_lambda_handler(self) -> None:
        batch = [
            {'correlation_id': 'first', 'original_url': 'https://example.com/1'},
            {'correlation_id': 'second', 'original_url': 'https://example.com/2'},
        ]

        response = app.lambda_handler(self.batch_event(batch), self.context)

        assert response['statusCode'] == 201
        assert json.loads(response['body']) == [
            {'correlation_id': 'first', 'short_url': f'https://sho.rt/{hash_url("https://example.com/1")}'},
            {'correlation_id': 'second', 'short_url': f'https://sho.rt/{hash_url("https://example.com/2")}'},
        ]
        assert len(self.store.list_by_owner(1)) == 2

    def test_lambda_handler_with_existing_url(self) -> None:
        existing = 'https://example.com/1'
        self.store.insert(ShortURLModel(target=existing, shortcode=hash_url(existing), user_id=1))
        batch = [
            {'correlation_id': 'first', 'original_url': existing},
            {'correlation_id': 'second', 'original_url': 'https://example.com/2'},
        ]

        response = app.lambda_handler(self.batch_event(batch), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 409
        assert [item['correlation_id'] for item in body] == ['first', 'second']
        assert self.store.get(hash_url('https://example.com/2')) is not None

    def test_lambda_handler_allocates_user_id(self) -> None:
        batch = [{'correlation_id': 'first', 'original_url': 'https://example.com/1'}]

        response = app.lambda_handler(self.batch_event(batch, user_id=None), self.context)

        assert response['statusCode'] == 201
        assert response['headers']['X-User-Id'] == '1'
        assert self.store.get(hash_url('https://example.com/1')).user_id == 1

    @pytest.mark.parametrize(
        'batch, error_code',
        [
            ('[{"correlation_id": ', 'INVALID_JSON'),
            ('', 'INVALID_BATCH'),
            ([], 'INVALID_BATCH'),
            ({'correlation_id': 'a', 'original_url': 'https://example.com'}, 'INVALID_BATCH'),
            (['https://example.com'], 'INVALID_BATCH'),
            ([{'correlation_id': 'a'}], 'INVALID_BATCH'),
            ([{'correlation_id': 1, 'original_url': 'https://example.com'}], 'INVALID_BATCH'),
            (
                [
                    {'correlation_id': 'a', 'original_url': 'https://example.com'},
                    {'correlation_id': 'b', 'original_url': 'not a url'},
                ],
                'INVALID_URL',
            ),
        ],
    )
    def test_lambda_handler_with_bad_request(self, batch, error_code: str) -> None:
        response = app.lambda_handler(self.batch_event(batch), self.context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == error_code
        # Nothing is stored when any item is invalid
        assert self.store.max_owner_id() == 0
