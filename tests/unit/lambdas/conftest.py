from typing import cast

import pytest

from urlshortener.types import LambdaContext, LambdaEvent
from urlshortener.store import ShortURLStore
from urlshortener.dao.memory import ShortURLMemoryDAO


@pytest.fixture
def store() -> ShortURLStore:
    return ShortURLStore(ShortURLMemoryDAO())


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'urlshortener'})


def build_event(
    *,
    method: str = 'GET',
    path: str = '/',
    body: str | None = None,
    user_id: str | None = '1',
    headers: dict | None = None,
    path_parameters: dict | None = None,
) -> LambdaEvent:
    request_context = {
        'resourcePath': path,
        'httpMethod': method,
        'domainName': 'sho.rt',
        'stage': 'test',
    }
    if user_id is not None:
        request_context['authorizer'] = {'claims': {'user_id': user_id}}

    return cast(
        LambdaEvent,
        {
            'body': body,
            'resource': path,
            'headers': {'User-Agent': 'pytest', **(headers or {})},
            'httpMethod': method,
            'path': path,
            'pathParameters': path_parameters,
            'requestContext': request_context,
        },
    )


@pytest.fixture
def make_event():
    """Factory for API Gateway proxy events"""
    return build_event
