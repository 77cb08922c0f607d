"""API Gateway (Lambda proxy) response builders shared by every handler

Error bodies look like:

    {"message": "Bad Request (invalid JSON body)", "errorCode": "INVALID_JSON"}
"""

import json
from typing import Any

from urlshortener.types import LambdaResponse
from urlshortener.constants import USER_ID_HEADER


JSON_HEADERS = {'Content-Type': 'application/json'}


def response_json(status_code: int, body: Any, headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def response_error(status_code: int, base: str, message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return response_json(status_code, body)


def user_id_headers(user_id: int | None) -> dict[str, str]:
    """Headers announcing a freshly allocated owner id (none if the caller already had one)"""
    return {USER_ID_HEADER: str(user_id)} if user_id is not None else {}


def response_200(body: Any) -> LambdaResponse:
    return response_json(200, body)


def response_201(body: Any, *, new_user_id: int | None = None) -> LambdaResponse:
    return response_json(201, body, headers=user_id_headers(new_user_id))


def response_202(body: Any) -> LambdaResponse:
    return response_json(202, body)


def response_204() -> LambdaResponse:
    return {
        'statusCode': 204,
        'headers': {},
        'body': '',
    }


def response_307(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 307,
        'headers': {'Location': location},
        'body': '',
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(400, 'Bad Request', message, error_code)


def response_401(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(401, 'Unauthorized', message, error_code)


def response_403(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(403, 'Forbidden', message, error_code)


def response_409(body: Any, *, new_user_id: int | None = None) -> LambdaResponse:
    return response_json(409, body, headers=user_id_headers(new_user_id))


def response_410(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(410, 'Gone', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_error(500, 'Internal Server Error', message, error_code)
