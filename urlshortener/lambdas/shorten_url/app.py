import json
import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.models import ShortURLModel
from urlshortener.store import get_store
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError
from urlshortener.utils import hash_url, base_url, get_short_url, request_body, event_user_id, is_valid_url
from urlshortener.utils.helpers import guarantee_500_response, log_request
from urlshortener.lambdas.responses import response_201, response_400, response_409
from urlshortener.lambdas.shorten_url.constants import (
    INVALID_BODY,
    INVALID_JSON,
    MISSING_URL,
    INVALID_URL,
    USER_ID_ALLOCATED,
    SHORT_URL_ALREADY_EXISTS,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def is_json_request(event: LambdaEvent) -> bool:
    headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
    return 'json' in (headers.get('content-type') or '').lower()


@log_request
@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL from request body (JSON or plain text)
    - Step 2: Identify the caller, allocating an owner id if there is none
    - Step 3: Hash original URL into a shortcode
    - Step 4: Store the mapping (via the store facade)
    - Step 5: Respond to user with 201 created

    HTTP responses:
        201: Successful URL shortening
            result: newly generated short url
            user_id: allocated owner id (only when the caller had none)
        400: Bad client request
            message: invalid body, invalid JSON, missing or invalid URL
        409: URL already shortened
            result: existing short url
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> event = {'headers': {'Content-Type': 'application/json'}, 'body': '{"url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['result']
        'http://localhost:3000/100680ad'
    """
    # 1- Extract original URL from request body
    try:
        body = request_body(event)
    except ValueError:
        logger.info('Undecodable request body. Responding with 400.', extra={'event': INVALID_BODY})
        return response_400(message='undecodable body', error_code=INVALID_BODY)

    if is_json_request(event):
        try:
            payload = json.loads(body or '{}')
        except json.JSONDecodeError:
            logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
            return response_400(message='invalid JSON body', error_code=INVALID_JSON)
        target_url = payload.get('url') if isinstance(payload, dict) else None
    else:
        target_url = body.strip()

    if not target_url:
        logger.info('Missing URL in request body. Responding with 400.', extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in body", error_code=MISSING_URL)
    if not is_valid_url(target_url):
        logger.info('Invalid URL in request body. Responding with 400.', extra={'event': INVALID_URL})
        return response_400(message=f'invalid URL {target_url!r}', error_code=INVALID_URL)

    store = get_store()

    # 2- Identify the caller
    user_id = event_user_id(event)
    new_user_id = None
    if user_id is None:
        user_id = new_user_id = store.allocate_user_id()
        logger.info('Allocated new owner id %s.', user_id, extra={'event': USER_ID_ALLOCATED, 'user_id': user_id})

    # 3- Hash original URL into a shortcode
    shortcode = hash_url(target_url)
    short_url_string = get_short_url(shortcode, base_url(event))
    response_body = {'result': short_url_string}
    if new_user_id is not None:
        response_body['user_id'] = new_user_id

    # 4- Store the mapping
    existing = store.get(shortcode)
    if existing is not None and existing.target == target_url:
        logger.info(
            'URL already shortened. Responding with 409.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_ALREADY_EXISTS},
        )
        return response_409(response_body, new_user_id=new_user_id)

    try:
        store.insert(ShortURLModel(target=target_url, shortcode=shortcode, user_id=user_id))
    except ShortURLAlreadyExistsError:
        logger.warning(
            'Shortcode already bound to a different URL. Responding with 409.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_ALREADY_EXISTS},
        )
        return response_409(response_body, new_user_id=new_user_id)

    # 5- Respond with 201 created
    logger.info(
        'Shortened URL. Responding with 201.',
        extra={'shortcode': shortcode, 'user_id': user_id, 'event': SHORTEN_SUCCESS},
    )
    return response_201(response_body, new_user_id=new_user_id)
