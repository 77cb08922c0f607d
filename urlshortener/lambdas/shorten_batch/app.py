import json
import logging
from typing import Any

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.models import ShortURLModel
from urlshortener.store import ShortURLStore, get_store
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError
from urlshortener.utils import hash_url, base_url, get_short_url, request_body, event_user_id, is_valid_url
from urlshortener.utils.helpers import guarantee_500_response, log_request
from urlshortener.lambdas.responses import response_201, response_400, response_409
from urlshortener.lambdas.shorten_batch.constants import (
    INVALID_JSON,
    INVALID_BATCH,
    INVALID_URL,
    USER_ID_ALLOCATED,
    SHORT_URL_ALREADY_EXISTS,
    SHORTEN_BATCH_SUCCESS,
)


logger = logging.getLogger(__name__)


def parse_batch(payload: Any) -> list[tuple[str, str]] | None:
    """Return (correlation_id, original_url) pairs, or None if payload isn't a valid batch"""
    if not isinstance(payload, list) or not payload:
        return None

    batch = []
    for item in payload:
        if not isinstance(item, dict):
            return None
        correlation_id = item.get('correlation_id')
        original_url = item.get('original_url')
        if not isinstance(correlation_id, str) or not isinstance(original_url, str) or not original_url:
            return None
        batch.append((correlation_id, original_url))
    return batch


def shorten(store: ShortURLStore, target_url: str, user_id: int) -> tuple[str, bool]:
    """Store one mapping. Returns its shortcode and whether it already existed."""
    shortcode = hash_url(target_url)
    existing = store.get(shortcode)
    if existing is not None and existing.target == target_url:
        return shortcode, True
    try:
        store.insert(ShortURLModel(target=target_url, shortcode=shortcode, user_id=user_id))
    except ShortURLAlreadyExistsError:
        return shortcode, True
    return shortcode, False


@log_request
@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten a batch of URLs

    This Lambda handler follows this procedure:
    - Step 1: Parse and validate the whole batch (nothing is stored if any item is invalid)
    - Step 2: Identify the caller, allocating an owner id if there is none
    - Step 3: Shorten every URL in request order
    - Step 4: Respond with one short URL per correlation id

    HTTP responses:
        201: Every URL was newly shortened
            [{"correlation_id": ..., "short_url": ...}, ...]
        400: Bad client request
            message: invalid JSON, malformed batch or invalid URL
        409: At least one URL was already shortened (body lists every item anyway)
        500: Internal server error

    Example:
        >>> event = {'body': '[{"correlation_id": "a", "original_url": "https://example.com"}]'}
        >>> json.loads(lambda_handler(event, None)['body'])
        [{'correlation_id': 'a', 'short_url': 'http://localhost:3000/100680ad'}]
    """
    # 1- Parse and validate the batch
    try:
        payload = json.loads(request_body(event) or 'null')
    except ValueError:
        # json.JSONDecodeError is a ValueError, as are base64 decoding failures
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    batch = parse_batch(payload)
    if batch is None:
        logger.info('Malformed batch. Responding with 400.', extra={'event': INVALID_BATCH})
        return response_400(
            message="expected a non-empty list of {'correlation_id', 'original_url'} objects",
            error_code=INVALID_BATCH,
        )

    invalid = [correlation_id for correlation_id, original_url in batch if not is_valid_url(original_url)]
    if invalid:
        logger.info('Invalid URL in batch. Responding with 400.', extra={'event': INVALID_URL, 'correlation_ids': invalid})
        return response_400(message=f'invalid URL for correlation ids {invalid}', error_code=INVALID_URL)

    store = get_store()

    # 2- Identify the caller
    user_id = event_user_id(event)
    new_user_id = None
    if user_id is None:
        user_id = new_user_id = store.allocate_user_id()
        logger.info('Allocated new owner id %s.', user_id, extra={'event': USER_ID_ALLOCATED, 'user_id': user_id})

    # 3- Shorten every URL
    base = base_url(event)
    results = []
    conflicts = 0
    for correlation_id, original_url in batch:
        shortcode, existed = shorten(store, original_url, user_id)
        conflicts += existed
        results.append({'correlation_id': correlation_id, 'short_url': get_short_url(shortcode, base)})

    # 4- Respond
    if conflicts:
        logger.info(
            'Batch contained already shortened URLs. Responding with 409.',
            extra={'event': SHORT_URL_ALREADY_EXISTS, 'conflicts': conflicts, 'total': len(batch)},
        )
        return response_409(results, new_user_id=new_user_id)

    logger.info(
        'Shortened batch. Responding with 201.',
        extra={'event': SHORTEN_BATCH_SUCCESS, 'user_id': user_id, 'total': len(batch)},
    )
    return response_201(results, new_user_id=new_user_id)
