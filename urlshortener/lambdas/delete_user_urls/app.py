import json
import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.store import get_store
from urlshortener.dao.exceptions import ShortURLForbiddenError, ShortURLNotFoundError
from urlshortener.utils import request_body, event_user_id
from urlshortener.utils.helpers import guarantee_500_response, log_request
from urlshortener.lambdas.responses import response_202, response_400, response_401, response_403
from urlshortener.lambdas.delete_user_urls.constants import (
    MISSING_USER_ID,
    INVALID_JSON,
    INVALID_SHORTCODES,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_FORBIDDEN,
    DELETE_ACCEPTED,
)


logger = logging.getLogger(__name__)


@log_request
@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Soft-delete a list of the caller's short URLs

    This Lambda handler follows this procedure:
    - Step 1: Identify the caller
    - Step 2: Parse the JSON list of shortcodes
    - Step 3: Run the batch deletion pipeline
    - Step 4: Respond with 202 accepted

    The batch stops at the first failing shortcode; deletions applied before
    it stay applied.

    HTTP responses:
        202: Every shortcode was deleted
        400: Bad client request (invalid body or unknown shortcode)
        401: Caller has no owner id
        403: A shortcode belongs to another user
        500: Internal server error
    """
    # 1- Identify the caller
    user_id = event_user_id(event)
    if user_id is None:
        logger.info('Missing owner id. Responding with 401.', extra={'event': MISSING_USER_ID})
        return response_401(message="missing 'user_id' in authorizer context", error_code=MISSING_USER_ID)

    # 2- Parse the list of shortcodes
    try:
        shortcodes = json.loads(request_body(event) or 'null')
    except ValueError:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    if not isinstance(shortcodes, list) or not all(isinstance(s, str) and s for s in shortcodes):
        logger.info('Body is not a list of shortcodes. Responding with 400.', extra={'event': INVALID_SHORTCODES})
        return response_400(message='expected a JSON list of shortcodes', error_code=INVALID_SHORTCODES)

    # 3- Run the batch deletion pipeline
    try:
        deleted = get_store().delete_many(shortcodes, user_id)
    except ShortURLNotFoundError as e:
        logger.info('Unknown shortcode in batch. Responding with 400.', extra={'user_id': user_id, 'event': SHORT_URL_NOT_FOUND})
        return response_400(message=str(e), error_code=SHORT_URL_NOT_FOUND)
    except ShortURLForbiddenError as e:
        logger.info('Shortcode owned by another user. Responding with 403.', extra={'user_id': user_id, 'event': SHORT_URL_FORBIDDEN})
        return response_403(message=str(e), error_code=SHORT_URL_FORBIDDEN)

    # 4- Respond with 202 accepted
    logger.info(
        'Deleted short URLs. Responding with 202.',
        extra={'user_id': user_id, 'count': deleted, 'event': DELETE_ACCEPTED},
    )
    return response_202({'deleted': deleted})
