import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.store import get_store
from urlshortener.utils import base_url, get_short_url, event_user_id
from urlshortener.utils.helpers import guarantee_500_response, log_request
from urlshortener.lambdas.responses import response_200, response_204, response_401
from urlshortener.lambdas.user_urls.constants import MISSING_USER_ID, NO_USER_URLS, USER_URLS_SUCCESS


logger = logging.getLogger(__name__)


@log_request
@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """List the caller's live short URLs

    HTTP responses:
        200: [{"short_url": ..., "original_url": ...}, ...]
        204: Caller owns no live short URLs
        401: Caller has no owner id
        500: Internal server error
    """
    user_id = event_user_id(event)
    if user_id is None:
        logger.info('Missing owner id. Responding with 401.', extra={'event': MISSING_USER_ID})
        return response_401(message="missing 'user_id' in authorizer context", error_code=MISSING_USER_ID)

    short_urls = [short_url for short_url in get_store().list_by_owner(user_id) if not short_url.deleted]
    if not short_urls:
        logger.info('No short URLs for owner. Responding with 204.', extra={'user_id': user_id, 'event': NO_USER_URLS})
        return response_204()

    base = base_url(event)
    body = [
        {'short_url': get_short_url(short_url.shortcode, base), 'original_url': short_url.target}
        for short_url in sorted(short_urls, key=lambda s: s.shortcode)
    ]
    logger.info(
        'Listed short URLs for owner. Responding with 200.',
        extra={'user_id': user_id, 'count': len(body), 'event': USER_URLS_SUCCESS},
    )
    return response_200(body)
