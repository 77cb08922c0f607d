import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.store import get_store
from urlshortener.utils import base_url, get_short_url
from urlshortener.utils.helpers import guarantee_500_response, log_request
from urlshortener.lambdas.responses import response_307, response_400, response_410
from urlshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_DELETED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@log_request
@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Get short URL record from the store
    - Step 3: Redirect client to target URL

    HTTP responses:
        307: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode or unknown short URL
        410: Gone
            message: short URL was deleted by its owner
        500: Internal server error
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    # 2- Get short URL record from the store
    short_url = get_store().get(shortcode)
    if short_url is None:
        logger.info(
            'Short URL record not found. Responding with 400.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_400(message=f"short url {get_short_url(shortcode, base_url(event))} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    if short_url.deleted:
        logger.info(
            'Short URL record was deleted. Responding with 410.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_DELETED},
        )
        return response_410(message=f'short url {get_short_url(shortcode, base_url(event))} was deleted', error_code=SHORT_URL_DELETED)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 307.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_307(location=short_url.target)
