import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.store import get_store
from urlshortener.dao.exceptions import DataStoreError
from urlshortener.utils.helpers import guarantee_500_response, log_request
from urlshortener.lambdas.responses import response_200, response_500
from urlshortener.lambdas.ping.constants import PING_SUCCESS, DATA_STORE_UNAVAILABLE


logger = logging.getLogger(__name__)


@log_request
@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Healthcheck the configured data store

    A cold start builds the store first; an unreachable database fails that
    step within PING_TIMEOUT and is reported the same way as a failed ping.

    HTTP responses:
        200: {"status": "ok"}
        500: Data store unreachable or too slow to answer
    """
    try:
        get_store().ping()
    except DataStoreError as error:
        logger.exception(
            'Data store healthcheck failed. Responding with 500.',
            extra={'event': DATA_STORE_UNAVAILABLE, 'reason': str(error)},
        )
        return response_500(message='data store unavailable', error_code=DATA_STORE_UNAVAILABLE)

    logger.debug('Data store healthcheck passed.', extra={'event': PING_SUCCESS})
    return response_200({'status': 'ok'})
