import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.exceptions import ConfigurationError, InfrastructureError
from urlshortener.dao import cached_url_dao_from_config
from urlshortener.dao.exceptions import DataStoreError
from urlshortener.utils import load_config, app_prefix
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.responses import response_200, response_400, response_500
from urlshortener.lambdas.delete_url.constants import (
    MISSING_ALIAS,
    DATA_STORE_UNAVAILABLE,
    CONFIGURATION_ERROR,
    ALIAS_DELETED,
    ALIAS_ALREADY_ABSENT,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to delete short URLs

    Deleting is idempotent: an alias that doesn't exist (anymore) is reported
    with 200 and `deleted: false`, never with 404.

    HTTP responses:
        200: Alias is absent after the request
            alias: requested alias
            deleted: True if this request removed a record
        400: Bad client request
            message: missing alias in path parameters
        500: Internal server error
            message: server experienced an internal error
    """
    # 0- Get application's config
    try:
        app_config = load_config('delete_url')
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load AppConfig for delete URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Extract alias from request's path
    alias = (event.get('pathParameters') or {}).get('alias')
    if not alias:
        logger.info('Missing "alias" in path. Responding with 400.', extra={'event': MISSING_ALIAS})
        return response_400(message="missing 'alias' in path", error_code=MISSING_ALIAS)

    # 2- Delete the record
    try:
        url_dao = cached_url_dao_from_config(app_config, prefix=app_prefix())
        deleted = url_dao.delete(alias)
    except DataStoreError:
        logger.exception('Failed to delete alias. Responding with 500.', extra={'alias': alias, 'event': DATA_STORE_UNAVAILABLE})
        return response_500(error_code=DATA_STORE_UNAVAILABLE)

    event_code = ALIAS_DELETED if deleted else ALIAS_ALREADY_ABSENT
    logger.info('Alias is absent. Responding with 200.', extra={'alias': alias, 'deleted': deleted, 'event': event_code})
    return response_200(
        {
            'message': f"Deleted alias '{alias}'" if deleted else f"Alias '{alias}' did not exist",
            'alias': alias,
            'deleted': deleted,
        }
    )
