import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.exceptions import ConfigurationError, InfrastructureError
from urlshortener.dao import cached_url_dao_from_config
from urlshortener.dao.exceptions import AliasNotFoundError, DataStoreError
from urlshortener.utils import load_config, app_prefix, get_short_url
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.responses import response_302, response_400, response_404, response_500
from urlshortener.lambdas.redirect_url.constants import (
    MISSING_ALIAS,
    ALIAS_NOT_FOUND,
    DATA_STORE_UNAVAILABLE,
    CONFIGURATION_ERROR,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract alias from request path
    - Step 2: Resolve alias to its target URL
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing alias in path parameters
        404: Not found
            message: no record exists for the alias
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> event = {'pathParameters': {'alias': 'aBcDeF'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Extract alias from request's path
    alias = (event.get('pathParameters') or {}).get('alias')
    if not alias:
        logger.info('Missing "alias" in path. Responding with 400.', extra={'event': MISSING_ALIAS})
        return response_400(message="missing 'alias' in path", error_code=MISSING_ALIAS)
    logger.debug('Client requested short URL %s.', get_short_url(alias, event))

    # 2- Resolve alias to its target URL
    try:
        url_dao = cached_url_dao_from_config(app_config, prefix=app_prefix())
        target_url = url_dao.resolve(alias)
    except AliasNotFoundError:
        logger.info('URL record not found in database. Responding with 404.', extra={'alias': alias, 'event': ALIAS_NOT_FOUND})
        return response_404(message=f"short url {get_short_url(alias, event)} doesn't exist", error_code=ALIAS_NOT_FOUND)
    except DataStoreError:
        logger.exception('Failed to resolve alias. Responding with 500.', extra={'alias': alias, 'event': DATA_STORE_UNAVAILABLE})
        return response_500(error_code=DATA_STORE_UNAVAILABLE)

    # 3- Redirect client to target URL
    logger.info('Redirecting client to target URL. Responding with 302.', extra={'alias': alias, 'event': REDIRECT_SUCCESS})
    return response_302(location=target_url)
