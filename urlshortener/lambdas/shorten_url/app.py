import json
import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.exceptions import ConfigurationError, InfrastructureError
from urlshortener.dao import cached_url_dao_from_config
from urlshortener.dao.exceptions import AliasExistsError, DataStoreError
from urlshortener.models import URLRecordModel
from urlshortener.utils import load_config, app_prefix, get_short_url, is_valid_url, is_valid_alias, save_with_generated_alias
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.responses import response_201, response_400, response_409, response_500
from urlshortener.lambdas.shorten_url.constants import (
    INVALID_JSON,
    MISSING_URL,
    INVALID_URL,
    INVALID_ALIAS,
    ALIAS_EXISTS,
    DATA_STORE_UNAVAILABLE,
    CONFIGURATION_ERROR,
    ALIAS_SAVED,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract target URL and optional alias from request body
    - Step 2: Validate target URL and alias
    - Step 3: Store alias and URL mapping in database (via DAO), generating
              an alias and retrying on collisions when none was given
    - Step 4: Respond to user with 201 created

    HTTP responses:
        201: Successful URL shortening
            message: success message
            url: original url (provided in request)
            alias: chosen or generated alias
            shortUrl: public short url
            id: record id
        400: Bad client request
            message: indicate cause of bad request (invalid JSON, missing/invalid url, invalid alias)
        409: Conflict
            message: the requested alias is already taken
        500: Internal server error
            message: indicate the server experienced an internal error

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"url": "https://example.com", "alias": "example"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['shortUrl']
        'http://localhost:3000/example'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load AppConfig for shorten URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Extract target URL and optional alias from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Request body is not valid JSON. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)
    if not isinstance(request_body, dict):
        logger.info('Request body is not a JSON object. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    url = request_body.get('url')
    alias = request_body.get('alias') or None

    # 2- Validate target URL and alias
    if not url:
        logger.info("Missing 'url' in request body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)
    if not is_valid_url(url):
        logger.info('Invalid target URL. Responding with 400.', extra={'url': url, 'event': INVALID_URL})
        return response_400(message="'url' must be an absolute http(s) URL", error_code=INVALID_URL)
    if alias is not None and not is_valid_alias(alias):
        logger.info('Invalid alias. Responding with 400.', extra={'alias': alias, 'event': INVALID_ALIAS})
        return response_400(message="'alias' may only contain letters, digits, '-' and '_'", error_code=INVALID_ALIAS)

    # 3- Store alias and URL mapping in database (via DAO)
    try:
        url_dao = cached_url_dao_from_config(app_config, prefix=app_prefix())
        if alias is None:
            record = save_with_generated_alias(url_dao, url)
        else:
            record = URLRecordModel(alias=alias, url=url, id=url_dao.save(url, alias))
    except AliasExistsError:
        logger.info('Alias already exists. Responding with 409.', extra={'alias': alias, 'event': ALIAS_EXISTS})
        return response_409(message=f"alias '{alias}' already exists", error_code=ALIAS_EXISTS)
    except DataStoreError:
        logger.exception('Failed to save URL record. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500(error_code=DATA_STORE_UNAVAILABLE)

    # 4- Return successful response to user
    short_url = get_short_url(record.alias, event)
    logger.info(
        'Saved URL record. Responding with 201.',
        extra={'alias': record.alias, 'id': record.id, 'event': ALIAS_SAVED},
    )
    return response_201(
        {
            'message': f'Successfully shortened {url} to {short_url}',
            'url': url,
            'alias': record.alias,
            'shortUrl': short_url,
            'id': record.id,
        }
    )
