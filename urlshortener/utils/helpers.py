"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given alias
    is_valid_url() -> bool
        Check that a string is an absolute http(s) URL
    is_valid_alias() -> bool
        Check that a client-chosen alias is safe to use in a URL path
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into HTTP 500 responses

Example:
    Typical usage inside a Lambda handler:

        >>> from urlshortener.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import re
import logging
import functools
from urllib.parse import urlparse
from collections.abc import Callable

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.constants import AliasDefaults, UNKNOWN_INTERNAL_SERVER_ERROR
from urlshortener.exceptions import MissingEnvironmentVariableError
from urlshortener.utils.responses import response_500
from urlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)

ALIAS_PATTERN = re.compile(r'[A-Za-z0-9_-]+')
MAX_URL_LENGTH = 2048


def base_url(event: LambdaEvent) -> str:
    """Extract public base URL from API Gateway event

    Works seamlessly with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.
    Local SAM hosts (localhost, 127.0.0.1) are served over plain HTTP.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain.split(':')[0] in {'localhost', '127.0.0.1'}:
        return f'http://{domain}'
    elif domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(alias: str, event: LambdaEvent) -> str:
    """Get string representation of shortened URL

    Args:
        alias (str): alias of the URL record
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: short url string representation
    """
    return f'{base_url(event).rstrip("/")}/{alias}'


def is_valid_url(url: object) -> bool:
    """Check that a value is a syntactically valid absolute http(s) URL

    Example:
        >>> is_valid_url('https://example.com/page?x=1')
        True
        >>> is_valid_url('example.com/page')
        False
    """
    if not isinstance(url, str) or not url or len(url) > MAX_URL_LENGTH:
        return False
    try:
        components = urlparse(url)
    except ValueError:
        return False
    return components.scheme in {'http', 'https'} and bool(components.netloc)


def is_valid_alias(alias: object) -> bool:
    """Check that a client-chosen alias is non-empty, short and URL-path safe

    Example:
        >>> is_valid_alias('my-blog_2025')
        True
        >>> is_valid_alias('with space')
        False
    """
    if not isinstance(alias, str) or len(alias) > AliasDefaults.MAX_CUSTOM_LENGTH:
        return False
    return ALIAS_PATTERN.fullmatch(alias) is not None


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: respond with HTTP 500 when a Lambda handler raises unexpectedly.

    When running locally the original exception is re-raised so SAM shows the
    traceback.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in Lambda handler. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
