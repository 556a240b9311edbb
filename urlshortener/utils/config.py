"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile (typically `backend-config`) and deployed to the
corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "sql",
        "configs": {
            "shorten_url": {
                "sql": {"url": "postgresql+psycopg://..."},
                "redis": { ... }
            },
            "redirect_url": { ... },
            "delete_url": { ... }
        }
    }

Each Lambda loads its own section (e.g., `"shorten_url"`) for the active
backend and hands it to `url_dao_from_config()`.

Typical usage inside a Lambda handler:
    >>> from urlshortener.utils.config import load_config
    >>> config = load_config('shorten_url')
    >>> config
    {'sql': {'url': 'postgresql+psycopg://...'}}
"""

import os
import json
import functools
import logging
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from collections.abc import Callable

import boto3
import botocore.exceptions

from urlshortener.types import AppConfig, LambdaConfiguration
from urlshortener.constants import ENV
from urlshortener.utils.helpers import require_environment
from urlshortener.utils.runtime import running_locally
from urlshortener.exceptions import BadConfigurationError, InfrastructureError


logger = logging.getLogger(__name__)

LOCAL_AGENT_HOSTS = {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}
LOCAL_AGENT_PORTS = {2772, None}


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.path.dirname(__file__)))


def app_prefix() -> str | None:
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def extract_function_config(document: AppConfig, function_name: str) -> LambdaConfiguration:
    """Pick one function's active backend section out of a full AppConfig document.

    Raises:
        BadConfigurationError:
            If the document lacks the active backend or the function's section.
    """
    try:
        backend = document['active_backend']
        return {backend: document['configs'][function_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no active backend section for '{function_name}'.") from e


def _validate_agent_url(url: str | None) -> str:
    if not url:
        return ''
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'}:
        raise BadConfigurationError(f'Bad scheme {url}')
    if components.hostname not in LOCAL_AGENT_HOSTS:
        raise BadConfigurationError(f'Bad host {url}')
    if components.port not in LOCAL_AGENT_PORTS:
        raise BadConfigurationError(f'Bad port {url}')
    return url


def _sam_load_local_appconfig(func: Callable) -> Callable:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://appconfig-agent:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    @functools.wraps(func)
    def wrapper(function_name: str) -> LambdaConfiguration:
        agent_url = _validate_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(function_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'functionName': function_name})
        try:
            with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
                document = json.load(r)
        except (urllib.error.URLError, TimeoutError, json.JSONDecodeError) as e:
            raise InfrastructureError(f'Failed to load AppConfig from local agent at {url}.') from e

        data = extract_function_config(document, function_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'functionName': function_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(function_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Raises:
        MissingEnvironmentVariableError:
            If the AppConfig identifiers are not set.
        InfrastructureError:
            If AppConfig cannot be reached or returns an error.
        BadConfigurationError:
            If the document is not valid JSON or lacks the function's section.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'functionName': function_name})

    try:
        appconfig = boto3.client('appconfigdata')

        # Start an AppConfig data session
        session_token = appconfig.start_configuration_session(
            ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
            EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
            ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
        )['InitialConfigurationToken']

        # Fetch the configuration
        response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
        content = response['Configuration'].read()
    except (botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError) as e:
        raise InfrastructureError('Failed to fetch configuration from AWS AppConfig.') from e

    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError('AppConfig document is not valid JSON.') from e

    data = extract_function_config(document, function_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'functionName': function_name, 'build': document.get('build')})
    return data
