"""Build URL DAOs from per-function backend configuration.

The configuration section handed to a Lambda by load_config() names exactly
one backend:

    {"redis": {"host": "redis.internal", "port": 6379, "db": 0}}
    {"sql": {"url": "postgresql+psycopg://shortener@db.internal/shortener"}}

Each option is passed to the DAO constructor with the backend's prefix, e.g.
`host` becomes `redis_host` and `url` becomes `sql_url`.

Example:
    >>> dao = url_dao_from_config({'sql': {'url': 'sqlite:///urls.db'}}, prefix='urlshortener:dev')
    >>> type(dao).__name__
    'URLSQLDAO'
"""

import json
from typing import Any

from urlshortener.types import LambdaConfiguration
from urlshortener.exceptions import BadConfigurationError
from urlshortener.dao.base import URLBaseDAO
from urlshortener.dao.redis import URLRedisDAO
from urlshortener.dao.sql import URLSQLDAO


BACKENDS: dict[str, type[URLBaseDAO]] = {
    'redis': URLRedisDAO,
    'sql': URLSQLDAO,
}


def url_dao_from_config(app_config: LambdaConfiguration, prefix: str | None = None) -> URLBaseDAO:
    """Construct the URL DAO selected by a backend configuration section

    Args:
        app_config (dict):
            Mapping with exactly one backend name as key and its options as value.
        prefix (str | None):
            Namespace prefix for keys or tables (see app_prefix()).

    Returns:
        URLBaseDAO: DAO instance for the configured backend.

    Raises:
        BadConfigurationError:
            If the section doesn't name exactly one known backend.
        DataStoreError:
            If the backend is unreachable at construction time.
    """
    if len(app_config) != 1:
        raise BadConfigurationError(f'Expected exactly one backend in configuration (given: {sorted(app_config)}).')

    [(backend, options)] = app_config.items()
    dao_class = BACKENDS.get(backend)
    if dao_class is None:
        raise BadConfigurationError(f"Unknown backend '{backend}' (supported: {', '.join(BACKENDS)}).")
    if not isinstance(options, dict):
        raise BadConfigurationError(f"Options for backend '{backend}' must be a mapping.")

    kwargs: dict[str, Any] = {f'{backend}_{key}': value for key, value in options.items()}
    try:
        return dao_class(**kwargs, prefix=prefix)
    except TypeError as e:
        raise BadConfigurationError(f"Invalid options for backend '{backend}': {sorted(options)}.") from e


_dao_cache: dict[str, URLBaseDAO] = {}


def cached_url_dao_from_config(app_config: LambdaConfiguration, prefix: str | None = None) -> URLBaseDAO:
    """Return the URL DAO for a configuration section, built once per process

    Warm Lambda containers reuse the DAO (and its connection pool) across
    invocations instead of reconnecting, healthchecking and inspecting the
    schema on every request. A changed configuration builds a new DAO.
    Failed constructions are not cached.

    Example:
        >>> first = cached_url_dao_from_config({'sql': {'url': 'sqlite:///urls.db'}})
        >>> first is cached_url_dao_from_config({'sql': {'url': 'sqlite:///urls.db'}})
        True
    """
    cache_key = json.dumps({'config': app_config, 'prefix': prefix}, sort_keys=True, default=str)
    dao = _dao_cache.get(cache_key)
    if dao is None:
        dao = _dao_cache[cache_key] = url_dao_from_config(app_config, prefix=prefix)
    return dao
