from urlshortener.dao.base import URLBaseDAO
from urlshortener.dao.factory import url_dao_from_config, cached_url_dao_from_config


__all__ = [
    'URLBaseDAO',
    'url_dao_from_config',
    'cached_url_dao_from_config',
]
