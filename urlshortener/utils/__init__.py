from urlshortener.utils.config import app_env, app_name, project_root, app_prefix, load_config
from urlshortener.utils.helpers import base_url, get_short_url, is_valid_url, is_valid_alias, require_environment
from urlshortener.utils.alias import generate_alias, save_with_generated_alias
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_alias',
    'save_with_generated_alias',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'base_url',
    'get_short_url',
    'is_valid_url',
    'is_valid_alias',
    'require_environment',
    'initialize_logging',
]
