# Event/error codes logged and returned by the shorten_url Lambda
INVALID_JSON = 'INVALID_JSON'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
INVALID_ALIAS = 'INVALID_ALIAS'
ALIAS_EXISTS = 'ALIAS_EXISTS'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
ALIAS_SAVED = 'ALIAS_SAVED'
