# Event/error codes logged and returned by the redirect_url Lambda
MISSING_ALIAS = 'MISSING_ALIAS'
ALIAS_NOT_FOUND = 'ALIAS_NOT_FOUND'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
