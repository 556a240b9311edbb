# Event/error codes logged and returned by the delete_url Lambda
MISSING_ALIAS = 'MISSING_ALIAS'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
ALIAS_DELETED = 'ALIAS_DELETED'
ALIAS_ALREADY_ABSENT = 'ALIAS_ALREADY_ABSENT'
