# Event codes
INVALID_BODY = 'INVALID_BODY'
INVALID_JSON = 'INVALID_JSON'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
USER_ID_ALLOCATED = 'USER_ID_ALLOCATED'
SHORT_URL_ALREADY_EXISTS = 'SHORT_URL_ALREADY_EXISTS'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
