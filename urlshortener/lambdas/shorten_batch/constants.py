# Event codes
INVALID_JSON = 'INVALID_JSON'
INVALID_BATCH = 'INVALID_BATCH'
INVALID_URL = 'INVALID_URL'
USER_ID_ALLOCATED = 'USER_ID_ALLOCATED'
SHORT_URL_ALREADY_EXISTS = 'SHORT_URL_ALREADY_EXISTS'
SHORTEN_BATCH_SUCCESS = 'SHORTEN_BATCH_SUCCESS'
