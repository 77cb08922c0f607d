# Event codes
MISSING_USER_ID = 'MISSING_USER_ID'
INVALID_JSON = 'INVALID_JSON'
INVALID_SHORTCODES = 'INVALID_SHORTCODES'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORT_URL_FORBIDDEN = 'SHORT_URL_FORBIDDEN'
DELETE_ACCEPTED = 'DELETE_ACCEPTED'
