# Event codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORT_URL_DELETED = 'SHORT_URL_DELETED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
