# Event codes
MISSING_USER_ID = 'MISSING_USER_ID'
NO_USER_URLS = 'NO_USER_URLS'
USER_URLS_SUCCESS = 'USER_URLS_SUCCESS'
