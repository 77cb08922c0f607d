# Event codes
PING_SUCCESS = 'PING_SUCCESS'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
