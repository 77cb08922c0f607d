from urlshortener.dao.logfile.recovery_log import RecoveryLog
from urlshortener.dao.logfile.short_url_logfile_dao import ShortURLLogFileDAO


__all__ = [
    'RecoveryLog',
    'ShortURLLogFileDAO',
]
