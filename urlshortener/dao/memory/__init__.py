from urlshortener.dao.memory.locks import ReadWriteLock
from urlshortener.dao.memory.short_url_memory_dao import ShortURLMemoryDAO


__all__ = [
    'ReadWriteLock',
    'ShortURLMemoryDAO',
]
