import threading

from urlshortener.dao.memory import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = threading.Barrier(2, timeout=2)

    def reader():
        with lock.read():
            inside.wait()

    thread = threading.Thread(target=reader)
    thread.start()
    with lock.read():
        # Both readers must be inside at once to pass the barrier
        inside.wait()
    thread.join(timeout=2)
    assert not thread.is_alive()


def test_writer_waits_for_reader():
    lock = ReadWriteLock()
    written = threading.Event()

    def writer():
        with lock.write():
            written.set()

    with lock.read():
        thread = threading.Thread(target=writer)
        thread.start()
        assert not written.wait(timeout=0.1)
    thread.join(timeout=2)
    assert written.is_set()


def test_reader_waits_for_writer():
    lock = ReadWriteLock()
    read = threading.Event()

    def reader():
        with lock.read():
            read.set()

    with lock.write():
        thread = threading.Thread(target=reader)
        thread.start()
        assert not read.wait(timeout=0.1)
    thread.join(timeout=2)
    assert read.is_set()


def test_lock_released_on_exception():
    lock = ReadWriteLock()

    try:
        with lock.write():
            raise RuntimeError('boom')
    except RuntimeError:
        pass

    acquired = threading.Event()

    def writer():
        with lock.write():
            acquired.set()

    thread = threading.Thread(target=writer)
    thread.start()
    thread.join(timeout=2)
    assert acquired.is_set()
