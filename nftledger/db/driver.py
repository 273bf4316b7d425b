from threading import RLock

from nftledger.db.encoder import encode, decode
from nftledger.logger import get_logger
from nftledger import config

log = get_logger('Driver')

# DB maps bytes to bytes
# Driver maps string to python object


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        res = self.db.get(key)
        if res is None:
            return None
        return decode(res)

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
        else:
            self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.db.pop(key.encode(), None)

    def flush(self):
        self.db.clear()


# Sentinel so that a pending delete (None) can be told apart from a key that was never written
_MISSING = object()


class CacheDriver:
    """
    Buffers writes in front of a committed store.

    begin() opens a savepoint. release() closes it and, once the outermost savepoint is
    closed, commits. revert() throws away everything written since the matching begin().
    Callbacks queued with after_commit() run after the writes reach the store, and are
    dropped together with the savepoint they were queued under.
    """

    def __init__(self, driver=None):
        self.pending_writes = {}  # L1 cache
        self.driver = driver or InMemDriver()  # L0

        self._savepoints = []
        self._after_commit = []

    def get(self, key: str):
        value = self.pending_writes.get(key, _MISSING)
        if value is not _MISSING:
            return value

        return self.driver.get(key)

    def set(self, key, value):
        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def begin(self):
        self._savepoints.append((dict(self.pending_writes), len(self._after_commit)))

    def release(self):
        self._savepoints.pop()
        if not self._savepoints:
            self.commit()

    def revert(self):
        writes, hooks = self._savepoints.pop()
        self.pending_writes = writes
        del self._after_commit[hooks:]

    def after_commit(self, callback):
        self._after_commit.append(callback)

    @property
    def in_transaction(self):
        return len(self._savepoints) > 0

    def commit(self):
        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        self.pending_writes = {}
        self._savepoints = []

        hooks, self._after_commit = self._after_commit, []
        for hook in hooks:
            hook()

    def rollback(self):
        # Returns to the committed state, which is whatever it was prior to any pending writes
        self.pending_writes = {}
        self._savepoints = []
        self._after_commit = []


class LedgerDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

        # Every registry namespaced on this driver shares its pending writes, so they share one lock too
        self.lock = RLock()

    def make_key(self, contract, variable):
        return self.delimiter.join((contract, variable))

    def flush(self):
        log.debug('Flushing all state')
        with self.lock:
            self.driver.flush()
            self.rollback()
