from nftledger.db.encoder import encode, decode
from nftledger.logger import get_logger
from nftledger import config
import pymongo

logger = get_logger(__name__)

# DB maps bytes to bytes
# Driver maps string to python object


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        return decode(self.db.get(key))

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
        else:
            self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.db.pop(key.encode(), None)

    def apply(self, writes: dict):
        # Stage on a copy so a bad value leaves the live dict untouched
        staged = dict(self.db)
        for k, v in writes.items():
            if v is None:
                staged.pop(k.encode(), None)
            else:
                staged[k.encode()] = encode(v).encode()

        self.db = staged

    def flush(self):
        self.db.clear()


class MongoDriver:
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    # apply() runs in a multi-document transaction, so the server must be a replica set or mongos
    def __init__(self, conn_str=config.MONGO_URL, db=config.MONGO_DB, collection=config.MONGO_COLLECTION,
                 client=None):
        self.client = client or pymongo.MongoClient(conn_str)
        self.db = self.client[db][collection]
        logger.debug('Using mongo collection {}.{}'.format(db, collection))

    def get(self, item: str):
        v = self.db.find_one({'_id': item})
        if v is None:
            return None
        return decode(v['value'])

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
        else:
            self.db.replace_one({'_id': key}, {'_id': key, 'value': encode(value)}, upsert=True)

    def delete(self, key: str):
        self.db.delete_one({'_id': key})

    def apply(self, writes: dict):
        ops = []
        for k, v in writes.items():
            if v is None:
                ops.append(pymongo.DeleteOne({'_id': k}))
            else:
                ops.append(pymongo.ReplaceOne({'_id': k}, {'_id': k, 'value': encode(v)}, upsert=True))

        if not ops:
            return

        with self.client.start_session() as session:
            with session.start_transaction():
                self.db.bulk_write(ops, ordered=True, session=session)

    def flush(self):
        self.db.delete_many({})


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}
        self.driver = driver if driver is not None else InMemDriver()

    def get(self, key: str):
        # A pending None is a pending delete, so membership decides, not the value
        if key in self.pending_writes:
            return self.pending_writes[key]

        return self.driver.get(key)

    def set(self, key, value):
        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def commit(self):
        # All or nothing: if the backend raises, pending writes stay for the caller to roll back
        self.driver.apply(dict(self.pending_writes))

        logger.debug('Committed {} writes'.format(len(self.pending_writes)))

        self.pending_writes.clear()

    def rollback(self):
        # Returns to disk state which should be whatever it was prior to any write sessions
        self.pending_writes.clear()

    def clear_pending_state(self):
        self.rollback()


class LedgerDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

    def make_key(self, namespace, variable, args=()):
        namespace_variable = self.delimiter.join((namespace, variable))
        if args:
            return config.DELIMITER.join((namespace_variable, *[str(arg) for arg in args]))
        return namespace_variable

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
