from unittest import TestCase
from nftledger.db.driver import InMemDriver, MongoDriver
from nftledger.client import LedgerClient
from nftledger import config
import pymongo


class FakeCollection:
    def __init__(self):
        self.docs = {}
        self.fail_on_write = 0
        self.writes = 0
        self.bulk_sessions = []

    def _write(self):
        self.writes += 1
        if self.fail_on_write and self.writes >= self.fail_on_write:
            raise ConnectionError('mongo went away')

    def find_one(self, query):
        doc = self.docs.get(query['_id'])
        return dict(doc) if doc is not None else None

    def replace_one(self, query, doc, upsert=False):
        self._write()
        if upsert or query['_id'] in self.docs:
            self.docs[query['_id']] = dict(doc)

    def delete_one(self, query):
        self._write()
        self.docs.pop(query['_id'], None)

    def delete_many(self, query):
        self.docs.clear()

    def bulk_write(self, requests, ordered=True, session=None):
        self.bulk_sessions.append(session)

        # Writes inside a transaction become visible together or not at all
        staged = dict(self.docs)
        for op in requests:
            self._write()
            if isinstance(op, pymongo.ReplaceOne):
                staged[op._filter['_id']] = dict(op._doc)
            elif isinstance(op, pymongo.DeleteOne):
                staged.pop(op._filter['_id'], None)
            else:
                raise TypeError(op)

        self.docs = staged


class FakeTransaction:
    def __init__(self, session):
        self.session = session

    def __enter__(self):
        self.session.in_transaction = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.session.in_transaction = False
        if exc_type is None:
            self.session.committed += 1
        else:
            self.session.aborted += 1
        return False


class FakeSession:
    def __init__(self):
        self.in_transaction = False
        self.committed = 0
        self.aborted = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def start_transaction(self):
        return FakeTransaction(self)


class FakeMongoClient:
    def __init__(self):
        self.collection = FakeCollection()
        self.sessions = []

    def __getitem__(self, item):
        return {'state': self.collection}

    def start_session(self):
        session = FakeSession()
        self.sessions.append(session)
        return session


class DriverTests:
    def test_get_set(self):
        a = 'a'
        self.d.set('b', a)

        b = self.d.get('b')
        self.assertEqual(a, b)

    def test_get_missing_is_none(self):
        self.assertIsNone(self.d.get('nothing'))

    def test_set_none_deletes(self):
        self.d.set('b', 1)
        self.d.set('b', None)

        self.assertIsNone(self.d.get('b'))
        self.assertEqual(self.stored_keys(), [])

    def test_delete(self):
        a = 'a'
        self.d.set('b', a)

        b = self.d.get('b')
        self.assertEqual(a, b)

        self.d.delete('b')

        b = self.d.get('b')
        self.assertIsNone(b)

    def test_delete_missing_is_noop(self):
        self.d.delete('never_set')
        self.assertEqual(self.stored_keys(), [])

    def test_big_int_survives(self):
        big = 2 ** 80
        self.d.set('ledger.balances:stu', big)

        self.assertEqual(self.d.get('ledger.balances:stu'), big)

    def test_apply_sets_and_deletes(self):
        self.d.set('ledger.owners:1', 'stu')
        self.d.set('ledger.balances:stu', 1)

        self.d.apply({
            'ledger.owners:1': 'raghu',
            'ledger.balances:stu': None,
            'ledger.balances:raghu': 1,
        })

        self.assertEqual(self.d.get('ledger.owners:1'), 'raghu')
        self.assertEqual(self.d.get('ledger.balances:raghu'), 1)
        self.assertEqual(self.stored_keys(), ['ledger.balances:raghu', 'ledger.owners:1'])

    def test_apply_nothing(self):
        self.d.set('a', 1)
        self.d.apply({})

        self.assertEqual(self.d.get('a'), 1)

    def test_flush(self):
        self.d.set('a', 1)
        self.d.set('b', 2)
        self.d.flush()

        self.assertListEqual(self.stored_keys(), [])


class TestInMemDriver(DriverTests, TestCase):
    def setUp(self):
        self.d = InMemDriver()

    def stored_keys(self):
        return sorted(k.decode() for k in self.d.db)

    def test_values_are_stored_encoded(self):
        self.d.set('ledger.owners:1', 'stu')
        self.assertEqual(self.d.db[b'ledger.owners:1'], b'"stu"')

    def test_apply_with_unencodable_value_changes_nothing(self):
        self.d.set('a', 1)

        with self.assertRaises(TypeError):
            self.d.apply({'a': 2, 'b': object()})

        self.assertEqual(self.d.db, {b'a': b'1'})


class TestMongoDriver(DriverTests, TestCase):
    def setUp(self):
        self.client = FakeMongoClient()
        self.d = MongoDriver(db='ledger', collection='state', client=self.client)

    def stored_keys(self):
        return sorted(self.client.collection.docs)

    def test_documents_hold_encoded_values(self):
        self.d.set('ledger.balances:stu', 3)
        self.assertEqual(self.client.collection.docs['ledger.balances:stu'],
                         {'_id': 'ledger.balances:stu', 'value': '3'})

    def test_apply_is_one_bulk_write_in_a_transaction(self):
        self.d.apply({'a': 1, 'b': 2, 'c': None})

        self.assertEqual(len(self.client.sessions), 1)
        session = self.client.sessions[0]

        self.assertEqual(self.client.collection.bulk_sessions, [session])
        self.assertEqual(session.committed, 1)
        self.assertEqual(session.aborted, 0)

    def test_apply_nothing_opens_no_session(self):
        self.d.apply({})
        self.assertEqual(self.client.sessions, [])

    def test_failed_apply_writes_nothing(self):
        self.d.set('a', 1)
        self.client.collection.writes = 0
        self.client.collection.fail_on_write = 2

        with self.assertRaises(ConnectionError):
            self.d.apply({'a': 5, 'b': 2, 'c': 3})

        self.assertEqual(self.d.get('a'), 1)
        self.assertEqual(self.stored_keys(), ['a'])
        self.assertEqual(self.client.sessions[0].aborted, 1)


class TestLedgerOnMongo(TestCase):
    def setUp(self):
        self.client = FakeMongoClient()
        self.collection = self.client.collection
        self.c = LedgerClient(driver=MongoDriver(db='ledger', collection='state', client=self.client),
                              address='nft_ledger')

    def test_mint_persists_documents(self):
        self.c.mint('stu', '1')

        self.assertEqual(sorted(self.collection.docs), [
            'nft_ledger.__supply__',
            'nft_ledger.balances:stu',
            'nft_ledger.owners:1',
        ])

    def test_backend_failure_mid_commit_leaves_ledger_unchanged(self):
        self.c.mint('stu', '1')
        before = {k: dict(v) for k, v in self.collection.docs.items()}

        self.collection.writes = 0
        self.collection.fail_on_write = 2

        output = self.c.execute(config.TRANSFER_FROM, caller='stu', sender='stu', to='raghu', token_id='1')

        self.assertEqual(output['status_code'], 1)
        self.assertIsInstance(output['result'], ConnectionError)
        self.assertEqual(self.collection.docs, before)
        self.assertEqual(self.c.raw_driver.pending_writes, {})

        self.assertEqual(self.c.owner_of('1'), 'stu')
        self.assertEqual(self.c.balance_of('stu'), 1)
        self.assertEqual(self.c.balance_of('raghu'), 0)

        self.collection.fail_on_write = 0
        self.c.transfer_from('stu', 'stu', 'raghu', '1')

        self.assertEqual(self.c.owner_of('1'), 'raghu')
        self.assertEqual(self.c.balance_of('stu'), 0)
        self.assertEqual(self.c.balance_of('raghu'), 1)
