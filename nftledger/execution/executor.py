from nftledger.db.driver import LedgerDriver
from nftledger.ledger.store import LedgerStore
from nftledger.ledger.engine import TransitionEngine
from nftledger.ledger.events import Emitter, NullEmitter
from nftledger.exceptions import LedgerError
from nftledger.logger import get_logger
from nftledger import config
from copy import deepcopy
import threading
import traceback

log = get_logger('nftledger.executor')


class Executor:
    """
    Runs ledger transitions one at a time. Each call holds the ledger lock for its
    whole read-modify-write, commits the driver's pending writes on success and
    discards them on failure. The emitter only hears about committed transitions.
    """

    def __init__(self, driver=None, emitter: Emitter=None, address=config.LEDGER_ADDRESS, lock=None):
        if not isinstance(driver, LedgerDriver):
            # A raw backend such as InMemDriver or MongoDriver
            driver = LedgerDriver(driver)
        self.driver = driver
        self.emitter = emitter if emitter is not None else NullEmitter()
        self.address = address

        self.store = LedgerStore(self.driver, namespace=address)
        self.engine = TransitionEngine(self.store, address=address)

        self.lock = lock if lock is not None else threading.RLock()

    def execute(self, operation, kwargs: dict, auto_commit=True) -> dict:
        assert operation in config.OPERATIONS, 'Unknown ledger operation {}.'.format(operation)

        with self.lock:
            # Writes left over from a read outside a session are not ours to commit
            self.driver.clear_pending_state()

            events = []
            writes = {}
            try:
                func = getattr(self.engine, operation)
                event = func(**kwargs)
                events.append(event)

                writes = deepcopy(self.driver.pending_writes)

                if auto_commit:
                    self.driver.commit()
                    log.debug('{} committed {} writes'.format(operation, len(writes)))
                else:
                    # Simulation only
                    self.driver.clear_pending_state()

                result = True
                status_code = 0
            except LedgerError as e:
                log.warning('{} rejected: {}'.format(operation, e))
                self.driver.clear_pending_state()
                events = []
                writes = {}
                result = e
                status_code = 1
            except Exception as e:
                log.error(str(e))
                log.error(traceback.format_exc())
                self.driver.clear_pending_state()
                events = []
                writes = {}
                result = e
                status_code = 1

            if auto_commit:
                # Already committed, so delivery failures are only logged
                for event in events:
                    try:
                        self.emitter.emit(event)
                    except Exception as e:
                        log.error('Could not deliver {} after {}: {}'.format(event.name, operation, e))
                        log.error(traceback.format_exc())

        output = {
            'status_code': status_code,
            'operation': operation,
            'result': result,
            'events': [e.to_dict() for e in events],
            'writes': writes,
        }

        return output
