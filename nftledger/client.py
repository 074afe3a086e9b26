from nftledger.execution.executor import Executor
from nftledger.ledger import access
from nftledger.ledger.engine import validate_address, validate_token_id
from nftledger.ledger.events import Emitter
from nftledger import config


class LedgerClient:
    """
    Public surface of a ledger.

    Transitions go through the Executor and raise the ledger error on failure, so
    callers that prefer status codes over exceptions should use execute().
    Queries hold the same lock as transitions and never see one half done.
    """

    def __init__(self, driver=None, emitter: Emitter=None,
                 name=config.LEDGER_NAME, address=config.LEDGER_ADDRESS):
        self.executor = Executor(driver=driver, emitter=emitter, address=address)
        self.raw_driver = self.executor.driver
        self._name = name
        self.address = address

    @property
    def store(self):
        return self.executor.store

    def _read(self, f, *args):
        with self.executor.lock:
            try:
                return f(*args)
            finally:
                self.raw_driver.clear_pending_state()

    def name(self):
        return self._name

    def balance_of(self, owner) -> int:
        validate_address(owner, 'owner')
        return self._read(self.store.get_balance, owner)

    def owner_of(self, token_id):
        validate_token_id(token_id)
        return self._read(self.store.get_owner, token_id)

    def exists(self, token_id) -> bool:
        return self.owner_of(token_id) is not None

    def get_approved(self, token_id):
        validate_token_id(token_id)
        return self._read(self.store.get_approved, token_id)

    def is_approved_for_all(self, owner, operator) -> bool:
        validate_address(owner, 'owner')
        validate_address(operator, 'operator')
        return self._read(access.is_approved_for_all, self.store, owner, operator)

    def total_supply(self) -> int:
        return self._read(self.store.get_supply)

    def execute(self, operation, auto_commit=True, **kwargs) -> dict:
        return self.executor.execute(operation, kwargs, auto_commit=auto_commit)

    def _call(self, operation, **kwargs):
        output = self.execute(operation, **kwargs)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']

    def mint(self, to, token_id):
        return self._call(config.MINT, to=to, token_id=token_id)

    def transfer_from(self, caller, sender, to, token_id):
        return self._call(config.TRANSFER_FROM, caller=caller, sender=sender, to=to, token_id=token_id)

    def approve(self, caller, to, token_id):
        return self._call(config.APPROVE, caller=caller, to=to, token_id=token_id)

    def set_approval_for_all(self, caller, operator, approved):
        return self._call(config.SET_APPROVAL_FOR_ALL, caller=caller, operator=operator, approved=approved)

    def burn(self, owner, token_id):
        return self._call(config.BURN, owner=owner, token_id=token_id)

    def flush(self):
        with self.executor.lock:
            self.raw_driver.flush()
