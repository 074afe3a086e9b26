from nftledger.db.driver import LedgerDriver
from nftledger.db.orm import Hash, Variable
from nftledger import config


class LedgerStore:
    """
    The four ledger tables plus the supply counter, laid out in one driver
    namespace:

        <namespace>.owners:<token_id>               -> address
        <namespace>.balances:<address>              -> int
        <namespace>.approvals:<token_id>            -> address
        <namespace>.operators:<owner>:<operator>    -> bool
        <namespace>.__supply__                      -> int

    No ledger rules live here. Reads of missing keys return the table default.
    """

    def __init__(self, driver: LedgerDriver, namespace=config.LEDGER_ADDRESS):
        self.driver = driver
        self.namespace = namespace

        self.owners = Hash(namespace, config.OWNERS_TABLE, driver=driver)
        self.balances = Hash(namespace, config.BALANCES_TABLE, driver=driver, default_value=0)
        self.approvals = Hash(namespace, config.APPROVALS_TABLE, driver=driver)
        self.operators = Hash(namespace, config.OPERATORS_TABLE, driver=driver, default_value=False)
        self.supply = Variable(namespace, config.SUPPLY_KEY, driver=driver, t=int, default_value=0)

    def get_owner(self, token_id):
        return self.owners[token_id]

    def set_owner(self, token_id, owner):
        self.owners[token_id] = owner

    def delete_owner(self, token_id):
        del self.owners[token_id]

    def get_balance(self, owner):
        return self.balances[owner]

    def set_balance(self, owner, value: int):
        self.balances[owner] = value

    def delete_balance(self, owner):
        del self.balances[owner]

    def get_approved(self, token_id):
        return self.approvals[token_id]

    def set_approved(self, token_id, address):
        self.approvals[token_id] = address

    def delete_approved(self, token_id):
        del self.approvals[token_id]

    def get_operator(self, owner, operator) -> bool:
        return self.operators[owner, operator]

    def set_operator(self, owner, operator, approved: bool):
        self.operators[owner, operator] = approved

    def delete_operator(self, owner, operator):
        del self.operators[owner, operator]

    def get_supply(self) -> int:
        return self.supply.get()

    def set_supply(self, value: int):
        self.supply.set(value)
