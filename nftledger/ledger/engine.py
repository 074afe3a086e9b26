from nftledger.ledger.store import LedgerStore
from nftledger.ledger import access
from nftledger.ledger.events import TransferEvent, ApprovalEvent, ApprovalForAllEvent
from nftledger.exceptions import NotFound, AlreadyExists, PermissionDenied, InvalidArgument, \
    InvalidDestination, InsufficientBalance
from nftledger import config


def validate_address(value, field='address'):
    if not isinstance(value, str) or value == '':
        raise InvalidArgument(reason='{} must be a non-empty string, got {!r}'.format(field, value))

    if config.DELIMITER in value or config.INDEX_SEPARATOR in value:
        raise InvalidArgument(reason='{} contains a reserved character'.format(field))

    if len(value) > config.MAX_ADDRESS_SIZE:
        raise InvalidArgument(reason='{} is longer than {}'.format(field, config.MAX_ADDRESS_SIZE))

    return value


def validate_token_id(token_id):
    if isinstance(token_id, bool) or not isinstance(token_id, (str, int)):
        raise InvalidArgument(reason='token id must be a string or an integer, got {!r}'.format(token_id))

    if isinstance(token_id, int) and token_id < 0:
        raise InvalidArgument(reason='token id must not be negative')

    # str() refuses ints past a few thousand digits, so bound them first
    if isinstance(token_id, int) and token_id >= 10 ** config.MAX_KEY_SIZE:
        raise InvalidArgument(reason='token id is longer than {}'.format(config.MAX_KEY_SIZE))

    key = str(token_id)
    if key == '':
        raise InvalidArgument(reason='token id must not be empty')

    if config.DELIMITER in key or config.INDEX_SEPARATOR in key:
        raise InvalidArgument(reason='token id contains a reserved character')

    if len(key) > config.MAX_KEY_SIZE:
        raise InvalidArgument(reason='token id is longer than {}'.format(config.MAX_KEY_SIZE))

    return token_id


class TransitionEngine:
    """
    Ownership and approval transitions over a LedgerStore.

    Every operation returns the event describing what it did, or raises a
    LedgerError, possibly after some writes. Writes land in the driver's pending
    writes; making them durable (or discarding them when an operation raises) is
    the executor's job.
    """

    def __init__(self, store: LedgerStore, address=config.LEDGER_ADDRESS):
        self.store = store
        self.address = address

    def _require_owner(self, token_id):
        owner = self.store.get_owner(token_id)
        if owner is None:
            raise NotFound(token_id=token_id)
        return owner

    def _check_destination(self, to):
        if to is None or to == '':
            raise InvalidDestination(to=to)

        validate_address(to, 'to')

        if to == self.address:
            raise InvalidDestination(to=to)

    def _add_token(self, to, token_id):
        self.store.set_owner(token_id, to)
        self.store.set_balance(to, self.store.get_balance(to) + 1)

    def _remove_token(self, owner, token_id):
        balance = self.store.get_balance(owner)
        if balance < 1:
            raise InsufficientBalance(owner=owner)

        if balance == 1:
            self.store.delete_balance(owner)
        else:
            self.store.set_balance(owner, balance - 1)

        self.store.delete_owner(token_id)

    def _clear_approval(self, owner, token_id):
        if self.store.get_owner(token_id) != owner:
            raise PermissionDenied(caller=owner, token_id=token_id, reason='not the current owner')

        if self.store.get_approved(token_id) is not None:
            self.store.delete_approved(token_id)

    def mint(self, to, token_id):
        validate_token_id(token_id)
        validate_address(to, 'to')

        if self.store.get_owner(token_id) is not None:
            raise AlreadyExists(token_id=token_id)

        if to == self.address:
            raise InvalidDestination(to=to)

        self._add_token(to, token_id)
        self.store.set_supply(self.store.get_supply() + 1)

        return TransferEvent(status=True, sender=None, to=to, token_id=token_id)

    def transfer_from(self, caller, sender, to, token_id):
        validate_token_id(token_id)
        validate_address(caller, 'caller')
        validate_address(sender, 'sender')

        self._require_owner(token_id)
        self._check_destination(to)

        if not access.is_approved_or_owner(self.store, caller, token_id):
            raise PermissionDenied(caller=caller, token_id=token_id,
                                   reason='not the owner, approved address or an operator')

        # Raises PermissionDenied if sender is not the current owner
        self._clear_approval(sender, token_id)
        self._remove_token(sender, token_id)
        self._add_token(to, token_id)

        return TransferEvent(status=True, sender=sender, to=to, token_id=token_id)

    def approve(self, caller, to, token_id):
        validate_token_id(token_id)
        validate_address(caller, 'caller')
        if to is not None:
            validate_address(to, 'to')

        owner = self._require_owner(token_id)

        if to == owner:
            raise InvalidArgument(reason='cannot approve the current owner of token {}'.format(token_id))

        if not access.can_approve(self.store, caller, token_id):
            raise PermissionDenied(caller=caller, token_id=token_id, reason='not the owner or an operator')

        if to is None:
            if self.store.get_approved(token_id) is not None:
                self.store.delete_approved(token_id)
        else:
            self.store.set_approved(token_id, to)

        return ApprovalEvent(status=True, owner=owner, spender=to, token_id=token_id)

    def set_approval_for_all(self, caller, operator, approved):
        validate_address(caller, 'caller')
        validate_address(operator, 'operator')

        if not isinstance(approved, bool):
            raise InvalidArgument(reason='approved must be a bool, got {!r}'.format(approved))

        if operator == caller:
            raise InvalidArgument(reason='cannot make {} an operator for itself'.format(caller))

        self.store.set_operator(caller, operator, approved)

        return ApprovalForAllEvent(status=True, owner=caller, operator=operator, approved=approved)

    def burn(self, owner, token_id):
        validate_token_id(token_id)
        validate_address(owner, 'owner')

        self._require_owner(token_id)

        self._clear_approval(owner, token_id)
        self._remove_token(owner, token_id)
        supply = self.store.get_supply()
        if supply < 1:
            raise InsufficientBalance(owner=self.address)

        self.store.set_supply(supply - 1)

        return TransferEvent(status=True, sender=owner, to=None, token_id=token_id)
