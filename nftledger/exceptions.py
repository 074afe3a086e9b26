class LedgerError(Exception):
    """
    The base exception for the ledger. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class NotFound(LedgerError):
    """
    The referenced token does not exist

    :ivar token_id: The token that was looked up
    """
    fmt = "Token '{token_id}' does not exist"


class AlreadyExists(LedgerError):
    """
    Attempted to mint a token that is already owned

    :ivar token_id: The token submitted for minting
    """
    fmt = "Token '{token_id}' already exists"


class PermissionDenied(LedgerError):
    """
    The caller lacks authorization for the requested mutation

    :ivar caller: The identity that attempted the operation
    :ivar token_id: The token the operation targeted
    :ivar reason: Why the check failed
    """
    fmt = "'{caller}' may not modify token '{token_id}': {reason}"


class InvalidArgument(LedgerError):
    """
    Self-approval, self-operator or a malformed address or token id

    :ivar reason: What was wrong with the input
    """
    fmt = "Invalid argument: {reason}"


class InvalidDestination(LedgerError):
    """
    Transfer target is not an externally controlled account

    :ivar to: The destination that was refused
    """
    fmt = "Cannot send tokens to '{to}'"


class InsufficientBalance(LedgerError):
    """
    An owner's balance, or the supply counter kept under the ledger's own
    address, would go negative. Unreachable while counters match ownership.

    :ivar owner: The owner, or ledger address, whose counter was checked
    """
    fmt = "Balance of '{owner}' is too low"
