from nftledger.ledger.store import LedgerStore


def is_approved_for_all(store: LedgerStore, owner, operator) -> bool:
    if owner is None or operator is None:
        return False
    return store.get_operator(owner, operator) is True


def is_approved_or_owner(store: LedgerStore, actor, token_id) -> bool:
    """
    True if actor is the token's owner, its approved address, or an operator
    for the owner. A missing token has no owner and matches nobody.
    """
    if actor is None:
        return False

    owner = store.get_owner(token_id)
    if owner is None:
        return False

    return actor == owner or \
        actor == store.get_approved(token_id) or \
        is_approved_for_all(store, owner, actor)


def can_approve(store: LedgerStore, actor, token_id) -> bool:
    if actor is None:
        return False

    owner = store.get_owner(token_id)
    if owner is None:
        return False

    return actor == owner or is_approved_for_all(store, owner, actor)
