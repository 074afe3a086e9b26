import os

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024
MAX_ADDRESS_SIZE = 256

# Ledger identity. The address is the ledger's own account; tokens may never be sent to it.
LEDGER_NAME = os.getenv('NFT_LEDGER_NAME', 'NFT Ledger')
LEDGER_ADDRESS = os.getenv('NFT_LEDGER_ADDRESS', 'nft_ledger')

# Table names inside the ledger's key space
OWNERS_TABLE = 'owners'
BALANCES_TABLE = 'balances'
APPROVALS_TABLE = 'approvals'
OPERATORS_TABLE = 'operators'
SUPPLY_KEY = '__supply__'

MONGO_URL = os.getenv('MONGO_URL', 'mongodb://localhost:27017')
MONGO_DB = os.getenv('MONGO_DB', 'nftledger')
MONGO_COLLECTION = os.getenv('MONGO_COLLECTION', 'state')

# Operation names accepted by the executor
MINT = 'mint'
TRANSFER_FROM = 'transfer_from'
APPROVE = 'approve'
SET_APPROVAL_FOR_ALL = 'set_approval_for_all'
BURN = 'burn'
OPERATIONS = {MINT, TRANSFER_FROM, APPROVE, SET_APPROVAL_FOR_ALL, BURN}
