DELIMITER = ':'
INDEX_SEPARATOR = '.'

DEFAULT_CONTRACT_NAME = 'registry'
OWNER_KEY = '__owner__'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

# Accounts are opaque strings. These all count as the null account.
NULL_ACCOUNT = '0x0000000000000000000000000000000000000000'
NULL_ACCOUNTS = {None, '', NULL_ACCOUNT}

# Token ids are unsigned 256 bit integers
MAX_TOKEN_ID = 2 ** 256

DEFAULT_BASE_URI = 'ipfs://QmZbWNKJPAjxXuNFSEaksCJVd1M6DaKQViJBYPK2BdpDEP/'
DEFAULT_URI_SUFFIX = '.json'

# Capability tags answered by supports_interface. Id -> name.
INTERFACES = {
    '0x01ffc9a7': 'capability-discovery',
    '0x80ac58cd': 'ownership-transfer',
    '0x5b5e139f': 'metadata-uri',
}
