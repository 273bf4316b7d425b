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


class Unauthorized(LedgerError):
    """
    The caller is not the registry owner and attempted an
    owner gated operation

    :ivar caller: The account that made the call
    """
    fmt = "Account '{caller}' is not the registry owner"


class NotAuthorized(LedgerError):
    """
    The caller is neither the token owner, the approved
    account for the token nor an operator of the owner

    :ivar caller: The account that made the call
    :ivar token_id: The token the call targeted
    """
    fmt = "Account '{caller}' is not the owner of token {token_id} nor approved"


class TokenAlreadyExists(LedgerError):
    """
    :ivar token_id: The token id that is already minted
    """
    fmt = 'Token {token_id} already minted'


class TokenNotFound(LedgerError):
    """
    :ivar token_id: The token id that was never minted
    """
    fmt = 'Token {token_id} does not exist'


class InvalidRecipient(LedgerError):
    fmt = "Account '{account}' is not a valid recipient"


class InvalidOperator(InvalidRecipient):
    fmt = "Account '{account}' cannot be set as an operator"


class IncorrectOwner(LedgerError):
    """
    A transfer named a sender that does not hold the token

    :ivar sender: The account named as the sender
    :ivar owner: The account holding the token
    :ivar token_id: The token the call targeted
    """
    fmt = "Token {token_id} is owned by '{owner}', not '{sender}'"


class InvalidTokenId(LedgerError):
    fmt = 'Invalid token id {token_id!r}. Must be an unsigned integer below 2**256'


class InvalidURI(LedgerError):
    fmt = 'Invalid metadata URI {uri!r}: {reason}'


class InvalidAccount(LedgerError):
    """
    Account identifiers are strings and cannot contain
    the storage key delimiter

    :ivar account: The offending identifier
    """
    fmt = 'Invalid account identifier {account!r}'


class InvalidMetadata(LedgerError):
    """
    Collection name and symbol are non-empty strings

    :ivar field: Which attribute was rejected
    :ivar value: The rejected value
    """
    fmt = 'Collection {field} must be a non-empty string, got {value!r}'
