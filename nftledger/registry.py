"""
The token registry.

All state lives in a LedgerDriver under the registry's contract namespace:

    registry.__owner__              registry owner
    registry.name / .symbol         collection metadata
    registry.total_supply           number of minted tokens
    registry.owners:<id>            token owner
    registry.balances:<account>     token count per account
    registry.approvals:<id>         single token approval
    registry.operators:<a>:<op>     account wide operator approval
    registry.uris:<id>              metadata URI

Every state changing operation runs inside _transaction(), holding the driver's lock.
Writes stay in the driver's pending cache under a savepoint until all checks have passed.
Any exception reverts to the savepoint, so a failed call leaves no trace. Events are
queued on the driver and published only when the outermost transaction commits, which
keeps them in step with the state even when registries share a driver.
"""
from contextlib import contextmanager
from functools import partial

from nftledger import config
from nftledger.db.driver import LedgerDriver
from nftledger.db.orm import Variable, Hash
from nftledger.events import EventLog, Transfer, Approval, ApprovalForAll, OwnershipTransferred
from nftledger.exceptions import LedgerError, Unauthorized, NotAuthorized, TokenAlreadyExists, TokenNotFound, \
    InvalidRecipient, InvalidOperator, IncorrectOwner, InvalidTokenId, InvalidAccount, InvalidMetadata
from nftledger.logger import get_logger
from nftledger.uri import DerivedURIPolicy

log = get_logger('Registry')


def is_null(account):
    return account is None or (isinstance(account, str) and account in config.NULL_ACCOUNTS)


def is_readable_account(account):
    return isinstance(account, str) and not is_null(account) and config.DELIMITER not in account


def validate_metadata(field, value):
    if not isinstance(value, str) or value == '':
        raise InvalidMetadata(field=field, value=value)
    return value


def validate_token_id(token_id):
    if isinstance(token_id, bool) or not isinstance(token_id, int) or not 0 <= token_id < config.MAX_TOKEN_ID:
        raise InvalidTokenId(token_id=token_id)
    return token_id


def validate_account(account, nullable=False):
    if account is None and nullable:
        return account

    if not isinstance(account, str) or config.DELIMITER in account:
        raise InvalidAccount(account=account)
    return account


class TokenRegistry:
    def __init__(self, name, symbol, owner, uri_policy=None, driver=None, event_log=None,
                 contract=config.DEFAULT_CONTRACT_NAME):

        self.contract = contract
        self.driver = driver or LedgerDriver()
        self.events = event_log if event_log is not None else EventLog()
        self.uri_policy = uri_policy or DerivedURIPolicy()

        self._lock = self.driver.lock
        self._pending_events = []

        self._owner = Variable(contract, config.OWNER_KEY, driver=self.driver)
        self._name = Variable(contract, 'name', driver=self.driver, t=str)
        self._symbol = Variable(contract, 'symbol', driver=self.driver, t=str)
        self._total_supply = Variable(contract, 'total_supply', driver=self.driver, default_value=0)

        self.owners = Hash(contract, 'owners', driver=self.driver)
        self.balances = Hash(contract, 'balances', driver=self.driver, default_value=0)
        self.approvals = Hash(contract, 'approvals', driver=self.driver)
        self.operators = Hash(contract, 'operators', driver=self.driver, default_value=False)
        self.uris = Hash(contract, 'uris', driver=self.driver)

        with self._lock:
            # An existing namespace keeps its owner and metadata. Ownership only moves through
            # transfer_ownership.
            if self._owner.get() is not None:
                log.debug('Attached to existing registry {} owned by {}'.format(contract, self._owner.get()))
                return

            with self._transaction('construct', caller=owner):
                validate_account(owner, nullable=True)
                if is_null(owner):
                    raise InvalidRecipient(account=owner)

                self._name.set(validate_metadata('name', name))
                self._symbol.set(validate_metadata('symbol', symbol))
                self._owner.set(owner)
                self._emit(OwnershipTransferred(config.NULL_ACCOUNT, owner))

    @contextmanager
    def _transaction(self, operation, **kwargs):
        with self._lock:
            outer_events, self._pending_events = self._pending_events, []
            self.driver.begin()
            try:
                yield
            except LedgerError as e:
                self.driver.revert()
                log.debug('{} rejected {}: {}'.format(operation, kwargs, e))
                raise
            except Exception:
                self.driver.revert()
                log.exception('{} failed {}'.format(operation, kwargs))
                raise
            else:
                self.driver.after_commit(partial(self._publish, operation, kwargs, self._pending_events))
                self.driver.release()
            finally:
                self._pending_events = outer_events

    def _publish(self, operation, kwargs, events):
        log.info('{} committed {}'.format(operation, kwargs))
        self.events.publish(events)

    def _emit(self, event):
        self._pending_events.append(event)

    def _require_token(self, token_id):
        owner = self.owners[token_id]
        if owner is None:
            raise TokenNotFound(token_id=token_id)
        return owner

    def _require_recipient(self, to):
        validate_account(to, nullable=True)
        if is_null(to):
            raise InvalidRecipient(account=to)

    def _is_approved_or_owner(self, caller, owner, token_id):
        return caller == owner or \
               self.approvals[token_id] == caller or \
               self.operators[owner, caller] is True

    def _move(self, owner, to, token_id):
        self.approvals[token_id] = None

        self.balances[owner] -= 1
        self.balances[to] += 1
        self.owners[token_id] = to

        self._emit(Transfer(owner, to, token_id))

    def mint(self, caller, to, token_id, uri=None):
        with self._transaction('mint', caller=caller, to=to, token_id=token_id):
            validate_token_id(token_id)
            validate_account(caller)

            if caller != self._owner.get():
                raise Unauthorized(caller=caller)

            self._require_recipient(to)

            if self.owners[token_id] is not None:
                raise TokenAlreadyExists(token_id=token_id)

            self.uris[token_id] = self.uri_policy.resolve(token_id, uri)

            self.owners[token_id] = to
            self.balances[to] += 1
            self._total_supply.set(self._total_supply.get() + 1)

            self._emit(Transfer(config.NULL_ACCOUNT, to, token_id))

    def transfer_asset(self, caller, to, token_id):
        with self._transaction('transfer_asset', caller=caller, to=to, token_id=token_id):
            validate_token_id(token_id)
            validate_account(caller)

            owner = self._require_token(token_id)

            if not self._is_approved_or_owner(caller, owner, token_id):
                raise NotAuthorized(caller=caller, token_id=token_id)

            self._require_recipient(to)
            self._move(owner, to, token_id)

    def transfer_from(self, caller, sender, to, token_id):
        with self._transaction('transfer_from', caller=caller, sender=sender, to=to, token_id=token_id):
            validate_token_id(token_id)
            validate_account(caller)
            validate_account(sender, nullable=True)

            owner = self._require_token(token_id)

            if not self._is_approved_or_owner(caller, owner, token_id):
                raise NotAuthorized(caller=caller, token_id=token_id)

            if sender != owner:
                raise IncorrectOwner(sender=sender, owner=owner, token_id=token_id)

            self._require_recipient(to)
            self._move(owner, to, token_id)

    def approve(self, caller, approved, token_id):
        with self._transaction('approve', caller=caller, approved=approved, token_id=token_id):
            validate_token_id(token_id)
            validate_account(caller)
            validate_account(approved, nullable=True)

            owner = self._require_token(token_id)

            if caller != owner and self.operators[owner, caller] is not True:
                raise NotAuthorized(caller=caller, token_id=token_id)

            if approved == owner:
                raise InvalidRecipient(account=approved)

            if is_null(approved):
                self.approvals[token_id] = None
                approved = config.NULL_ACCOUNT
            else:
                self.approvals[token_id] = approved

            self._emit(Approval(owner, approved, token_id))

    def set_approval_for_all(self, caller, operator, approved):
        approved = bool(approved)

        with self._transaction('set_approval_for_all', caller=caller, operator=operator, approved=approved):
            validate_account(caller)
            validate_account(operator, nullable=True)

            if is_null(operator) or operator == caller:
                raise InvalidOperator(account=operator)

            self.operators[caller, operator] = approved if approved else None

            self._emit(ApprovalForAll(caller, operator, approved))

    def transfer_ownership(self, caller, new_owner):
        with self._transaction('transfer_ownership', caller=caller, new_owner=new_owner):
            validate_account(caller)

            previous = self._owner.get()
            if caller != previous:
                raise Unauthorized(caller=caller)

            self._require_recipient(new_owner)

            self._owner.set(new_owner)
            self._emit(OwnershipTransferred(previous, new_owner))

    # Queries

    def owner_of(self, token_id):
        validate_token_id(token_id)
        with self._lock:
            return self._require_token(token_id)

    def balance_of(self, account):
        if not is_readable_account(account):
            return 0

        with self._lock:
            return self.balances[account]

    def get_approved(self, token_id):
        validate_token_id(token_id)
        with self._lock:
            self._require_token(token_id)
            return self.approvals[token_id]

    def is_approved_for_all(self, account, operator):
        if not (is_readable_account(account) and is_readable_account(operator)):
            return False

        with self._lock:
            return self.operators[account, operator] is True

    def token_uri(self, token_id):
        validate_token_id(token_id)
        with self._lock:
            self._require_token(token_id)
            return self.uris[token_id]

    def exists(self, token_id):
        try:
            validate_token_id(token_id)
        except InvalidTokenId:
            return False

        with self._lock:
            return self.owners[token_id] is not None

    def total_supply(self):
        with self._lock:
            return self._total_supply.get()

    def supports_interface(self, tag):
        if not isinstance(tag, str):
            return False

        tag = tag.lower()
        return tag in config.INTERFACES or tag in config.INTERFACES.values()

    def name(self):
        return self._name.get()

    def symbol(self):
        return self._symbol.get()

    def owner(self):
        with self._lock:
            return self._owner.get()
