from functools import partial

from nftledger.registry import TokenRegistry

# Operations whose first argument is the calling account
EXPORTED_OPERATIONS = (
    'mint',
    'transfer_asset',
    'transfer_from',
    'approve',
    'set_approval_for_all',
    'transfer_ownership',
)

QUERIES = (
    'owner_of',
    'balance_of',
    'get_approved',
    'is_approved_for_all',
    'token_uri',
    'supports_interface',
    'exists',
    'total_supply',
    'name',
    'symbol',
    'owner',
)


class RegistryClient:
    def __init__(self, registry: TokenRegistry, signer):
        self.registry = registry
        self.signer = signer

        # set up the signer bound operations
        for func in EXPORTED_OPERATIONS:
            setattr(self, func, partial(getattr(self.registry, func), self.signer))

        for func in QUERIES:
            setattr(self, func, getattr(self.registry, func))

    def as_signer(self, signer):
        return RegistryClient(self.registry, signer)

    @property
    def events(self):
        return self.registry.events

    def __repr__(self):
        return 'RegistryClient(contract={!r}, signer={!r})'.format(self.registry.contract, self.signer)
