from nftledger import config
from nftledger.exceptions import InvalidURI


class DerivedURIPolicy:
    """Metadata URI is base_uri + token id + suffix. Callers never supply one."""

    def __init__(self, base_uri=config.DEFAULT_BASE_URI, suffix=config.DEFAULT_URI_SUFFIX):
        if not isinstance(base_uri, str):
            raise InvalidURI(uri=base_uri, reason='the base URI must be a string')
        if not isinstance(suffix, str):
            raise InvalidURI(uri=suffix, reason='the URI suffix must be a string')

        self.base_uri = base_uri
        self.suffix = suffix

    def resolve(self, token_id, uri=None):
        if uri is not None:
            raise InvalidURI(uri=uri, reason='URIs are derived from the token id and cannot be supplied')

        return '{}{}{}'.format(self.base_uri, token_id, self.suffix)

    def __repr__(self):
        return 'DerivedURIPolicy(base_uri={!r}, suffix={!r})'.format(self.base_uri, self.suffix)


class ExplicitURIPolicy:
    """Metadata URI is whatever the minter passes in."""

    def resolve(self, token_id, uri=None):
        if not isinstance(uri, str) or uri == '':
            raise InvalidURI(uri=uri, reason='a non-empty URI string is required at mint time')

        return uri

    def __repr__(self):
        return 'ExplicitURIPolicy()'
