import json

# Values above this do not survive a round trip through most JSON consumers, so they are
# stored as strings instead. Token ids go up to 2**256.
MAX_SAFE_INT = 2 ** 63 - 1
MIN_SAFE_INT = -(2 ** 63)

##
# ENCODER CLASS
# Add to this to encode Python types for storage.
# Right now this only covers bytes. Big ints are handled in encode() because JSONEncoder.default is
# never called for builtin types.
##


class Encoder(json.JSONEncoder):
    def default(self, o, *args):
        if isinstance(o, bytes):
            return {
                '__bytes__': o.hex()
            }
        return super().default(o)


def encode_int(value: int):
    if MIN_SAFE_INT < value < MAX_SAFE_INT:
        return value

    return {
        '__big_int__': str(value)
    }


def encode_value(value):
    # bool is a subclass of int, leave it alone
    if isinstance(value, int) and not isinstance(value, bool):
        return encode_int(value)
    elif isinstance(value, dict):
        return {k: encode_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    return value


def encode(data):
    """ NOTE:
    Normally encoding behavior is overriden in 'default' method inside
    a class derived from json.JSONEncoder. Unfortunately this can be done only
    for custom types, so big integers are preprocessed here.
    """
    return json.dumps(encode_value(data), cls=Encoder, separators=(',', ':'))


def as_object(d):
    if '__bytes__' in d:
        return bytes.fromhex(d['__bytes__'])
    elif '__big_int__' in d:
        return int(d['__big_int__'])
    return dict(d)


# Decode has a hook for JSON objects, which are just Python dictionaries. You have to specify the logic in this hook.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None

