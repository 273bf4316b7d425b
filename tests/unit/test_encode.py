from unittest import TestCase
from nftledger.db.encoder import encode, decode, MAX_SAFE_INT


class TestEncode(TestCase):
    def test_int_to_str(self):
        self.assertEqual(encode(1000), '1000')

    def test_str_to_str(self):
        self.assertEqual(encode('hello'), '"hello"')

    def test_bool_is_not_treated_as_int(self):
        self.assertEqual(encode(True), 'true')

    def test_decode_int(self):
        self.assertEqual(decode('1234'), 1234)

    def test_decode_str(self):
        self.assertEqual(decode('"howdy"'), 'howdy')

    def test_decode_bytes_input(self):
        self.assertEqual(decode(b'"howdy"'), 'howdy')

    def test_decode_none_returns_none(self):
        self.assertIsNone(decode(None))

    def test_decode_garbage_returns_none(self):
        self.assertIsNone(decode('{not json'))

    def test_big_int_encoded_as_string(self):
        big = 2 ** 256 - 1
        self.assertEqual(encode(big), '{{"__big_int__":"{}"}}'.format(big))

    def test_big_int_decodes_back(self):
        big = 2 ** 200 + 7
        self.assertEqual(decode(encode(big)), big)

    def test_safe_int_boundary_is_plain(self):
        self.assertEqual(encode(MAX_SAFE_INT - 1), str(MAX_SAFE_INT - 1))

    def test_big_ints_nested_in_dict(self):
        d = {'event': 'Transfer', 'args': {'token_id': 2 ** 100, 'to': 'bob'}}
        self.assertEqual(decode(encode(d)), d)

    def test_bytes_encoded_as_hex(self):
        self.assertEqual(encode(b'\x01\xff'), '{"__bytes__":"01ff"}')
        self.assertEqual(decode(encode(b'\x01\xff')), b'\x01\xff')
