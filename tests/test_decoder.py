"""Tests for insights/decoder.py."""

import unittest

from eth_abi import encode

from insights.decoder import decode, decode_call_data
from insights.errors import DecodeFailure
from insights.normalize import normalize

ADDRESS = "0x5d8a7dc9405f08f14541ba918c1bf7eb2dace556"
OTHER_ADDRESS = "0x0000000000000000000000000000000000000abc"


def _slot(value: int) -> str:
    return format(value, "064x")


class TestDecodeElementary(unittest.TestCase):
    """Tests for decoding single-slot values."""

    def test_transfer_arguments(self):
        data = bytes.fromhex(_slot(0xABC) + _slot(100))
        self.assertEqual(decode(["address", "uint256"], data), [OTHER_ADDRESS, 100])

    def test_no_params(self):
        self.assertEqual(decode([], b""), [])
        # Trailing bytes are not consumed
        self.assertEqual(decode([], b"\x01\x02"), [])

    def test_signed_integer(self):
        data = encode(["int256", "int8"], [-42, -128])
        self.assertEqual(decode(["int256", "int8"], data), [-42, -128])

    def test_bool_uses_lowest_bit(self):
        self.assertEqual(decode(["bool"], bytes.fromhex(_slot(1))), [True])
        self.assertEqual(decode(["bool"], bytes.fromhex(_slot(0))), [False])

    def test_fixed_bytes(self):
        data = bytes.fromhex("deadbeef" + "00" * 28)
        self.assertEqual(decode(["bytes4"], data), [b"\xde\xad\xbe\xef"])

    def test_address_takes_low_20_bytes(self):
        data = bytes.fromhex("ff" * 12 + ADDRESS[2:])
        self.assertEqual(decode(["address"], data), [ADDRESS])

    def test_function_type(self):
        data = bytes.fromhex("11" * 24 + "00" * 8)
        self.assertEqual(decode(["function"], data), [b"\x11" * 24])


class TestDecodeRoundTrip(unittest.TestCase):
    """Values encoded with eth_abi decode back to the same values."""

    def assertRoundTrip(self, types, values):
        decoded = decode(types, encode(types, values))
        self.assertEqual(normalize(decoded), normalize(list(values)))

    def test_static_values(self):
        self.assertRoundTrip(
            ["uint256", "int16", "bool", "address", "bytes32"],
            [2**256 - 1, -300, True, ADDRESS, b"\x01" * 32],
        )

    def test_dynamic_values(self):
        self.assertRoundTrip(
            ["string", "bytes", "uint256[]"],
            ["hello wörld", b"\xca\xfe" * 40, [1, 2, 3]],
        )

    def test_nested_values(self):
        self.assertRoundTrip(
            ["(address,uint256)[]", "bytes[2]", "string[]"],
            [[(ADDRESS, 5), (OTHER_ADDRESS, 6)], [b"a", b"bc"], ["x", "", "yz"]],
        )

    def test_inline_static_composites(self):
        self.assertRoundTrip(
            ["uint256[2]", "(bool,address)", "uint8"],
            [[7, 8], (True, ADDRESS), 255],
        )

    def test_dynamic_tuple(self):
        self.assertRoundTrip(
            ["(uint256,(string,bytes4)[])", "bool"],
            [(1, [("a", b"\x00\x01\x02\x03")]), False],
        )

    def test_empty_dynamic_array(self):
        self.assertRoundTrip(["address[]", "uint8"], [[], 3])


class TestDecodeFailures(unittest.TestCase):
    """Malformed input raises DecodeFailure."""

    def test_truncated_head(self):
        with self.assertRaises(DecodeFailure):
            decode(["address", "uint256"], bytes.fromhex(_slot(1)))

    def test_unknown_type(self):
        with self.assertRaises(DecodeFailure):
            decode(["notAType"], bytes.fromhex(_slot(1)))

    def test_offset_out_of_range(self):
        with self.assertRaises(DecodeFailure):
            decode(["bytes"], bytes.fromhex(_slot(0x1000)))

    def test_length_exceeds_data(self):
        data = bytes.fromhex(_slot(32) + _slot(100) + "ab" * 10)
        with self.assertRaises(DecodeFailure):
            decode(["bytes"], data)

    def test_huge_array_length(self):
        data = bytes.fromhex(_slot(32) + _slot(2**200))
        with self.assertRaises(DecodeFailure):
            decode(["uint256[]"], data)

    def test_uint_out_of_range(self):
        with self.assertRaises(DecodeFailure):
            decode(["uint8"], bytes.fromhex(_slot(256)))

    def test_int_out_of_range(self):
        with self.assertRaises(DecodeFailure):
            decode(["int8"], bytes.fromhex(_slot(128)))

    def test_oversized_fixed_array(self):
        with self.assertRaises(DecodeFailure):
            decode(["uint256[100000000000]"], bytes(32))

    def test_oversized_fixed_array_of_dynamic_elements(self):
        data = bytes.fromhex(_slot(32) + _slot(0))
        with self.assertRaises(DecodeFailure):
            decode(["string[100000000000]"], data)

    def test_oversized_fixed_array_inside_tuple(self):
        with self.assertRaises(DecodeFailure):
            decode(["(bool,uint8[100000000000])"], bytes(64))


class TestDecodeStrings(unittest.TestCase):
    """Tests for string payloads."""

    def test_invalid_utf8_is_replaced(self):
        data = bytes.fromhex(_slot(32) + _slot(2) + "fffe" + "00" * 30)
        self.assertEqual(decode(["string"], data), ["\ufffd\ufffd"])


class TestDecodeCallData(unittest.TestCase):
    """Tests for decode_call_data."""

    def test_hex_payload(self):
        self.assertEqual(decode_call_data(["uint256"], _slot(1000)), [1000])
        self.assertEqual(decode_call_data(["uint256"], "0x" + _slot(1000)), [1000])

    def test_odd_length_hex(self):
        with self.assertRaises(DecodeFailure):
            decode_call_data(["uint256"], _slot(1)[:-1])

    def test_non_hex(self):
        with self.assertRaises(DecodeFailure):
            decode_call_data(["uint256"], "zz" * 32)

    def test_no_params_ignores_payload(self):
        self.assertEqual(decode_call_data([], "not hex"), [])


if __name__ == "__main__":
    unittest.main()
