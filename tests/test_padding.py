import unittest

from Cryptodome.Util.Padding import pad

from feistel.padding import PaddingError, add_padding, remove_padding


class TestAddPadding(unittest.TestCase):
    def test_pads_to_next_boundary(self):
        msg = b"Hello, World!"
        self.assertEqual(add_padding(msg, 15), msg + b"\x02\x02")
        self.assertEqual(add_padding(msg, 16), msg + b"\x03\x03\x03")

    def test_exact_multiple_gets_full_block(self):
        for block_size in (1, 2, 8, 16, 255):
            with self.subTest(block_size=block_size):
                msg = b"a" * (block_size * 3)
                padded = add_padding(msg, block_size)
                self.assertEqual(len(padded), len(msg) + block_size)
                self.assertEqual(padded[len(msg):], bytes([block_size]) * block_size)

    def test_empty_message(self):
        self.assertEqual(add_padding(b"", 8), b"\x08" * 8)

    def test_accepts_bytearray(self):
        self.assertEqual(add_padding(bytearray(b"abc"), 4), b"abc\x01")

    def test_block_size_256_stores_zero_tag(self):
        padded = add_padding(b"", 256)
        self.assertEqual(padded, b"\x00" * 256)

    def test_rejects_invalid_block_sizes(self):
        for block_size in (0, -4, 257, 1024):
            with self.subTest(block_size=block_size):
                with self.assertRaises(ValueError):
                    add_padding(b"abc", block_size)

    def test_matches_pycryptodome(self):
        for block_size in (2, 8, 16, 32, 255):
            for length in (0, 1, block_size - 1, block_size, 2 * block_size + 3):
                with self.subTest(block_size=block_size, length=length):
                    msg = bytes(range(256))[:length] if length <= 256 else b"z" * length
                    self.assertEqual(add_padding(msg, block_size), pad(msg, block_size, style='pkcs7'))


class TestRemovePadding(unittest.TestCase):
    def test_restores_original_message(self):
        for block_size in (1, 2, 7, 16, 64, 255):
            for length in (0, 1, 13, 64, 100):
                with self.subTest(block_size=block_size, length=length):
                    msg = bytes((i * 7) & 0xFF for i in range(length))
                    buffer = bytearray(add_padding(msg, block_size))
                    self.assertIsNone(remove_padding(buffer))
                    self.assertEqual(bytes(buffer), msg)

    def test_empty_message(self):
        with self.assertRaises(PaddingError) as ctx:
            remove_padding(bytearray())
        self.assertEqual(str(ctx.exception), "empty message")

    def test_zero_padding_number(self):
        with self.assertRaises(PaddingError) as ctx:
            remove_padding(bytearray(b"abc\x00"))
        self.assertEqual(ctx.exception.reason, "padding number cannot be 0")

    def test_inconsistent_padding(self):
        with self.assertRaises(PaddingError) as ctx:
            remove_padding(bytearray(b"abcd\x03\x05"))
        self.assertEqual(str(ctx.exception), "malformed padding")

    def test_padding_longer_than_message(self):
        with self.assertRaises(PaddingError) as ctx:
            remove_padding(bytearray(b"\x05\x05"))
        self.assertEqual(str(ctx.exception), "malformed padding")

    def test_full_256_byte_block_cannot_be_removed(self):
        buffer = bytearray(add_padding(b"x" * 256, 256))
        with self.assertRaises(PaddingError):
            remove_padding(buffer)

    def test_padding_error_is_not_a_value_error(self):
        self.assertFalse(issubclass(PaddingError, ValueError))


if __name__ == "__main__":
    unittest.main()
