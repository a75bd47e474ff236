import unittest

from feistel.key_schedule import (
    expand_key, generate_key, derive_key_from_password, schedule_from_key, RoundKeySchedule
)
from feistel.key_schedule.arx_key_schedule import rotate_left, rotate_right


class TestRotations(unittest.TestCase):
    def test_rotate_left(self):
        self.assertEqual(rotate_left(0x80000001, 1), 0x00000003)
        self.assertEqual(rotate_left(0x12345678, 8), 0x34567812)

    def test_rotate_right(self):
        self.assertEqual(rotate_right(0x00000003, 1), 0x80000001)
        self.assertEqual(rotate_right(0x12345678, 8), 0x78123456)

    def test_rotations_are_inverse(self):
        for shift in range(33):
            with self.subTest(shift=shift):
                self.assertEqual(rotate_right(rotate_left(0xdeadbeef, shift), shift), 0xdeadbeef)


class TestExpandKey(unittest.TestCase):
    def setUp(self):
        self.master_key = bytes(range(32))

    def test_shape(self):
        round_keys = expand_key(self.master_key, 16, 32)
        self.assertEqual(len(round_keys), 16)
        self.assertTrue(all(len(rk) == 32 for rk in round_keys))

    def test_round_key_size_not_multiple_of_four(self):
        round_keys = expand_key(self.master_key, 3, 7)
        self.assertTrue(all(len(rk) == 7 for rk in round_keys))

    def test_deterministic(self):
        self.assertEqual(expand_key(self.master_key, 8, 16), expand_key(self.master_key, 8, 16))

    def test_round_keys_differ(self):
        round_keys = expand_key(self.master_key, 16, 16)
        self.assertEqual(len(set(round_keys)), 16)

    def test_one_bit_changes_schedule(self):
        modified = bytearray(self.master_key)
        modified[0] ^= 0x01
        original = expand_key(self.master_key, 16, 32)
        changed = expand_key(bytes(modified), 16, 32)
        self.assertTrue(all(a != b for a, b in zip(original, changed)))

    def test_rejects_bad_arguments(self):
        with self.assertRaises(ValueError):
            expand_key(b"short", 16, 32)
        with self.assertRaises(ValueError):
            expand_key(self.master_key, 0, 32)
        with self.assertRaises(ValueError):
            expand_key(self.master_key, 16, 0)

    def test_schedule_from_key(self):
        schedule = schedule_from_key(self.master_key, 5, 8, per_block=False)
        self.assertIsInstance(schedule, RoundKeySchedule)
        self.assertEqual(schedule.round_keys, expand_key(self.master_key, 5, 8))
        self.assertFalse(schedule.per_block)


class TestKeyGeneration(unittest.TestCase):
    def test_generate_key(self):
        self.assertEqual(len(generate_key()), 32)
        self.assertNotEqual(generate_key(), generate_key())

    def test_derive_key_from_password(self):
        key, salt = derive_key_from_password("correct horse battery staple")
        self.assertEqual(len(key), 32)
        self.assertEqual(len(salt), 16)

        again, _ = derive_key_from_password(b"correct horse battery staple", salt)
        self.assertEqual(key, again)

        other, _ = derive_key_from_password("wrong password", salt)
        self.assertNotEqual(key, other)


if __name__ == "__main__":
    unittest.main()
