"""Unit tests for ObjectId validation."""

import unittest

from domain.model.identifier import is_valid_id, new_id, validate_ids


class TestIdentifierValidation(unittest.TestCase):

    def test_24_hex_characters_are_valid(self):
        for value in ('507f1f77bcf86cd799439011', '0' * 24, 'ABCDEFabcdef012345678901'):
            with self.subTest(value=value):
                self.assertTrue(is_valid_id(value))

    def test_other_lengths_are_invalid(self):
        for value in ('', '507f1f77bcf86cd79943901', '507f1f77bcf86cd7994390111', 'a' * 12):
            with self.subTest(value=value):
                self.assertFalse(is_valid_id(value))

    def test_non_hex_characters_are_invalid(self):
        for value in ('not-an-id', 'z07f1f77bcf86cd799439011', '507f1f77bcf86cd79943901-'):
            with self.subTest(value=value):
                self.assertFalse(is_valid_id(value))

    def test_non_strings_are_invalid(self):
        for value in (None, 123, b'507f1f77bcf8'):
            with self.subTest(value=value):
                self.assertFalse(is_valid_id(value))

    def test_validate_ids_requires_every_id_valid(self):
        good = '507f1f77bcf86cd799439011'
        self.assertTrue(validate_ids([good, new_id()]))
        self.assertFalse(validate_ids([good, 'not-an-id']))

    def test_new_id_is_valid(self):
        self.assertTrue(is_valid_id(new_id()))


if __name__ == '__main__':
    unittest.main()
