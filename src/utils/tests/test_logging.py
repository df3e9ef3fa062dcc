"""Tests for structured JSON logging."""

import json
import logging
import sys
import unittest
from datetime import datetime, timezone

from bson import ObjectId

from utils.logging import JSONFormatter, SERVICE_LOG_NAME, setup_structured_logging


def _record(msg: str, level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord('services.membership_service', level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_standard_fields(self):
        data = json.loads(self.formatter.format(_record("User joined community")))

        self.assertEqual(data['message'], 'User joined community')
        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'services.membership_service')
        self.assertEqual(data['service'], SERVICE_LOG_NAME)
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_are_top_level(self):
        data = json.loads(self.formatter.format(_record("x", userId='u1', communityId='c1')))
        self.assertEqual(data['userId'], 'u1')
        self.assertEqual(data['communityId'], 'c1')
        self.assertNotIn('pathname', data)

    def test_non_json_extra_values_are_stringified(self):
        oid = ObjectId('64b7f0c2a1b2c3d4e5f60718')
        ts = datetime(2024, 1, 1, tzinfo=timezone.utc)

        data = json.loads(self.formatter.format(_record("x", communityId=oid, at=ts)))

        self.assertEqual(data['communityId'], str(oid))
        self.assertEqual(data['at'], str(ts))

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord('x', logging.ERROR, __file__, 1, 'failed', None, sys.exc_info())

        data = json.loads(self.formatter.format(record))
        self.assertIn('ValueError: boom', data['exception'])


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self._handlers = self.root.handlers[:]
        self._level = self.root.level

    def tearDown(self):
        self.root.handlers = self._handlers
        self.root.setLevel(self._level)

    def test_installs_json_handler(self):
        setup_structured_logging('debug')

        self.assertEqual(self.root.level, logging.DEBUG)
        self.assertEqual(len(self.root.handlers), 1)
        self.assertIsInstance(self.root.handlers[0].formatter, JSONFormatter)
        self.assertEqual(logging.getLogger('uvicorn.access').level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
