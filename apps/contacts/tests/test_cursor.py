"""
Cursor Pagination Tests
=======================

Run tests:
    docker compose exec web python manage.py test apps.contacts.tests.test_cursor --settings=config.test_settings
"""

import base64

from django.test import SimpleTestCase

from apps.contacts.cursor import MAX_OFFSET, decode_cursor, encode_cursor, page_window, parse_limit
from apps.core.conf import PublicApiConfig


def _token(raw):
    return base64.urlsafe_b64encode(raw.encode('ascii')).decode('ascii').rstrip('=')


class CursorCodecTest(SimpleTestCase):

    def test_known_token(self):
        self.assertEqual(encode_cursor(100), 'bzoxMDA')
        self.assertEqual(decode_cursor('bzoxMDA'), 100)

    def test_round_trip(self):
        for offset in (0, 50, MAX_OFFSET):
            self.assertEqual(decode_cursor(encode_cursor(offset)), offset)

    def test_token_is_url_safe(self):
        token = encode_cursor(123456)
        self.assertNotIn('=', token)
        self.assertNotIn('+', token)
        self.assertNotIn('/', token)

    def test_encode_rejects_bad_offsets(self):
        with self.assertRaises(ValueError):
            encode_cursor(-1)
        with self.assertRaises(ValueError):
            encode_cursor(MAX_OFFSET + 1)
        with self.assertRaises(TypeError):
            encode_cursor('10')
        with self.assertRaises(TypeError):
            encode_cursor(True)

    def test_bad_tokens_restart_at_zero(self):
        self.assertEqual(decode_cursor(None), 0)
        self.assertEqual(decode_cursor(''), 0)
        self.assertEqual(decode_cursor('%%%'), 0)
        self.assertEqual(decode_cursor(_token('x:10')), 0)
        self.assertEqual(decode_cursor(_token('o:-5')), 0)
        self.assertEqual(decode_cursor(_token('o:abc')), 0)
        self.assertEqual(decode_cursor(_token(f'o:{MAX_OFFSET + 1}')), 0)


class ParseLimitTest(SimpleTestCase):

    def setUp(self):
        self.config = PublicApiConfig()

    def test_default(self):
        self.assertEqual(parse_limit(None, self.config), 50)
        self.assertEqual(parse_limit('abc', self.config), 50)

    def test_clamped(self):
        self.assertEqual(parse_limit('0', self.config), 1)
        self.assertEqual(parse_limit('-3', self.config), 1)
        self.assertEqual(parse_limit('1000', self.config), 100)
        self.assertEqual(parse_limit(' 25 ', self.config), 25)


class PageWindowTest(SimpleTestCase):

    def test_more_pages(self):
        self.assertEqual(page_window(0, 2, 5), (0, 1, encode_cursor(2)))

    def test_last_page(self):
        start, end, next_cursor = page_window(4, 2, 5)
        self.assertEqual((start, end), (4, 5))
        self.assertIsNone(next_cursor)

    def test_exact_fit(self):
        self.assertIsNone(page_window(3, 2, 5)[2])

    def test_empty(self):
        self.assertIsNone(page_window(0, 50, 0)[2])
