import unittest
from datetime import datetime, timedelta, timezone

from bcesig.encoding import format_timestamp, sha256_hmac, to_text, uri_encode


class TestUriEncode(unittest.TestCase):
    def test_unreserved_characters_untouched(self) -> None:
        value = 'AZaz09-._~'
        self.assertEqual(uri_encode(value), value)

    def test_space_and_slash(self) -> None:
        self.assertEqual(uri_encode('a b/c'), 'a%20b%2Fc')

    def test_reserved_characters_uppercase_hex(self) -> None:
        self.assertEqual(uri_encode('+=&:;*'), '%2B%3D%26%3A%3B%2A')

    def test_utf8(self) -> None:
        self.assertEqual(uri_encode('百度'), '%E7%99%BE%E5%BA%A6')

    def test_numbers(self) -> None:
        self.assertEqual(uri_encode(1024), '1024')


class TestToText(unittest.TestCase):
    def test_supported_types(self) -> None:
        self.assertEqual(to_text('x'), 'x')
        self.assertEqual(to_text(b'x'), 'x')
        self.assertEqual(to_text(3), '3')
        self.assertEqual(to_text(1.5), '1.5')

    def test_unsupported_type(self) -> None:
        with self.assertRaises(TypeError):
            to_text({'a': 1})


class TestSha256Hmac(unittest.TestCase):
    def test_rfc4231_case_2(self) -> None:
        self.assertEqual(
            sha256_hmac('Jefe', 'what do ya want for nothing?'),
            '5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843'
        )

    def test_bytes_and_text_agree(self) -> None:
        self.assertEqual(sha256_hmac(b'key', b'msg'), sha256_hmac('key', 'msg'))


class TestFormatTimestamp(unittest.TestCase):
    def test_drops_microseconds(self) -> None:
        self.assertEqual(
            format_timestamp(datetime(2016, 4, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)),
            '2016-04-01T12:00:00Z'
        )

    def test_naive_taken_as_utc(self) -> None:
        self.assertEqual(format_timestamp(datetime(2016, 4, 1, 12, 0, 0)), '2016-04-01T12:00:00Z')

    def test_aware_converted_to_utc(self) -> None:
        pacific = timezone(timedelta(hours=-7))
        self.assertEqual(
            format_timestamp(datetime(2016, 4, 1, 5, 0, 0, tzinfo=pacific)),
            '2016-04-01T12:00:00Z'
        )

    def test_epoch_seconds(self) -> None:
        self.assertEqual(format_timestamp(1459512000), '2016-04-01T12:00:00Z')
        self.assertEqual(format_timestamp(1459512000.75), '2016-04-01T12:00:00Z')


if __name__ == '__main__':
    unittest.main(verbosity=2)
