import unittest

from awssig4.encoding import AWS_PATH_ALLOWED, AWS_QUERY_ALLOWED, encode_path, encode_query, percent_encode
from awssig4.errors import EncodingError


class TestPercentEncoding(unittest.TestCase):

    def test_unreserved_untouched(self) -> None:
        value = 'AZaz09-_.~'

        self.assertEqual(encode_path(value), value)
        self.assertEqual(encode_query(value), value)

    def test_path_keeps_slashes_only(self) -> None:
        self.assertEqual(encode_path('/photos/my trip+2023=ok&x'), '/photos/my%20trip%2B2023%3Dok%26x')

    def test_query_keeps_separators_only(self) -> None:
        self.assertEqual(encode_query('key=a b/c+d&other=1'), 'key=a%20b%2Fc%2Bd&other=1')

    def test_allowed_sets_differ(self) -> None:
        self.assertIn(ord('/'), AWS_PATH_ALLOWED)
        self.assertNotIn(ord('/'), AWS_QUERY_ALLOWED)
        self.assertIn(ord('='), AWS_QUERY_ALLOWED)
        self.assertNotIn(ord('='), AWS_PATH_ALLOWED)

    def test_multibyte_uppercase_hex(self) -> None:
        self.assertEqual(encode_path('/café'), '/caf%C3%A9')

    def test_percent_is_encoded(self) -> None:
        self.assertEqual(encode_path('/my%20file'), '/my%2520file')

    def test_lone_surrogate(self) -> None:
        with self.assertRaises(EncodingError):
            encode_path('/\ud800')

    def test_non_text(self) -> None:
        with self.assertRaises(EncodingError):
            percent_encode(b'/path', AWS_PATH_ALLOWED)


if __name__ == '__main__':
    unittest.main(verbosity=2)
