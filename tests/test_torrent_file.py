import hashlib
import unittest

import bencodepy

from qbit_webui.errors import ClientError
from qbit_webui.torrent_file import (
    InvalidTorrentFileError,
    MissingRequiredKeyError,
    TorrentFile,
    TorrentFileError,
    read_torrent_bytes,
)

from conftest import SAMPLE_TORRENT


class TestTorrentFile(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.torrent_file = TorrentFile(SAMPLE_TORRENT)

    def test_info_hash(self):
        info = bencodepy.decode(SAMPLE_TORRENT)[b'info']
        info_hash = self.torrent_file.info_hash()
        self.assertEqual(len(info_hash), 40)
        self.assertEqual(info_hash, hashlib.sha1(bencodepy.encode(info)).hexdigest())
        self.assertEqual(info_hash, info_hash.lower())

    def test_not_bencode(self):
        with self.assertRaises(InvalidTorrentFileError):
            TorrentFile(b'<html>not a torrent</html>')

    def test_not_a_dictionary(self):
        with self.assertRaises(InvalidTorrentFileError):
            TorrentFile(bencodepy.encode([1, 2, 3]))

    def test_missing_info(self):
        with self.assertRaises(MissingRequiredKeyError):
            TorrentFile(bencodepy.encode({b'announce': b'http://a/announce'}))

    def test_errors_are_client_errors(self):
        self.assertTrue(issubclass(TorrentFileError, ClientError))


class TestReadTorrentBytes(unittest.TestCase):
    def test_missing_path(self):
        with self.assertRaises(TorrentFileError):
            read_torrent_bytes("does/not/exist.torrent")

    def test_directory(self):
        with self.assertRaises(TorrentFileError):
            read_torrent_bytes(".")


if __name__ == '__main__':
    unittest.main()
