"""
Torrent file reader with error handling.

Provides the TorrentFile class for decoding bencoded .torrent data and
computing its info hash, so uploads can be matched against the hashes the
server reports in its torrent list.

Custom exceptions:
- TorrentFileError: Base exception for all torrent file errors
- InvalidTorrentFileError: Raised when data is not valid bencode format
- MissingRequiredKeyError: Raised when required keys are missing
"""

import hashlib

import bencodepy

from .errors import ClientError


class TorrentFileError(ClientError):
    """Base exception for torrent file parsing errors."""
    pass


class InvalidTorrentFileError(TorrentFileError):
    """Raised when torrent data is not valid bencode format."""
    pass


class MissingRequiredKeyError(TorrentFileError):
    """Raised when torrent data is missing required keys."""
    pass


def read_torrent_bytes(torrent_path):
    try:
        with open(torrent_path, 'rb') as f:
            return f.read()
    except FileNotFoundError:
        raise TorrentFileError(f"Torrent file not found: {torrent_path}")
    except PermissionError:
        raise TorrentFileError(f"Permission denied reading torrent file: {torrent_path}")
    except OSError as e:
        raise TorrentFileError(f"Failed to read torrent file: {e}")


class TorrentFile:
    def __init__(self, data: bytes):
        try:
            torrent_data = bencodepy.decode(data)
        except bencodepy.DecodingError as e:
            raise InvalidTorrentFileError(f"Invalid bencode format: {e}")
        except Exception as e:
            raise InvalidTorrentFileError(f"Failed to decode torrent data: {e}")

        if not isinstance(torrent_data, dict):
            raise InvalidTorrentFileError("Torrent data is not a dictionary")

        if b'info' not in torrent_data:
            raise MissingRequiredKeyError("Torrent file missing required 'info' dictionary")

        # Kept raw, the hash has to be taken over the original bytes
        self._raw_info = torrent_data[b'info']

        if not isinstance(self._raw_info, dict):
            raise InvalidTorrentFileError("'info' field is not a dictionary")

    def info_hash(self):
        return hashlib.sha1(bencodepy.encode(self._raw_info)).hexdigest()
