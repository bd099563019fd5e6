"""
Magnet link parsing.

Provides the MagnetLink class for pulling the info hash out of a magnet
URI. Base32 info hashes are converted to the lowercase hex form qBittorrent
uses for torrent hashes.
"""

import base64
import re
from urllib.parse import parse_qs


class MagnetLink:
    HEX_PATTERN = re.compile(r'^[a-fA-F0-9]{40}$')
    BASE32_PATTERN = re.compile(r'^[a-zA-Z2-7]{32}$')

    def __init__(self, magnet_uri):
        btih = self._find_btih(magnet_uri)
        if btih is None:
            raise ValueError(f"Not a valid magnet URI: {magnet_uri}")
        self.magnet_uri = magnet_uri
        self.info_hash = self._to_hex(btih)

    @classmethod
    def _find_btih(cls, magnet_uri):
        """Return the first well-formed btih value, or None."""
        if not magnet_uri.startswith('magnet:?'):
            return None

        params = parse_qs(magnet_uri.split('?', 1)[1])
        for xt in params.get('xt', []):
            if not xt.lower().startswith('urn:btih:'):
                continue
            value = xt.split(':')[-1]
            if cls.HEX_PATTERN.match(value) or cls.BASE32_PATTERN.match(value):
                return value
        return None

    @classmethod
    def _to_hex(cls, value):
        if cls.BASE32_PATTERN.match(value):
            return base64.b32decode(value.upper()).hex()
        return value.lower()

    @classmethod
    def is_valid_magnet(cls, magnet_uri):
        return cls._find_btih(magnet_uri) is not None
