"""
qbit-webui - Typed client for the qBittorrent WebUI API.

Covers login, torrent listing and removal, adding torrents, tracker
editing and tag management.
"""

from .client import QBittorrentClient
from .config import Config
from .errors import AuthorizationError, ClientError, HttpError, JsonError
from .models import TorrentInfo, TorrentState, TorrentTracker, TrackerStatus
from .params import GetTorrentListParams, TorrentListFilter
from .upload import TorrentUpload

__version__ = "0.1.0"
__all__ = [
    "QBittorrentClient",
    "Config",
    "ClientError",
    "HttpError",
    "AuthorizationError",
    "JsonError",
    "TorrentInfo",
    "TorrentState",
    "TorrentTracker",
    "TrackerStatus",
    "GetTorrentListParams",
    "TorrentListFilter",
    "TorrentUpload",
]
