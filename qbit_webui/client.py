"""
Python client for the qBittorrent WebUI API.

Wraps the subset of endpoints needed for torrent bookkeeping:
- Authentication (session cookie login)
- Torrent listing and removal
- Adding torrents from files, URLs or magnet links
- Tracker listing, adding, replacing and removing
- Tag listing, creation and deletion

Usage:
    from qbit_webui import QBittorrentClient

    client = QBittorrentClient()
    client.login("http://localhost:8080", "admin", "adminadmin")
    torrents = client.get_torrent_list()

The session is never renewed. If the server expires it, call login() again.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

import requests
from pydantic import TypeAdapter, ValidationError

from .config import Config
from .errors import AuthorizationError, HttpError, JsonError
from .logger import logger
from .models import TorrentInfo, TorrentTracker
from .params import GetTorrentListParams
from .upload import TorrentUpload


API_PREFIX = "/api/v2"
REQUEST_TIMEOUT = Config.REQUEST_TIMEOUT

TorrentRef = Union[TorrentInfo, str]

_TORRENT_LIST = TypeAdapter(List[TorrentInfo])
_TRACKER_LIST = TypeAdapter(List[TorrentTracker])
_TAG_LIST = TypeAdapter(List[str])


@dataclass
class ConnectionInfo:
    url: str
    username: str
    password: str


def _hash_of(torrent: TorrentRef) -> str:
    return torrent.hash if isinstance(torrent, TorrentInfo) else torrent


class QBittorrentClient:
    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        self.session = requests.Session()
        self.timeout = timeout
        self.connection_info: Optional[ConnectionInfo] = None
        self.auth_string: Optional[str] = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        """Close the HTTP connection pool. This does not log out."""
        self.session.close()

    @property
    def is_authenticated(self) -> bool:
        return self.auth_string is not None and self.connection_info is not None

    def _send(self, method: str, base_url: str, endpoint: str, **kwargs) -> requests.Response:
        url = f"{base_url}{API_PREFIX}{endpoint}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"{method} {endpoint} returned HTTP {status_code}")
            raise HttpError(f"{method} {endpoint} failed with HTTP {status_code}", status_code=status_code) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Could not reach qBittorrent at {base_url}: {e}")
            raise HttpError(f"Could not connect to server at {base_url}: {e}") from e

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        if not self.is_authenticated:
            logger.warning(f"Refusing {endpoint}: not logged in")
            raise AuthorizationError("Not logged in, call login() first")

        headers = kwargs.pop("headers", {})
        headers["Cookie"] = self.auth_string
        return self._send(method, self.connection_info.url, endpoint, headers=headers, **kwargs)

    @staticmethod
    def _parse(response: requests.Response, adapter: TypeAdapter):
        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Malformed JSON from {response.url}: {e}")
            raise JsonError(f"Response is not valid JSON: {e}") from e

        try:
            return adapter.validate_python(payload)
        except ValidationError as e:
            logger.error(f"Unexpected payload from {response.url}: {e}")
            raise JsonError(f"Response does not match the expected shape: {e}") from e

    # -------------------------------------------------------------------------
    # Auth Methods
    # -------------------------------------------------------------------------

    def login(self, url: str, username: str, password: str) -> None:
        """
        Login to qBittorrent. This must be run before any other request.

        Args:
            url: Base URL of the WebUI, e.g. http://localhost:8080
            username: WebUI username
            password: WebUI password

        Raises:
            HttpError: If the server is unreachable or answers non-2xx
                (qBittorrent answers 403 once an IP is banned)
            AuthorizationError: If the credentials were rejected
        """
        url = url.rstrip('/')
        response = self._send("POST", url, "/auth/login", data={
            "username": username,
            "password": password,
        })

        if response.text != "Ok.":
            logger.warning(f"Login to {url} rejected for user {username}")
            raise AuthorizationError(f"Login rejected for user {username}")

        sid = response.cookies.get("SID")
        if not sid:
            logger.error(f"Login to {url} succeeded but no SID cookie was returned")
            raise AuthorizationError("Server did not return a session cookie")

        self.auth_string = f"SID={sid}"
        self.connection_info = ConnectionInfo(url=url, username=username, password=password)
        logger.info(f"Logged in to {url} as {username}")

    # -------------------------------------------------------------------------
    # Torrent Methods
    # -------------------------------------------------------------------------

    def get_torrent_list(self, params: Optional[GetTorrentListParams] = None) -> List[TorrentInfo]:
        """Get the torrents in the client, optionally filtered."""
        data = params.to_params() if params is not None else {}
        response = self._request("POST", "/torrents/info", data=data)
        return self._parse(response, _TORRENT_LIST)

    def add_torrent(self, upload: TorrentUpload) -> None:
        """
        Add torrents from URLs, magnet links and/or .torrent files.

        The request returns once the server accepts it; torrents fetched from
        URLs may show up in the list later, or not at all.
        """
        files = upload.to_multipart()
        response = self._request("POST", "/torrents/add", files=files)

        if response.text.strip() == "Fails.":
            logger.error(f"Server refused to add torrents: {upload.urls} {[name for name, _ in upload.torrents]}")
            raise HttpError("Server refused to add the torrent", status_code=response.status_code)

        logger.info(f"Added {len(upload.urls)} URL(s) and {len(upload.torrents)} file(s)")

    def remove_torrent(self, torrent: TorrentRef, delete_files: bool = False) -> None:
        """Remove a torrent from the client."""
        self.remove_torrents([torrent], delete_files)

    def remove_torrents(self, torrents: Iterable[TorrentRef], delete_files: bool = False) -> None:
        """Remove multiple torrents at once. `delete_files` applies to all of them."""
        hashes = [_hash_of(torrent) for torrent in torrents]
        self._request("POST", "/torrents/delete", data={
            "hashes": "|".join(hashes),
            "deleteFiles": "true" if delete_files else "false",
        })
        logger.info(f"Removed {len(hashes)} torrent(s), delete_files={delete_files}")

    # -------------------------------------------------------------------------
    # Tracker Methods
    # -------------------------------------------------------------------------

    def get_torrent_trackers(self, torrent: TorrentRef) -> List[TorrentTracker]:
        """Get the trackers of a torrent."""
        response = self._request("POST", "/torrents/trackers", data={"hash": _hash_of(torrent)})
        return self._parse(response, _TRACKER_LIST)

    def get_trackers_by_hash(self, torrents: Iterable[TorrentRef]) -> Dict[str, List[TorrentTracker]]:
        """Get the trackers of several torrents, keyed by torrent hash."""
        return {_hash_of(torrent): self.get_torrent_trackers(torrent) for torrent in torrents}

    def add_torrent_tracker(self, torrent: TorrentRef, tracker_url: str) -> None:
        self.add_torrent_trackers(torrent, [tracker_url])

    def add_torrent_trackers(self, torrent: TorrentRef, tracker_urls: List[str]) -> None:
        self._request("POST", "/torrents/addTrackers", data={
            "hash": _hash_of(torrent),
            "urls": "\n".join(tracker_urls),
        })

    def replace_torrent_tracker(self, torrent: TorrentRef, old_url: str, new_url: str) -> None:
        """Replace a tracker URL on a torrent."""
        self._request("POST", "/torrents/editTracker", data={
            "hash": _hash_of(torrent),
            "origUrl": old_url,
            "newUrl": new_url,
        })

    def remove_torrent_tracker(self, torrent: TorrentRef, tracker_url: str) -> None:
        self.remove_torrent_trackers(torrent, [tracker_url])

    def remove_torrent_trackers(self, torrent: TorrentRef, tracker_urls: List[str]) -> None:
        self._request("POST", "/torrents/removeTrackers", data={
            "hash": _hash_of(torrent),
            "urls": "|".join(tracker_urls),
        })

    # -------------------------------------------------------------------------
    # Tag Methods
    # -------------------------------------------------------------------------

    def get_tags(self) -> List[str]:
        response = self._request("GET", "/torrents/tags")
        return self._parse(response, _TAG_LIST)

    def create_tag(self, tag: str) -> None:
        self.create_tags([tag])

    def create_tags(self, tags: List[str]) -> None:
        self._request("POST", "/torrents/createTags", data={"tags": ",".join(tags)})

    def delete_tag(self, tag: str) -> None:
        self.delete_tags([tag])

    def delete_tags(self, tags: List[str]) -> None:
        self._request("POST", "/torrents/deleteTags", data={"tags": ",".join(tags)})
