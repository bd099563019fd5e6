"""
Requests for adding torrents to the client.

A TorrentUpload carries torrent URLs (http(s) or magnet) and/or raw
.torrent files together with the options /torrents/add accepts. It is
always sent as multipart/form-data: files as `torrents` parts, everything
else as plain text fields.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .magnet_link import MagnetLink
from .torrent_file import TorrentFile, read_torrent_bytes


TORRENT_CONTENT_TYPE = "application/x-bittorrent"


def _bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class TorrentUpload:
    # http, https or magnet URLs. HTTP URLs are fetched by the server and
    # are not always added; check the torrent list afterwards.
    urls: List[str] = field(default_factory=list)
    # (filename, data) of .torrent files
    torrents: List[Tuple[str, bytes]] = field(default_factory=list)
    save_path: Optional[str] = None
    cookie: Optional[str] = None           # Sent when downloading the .torrent URL
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    skip_hash_check: Optional[bool] = None
    paused: Optional[bool] = None
    root_folder: Optional[bool] = None
    rename: Optional[str] = None
    upload_limit: Optional[int] = None     # Bytes/s
    download_limit: Optional[int] = None   # Bytes/s
    ratio_limit: Optional[float] = None
    seeding_time_limit: Optional[int] = None   # Seconds
    auto_tmm: Optional[bool] = None
    sequential_download: Optional[bool] = None
    first_last_piece_prio: Optional[bool] = None

    @staticmethod
    def builder() -> "TorrentUploadBuilder":
        return TorrentUploadBuilder()

    def to_multipart(self) -> List[Tuple[str, tuple]]:
        """
        Encode the upload for the `files` argument of requests.

        Text fields are given a None filename so requests sends them as
        ordinary form parts of the same multipart body.

        Raises:
            ValueError: If neither urls nor torrent files are set
        """
        if not self.urls and not self.torrents:
            raise ValueError("Either urls or torrent files must be set")

        parts = []

        if self.urls:
            parts.append(("urls", (None, "\n".join(self.urls))))

        for filename, data in self.torrents:
            parts.append(("torrents", (filename, data, TORRENT_CONTENT_TYPE)))

        fields = [
            ("savepath", self.save_path),
            ("cookie", self.cookie),
            ("category", self.category),
            ("tags", ",".join(self.tags) if self.tags is not None else None),
            ("skip_checking", _bool(self.skip_hash_check) if self.skip_hash_check is not None else None),
            ("paused", _bool(self.paused) if self.paused is not None else None),
            ("root_folder", _bool(self.root_folder) if self.root_folder is not None else None),
            ("rename", self.rename),
            ("upLimit", self.upload_limit),
            ("dlLimit", self.download_limit),
            ("ratioLimit", self.ratio_limit),
            ("seedingTimeLimit", self.seeding_time_limit),
            ("autoTMM", _bool(self.auto_tmm) if self.auto_tmm is not None else None),
            ("sequentialDownload", _bool(self.sequential_download) if self.sequential_download is not None else None),
            ("firstLastPiecePrio", _bool(self.first_last_piece_prio) if self.first_last_piece_prio is not None else None),
        ]
        for name, value in fields:
            if value is not None:
                parts.append((name, (None, str(value))))

        return parts

    def info_hashes(self) -> List[str]:
        """
        Info hashes of everything in this upload that can be known locally.

        Covers attached torrent files and magnet URLs; plain http(s) URLs
        are skipped since only the server downloads them.
        """
        hashes = []
        for _, data in self.torrents:
            hashes.append(TorrentFile(data).info_hash())
        for url in self.urls:
            if MagnetLink.is_valid_magnet(url):
                hashes.append(MagnetLink(url).info_hash)
        return hashes


class TorrentUploadBuilder:
    def __init__(self):
        self.upload = TorrentUpload()

    def url(self, url: str) -> "TorrentUploadBuilder":
        self.upload.urls.append(url)
        return self

    def magnet(self, uri: str) -> "TorrentUploadBuilder":
        """Add a magnet URI, rejecting ones without a usable info hash."""
        MagnetLink(uri)
        self.upload.urls.append(uri)
        return self

    def torrent_file(self, path: str) -> "TorrentUploadBuilder":
        return self.torrent_data(os.path.basename(path), read_torrent_bytes(path))

    def torrent_data(self, filename: str, data: bytes) -> "TorrentUploadBuilder":
        self.upload.torrents.append((filename, data))
        return self

    def save_path(self, save_path: str) -> "TorrentUploadBuilder":
        self.upload.save_path = save_path
        return self

    def cookie(self, cookie: str) -> "TorrentUploadBuilder":
        self.upload.cookie = cookie
        return self

    def category(self, category: str) -> "TorrentUploadBuilder":
        self.upload.category = category
        return self

    def tag(self, tag: str) -> "TorrentUploadBuilder":
        if self.upload.tags is None:
            self.upload.tags = []
        self.upload.tags.append(tag)
        return self

    def tags(self, tags: List[str]) -> "TorrentUploadBuilder":
        self.upload.tags = list(tags)
        return self

    def skip_hash_check(self, skip_hash_check: bool) -> "TorrentUploadBuilder":
        self.upload.skip_hash_check = skip_hash_check
        return self

    def paused(self, paused: bool) -> "TorrentUploadBuilder":
        self.upload.paused = paused
        return self

    def root_folder(self, root_folder: bool) -> "TorrentUploadBuilder":
        self.upload.root_folder = root_folder
        return self

    def rename(self, rename: str) -> "TorrentUploadBuilder":
        self.upload.rename = rename
        return self

    def upload_limit(self, upload_limit: int) -> "TorrentUploadBuilder":
        self.upload.upload_limit = upload_limit
        return self

    def download_limit(self, download_limit: int) -> "TorrentUploadBuilder":
        self.upload.download_limit = download_limit
        return self

    def ratio_limit(self, ratio_limit: float) -> "TorrentUploadBuilder":
        self.upload.ratio_limit = ratio_limit
        return self

    def seeding_time_limit(self, seeding_time_limit: int) -> "TorrentUploadBuilder":
        self.upload.seeding_time_limit = seeding_time_limit
        return self

    def auto_tmm(self, auto_tmm: bool) -> "TorrentUploadBuilder":
        self.upload.auto_tmm = auto_tmm
        return self

    def sequential_download(self, sequential_download: bool) -> "TorrentUploadBuilder":
        self.upload.sequential_download = sequential_download
        return self

    def first_last_piece_prio(self, first_last_piece_prio: bool) -> "TorrentUploadBuilder":
        self.upload.first_last_piece_prio = first_last_piece_prio
        return self

    def build(self) -> TorrentUpload:
        return self.upload
