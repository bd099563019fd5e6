"""
Query parameters for the torrent list endpoint.

GetTorrentListParams holds the optional filters accepted by /torrents/info
and renders only the ones that are set. Build one directly or through
GetTorrentListParams.builder().
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional

from .models import TorrentInfo


class TorrentListFilter(str, Enum):
    ALL = "all"
    DOWNLOADING = "downloading"
    SEEDING = "seeding"
    COMPLETED = "completed"
    PAUSED = "paused"
    STOPPED = "stopped"         # qBittorrent 5.0 name for paused
    ACTIVE = "active"
    INACTIVE = "inactive"
    RESUMED = "resumed"
    RUNNING = "running"         # qBittorrent 5.0 name for resumed
    STALLED = "stalled"
    STALLED_UPLOADING = "stalled_uploading"
    STALLED_DOWNLOADING = "stalled_downloading"
    ERRORED = "errored"


@dataclass
class GetTorrentListParams:
    filter: Optional[TorrentListFilter] = None
    category: Optional[str] = None
    tag: Optional[str] = None
    sort: Optional[str] = None          # Any TorrentInfo field name
    reverse: Optional[bool] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    hashes: Optional[List[str]] = None

    @staticmethod
    def builder() -> "GetTorrentListParamsBuilder":
        return GetTorrentListParamsBuilder()

    def to_params(self) -> Dict[str, str]:
        """Render the set parameters as form fields."""
        params = {}

        if self.filter is not None:
            params["filter"] = TorrentListFilter(self.filter).value
        if self.category is not None:
            params["category"] = self.category
        if self.tag is not None:
            params["tag"] = self.tag
        if self.sort is not None:
            if self.sort not in TorrentInfo.model_fields:
                raise ValueError(f"Cannot sort by unknown torrent field: {self.sort}")
            params["sort"] = self.sort
        if self.reverse is not None:
            params["reverse"] = str(self.reverse).lower()
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.offset is not None:
            params["offset"] = str(self.offset)
        if self.hashes:
            params["hashes"] = "|".join(self.hashes)

        return params


class GetTorrentListParamsBuilder:
    def __init__(self):
        self.params = GetTorrentListParams()

    def filter(self, filter: TorrentListFilter) -> "GetTorrentListParamsBuilder":
        self.params.filter = filter
        return self

    def category(self, category: str) -> "GetTorrentListParamsBuilder":
        self.params.category = category
        return self

    def tag(self, tag: str) -> "GetTorrentListParamsBuilder":
        self.params.tag = tag
        return self

    def sort(self, field: str) -> "GetTorrentListParamsBuilder":
        self.params.sort = field
        return self

    def reverse(self) -> "GetTorrentListParamsBuilder":
        """Reverse the order of the results."""
        self.params.reverse = True
        return self

    def limit(self, limit: int) -> "GetTorrentListParamsBuilder":
        self.params.limit = limit
        return self

    def offset(self, offset: int) -> "GetTorrentListParamsBuilder":
        self.params.offset = offset
        return self

    def hash(self, info_hash: str) -> "GetTorrentListParamsBuilder":
        """Add one hash to filter by."""
        if self.params.hashes is None:
            self.params.hashes = []
        self.params.hashes.append(info_hash)
        return self

    def hashes(self, hashes: List[str]) -> "GetTorrentListParamsBuilder":
        self.params.hashes = list(hashes)
        return self

    def build(self) -> GetTorrentListParams:
        hashes = list(self.params.hashes) if self.params.hashes is not None else None
        return replace(self.params, hashes=hashes)
