"""
Typed records returned by the qBittorrent WebUI API.

TorrentInfo mirrors one element of /torrents/info and TorrentTracker one
element of /torrents/trackers. Both are pydantic models so the raw JSON is
validated on the way in; a payload that does not fit raises a
ValidationError which the client turns into a JsonError.
"""

from enum import Enum, IntEnum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TorrentState(str, Enum):
    """State of a torrent as reported by the server."""

    ERROR = "error"                               # Some error occurred, applies to paused torrents
    MISSING_FILES = "missingFiles"                # Torrent data files are missing
    UPLOADING = "uploading"                       # Seeding and data is being transferred
    PAUSED_UP = "pausedUP"                        # Paused and has finished downloading
    STOPPED_UP = "stoppedUP"                      # Replaces pausedUP from qBittorrent 5.0
    QUEUED_UP = "queuedUP"                        # Queued for upload
    STALLED_UP = "stalledUP"                      # Seeding, but no connection were made
    CHECKING_UP = "checkingUP"                    # Finished downloading and is being checked
    FORCED_UP = "forcedUP"                        # Forced to upload, ignoring queue limit
    ALLOCATING = "allocating"                     # Allocating disk space for download
    DOWNLOADING = "downloading"                   # Downloading and data is being transferred
    META_DOWNLOADING = "metaDL"                   # Just started, fetching metadata
    FORCED_META_DOWNLOADING = "forcedMetaDL"      # Forced to fetch metadata, ignoring queue limit
    PAUSED_DL = "pausedDL"                        # Paused and has NOT finished downloading
    STOPPED_DL = "stoppedDL"                      # Replaces pausedDL from qBittorrent 5.0
    QUEUED_DL = "queuedDL"                        # Queued for download
    STALLED_DL = "stalledDL"                      # Downloading, but no connection were made
    CHECKING_DL = "checkingDL"                    # Being checked, has NOT finished downloading
    FORCED_DL = "forcedDL"                        # Forced to download, ignoring queue limit
    CHECKING_RESUME_DATA = "checkingResumeData"   # Checking resume data on startup
    MOVING = "moving"                             # Moving to another location
    UNKNOWN = "unknown"


class TrackerStatus(IntEnum):
    """Tracker status codes."""

    DISABLED = 0        # Used for DHT, PeX, and LSD
    NOT_CONTACTED = 1
    WORKING = 2
    UPDATING = 3
    NOT_WORKING = 4


class TorrentInfo(BaseModel):
    """A torrent's information from the qBittorrent client."""

    model_config = ConfigDict(extra="ignore")

    added_on: int = 0                  # Unix time the torrent was added
    amount_left: int = 0               # Bytes left to download
    auto_tmm: bool = False             # Managed by Automatic Torrent Management
    availability: float = 0.0          # Percentage of pieces currently available
    category: str = ""
    completed: int = 0                 # Bytes of transfer data completed
    completion_on: int = 0             # Unix time the torrent completed
    content_path: str = ""
    dl_limit: int = -1                 # Bytes/s, -1 if unlimited
    dlspeed: int = 0
    downloaded: int = 0
    downloaded_session: int = 0
    eta: int = 0                       # Seconds
    f_l_piece_prio: bool = False       # First and last pieces prioritized
    force_start: bool = False
    hash: str = ""
    last_activity: int = 0             # Unix time of the last chunk transferred
    magnet_uri: str = ""
    max_ratio: float = -1.0
    max_seeding_time: int = -1         # Seconds
    name: str = ""
    num_complete: int = 0              # Seeds in the swarm
    num_incomplete: int = 0            # Leechers in the swarm
    num_leechs: int = 0                # Leechers connected to
    num_seeds: int = 0                 # Seeds connected to
    priority: int = 0                  # -1 if queuing is disabled or in seed mode
    progress: float = 0.0              # 0.0 to 1.0
    ratio: float = 0.0                 # Capped at 9999
    ratio_limit: float = -2.0
    save_path: str = ""
    seeding_time: int = 0              # Seconds elapsed while complete
    seeding_time_limit: int = -2       # -2 when ATM is enabled, -1 when unset
    seen_complete: int = 0
    seq_dl: bool = False
    size: int = 0                      # Bytes of selected files
    state: TorrentState = TorrentState.UNKNOWN
    super_seeding: bool = False
    tags: List[str] = Field(default_factory=list)
    time_active: int = 0
    total_size: int = 0                # Bytes of all files, selected or not
    tracker: str = ""                  # First working tracker, empty if none
    up_limit: int = -1
    uploaded: int = 0
    uploaded_session: int = 0
    upspeed: int = 0

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        """The server sends tags as one comma separated string."""
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return value


class TorrentTracker(BaseModel):
    """A tracker entry of a torrent."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    url: str
    status: TrackerStatus = TrackerStatus.NOT_CONTACTED
    # Lower tiers are tried first. Negative for DHT/PeX/LSD entries.
    tier: int = -1
    num_peers: int = 0
    num_seeds: int = 0
    num_leeches: int = 0
    num_downloaded: int = 0
    # Free-form text chosen by the tracker admins
    message: str = Field("", alias="msg")

    @field_validator("tier", mode="before")
    @classmethod
    def blank_tier(cls, value):
        if value == "":
            return -1
        return value
