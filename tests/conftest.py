import bencodepy
import pytest
from urllib.parse import parse_qs

from qbit_webui.client import QBittorrentClient
from qbit_webui.torrent_file import TorrentFile


BASE_URL = "http://qbit.test:8080"
API = f"{BASE_URL}/api/v2"
SID = "Zx9Qp2sLm4"


SAMPLE_TORRENT = bencodepy.encode({
    b"announce": b"http://tracker.example.org/announce",
    b"info": {
        b"length": 1048576,
        b"name": b"debian-12.6.0-amd64-netinst.iso",
        b"piece length": 262144,
        b"pieces": b"a" * 80,
    },
})


def torrent_record(**overrides):
    record = {
        "added_on": 1700000000,
        "amount_left": 0,
        "auto_tmm": False,
        "availability": -1,
        "category": "linux",
        "completed": 1048576,
        "completion_on": 1700000500,
        "content_path": "/downloads/debian-12.6.0-amd64-netinst.iso",
        "dl_limit": -1,
        "dlspeed": 0,
        "downloaded": 1048576,
        "downloaded_session": 0,
        "eta": 8640000,
        "f_l_piece_prio": False,
        "force_start": False,
        "hash": "8c4adbf9ebe66f1d804fb6a4fb9b74966c3ab609",
        "last_activity": 1700000600,
        "magnet_uri": "magnet:?xt=urn:btih:8c4adbf9ebe66f1d804fb6a4fb9b74966c3ab609",
        "max_ratio": -1,
        "max_seeding_time": -1,
        "name": "debian-12.6.0-amd64-netinst.iso",
        "num_complete": 12,
        "num_incomplete": 3,
        "num_leechs": 0,
        "num_seeds": 0,
        "priority": 0,
        "progress": 1,
        "ratio": 0.25,
        "ratio_limit": -2,
        "save_path": "/downloads",
        "seeding_time": 3600,
        "seeding_time_limit": -2,
        "seen_complete": 1700000500,
        "seq_dl": False,
        "size": 1048576,
        "state": "stalledUP",
        "super_seeding": False,
        "tags": "",
        "time_active": 4000,
        "total_size": 1048576,
        "tracker": "http://tracker.example.org/announce",
        "up_limit": -1,
        "uploaded": 262144,
        "uploaded_session": 0,
        "upspeed": 0,
    }
    record.update(overrides)
    return record


class FakeWebUI:
    """In-memory stand-in for the tag and torrent endpoints of a WebUI server."""

    def __init__(self, mocker):
        self.tags = []
        self.torrents = []
        self.known_uploads = {}

        mocker.post(f"{API}/auth/login", text="Ok.", cookies={"SID": SID})
        mocker.get(f"{API}/torrents/tags", json=self.list_tags)
        mocker.post(f"{API}/torrents/createTags", text=self.create_tags)
        mocker.post(f"{API}/torrents/deleteTags", text=self.delete_tags)
        mocker.post(f"{API}/torrents/info", json=self.list_torrents)
        mocker.post(f"{API}/torrents/add", text=self.add_torrents)
        mocker.post(f"{API}/torrents/delete", text=self.delete_torrents)

    def _authorized(self, request, context):
        if request.headers.get("Cookie") != f"SID={SID}":
            context.status_code = 403
            return False
        return True

    @staticmethod
    def _form(request):
        return {k: v[0] for k, v in parse_qs(request.text or "").items()}

    def list_tags(self, request, context):
        if not self._authorized(request, context):
            return "Forbidden"
        return list(self.tags)

    def create_tags(self, request, context):
        if not self._authorized(request, context):
            return "Forbidden"
        for tag in self._form(request)["tags"].split(","):
            if tag.strip() and tag.strip() not in self.tags:
                self.tags.append(tag.strip())
        return ""

    def delete_tags(self, request, context):
        if not self._authorized(request, context):
            return "Forbidden"
        doomed = {tag.strip() for tag in self._form(request)["tags"].split(",")}
        self.tags = [tag for tag in self.tags if tag not in doomed]
        return ""

    def list_torrents(self, request, context):
        if not self._authorized(request, context):
            return "Forbidden"
        return list(self.torrents)

    def register_upload(self, data):
        info_hash = TorrentFile(data).info_hash()
        self.known_uploads[data] = torrent_record(hash=info_hash, state="downloading", progress=0)
        return info_hash

    def add_torrents(self, request, context):
        if not self._authorized(request, context):
            return "Forbidden"
        body = request.body
        added = False
        for data, record in self.known_uploads.items():
            if data in body:
                self.torrents.append(record)
                added = True
        return "Ok." if added else "Fails."

    def delete_torrents(self, request, context):
        if not self._authorized(request, context):
            return "Forbidden"
        hashes = set(self._form(request)["hashes"].split("|"))
        self.torrents = [t for t in self.torrents if t["hash"] not in hashes]
        return ""


@pytest.fixture
def server(requests_mock):
    return FakeWebUI(requests_mock)


@pytest.fixture
def client():
    with QBittorrentClient(timeout=5) as c:
        yield c


@pytest.fixture
def logged_in(client, server):
    client.login(BASE_URL, "admin", "adminadmin")
    return client


@pytest.fixture
def torrent_path(tmp_path):
    path = tmp_path / "debian-12.6.0-amd64-netinst.iso.torrent"
    path.write_bytes(SAMPLE_TORRENT)
    return str(path)
