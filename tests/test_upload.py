import hashlib

import bencodepy
import pytest

from qbit_webui.torrent_file import TorrentFileError
from qbit_webui.upload import TorrentUpload

from conftest import SAMPLE_TORRENT


MAGNET = "magnet:?xt=urn:btih:dd8255ecdc7ca55fb0bbf81323d87062db1f6d1c&dn=Big+Buck+Bunny"


def fields(upload):
    return {name: value[1] for name, value in upload.to_multipart() if value[0] is None}


class TestTorrentUpload:
    def test_requires_urls_or_files(self):
        with pytest.raises(ValueError):
            TorrentUpload().to_multipart()

    def test_option_wire_names(self):
        upload = (TorrentUpload.builder()
                  .url("http://example.org/a.torrent")
                  .save_path("/downloads")
                  .cookie("uid=1")
                  .category("linux")
                  .tag("iso")
                  .tag("debian")
                  .skip_hash_check(True)
                  .paused(False)
                  .root_folder(True)
                  .rename("Debian")
                  .upload_limit(1024)
                  .download_limit(2048)
                  .ratio_limit(1.5)
                  .seeding_time_limit(3600)
                  .auto_tmm(False)
                  .sequential_download(True)
                  .first_last_piece_prio(True)
                  .build())

        assert fields(upload) == {
            "urls": "http://example.org/a.torrent",
            "savepath": "/downloads",
            "cookie": "uid=1",
            "category": "linux",
            "tags": "iso,debian",
            "skip_checking": "true",
            "paused": "false",
            "root_folder": "true",
            "rename": "Debian",
            "upLimit": "1024",
            "dlLimit": "2048",
            "ratioLimit": "1.5",
            "seedingTimeLimit": "3600",
            "autoTMM": "false",
            "sequentialDownload": "true",
            "firstLastPiecePrio": "true",
        }

    def test_unset_options_are_omitted(self):
        upload = TorrentUpload(urls=["http://example.org/a.torrent"])
        assert fields(upload) == {"urls": "http://example.org/a.torrent"}

    def test_torrent_files_become_file_parts(self, torrent_path):
        upload = TorrentUpload.builder().torrent_file(torrent_path).torrent_data("b.torrent", b"d4:infodee").build()

        parts = [value for name, value in upload.to_multipart() if name == "torrents"]
        assert parts == [
            ("debian-12.6.0-amd64-netinst.iso.torrent", SAMPLE_TORRENT, "application/x-bittorrent"),
            ("b.torrent", b"d4:infodee", "application/x-bittorrent"),
        ]

    def test_missing_torrent_file(self, tmp_path):
        with pytest.raises(TorrentFileError):
            TorrentUpload.builder().torrent_file(str(tmp_path / "missing.torrent"))

    def test_magnet_is_validated(self):
        with pytest.raises(ValueError):
            TorrentUpload.builder().magnet("magnet:?dn=nothing")

    def test_info_hashes(self):
        upload = (TorrentUpload.builder()
                  .torrent_data("a.torrent", SAMPLE_TORRENT)
                  .magnet(MAGNET)
                  .url("http://example.org/c.torrent")
                  .build())

        info = bencodepy.decode(SAMPLE_TORRENT)[b"info"]
        assert upload.info_hashes() == [
            hashlib.sha1(bencodepy.encode(info)).hexdigest(),
            "dd8255ecdc7ca55fb0bbf81323d87062db1f6d1c",
        ]
