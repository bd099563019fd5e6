"""
Example of using the qBittorrent WebUI client.

This demonstrates:
1. Logging in
2. Listing completed torrents in a category
3. Creating a tag
4. Moving torrents off a dead tracker
"""

from qbit_webui import GetTorrentListParams, QBittorrentClient, TorrentListFilter, TrackerStatus


URL = "http://localhost:8080"
OLD_TRACKER = "http://tracker.old.example/announce"
NEW_TRACKER = "http://tracker.new.example/announce"


def main():
    with QBittorrentClient() as client:
        print("1. Logging in...")
        client.login(URL, "admin", "adminadmin")

        print("2. Listing completed linux torrents...")
        params = (GetTorrentListParams.builder()
                  .filter(TorrentListFilter.COMPLETED)
                  .category("linux")
                  .build())
        torrents = client.get_torrent_list(params)
        for torrent in torrents:
            print(f"   {torrent.hash} {torrent.name} tags={torrent.tags}")

        print("3. Creating tag...")
        client.create_tag("migrated")
        print(f"   Tags: {client.get_tags()}")

        print("4. Replacing dead trackers...")
        for info_hash, trackers in client.get_trackers_by_hash(torrents).items():
            for tracker in trackers:
                if tracker.url == OLD_TRACKER and tracker.status == TrackerStatus.NOT_WORKING:
                    client.replace_torrent_tracker(info_hash, OLD_TRACKER, NEW_TRACKER)
                    print(f"   {info_hash}: {tracker.message or 'not working'}, replaced")


if __name__ == "__main__":
    main()
