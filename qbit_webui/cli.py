"""
Command-line interface for the qBittorrent WebUI client.

Logs in on every invocation using --url/--username/--password or the
QBITTORRENT_* settings, then runs one command.

Usage:
    qbit-webui list --tag movies
    qbit-webui trackers <hash>
    qbit-webui add <magnet/url/file> --category linux
    qbit-webui remove <hash>... --delete-files
    qbit-webui tags
    qbit-webui create-tags <tag>...
"""

import argparse
import os
import sys

from .client import QBittorrentClient
from .config import Config
from .errors import ClientError
from .logger import logger
from .params import GetTorrentListParams, TorrentListFilter
from .upload import TorrentUpload


def format_bytes(size):
    """Format bytes as human-readable string."""
    if size is None:
        return "N/A"
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} PB"


def build_upload(args) -> TorrentUpload:
    builder = TorrentUpload.builder()
    for uri in args.uris:
        if os.path.exists(uri):
            builder.torrent_file(uri)
        elif uri.startswith("magnet:"):
            builder.magnet(uri)
        else:
            builder.url(uri)

    if args.category:
        builder.category(args.category)
    for tag in args.tag or []:
        builder.tag(tag)
    if args.save_path:
        builder.save_path(args.save_path)
    if args.paused:
        builder.paused(True)
    return builder.build()


def build_parser():
    parser = argparse.ArgumentParser(
        description="qBittorrent WebUI CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list --filter downloading
  %(prog)s add magnet:?xt=urn:btih:... --tag linux
  %(prog)s edit-tracker <hash> http://old/announce http://new/announce
  %(prog)s delete-tags old-tag
"""
    )
    parser.add_argument("--url", default=Config.QBITTORRENT_URL, help="WebUI URL")
    parser.add_argument("--username", default=Config.QBITTORRENT_USERNAME, help="WebUI username")
    parser.add_argument("--password", default=Config.QBITTORRENT_PASSWORD, help="WebUI password")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show client log messages")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # -------------------------------------------------------------------------
    # Torrent Commands
    # -------------------------------------------------------------------------

    list_parser = subparsers.add_parser("list", help="List torrents")
    list_parser.add_argument("--filter", choices=[f.value for f in TorrentListFilter],
                             help="Filter by state")
    list_parser.add_argument("--category", help="Filter by category")
    list_parser.add_argument("--tag", help="Filter by tag")
    list_parser.add_argument("--sort", help="Torrent field to sort by")
    list_parser.add_argument("--reverse", action="store_true", help="Reverse the sort order")
    list_parser.add_argument("--limit", type=int, help="Maximum number of torrents")
    list_parser.add_argument("--offset", type=int, help="Skip this many torrents")

    add_parser = subparsers.add_parser("add", help="Add torrents")
    add_parser.add_argument("uris", nargs="+", help="Magnet URIs, HTTP URLs, or file paths")
    add_parser.add_argument("--category", help="Category for the torrents")
    add_parser.add_argument("--tag", action="append", help="Tag for the torrents (repeatable)")
    add_parser.add_argument("--save-path", help="Download folder")
    add_parser.add_argument("--paused", action="store_true", help="Add in the paused state")

    rm_parser = subparsers.add_parser("remove", help="Remove torrents")
    rm_parser.add_argument("hashes", nargs="+", help="Torrent info hashes")
    rm_parser.add_argument("--delete-files", action="store_true",
                           help="Also delete downloaded data")

    # -------------------------------------------------------------------------
    # Tracker Commands
    # -------------------------------------------------------------------------

    trackers_parser = subparsers.add_parser("trackers", help="List trackers of a torrent")
    trackers_parser.add_argument("info_hash", help="Torrent info hash")

    add_tracker_parser = subparsers.add_parser("add-tracker", help="Add a tracker to a torrent")
    add_tracker_parser.add_argument("info_hash", help="Torrent info hash")
    add_tracker_parser.add_argument("tracker_url", help="Tracker URL")

    edit_tracker_parser = subparsers.add_parser("edit-tracker", help="Replace a tracker URL")
    edit_tracker_parser.add_argument("info_hash", help="Torrent info hash")
    edit_tracker_parser.add_argument("old_url", help="Current tracker URL")
    edit_tracker_parser.add_argument("new_url", help="New tracker URL")

    rm_tracker_parser = subparsers.add_parser("remove-tracker", help="Remove a tracker from a torrent")
    rm_tracker_parser.add_argument("info_hash", help="Torrent info hash")
    rm_tracker_parser.add_argument("tracker_url", help="Tracker URL")

    # -------------------------------------------------------------------------
    # Tag Commands
    # -------------------------------------------------------------------------

    subparsers.add_parser("tags", help="List all tags")

    create_tags_parser = subparsers.add_parser("create-tags", help="Create tags")
    create_tags_parser.add_argument("tags", nargs="+", help="Tag names")

    delete_tags_parser = subparsers.add_parser("delete-tags", help="Delete tags")
    delete_tags_parser.add_argument("tags", nargs="+", help="Tag names")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if args.verbose:
        logger.enable("qbit_webui")

    try:
        with QBittorrentClient() as client:
            client.login(args.url, args.username, args.password)
            run_command(client, args)
    except (ClientError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)


def run_command(client: QBittorrentClient, args):
    # -------------------------------------------------------------------------
    # Torrent Commands
    # -------------------------------------------------------------------------

    if args.command == "list":
        params = GetTorrentListParams(
            filter=TorrentListFilter(args.filter) if args.filter else None,
            category=args.category,
            tag=args.tag,
            sort=args.sort,
            reverse=True if args.reverse else None,
            limit=args.limit,
            offset=args.offset,
        )
        torrents = client.get_torrent_list(params)
        if not torrents:
            print("No torrents found.")
        else:
            print(f"{'HASH':<42} {'STATE':<18} {'PROGRESS':<10} {'SIZE':<12} {'NAME'}")
            print("-" * 110)
            for t in torrents:
                progress = f"{t.progress * 100:.1f}%"
                print(f"{t.hash:<42} {t.state.value:<18} {progress:<10} {format_bytes(t.size):<12} {t.name[:40]}")

    elif args.command == "add":
        client.add_torrent(build_upload(args))
        print("Torrent added")

    elif args.command == "remove":
        client.remove_torrents(args.hashes, delete_files=args.delete_files)
        print(f"Removed {len(args.hashes)} torrent(s)")

    # -------------------------------------------------------------------------
    # Tracker Commands
    # -------------------------------------------------------------------------

    elif args.command == "trackers":
        trackers = client.get_torrent_trackers(args.info_hash)
        if not trackers:
            print("No trackers found.")
        else:
            print(f"{'TIER':<6} {'STATUS':<14} {'SEEDS':<7} {'PEERS':<7} {'URL'}")
            print("-" * 90)
            for tr in trackers:
                print(f"{tr.tier:<6} {tr.status.name:<14} {tr.num_seeds:<7} {tr.num_peers:<7} {tr.url}")

    elif args.command == "add-tracker":
        client.add_torrent_tracker(args.info_hash, args.tracker_url)
        print("Tracker added")

    elif args.command == "edit-tracker":
        client.replace_torrent_tracker(args.info_hash, args.old_url, args.new_url)
        print("Tracker replaced")

    elif args.command == "remove-tracker":
        client.remove_torrent_tracker(args.info_hash, args.tracker_url)
        print("Tracker removed")

    # -------------------------------------------------------------------------
    # Tag Commands
    # -------------------------------------------------------------------------

    elif args.command == "tags":
        tags = client.get_tags()
        if not tags:
            print("No tags found.")
        for tag in tags:
            print(tag)

    elif args.command == "create-tags":
        client.create_tags(args.tags)
        print(f"Created {len(args.tags)} tag(s)")

    elif args.command == "delete-tags":
        client.delete_tags(args.tags)
        print(f"Deleted {len(args.tags)} tag(s)")


if __name__ == "__main__":
    main()
