"""
Command-line driver: decode a .torrent (or any Bencoded file) and print it.
"""
import argparse
import sys

from bdecoder import MAX_DEPTH, BencodeDecodeError, BencodeTypeMismatch, decode, decode_length, destroy, find_path
from bdecoder.printer import render

from .metainfo import TorrentMeta, read_metainfo
from .peer_id import generate_peer_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Decode a Bencoded file")
    parser.add_argument("path", help="Bencoded file, e.g. a .torrent")
    parser.add_argument('-k', '--key', dest="keys", action="append", default=[],
                        help="Dictionary key to descend into (repeat for nested keys)")
    parser.add_argument('--max-depth', type=int, default=MAX_DEPTH,
                        help=f"Deepest list/dict nesting to accept (default {MAX_DEPTH})")
    parser.add_argument('--length-only', action="store_true",
                        help="Only validate and report the encoded length of the root")
    parser.add_argument('--summary', action="store_true",
                        help="Print a metainfo summary instead of the decoded tree")
    parser.add_argument('--peer-id', dest="peer_seed", help="Also print the peer id for this seed")
    return parser


def _print_summary(args):
    meta = TorrentMeta(args.path, max_depth=args.max_depth)
    try:
        print(meta)
        print("announce:", meta.announce)
        print("announce_list:", meta.announce_list)
        print("Computed info_hash:", meta.info_hash.hex())
        print("Total length:", meta.total_length)
        for f in meta.files:
            print(f"  {f['abs_path']} ({f['length']} bytes)")
    finally:
        meta.close()


def _print_tree(args, raw: bytes) -> int:
    root, consumed = decode(raw, max_depth=args.max_depth)
    print(f"[Decoder] Decoded {consumed} of {len(raw)} bytes")

    try:
        value = find_path(root, *args.keys) if args.keys else root
        if value is None:
            print(f"[Decoder] Key path {'/'.join(args.keys)} not found", file=sys.stderr)
            return 2
        print(render(value))
    finally:
        destroy(root)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.peer_seed is not None:
        print("Peer id:", generate_peer_id(args.peer_seed).hex())

    try:
        if args.summary:
            _print_summary(args)
            return 0

        raw = read_metainfo(args.path)
        if args.length_only:
            length = decode_length(raw, max_depth=args.max_depth)
            print(f"[Decoder] Root value spans {length} of {len(raw)} bytes")
            return 0

        return _print_tree(args, raw)

    except BencodeDecodeError as e:
        print(f"[Error] {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, BencodeTypeMismatch) as e:
        print(f"[Error] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
