import hashlib
from pathlib import Path

from bdecoder import (
    MAX_DEPTH,
    BencodeBinary,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    BencodeTypeMismatch,
    decode,
    destroy,
    find,
    find_span,
    get_nested_dict,
)
from bdecoder.markers import PIECE_HASH_LEN


def read_metainfo(path) -> bytes:
    """Loads a whole .torrent file into memory."""
    raw = Path(path).read_bytes()
    if not raw:
        raise ValueError(f"Invalid torrent: {path} is empty")
    return raw


def extract_info_bytes(raw: bytes, max_depth: int = MAX_DEPTH) -> bytes:
    """
    Extract the exact bencoded 'info' dictionary byte slice.
    This guarantees correct SHA-1 infohash as required by BitTorrent spec.
    """
    span = find_span(raw, [b"info"], max_depth=max_depth)
    if span is None:
        raise ValueError("Torrent missing 'info' dictionary")
    start, length = span
    return raw[start:start + length]


def _text(value):
    return value.value.decode() if isinstance(value, BencodeString) else None


class TorrentMeta:
    def __init__(self, path: Path, max_depth: int = MAX_DEPTH):
        self.path = Path(path)

        # Load raw bytes
        raw = read_metainfo(self.path)

        self.info_bytes = extract_info_bytes(raw, max_depth)
        self.info_hash = hashlib.sha1(self.info_bytes).digest()

        # Decode full torrent structure normally
        root, consumed = decode(raw, max_depth=max_depth)
        self.root = root

        try:
            if not isinstance(root, BencodeDict):
                raise ValueError("Invalid torrent: root must be a dictionary")
            if consumed != len(raw):
                raise ValueError(f"Invalid torrent: {len(raw) - consumed} trailing bytes after root")
            self._read_fields(root)
        except (ValueError, BencodeTypeMismatch):
            destroy(root)
            raise

    def _read_fields(self, root: BencodeDict):
        # ------------------ INFO ------------------
        self.info = get_nested_dict(root, b"info")
        if self.info is None:
            raise ValueError("Torrent missing 'info' dictionary")

        # ------------------ NAME ------------------
        self.name = _text(find(self.info, b"name"))

        # ------------------ ANNOUNCE URL ------------------
        self.announce = _text(find(root, b"announce"))

        # ------------------ ANNOUNCE-LIST ------------------
        self.announce_list = None
        ann_list_b = find(root, b"announce-list")

        if isinstance(ann_list_b, BencodeList):
            tiers = []
            for tier in ann_list_b.value:
                if not isinstance(tier, BencodeList):
                    continue
                urls = [u.value.decode() for u in tier.value if isinstance(u, BencodeString)]
                if urls:
                    tiers.append(urls)
            if tiers:
                self.announce_list = tiers

        # ------------------ PIECE LENGTH ------------------
        piece_len_b = find(self.info, b"piece length")
        if not isinstance(piece_len_b, BencodeInt) or piece_len_b.value <= 0:
            raise ValueError("Invalid torrent: 'piece length' must be a positive integer")
        self.piece_length = piece_len_b.value

        # ------------------ PIECES ------------------
        pieces_b = find(self.info, b"pieces")
        if not isinstance(pieces_b, BencodeBinary) or len(pieces_b.value) % PIECE_HASH_LEN:
            raise ValueError("Invalid torrent: 'pieces' must hold whole 20-byte SHA1 digests")
        self.pieces = pieces_b.chunks(PIECE_HASH_LEN)

        # ------------------ FILES ------------------
        files_b = find(self.info, b"files")
        if isinstance(files_b, BencodeList):
            self.files = []
            for f_entry in files_b.value:
                length_b = find(f_entry, b"length")
                path_b = find(f_entry, b"path")
                if not isinstance(length_b, BencodeInt) or not isinstance(path_b, BencodeList):
                    raise ValueError("Invalid torrent: file entries need 'length' and 'path'")
                if not all(isinstance(p, BencodeString) for p in path_b.value):
                    raise ValueError("Invalid torrent: file path parts must be strings")
                parts = [p.value.decode() for p in path_b.value]
                self.files.append({"length": length_b.value, "path": "/".join(parts)})
        else:
            length_b = find(self.info, b"length")
            if not isinstance(length_b, BencodeInt):
                raise ValueError("Invalid torrent: single-file info needs a 'length'")
            self.files = [{"length": length_b.value, "path": self.name}]

        self.total_length = sum(f["length"] for f in self.files)
        self.is_multi = files_b is not None
        self.is_single = not self.is_multi
        self.num_pieces = len(self.pieces)

        for f in self.files:
            f["abs_path"] = f"{self.name}/{f['path']}" if self.is_multi else self.name

    def close(self) -> int:
        """Releases the decoded tree. Returns how many nodes were released."""
        released = destroy(self.root)
        self.info = None
        return released

    def __repr__(self):
        return (
            f"TorrentMeta(name={self.name!r}, files={len(self.files)}, pieces={self.num_pieces}, "
            f"multi={self.is_multi}, announce={self.announce!r})"
        )
