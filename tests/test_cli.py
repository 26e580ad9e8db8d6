import hashlib

import pytest

from bdecoder.encoder import encode
from torrentmeta.cli import main
from torrentmeta.metainfo import TorrentMeta
from torrentmeta.peer_id import PEER_ID_PREFIX, generate_peer_id

from samples import SINGLE_FILE


def test_peer_id_is_prefix_plus_digest():
    peer_id = generate_peer_id("my-seed")
    print("Peer id:", peer_id)
    assert len(peer_id) == 20
    assert peer_id.startswith(PEER_ID_PREFIX)
    assert peer_id[8:] == hashlib.sha1(b"my-seed").digest()[:12]
    assert generate_peer_id("my-seed") == peer_id
    assert generate_peer_id("other-seed") != peer_id


def test_peer_id_custom_prefix():
    peer_id = generate_peer_id("seed", prefix=b"-PC0001-")
    assert len(peer_id) == 20
    assert peer_id.startswith(b"-PC0001-")


def test_cli_prints_tree(sample_torrent, capsys):
    assert main([str(sample_torrent)]) == 0
    out = capsys.readouterr().out
    print(out)
    assert "[Decoder] Decoded" in out
    assert "announce: http://tracker.example/announce" in out
    assert "pieces: <binary, 40 bytes>" in out


def test_cli_key_path(sample_torrent, capsys):
    assert main([str(sample_torrent), "-k", "info", "-k", "name"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "sample.txt"


def test_cli_missing_key(sample_torrent, capsys):
    assert main([str(sample_torrent), "-k", "nope"]) == 2
    assert "not found" in capsys.readouterr().err


def test_cli_length_only(sample_torrent, capsys):
    assert main([str(sample_torrent), "--length-only"]) == 0
    size = len(encode(SINGLE_FILE))
    assert f"Root value spans {size} of {size} bytes" in capsys.readouterr().out


def test_cli_summary(sample_torrent, capsys):
    assert main([str(sample_torrent), "--summary", "--peer-id", "seed"]) == 0
    out = capsys.readouterr().out
    info_hash = hashlib.sha1(encode(SINGLE_FILE["info"])).hexdigest()
    assert f"Computed info_hash: {info_hash}" in out
    assert "Peer id:" in out


def test_cli_reports_decode_errors(tmp_path, capsys):
    path = tmp_path / "bad.torrent"
    path.write_bytes(b"d3:keyi042ee")
    assert main([str(path)]) == 1
    assert "[Error] InvalidLeadingZero" in capsys.readouterr().err


def test_cli_depth_limit(tmp_path, capsys):
    path = tmp_path / "deep.torrent"
    path.write_bytes(b"lllleeee")
    assert main([str(path), "--max-depth", "3"]) == 1
    assert "NestingTooDeep" in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.torrent")]) == 1
    assert "[Error]" in capsys.readouterr().err


def test_cli_summary_reports_bad_path_parts(tmp_path, capsys):
    broken = dict(SINGLE_FILE, info={
        "files": [{"length": 3, "path": [1]}],
        "name": "album",
        "piece length": 16384,
        "pieces": b"\x00" * 20,
    })
    path = tmp_path / "bad-path.torrent"
    path.write_bytes(encode(broken))
    assert main([str(path), "--summary"]) == 1
    assert "[Error] Invalid torrent" in capsys.readouterr().err


def test_cli_summary_closes_tree_when_printing_fails(sample_torrent, monkeypatch):
    closed = []
    original_close = TorrentMeta.close

    def recording_close(self):
        closed.append(self.root)
        return original_close(self)

    def broken_repr(self):
        raise RuntimeError("stdout went away")

    monkeypatch.setattr(TorrentMeta, "close", recording_close)
    monkeypatch.setattr(TorrentMeta, "__repr__", broken_repr)

    with pytest.raises(RuntimeError):
        main([str(sample_torrent), "--summary"])
    (root,) = closed
    assert root.released


def test_cli_depth_limit_above_the_interpreter_stack(tmp_path, capsys):
    path = tmp_path / "very-deep.torrent"
    path.write_bytes(b"l" * 3000 + b"e" * 3000)
    assert main([str(path), "--max-depth", "10000"]) == 1
    assert "NestingTooDeep" in capsys.readouterr().err
