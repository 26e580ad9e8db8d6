PIECES = bytes(range(40))

SINGLE_FILE = {
    "announce": "http://tracker.example/announce",
    "announce-list": [["http://tracker.example/announce"], ["udp://backup.example:6969"]],
    "info": {
        "length": 20000,
        "name": "sample.txt",
        "piece length": 16384,
        "pieces": PIECES,
    },
}

MULTI_FILE = {
    "announce": "http://tracker.example/announce",
    "info": {
        "files": [
            {"length": 10, "path": ["cd1", "a.mp3"]},
            {"length": 5, "path": ["b.txt"]},
        ],
        "name": "album",
        "piece length": 16384,
        "pieces": PIECES[:20],
    },
}
