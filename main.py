import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from torrentmeta.cli import main


if __name__ == "__main__":
    sys.exit(main())
