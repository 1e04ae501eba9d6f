"""
Launcher for the mgo utilities when run from a checkout.

    python main.py --md5 hello

The installed console script is `mgo-utils`.
"""

import os
import sys

src_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from mgo_utils.cli.main import main


if __name__ == "__main__":
    main()
