# main.py

import sys

from ecroll.cli import main

if __name__ == "__main__":
    sys.exit(main())
